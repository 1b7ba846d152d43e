"""ProductRepository caching and stats fallback."""

import httpx
import pytest

from craftly.client.errors import NotLoggedInError
from craftly.client.models import SessionUser
from craftly.client.repositories.products import ProductRepository
from tests.client_fakes import FakeBackend, FakeClock, body_of, envelope, failure, make_api

PRODUCTS = [
    {"id": "p1", "name": "Bamboo Basket", "category": "Home", "price": 250, "createdAt": "2024-05-01"},
    {"id": "p2", "name": "Clay Pot", "category": "Pottery", "price": 120, "createdAt": "2024-06-01"},
]


def stats_handler(request: httpx.Request) -> httpx.Response:
    ids = body_of(request)["productIds"]
    return envelope(
        {pid: {"averageRating": 4.5, "reviewCount": 2, "salesCount": 7} for pid in ids}
    )


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def backend() -> FakeBackend:
    backend = FakeBackend()
    backend.on("GET", "/products", envelope(PRODUCTS))
    backend.on("POST", "/products/batch/stats", stats_handler)
    return backend


def make_repo(backend: FakeBackend, tmp_path, clock: FakeClock, user=None) -> ProductRepository:
    return ProductRepository(
        make_api(backend, tmp_path, user), products_ttl=300, stats_ttl=300, clock=clock
    )


async def test_product_list_cache(backend: FakeBackend, tmp_path, clock: FakeClock) -> None:
    repo = make_repo(backend, tmp_path, clock)
    assert (await repo.get_all_products()).get_or_raise() == PRODUCTS
    await repo.get_all_products()
    assert len(backend.calls("GET", "/products")) == 1

    await repo.get_all_products(force_refresh=True)
    assert len(backend.calls("GET", "/products")) == 2

    clock.advance(300)
    await repo.get_all_products()
    assert len(backend.calls("GET", "/products")) == 3


async def test_stats_requests_only_missing_ids(
    backend: FakeBackend, tmp_path, clock: FakeClock
) -> None:
    repo = make_repo(backend, tmp_path, clock)
    first = await repo.get_products_stats(["p1"])
    assert first["p1"].sales_count == 7
    both = await repo.get_products_stats(["p1", "p2", "p2"])
    assert set(both) == {"p1", "p2"}
    requests = backend.calls("POST", "/products/batch/stats")
    assert [body_of(r)["productIds"] for r in requests] == [["p1"], ["p2"]]


async def test_stats_fall_back_on_failure(tmp_path, clock: FakeClock) -> None:
    backend = FakeBackend()
    backend.on("POST", "/products/batch/stats", stats_handler)
    repo = make_repo(backend, tmp_path, clock)
    await repo.get_products_stats(["p1"])

    backend.on("POST", "/products/batch/stats", failure(503, "down", "SERVICE_UNAVAILABLE"))
    clock.advance(301)
    stats = await repo.get_products_stats(["p1", "p2"])
    assert stats["p1"].average_rating == 4.5
    assert stats["p2"].review_count == 0


async def test_seller_products_bypass_cache(backend: FakeBackend, tmp_path, clock: FakeClock) -> None:
    repo = make_repo(backend, tmp_path, clock)
    await repo.get_seller_products("seller1")
    request = backend.calls("GET", "/products")[0]
    assert request.url.params["createdBy"] == "seller1"
    assert request.url.params["status"] == "active"


async def test_writes_require_login_and_clear_cache(
    backend: FakeBackend, tmp_path, clock: FakeClock
) -> None:
    anonymous = make_repo(backend, tmp_path / "anon", clock)
    result = await anonymous.create_product({"name": "x"})
    assert isinstance(result.error, NotLoggedInError)

    backend.on("POST", "/products", envelope({"id": "p3", "name": "Fan"}, status=201))
    backend.on("DELETE", "/products/p1", envelope({"id": "p1"}))
    repo = make_repo(backend, tmp_path / "seller", clock, SessionUser(uid="seller1"))
    await repo.get_all_products()
    created = await repo.create_product({"name": "Fan"})
    assert created.get_or_raise()["id"] == "p3"
    await repo.get_all_products()
    assert len(backend.calls("GET", "/products")) == 2

    await repo.get_products_stats(["p1"])
    assert (await repo.delete_product("p1")).is_success
    await repo.get_products_stats(["p1"])
    assert len(backend.calls("POST", "/products/batch/stats")) == 2


async def test_missing_product_is_a_failure(backend: FakeBackend, tmp_path, clock: FakeClock) -> None:
    backend.on("GET", "/products/nope", failure(404, "Product not found", "RESOURCE_NOT_FOUND"))
    repo = make_repo(backend, tmp_path, clock)
    result = await repo.get_product("nope")
    assert result.is_failure
    assert result.error.status == 404
