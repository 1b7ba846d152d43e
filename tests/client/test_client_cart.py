"""CartRepository cart rules against a stateful fake cart endpoint."""

import httpx
import pytest

from craftly.client.errors import NotLoggedInError
from craftly.client.models import CartItem, SessionUser
from craftly.client.repositories.cart import OWN_PRODUCT, SINGLE_SELLER, CartRepository
from tests.client_fakes import FakeBackend, FakeClock, body_of, envelope, make_api

BUYER = SessionUser(uid="buyer1", display_name="Juan")


def basket(**fields) -> CartItem:
    data = {"product_id": "p1", "name": "Bamboo Basket", "price": 250, "stock": 3, "created_by": "seller1"}
    data.update(fields)
    return CartItem(**data)


@pytest.fixture
def backend() -> FakeBackend:
    backend = FakeBackend()
    stored: list[dict] = []

    def get_cart(request: httpx.Request) -> httpx.Response:
        return envelope({"userId": "buyer1", "items": stored})

    def save_cart(request: httpx.Request) -> httpx.Response:
        stored[:] = body_of(request)["items"]
        return envelope({"userId": "buyer1", "items": stored, "message": "Cart saved successfully"})

    def clear_cart(request: httpx.Request) -> httpx.Response:
        stored.clear()
        return envelope({"userId": "buyer1", "items": []})

    backend.on("GET", "/cart/buyer1", get_cart)
    backend.on("POST", "/cart", save_cart)
    backend.on("DELETE", "/cart", clear_cart)
    backend.stored = stored
    return backend


@pytest.fixture
def repo(backend: FakeBackend, tmp_path) -> CartRepository:
    return CartRepository(make_api(backend, tmp_path, BUYER), ttl=300, clock=FakeClock())


async def test_add_then_merge_quantities(repo: CartRepository, backend: FakeBackend) -> None:
    first = await repo.add_to_cart(basket())
    second = await repo.add_to_cart(basket(quantity=2))
    assert first.is_success
    assert second.is_success
    items = second.get_or_raise()
    assert len(items) == 1
    assert items[0].quantity == 3
    assert backend.stored[0]["productId"] == "p1"
    assert backend.stored[0]["createdBy"] == "seller1"


async def test_merge_over_stock(repo: CartRepository) -> None:
    await repo.add_to_cart(basket(quantity=2))
    result = await repo.add_to_cart(basket(quantity=2))
    assert result.is_failure
    assert str(result.error) == (
        "Cannot add that many items. Only 3 available. You already have 2 in cart."
    )


async def test_new_item_over_stock(repo: CartRepository) -> None:
    result = await repo.add_to_cart(basket(quantity=4))
    assert str(result.error) == "Cannot add that many items. Only 3 available in stock."


async def test_own_product_rejected(repo: CartRepository, backend: FakeBackend) -> None:
    result = await repo.add_to_cart(basket(created_by="buyer1"))
    assert str(result.error) == OWN_PRODUCT
    assert backend.calls("POST", "/cart") == []


async def test_single_seller_rule(repo: CartRepository) -> None:
    await repo.add_to_cart(basket())
    result = await repo.add_to_cart(basket(product_id="p2", created_by="seller2"))
    assert str(result.error) == SINGLE_SELLER


async def test_update_quantity_rules(repo: CartRepository) -> None:
    await repo.add_to_cart(basket())
    assert str((await repo.update_quantity("p1", 0)).error) == "Quantity must be at least 1"
    assert str((await repo.update_quantity("zzz", 1)).error) == "Item not found in cart"
    assert str((await repo.update_quantity("p1", 9)).error) == (
        "Cannot update quantity. Only 3 available in stock."
    )
    updated = await repo.update_quantity("p1", 2)
    assert updated.get_or_raise()[0].quantity == 2


async def test_remove_and_clear(repo: CartRepository, backend: FakeBackend) -> None:
    await repo.add_to_cart(basket())
    removed = await repo.remove_from_cart("p1")
    assert removed.get_or_raise() == []
    await repo.add_to_cart(basket())
    cleared = await repo.clear_cart()
    assert cleared.get_or_raise() == []
    assert backend.stored == []
    assert (await repo.get_cart()).get_or_raise() == []


async def test_cart_is_served_from_cache(repo: CartRepository, backend: FakeBackend) -> None:
    await repo.get_cart()
    await repo.get_cart()
    assert len(backend.calls("GET", "/cart/buyer1")) == 1
    repo.clear_cache()
    await repo.get_cart()
    assert len(backend.calls("GET", "/cart/buyer1")) == 2


async def test_cart_requires_login(backend: FakeBackend, tmp_path) -> None:
    repo = CartRepository(make_api(backend, tmp_path), ttl=300)
    result = await repo.get_cart()
    assert isinstance(result.error, NotLoggedInError)
    assert backend.requests == []
