"""View models: state transitions over the client repositories."""

import httpx
import pytest

from craftly.client.models import CartItem, SessionUser
from craftly.client.repositories import (
    AuthRepository,
    CartRepository,
    FavoritesRepository,
    MessagingRepository,
    NotificationRepository,
    OrderRepository,
    ProductRepository,
)
from craftly.client.viewmodels import (
    CartViewModel,
    ChatViewModel,
    Error,
    FavoritesViewModel,
    Idle,
    Loading,
    LoginViewModel,
    NotificationsViewModel,
    OrdersViewModel,
    ProductsViewModel,
    RegisterViewModel,
    Success,
)
from craftly.client.viewmodels.auth import DESTINATION_ADMIN, DESTINATION_SELLER
from tests.client_fakes import FakeBackend, FakeClock, body_of, envelope, failure, make_api

BUYER = SessionUser(uid="buyer1", display_name="Juan")


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()


async def test_login_validation_skips_request(backend: FakeBackend, tmp_path) -> None:
    vm = LoginViewModel(AuthRepository(make_api(backend, tmp_path)))
    states = []
    vm.subscribe(states.append)
    await vm.login("", "secret123")
    assert states == [Idle(), Error("Email is required")]
    assert backend.requests == []


async def test_login_success_routes_by_role(backend: FakeBackend, tmp_path) -> None:
    backend.on(
        "POST",
        "/auth/signin",
        envelope({"uid": "s1", "email": "s@gmail.com", "roles": ["buyer", "seller"], "accessToken": "t"}),
    )
    vm = LoginViewModel(AuthRepository(make_api(backend, tmp_path)))
    states = []
    vm.subscribe(states.append)
    await vm.login(" s@gmail.com ", "secret123")
    assert isinstance(states[1], Loading)
    assert isinstance(vm.state, Success)
    assert vm.destination == DESTINATION_SELLER


async def test_login_failure_shows_server_message(backend: FakeBackend, tmp_path) -> None:
    backend.on("POST", "/auth/signin", failure(401, "Invalid email or password"))
    vm = LoginViewModel(AuthRepository(make_api(backend, tmp_path)))
    await vm.login("s@gmail.com", "secret123")
    assert vm.state == Error("Invalid email or password")
    assert vm.destination is None


async def test_register_password_mismatch(backend: FakeBackend, tmp_path) -> None:
    vm = RegisterViewModel(AuthRepository(make_api(backend, tmp_path)))
    await vm.register("Ana Reyes", "ana@gmail.com", "secret123", "secret124")
    assert vm.state == Error("Passwords do not match")
    await vm.register("Ana 2", "ana@gmail.com", "secret123", "secret123")
    assert vm.state == Error("Full name contains invalid characters")


async def test_admin_destination(backend: FakeBackend, tmp_path) -> None:
    backend.on("POST", "/auth/signin", envelope({"uid": "a1", "roles": ["admin", "seller"]}))
    vm = LoginViewModel(AuthRepository(make_api(backend, tmp_path)))
    await vm.login("admin@gmail.com", "secret123")
    assert vm.destination == DESTINATION_ADMIN


async def test_cart_totals(backend: FakeBackend, tmp_path) -> None:
    stored: list[dict] = []

    def save(request: httpx.Request) -> httpx.Response:
        stored[:] = body_of(request)["items"]
        return envelope({"items": stored})

    backend.on("GET", "/cart/buyer1", envelope({"items": []}))
    backend.on("POST", "/cart", save)
    repo = CartRepository(make_api(backend, tmp_path, BUYER), ttl=300, clock=FakeClock())
    vm = CartViewModel(repo)
    await vm.load()
    assert vm.items == []
    await vm.add(CartItem(product_id="p1", price=250, quantity=2, stock=5, created_by="s1"))
    await vm.add(CartItem(product_id="p2", price=100, quantity=1, stock=5, created_by="s1"))
    assert vm.total == 600
    assert vm.item_count == 3

    failed = await vm.add(CartItem(product_id="p3", price=1, stock=5, created_by="s2"))
    assert isinstance(failed, Error)
    assert vm.items == []


async def test_products_filtering(backend: FakeBackend, tmp_path) -> None:
    backend.on(
        "GET",
        "/products",
        envelope(
            [
                {"id": "p1", "name": "Bamboo Basket", "category": "Home", "price": 250, "createdAt": "2024-05-01"},
                {"id": "p2", "name": "Clay Pot", "category": "Pottery", "price": 120, "createdAt": "2024-06-01"},
            ]
        ),
    )
    backend.on(
        "POST",
        "/products/batch/stats",
        envelope({"p1": {"averageRating": 5, "reviewCount": 1, "salesCount": 0}}),
    )
    repo = ProductRepository(make_api(backend, tmp_path), products_ttl=300, stats_ttl=300, clock=FakeClock())
    vm = ProductsViewModel(repo)
    await vm.load()
    assert [p["id"] for p in vm.state.data] == ["p2", "p1"]
    assert vm.stats["p1"].average_rating == 5
    assert vm.stats["p2"].review_count == 0
    assert vm.categories == ["Home", "Pottery"]

    vm.update_category("home")
    assert [p["id"] for p in vm.state.data] == ["p1"]
    vm.update_category("all")
    vm.update_search("clay")
    assert [p["id"] for p in vm.state.data] == ["p2"]
    vm.update_search("")
    vm.update_sort("price-desc")
    assert [p["id"] for p in vm.state.data] == ["p1", "p2"]


async def test_favorites_toggle(backend: FakeBackend, tmp_path) -> None:
    backend.on("GET", "/favorites/buyer1", envelope({"favorites": ["p1"], "count": 1}))
    backend.on("POST", "/favorites", envelope({"productId": "p2"}, status=201))
    backend.on("DELETE", "/favorites/p1", envelope({"productId": "p1"}))
    vm = FavoritesViewModel(FavoritesRepository(make_api(backend, tmp_path, BUYER)))
    await vm.load()
    assert vm.is_favorite("p1")
    await vm.toggle("p2")
    await vm.toggle("p1")
    assert vm.state == Success(["p2"])


async def test_orders_paging_and_mark_paid(backend: FakeBackend, tmp_path) -> None:
    backend.on(
        "GET",
        "/orders/buyer1",
        envelope({"orders": [{"id": "o1"}], "count": 1, "total": 3, "hasMore": True}),
    )
    backend.on("GET", "/orders/seller/buyer1", envelope({"orders": [{"id": "o9"}], "count": 1}))
    backend.on("POST", "/orders/o9/payment-status", envelope({"orderId": "o9"}))
    vm = OrdersViewModel(OrderRepository(make_api(backend, tmp_path, BUYER)))
    await vm.load_my_orders(limit=1)
    assert vm.state == Success([{"id": "o1"}])
    assert vm.has_more
    assert backend.requests[0].url.params["limit"] == "1"

    await vm.mark_paid("o9")
    assert body_of(backend.calls("POST", "/orders/o9/payment-status")[0]) == {"paymentStatus": "paid"}
    assert vm.state == Success([{"id": "o9"}])


async def test_notifications_unread_count(backend: FakeBackend, tmp_path) -> None:
    backend.on(
        "GET",
        "/notifications/buyer1",
        envelope({"notifications": [{"id": "n1", "isRead": False}], "unreadCount": 1}),
    )
    backend.on("PUT", "/notifications/buyer1/mark-all-as-read", envelope({"updated": 1}))
    vm = NotificationsViewModel(NotificationRepository(make_api(backend, tmp_path, BUYER)))
    await vm.load()
    assert vm.unread_count == 1
    await vm.mark_all_as_read()
    assert len(backend.calls("GET", "/notifications/buyer1")) == 2


async def test_chat_open_and_send(backend: FakeBackend, tmp_path) -> None:
    cid = "buyer1_seller1"
    backend.on("POST", "/messages/conversations", envelope({"id": cid, "participants": ["buyer1", "seller1"]}))
    backend.on(
        "GET",
        f"/messages/conversations/{cid}/messages",
        envelope({"messages": [{"id": "m1", "text": "Hello", "createdAt": "2024-06-01T10:00:00"}]}),
    )
    backend.on("POST", f"/messages/conversations/{cid}/read", envelope({"conversationId": cid}))
    backend.on(
        "POST",
        f"/messages/conversations/{cid}/messages",
        envelope({"id": "m2", "text": "Hi po", "createdAt": "2024-06-01T10:05:00"}, status=201),
    )
    vm = ChatViewModel(MessagingRepository(make_api(backend, tmp_path, BUYER)))

    assert await vm.send("too early") == Error("No conversation open")
    await vm.open("seller1", "Lola")
    assert [m["id"] for m in vm.state.data] == ["m1"]
    assert len(backend.calls("POST", f"/messages/conversations/{cid}/read")) == 1

    await vm.send("Hi po")
    assert [m["id"] for m in vm.messages] == ["m1", "m2"]
    vm.stop_listening()
