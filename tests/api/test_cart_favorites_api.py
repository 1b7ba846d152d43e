"""Cart and favorites API tests."""

from httpx import AsyncClient

from tests.fakes import FakeFirestore
from tests.helpers import user_headers

ITEM = {"productId": "p1", "name": "Bamboo Basket", "price": 250, "quantity": 2, "createdBy": "seller1"}


async def test_empty_cart(client: AsyncClient) -> None:
    response = await client.get("/api/cart/buyer1", headers=user_headers("buyer1"))
    assert response.status_code == 200
    assert response.json()["data"] == {"userId": "buyer1", "items": []}


async def test_save_and_read_cart(client: AsyncClient, db: FakeFirestore) -> None:
    headers = user_headers("buyer1")
    saved = await client.post("/api/cart", headers=headers, json={"items": [ITEM]})
    assert saved.status_code == 200
    assert saved.json()["data"]["message"] == "Cart saved successfully"
    assert db.doc("carts/buyer1")["items"] == [ITEM]

    response = await client.get("/api/cart/buyer1", headers=headers)
    assert response.json()["data"]["items"] == [ITEM]


async def test_save_cart_requires_list(client: AsyncClient) -> None:
    response = await client.post(
        "/api/cart", headers=user_headers("buyer1"), json={"items": "nope"}
    )
    assert response.status_code == 400
    assert response.json()["error"] == "Items must be an array"


async def test_clear_cart(client: AsyncClient, db: FakeFirestore) -> None:
    db.seed("carts/buyer1", {"items": [ITEM], "userId": "buyer1"})
    response = await client.delete("/api/cart", headers=user_headers("buyer1"))
    assert response.status_code == 200
    assert db.doc("carts/buyer1")["items"] == []


async def test_cart_of_another_user_is_forbidden(client: AsyncClient) -> None:
    response = await client.get("/api/cart/buyer1", headers=user_headers("buyer2"))
    assert response.status_code == 403
    assert response.json()["error"] == "Unauthorized to access this cart"


async def test_favorites_add_list_remove(client: AsyncClient, db: FakeFirestore) -> None:
    headers = user_headers("buyer1")
    added = await client.post("/api/favorites", headers=headers, json={"productId": "p1"})
    again = await client.post("/api/favorites", headers=headers, json={"productId": "p1"})
    await client.post("/api/favorites", headers=headers, json={"productId": "p2"})
    assert added.status_code == 201
    assert again.status_code == 201

    listing = await client.get("/api/favorites/buyer1", headers=headers)
    data = listing.json()["data"]
    assert sorted(data["favorites"]) == ["p1", "p2"]
    assert data["count"] == 2

    removed = await client.delete("/api/favorites/p1", headers=headers)
    assert removed.status_code == 200
    assert db.doc("users/buyer1/favorites/p1") is None


async def test_favorite_requires_product_id(client: AsyncClient) -> None:
    response = await client.post("/api/favorites", headers=user_headers("buyer1"), json={})
    assert response.status_code == 400
    assert response.json()["error"] == "productId is required"
