"""Review API tests."""

from httpx import AsyncClient

from tests.fakes import FakeFirestore
from tests.helpers import user_headers


def _body(**fields) -> dict:
    body = {
        "productId": "p1",
        "userId": "buyer1",
        "userName": "Juan",
        "rating": 5,
        "comment": "Beautiful craftsmanship!",
    }
    body.update(fields)
    return body


async def test_submit_review_notifies_seller(client: AsyncClient, db: FakeFirestore) -> None:
    db.seed("products/p1", {"name": "Bamboo Basket", "createdBy": "seller1", "status": "active"})
    response = await client.post(
        "/api/reviews/submit", headers=user_headers("buyer1"), json=_body()
    )
    assert response.status_code == 201
    review = response.json()["data"]["review"]
    assert review["rating"] == 5
    assert review["userName"] == "Juan"

    assert db.doc("products/p1/reviews/buyer1")["comment"] == "Beautiful craftsmanship!"
    notifications = list(db.children("users/seller1/notifications").values())
    assert len(notifications) == 1
    assert notifications[0]["type"] == "new_review"
    assert notifications[0]["message"] == 'Juan left a 5-star review on your product: "Bamboo Basket".'


async def test_review_twice_conflicts(client: AsyncClient, db: FakeFirestore) -> None:
    db.seed("products/p1", {"name": "Bamboo Basket", "createdBy": "seller1"})
    first = await client.post("/api/reviews/submit", headers=user_headers("buyer1"), json=_body())
    second = await client.post(
        "/api/reviews/submit", headers=user_headers("buyer1"), json=_body(rating=1)
    )
    assert first.status_code == 201
    assert second.status_code == 409
    assert second.json()["error"] == "You have already reviewed this product"
    assert db.doc("products/p1/reviews/buyer1")["rating"] == 5
    assert len(db.children("users/seller1/notifications")) == 1


async def test_review_as_someone_else_is_forbidden(client: AsyncClient) -> None:
    response = await client.post(
        "/api/reviews/submit", headers=user_headers("buyer1"), json=_body(userId="buyer2")
    )
    assert response.status_code == 403


async def test_review_validation(client: AsyncClient) -> None:
    bad_rating = await client.post(
        "/api/reviews/submit", headers=user_headers("buyer1"), json=_body(rating=9)
    )
    short = await client.post(
        "/api/reviews/submit", headers=user_headers("buyer1"), json=_body(comment="ok")
    )
    missing = await client.post(
        "/api/reviews/submit", headers=user_headers("buyer1"), json={"productId": "p1"}
    )
    assert bad_rating.status_code == 400
    assert short.status_code == 400
    assert missing.status_code == 400
    assert missing.json()["error"].startswith("Missing required fields")


async def test_own_product_review_sends_no_notification(
    client: AsyncClient, db: FakeFirestore
) -> None:
    db.seed("products/p1", {"name": "Bamboo Basket", "createdBy": "buyer1"})
    response = await client.post(
        "/api/reviews/submit", headers=user_headers("buyer1"), json=_body()
    )
    assert response.status_code == 201
    assert db.children("users/buyer1/notifications") == {}


async def test_list_reviews(client: AsyncClient, db: FakeFirestore) -> None:
    await client.post("/api/reviews/submit", headers=user_headers("buyer1"), json=_body())
    await client.post(
        "/api/reviews/submit",
        headers=user_headers("buyer2"),
        json=_body(userId="buyer2", rating=3, userName="Ana"),
    )
    response = await client.get("/api/reviews/p1")
    data = response.json()["data"]
    assert data["count"] == 2
    assert {r["userId"] for r in data["reviews"]} == {"buyer1", "buyer2"}


async def test_review_invalidates_cached_stats(client: AsyncClient) -> None:
    before = await client.get("/api/products/p1/stats")
    assert before.json()["data"]["reviewCount"] == 0
    await client.post("/api/reviews/submit", headers=user_headers("buyer1"), json=_body())
    after = await client.get("/api/products/p1/stats")
    assert after.json()["data"]["reviewCount"] == 1
    assert after.json()["data"]["averageRating"] == 5.0


async def test_review_rejects_ids_that_are_not_document_ids(
    client: AsyncClient, db: FakeFirestore
) -> None:
    nested_product = await client.post(
        "/api/reviews/submit",
        headers=user_headers("buyer1"),
        json=_body(productId="p1/reviews/zz/other"),
    )
    nested_creator = await client.post(
        "/api/reviews/submit",
        headers=user_headers("buyer1"),
        json=_body(productCreatorId="victim/notifications/x/inbox", productName="Basket"),
    )
    assert nested_product.status_code == 400
    assert nested_product.json()["error"] == "Invalid productId"
    assert nested_creator.status_code == 400
    assert nested_creator.json()["error"] == "Invalid productCreatorId"
    assert db.docs == {}
