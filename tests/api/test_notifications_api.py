"""Notification API tests."""

from datetime import timedelta

from httpx import AsyncClient

from craftly.shared.utils.datetime import utc_now
from tests.fakes import FakeFirestore
from tests.helpers import user_headers


def _seed(db: FakeFirestore) -> None:
    now = utc_now()
    db.seed(
        "users/seller1/notifications/n1",
        {"message": "older", "type": "new_order", "isRead": False, "createdAt": now - timedelta(hours=1)},
    )
    db.seed(
        "users/seller1/notifications/n2",
        {"message": "newer", "type": "new_review", "isRead": False, "createdAt": now},
    )
    db.seed(
        "users/seller1/notifications/n3",
        {"message": "seen", "type": "new_order", "isRead": True, "createdAt": now - timedelta(days=1)},
    )


async def test_list_notifications_newest_first(client: AsyncClient, db: FakeFirestore) -> None:
    _seed(db)
    response = await client.get("/api/notifications/seller1", headers=user_headers("seller1"))
    assert response.status_code == 200
    data = response.json()["data"]
    assert [n["id"] for n in data["notifications"]] == ["n2", "n1", "n3"]
    assert data["unreadCount"] == 2


async def test_other_users_notifications_are_forbidden(client: AsyncClient) -> None:
    response = await client.get("/api/notifications/seller1", headers=user_headers("buyer1"))
    assert response.status_code == 403
    assert response.json()["error"] == "Unauthorized to access this notifications"


async def test_mark_one_and_all_read(client: AsyncClient, db: FakeFirestore) -> None:
    _seed(db)
    headers = user_headers("seller1")
    one = await client.put("/api/notifications/seller1/n1/mark-as-read", headers=headers)
    assert one.status_code == 200
    assert db.doc("users/seller1/notifications/n1")["isRead"] is True

    rest = await client.put("/api/notifications/seller1/mark-all-as-read", headers=headers)
    assert rest.json()["data"]["updated"] == 1
    assert all(n["isRead"] for n in db.children("users/seller1/notifications").values())


async def test_mark_missing_notification(client: AsyncClient) -> None:
    response = await client.put(
        "/api/notifications/seller1/ghost/mark-as-read", headers=user_headers("seller1")
    )
    assert response.status_code == 404
    assert response.json()["error"] == "Notification not found"


async def test_delete_notification(client: AsyncClient, db: FakeFirestore) -> None:
    _seed(db)
    response = await client.delete(
        "/api/notifications/seller1/n3", headers=user_headers("seller1")
    )
    assert response.status_code == 200
    assert db.doc("users/seller1/notifications/n3") is None
