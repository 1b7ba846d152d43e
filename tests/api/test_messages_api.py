"""Messaging API tests: conversations, messages and unread counters."""

from httpx import AsyncClient

from tests.fakes import FakeFirestore
from tests.helpers import user_headers

CID = "buyer1_seller1"


async def _open(client: AsyncClient) -> dict:
    response = await client.post(
        "/api/messages/conversations",
        headers=user_headers("seller1"),
        json={"otherUserId": "buyer1", "otherUserName": "Juan", "currentUserName": "Lola's Crafts"},
    )
    assert response.status_code == 200, response.text
    return response.json()["data"]


async def test_conversation_id_is_shared(client: AsyncClient, db: FakeFirestore) -> None:
    """Both sides of a chat land on the same sorted-uid document."""
    created = await _open(client)
    assert created["id"] == CID
    assert created["participantNames"] == {"seller1": "Lola's Crafts", "buyer1": "Juan"}

    reopened = await client.post(
        "/api/messages/conversations",
        headers=user_headers("buyer1"),
        json={"otherUserId": "seller1"},
    )
    assert reopened.json()["data"]["id"] == CID
    assert len(db.children("conversations")) == 1


async def test_cannot_message_yourself(client: AsyncClient) -> None:
    response = await client.post(
        "/api/messages/conversations",
        headers=user_headers("buyer1"),
        json={"otherUserId": "buyer1"},
    )
    assert response.status_code == 400
    missing = await client.post(
        "/api/messages/conversations", headers=user_headers("buyer1"), json={}
    )
    assert missing.json()["error"] == "otherUserId is required"


async def test_send_and_read_messages(client: AsyncClient, db: FakeFirestore) -> None:
    await _open(client)
    sent = await client.post(
        f"/api/messages/conversations/{CID}/messages",
        headers=user_headers("buyer1"),
        json={"text": "  Is the basket available?  "},
    )
    assert sent.status_code == 201
    message = sent.json()["data"]
    assert message["text"] == "Is the basket available?"
    assert message["senderName"] == "Juan"

    conversation = db.doc(f"conversations/{CID}")
    assert conversation["lastMessage"] == "Is the basket available?"
    assert conversation["lastMessageBy"] == "buyer1"
    assert conversation["unreadCount"] == {"seller1": 1, "buyer1": 0}

    listing = await client.get("/api/messages/conversations", headers=user_headers("seller1"))
    data = listing.json()["data"]
    assert data["count"] == 1
    assert data["totalUnread"] == 1

    messages = await client.get(
        f"/api/messages/conversations/{CID}/messages", headers=user_headers("seller1")
    )
    assert [m["text"] for m in messages.json()["data"]["messages"]] == ["Is the basket available?"]

    read = await client.post(
        f"/api/messages/conversations/{CID}/read", headers=user_headers("seller1")
    )
    assert read.status_code == 200
    assert db.doc(f"conversations/{CID}")["unreadCount"]["seller1"] == 0


async def test_empty_message_rejected(client: AsyncClient) -> None:
    await _open(client)
    response = await client.post(
        f"/api/messages/conversations/{CID}/messages",
        headers=user_headers("buyer1"),
        json={"text": "   "},
    )
    assert response.status_code == 400
    assert response.json()["error"] == "Message text is required"


async def test_outsiders_cannot_read_or_send(client: AsyncClient) -> None:
    await _open(client)
    read = await client.get(
        f"/api/messages/conversations/{CID}/messages", headers=user_headers("intruder")
    )
    send = await client.post(
        f"/api/messages/conversations/{CID}/messages",
        headers=user_headers("intruder"),
        json={"text": "hello"},
    )
    missing = await client.get(
        "/api/messages/conversations/nope/messages", headers=user_headers("buyer1")
    )
    assert read.status_code == 403
    assert send.status_code == 403
    assert missing.status_code == 404
