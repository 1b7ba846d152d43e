"""Chat WebSocket tests (Starlette TestClient; one portal per test client)."""

import pytest
from starlette.testclient import TestClient
from starlette.websockets import WebSocketDisconnect

from craftly.infrastructure.security.jwt import create_user_token
from craftly.main import app
from tests.fakes import FakeFirestore
from tests.helpers import user_headers


def test_missing_token_is_rejected() -> None:
    with TestClient(app) as tc:
        with tc.websocket_connect("/ws/messages") as ws:
            with pytest.raises(WebSocketDisconnect) as exc_info:
                ws.receive_text()
    assert exc_info.value.code == 1008


def test_invalid_token_is_rejected() -> None:
    with TestClient(app) as tc:
        with tc.websocket_connect("/ws/messages?token=garbage") as ws:
            with pytest.raises(WebSocketDisconnect) as exc_info:
                ws.receive_text()
    assert exc_info.value.code == 1008


def test_ping_pong() -> None:
    token = create_user_token("buyer1")
    with TestClient(app) as tc:
        with tc.websocket_connect(f"/ws/messages?token={token}") as ws:
            ws.send_text("ping")
            assert ws.receive_text() == "pong"


def test_sent_message_is_pushed_to_receiver(db: FakeFirestore) -> None:
    db.seed(
        "conversations/buyer1_seller1",
        {
            "participants": ["buyer1", "seller1"],
            "participantNames": {"buyer1": "Juan", "seller1": "Lola"},
            "unreadCount": {"buyer1": 0, "seller1": 0},
        },
    )
    token = create_user_token("seller1")
    with TestClient(app) as tc:
        with tc.websocket_connect(f"/ws/messages?token={token}") as ws:
            ws.send_text("ping")
            assert ws.receive_text() == "pong"
            response = tc.post(
                "/api/messages/conversations/buyer1_seller1/messages",
                headers=user_headers("buyer1"),
                json={"text": "Hello po"},
            )
            assert response.status_code == 201
            event = ws.receive_json()
    assert event["type"] == "message"
    assert event["conversationId"] == "buyer1_seller1"
    assert event["message"]["text"] == "Hello po"
    assert event["message"]["senderId"] == "buyer1"
