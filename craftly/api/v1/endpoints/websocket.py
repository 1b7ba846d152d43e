"""WebSocket endpoint for chat events: /ws/messages?token=<jwt>.

Requires a valid JWT via the token query param before registering the
connection. Events are pushed by MessagingService through the connection
manager on app.state; inbound frames are only used as keep-alive pings.
"""

import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from craftly.domain.validators import is_valid_document_id
from craftly.infrastructure.security.jwt import verify_token

logger = logging.getLogger(__name__)

router = APIRouter()


async def _reject_websocket(websocket: WebSocket, reason: str, code: int = 1008) -> None:
    """Accept then immediately close with code/reason so client gets a proper close frame."""
    await websocket.accept()
    await websocket.close(code=code, reason=reason)


@router.websocket("/messages")
async def messages_websocket(websocket: WebSocket):
    manager = websocket.app.state.ws_manager
    token = websocket.query_params.get("token")
    if not token:
        await _reject_websocket(websocket, "Missing token")
        return
    try:
        uid = verify_token(token)["sub"]
    except ValueError:
        await _reject_websocket(websocket, "Invalid token")
        return
    if not is_valid_document_id(uid):
        await _reject_websocket(websocket, "Invalid token")
        return

    await manager.connect(websocket, uid)
    try:
        while True:
            data = await websocket.receive_text()
            if data == "ping":
                await websocket.send_text("pong")
    except WebSocketDisconnect:
        logger.debug("WebSocket closed for user %s", uid)
    finally:
        await manager.disconnect(websocket)
