"""WebSocket connection manager.

Holds active chat connections per user so a sent message can be pushed to
both participants. Lives on app.state.ws_manager (set in create_app).
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from fastapi import WebSocket

logger = logging.getLogger(__name__)


class ConnectionManager:
    """Tracks WebSocket connections by user ID.

    A user may hold several connections (phone and browser); each receives
    the events addressed to that user. Connections that fail on send are
    dropped.
    """

    def __init__(self) -> None:
        self._connections_by_user: dict[str, set[WebSocket]] = {}
        self._websocket_to_user: dict[WebSocket, str] = {}
        self._lock = asyncio.Lock()

    async def connect(self, websocket: WebSocket, user_id: str) -> None:
        """Accept the socket and register it for user_id."""
        await websocket.accept()
        async with self._lock:
            self._connections_by_user.setdefault(user_id, set()).add(websocket)
            self._websocket_to_user[websocket] = user_id
        logger.debug("WebSocket connected for user %s", user_id)

    def _forget(self, websocket: WebSocket) -> None:
        user_id = self._websocket_to_user.pop(websocket, None)
        if user_id is None:
            return
        conns = self._connections_by_user.get(user_id)
        if conns is None:
            return
        conns.discard(websocket)
        if not conns:
            del self._connections_by_user[user_id]

    async def disconnect(self, websocket: WebSocket) -> None:
        async with self._lock:
            self._forget(websocket)

    async def send_to_user(self, user_id: str, message: str | dict[str, Any]) -> int:
        """Send message to every connection of user_id. Returns how many received it."""
        async with self._lock:
            snapshot = list(self._connections_by_user.get(user_id, ()))
        return await self._send_to_list(snapshot, message)

    async def _send_to_list(
        self,
        connections: list[WebSocket],
        message: str | dict[str, Any],
    ) -> int:
        dead: list[WebSocket] = []
        for ws in connections:
            try:
                if isinstance(message, dict):
                    await ws.send_json(message)
                else:
                    await ws.send_text(message)
            except Exception:
                logger.debug("Dropping WebSocket that failed on send", exc_info=True)
                dead.append(ws)
        if dead:
            async with self._lock:
                for ws in dead:
                    self._forget(ws)
        return len(connections) - len(dead)

    async def get_connection_count(self, user_id: str | None = None) -> int:
        """Active connections, for one user or in total."""
        async with self._lock:
            if user_id is not None:
                return len(self._connections_by_user.get(user_id, ()))
            return sum(len(c) for c in self._connections_by_user.values())
