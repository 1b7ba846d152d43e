"""WebSocket support for real-time chat."""

from craftly.api.websocket.manager import ConnectionManager

__all__ = ["ConnectionManager"]
