"""Polling listener that delivers new chat messages to a callback."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from craftly.client.config import get_client_settings

if TYPE_CHECKING:
    from craftly.client.repositories.messaging import MessagingRepository

logger = logging.getLogger(__name__)

MessageCallback = Callable[[list[dict[str, Any]]], Any]


class MessageListener:
    """Polls a conversation and calls back with messages not seen before.

    The first poll delivers the existing history. Failed polls are logged
    and retried on the next tick.
    """

    def __init__(
        self,
        repository: MessagingRepository,
        conversation_id: str,
        callback: MessageCallback,
        *,
        interval: float | None = None,
    ) -> None:
        self._repository = repository
        self._conversation_id = conversation_id
        self._callback = callback
        self._interval = (
            interval if interval is not None else get_client_settings().poll_interval_seconds
        )
        self._seen: set[str] = set()
        self._task: asyncio.Task[None] | None = None

    @property
    def active(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if not self.active:
            self._task = asyncio.create_task(self._run())

    async def poll_once(self) -> list[dict[str, Any]]:
        """Fetch once and deliver unseen messages; returns what was delivered."""
        result = await self._repository.get_messages(self._conversation_id)
        if result.is_failure:
            return []
        fresh = [m for m in result.value or [] if m.get("id") not in self._seen]
        if fresh:
            self._seen.update(m.get("id") for m in fresh)
            outcome = self._callback(fresh)
            if asyncio.iscoroutine(outcome):
                await outcome
        return fresh

    async def _run(self) -> None:
        while True:
            await self.poll_once()
            await asyncio.sleep(self._interval)

    def unsubscribe(self) -> None:
        if self._task is not None:
            self._task.cancel()
            self._task = None
            logger.debug("Stopped listening to %s", self._conversation_id)
