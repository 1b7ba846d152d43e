"""Shared plumbing for client repositories: session access and Result mapping."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from typing import TypeVar

import httpx

from craftly.client.api_client import ApiClient
from craftly.client.errors import ClientError, NotLoggedInError
from craftly.client.models import SessionUser
from craftly.client.result import Result
from craftly.client.session import SessionStore

logger = logging.getLogger(__name__)

T = TypeVar("T")


class BaseRepository:
    def __init__(self, api: ApiClient, session: SessionStore | None = None) -> None:
        self._api = api
        self._session = session if session is not None else api.session

    def current_user(self) -> SessionUser | None:
        return self._session.get_user() if self._session is not None else None

    def _require_user(self) -> SessionUser:
        user = self.current_user()
        if user is None:
            raise NotLoggedInError()
        return user

    async def _run(self, action: str, call: Callable[[], Awaitable[T]]) -> Result[T]:
        """Await call and wrap its value; client and transport errors become failures."""
        try:
            return Result.success(await call())
        except (ClientError, httpx.HTTPError) as e:
            logger.error("Error %s: %s", action, e)
            return Result.failure(e)
