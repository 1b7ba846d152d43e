"""HTTP transport for the client repositories.

Every API response is a JSON envelope ``{"success": ..., "data": ...}``.
ApiClient returns the ``data`` member of successful responses and raises
ApiError for error envelopes and non-2xx statuses.

Usage::

    api = ApiClient("http://localhost:8000/api", session=SessionStore(path))
    products = await api.get("/products")
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from craftly.client.config import ClientSettings, get_client_settings
from craftly.client.errors import ApiError
from craftly.client.session import SessionStore

logger = logging.getLogger(__name__)

USER_ID_HEADER = "X-User-ID"


class ApiClient:
    """Async client for the Craftly REST API.

    The internal httpx.AsyncClient is created lazily and reused; pass a
    ``transport`` (e.g. httpx.MockTransport) to route requests elsewhere.
    """

    def __init__(
        self,
        base_url: str | None = None,
        *,
        session: SessionStore | None = None,
        settings: ClientSettings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings or get_client_settings()
        self._base_url = (base_url or self._settings.base_url).rstrip("/")
        self._session = session
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @property
    def session(self) -> SessionStore | None:
        return self._session

    async def _client_get(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self._base_url,
                timeout=self._settings.timeout_seconds,
                transport=self._transport,
                headers={"Accept": "application/json"},
            )
        return self._client

    def _auth_headers(self) -> dict[str, str]:
        user = self._session.get_user() if self._session is not None else None
        if user is None:
            return {}
        headers = {USER_ID_HEADER: user.uid}
        if user.token:
            headers["Authorization"] = f"Bearer {user.token}"
        return headers

    async def request(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        params: dict[str, Any] | None = None,
    ) -> Any:
        """Send a request and return the envelope's data.

        Raises:
            ApiError: Error envelope or non-2xx status.
            httpx.HTTPError: Transport failure (connection, timeout).
        """
        client = await self._client_get()
        response = await client.request(
            method,
            path,
            json=json,
            params={k: v for k, v in (params or {}).items() if v is not None} or None,
            headers=self._auth_headers(),
        )
        try:
            body = response.json()
        except ValueError:
            body = None

        if response.is_error or (isinstance(body, dict) and body.get("success") is False):
            message = response.reason_phrase or "Request failed"
            code = details = None
            if isinstance(body, dict):
                message = body.get("error") or body.get("message") or message
                code = body.get("code")
                details = body.get("details")
            logger.debug("%s %s failed: %s %s", method, path, response.status_code, message)
            raise ApiError(response.status_code, message, code=code, details=details)

        if isinstance(body, dict) and "success" in body:
            return body.get("data", body)
        return body

    async def get(self, path: str, **params: Any) -> Any:
        return await self.request("GET", path, params=params)

    async def post(self, path: str, json: Any = None) -> Any:
        return await self.request("POST", path, json=json)

    async def put(self, path: str, json: Any = None) -> Any:
        return await self.request("PUT", path, json=json)

    async def delete(self, path: str) -> Any:
        return await self.request("DELETE", path)

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> ApiClient:
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.aclose()
