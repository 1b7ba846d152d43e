"""Profile of the signed-in user (and public profiles of sellers)."""

from __future__ import annotations

from typing import Any

from craftly.client.errors import ClientError
from craftly.client.repositories.base import BaseRepository
from craftly.client.result import Result
from craftly.domain.validators import validate_profile_data


class ProfileRepository(BaseRepository):
    async def get_profile(self, user_id: str | None = None) -> Result[dict[str, Any]]:
        """The given user's profile, or the signed-in user's."""

        async def call() -> dict[str, Any]:
            uid = user_id or self._require_user().uid
            return await self._api.get(f"/profile/{uid}")

        return await self._run("loading profile", call)

    async def update_profile(self, updates: dict[str, Any]) -> Result[dict[str, Any]]:
        async def call() -> dict[str, Any]:
            uid = self._require_user().uid
            errors = validate_profile_data(updates)
            if errors:
                raise ClientError(errors[0])
            return await self._api.post(f"/profile/{uid}", updates)

        return await self._run("updating profile", call)
