"""Favorited product ids of the signed-in user."""

from __future__ import annotations

from craftly.client.repositories.base import BaseRepository
from craftly.client.result import Result


class FavoritesRepository(BaseRepository):
    async def get_favorites(self) -> Result[list[str]]:
        async def call() -> list[str]:
            uid = self._require_user().uid
            data = await self._api.get(f"/favorites/{uid}")
            return list(data.get("favorites") or [])

        return await self._run("loading favorites", call)

    async def add_favorite(self, product_id: str) -> Result[None]:
        async def call() -> None:
            self._require_user()
            await self._api.post("/favorites", {"productId": product_id})

        return await self._run(f"adding favorite {product_id}", call)

    async def remove_favorite(self, product_id: str) -> Result[None]:
        async def call() -> None:
            self._require_user()
            await self._api.delete(f"/favorites/{product_id}")

        return await self._run(f"removing favorite {product_id}", call)

    async def toggle_favorite(self, product_id: str, is_favorite: bool) -> Result[bool]:
        """Flip the favorite flag; returns the new state."""
        if is_favorite:
            result = await self.remove_favorite(product_id)
        else:
            result = await self.add_favorite(product_id)
        return result.map(lambda _: not is_favorite)
