"""Favorites API schemas."""

from craftly.schemas.common import CamelModel


class FavoriteAddRequest(CamelModel):
    product_id: str | None = None
