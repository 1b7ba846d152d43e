"""Review API schemas."""

from typing import Any

from craftly.schemas.common import CamelModel


class ReviewSubmitRequest(CamelModel):
    product_id: str | None = None
    product_creator_id: str | None = None
    product_name: str | None = None
    user_id: str | None = None
    user_name: str | None = None
    rating: Any = None
    comment: str | None = None
