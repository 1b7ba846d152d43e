"""Product API schemas.

Price and stock are passed through as sent so that ProductService can
answer bad numbers with a 400.
"""

from typing import Any

from pydantic import Field

from craftly.schemas.common import CamelModel


class ProductCreateRequest(CamelModel):
    name: str | None = None
    description: str | None = None
    category: str | None = None
    price: Any = None
    stock: Any = None
    images: list[str] = Field(default_factory=list)


class ProductUpdateRequest(CamelModel):
    """Partial update; only fields present in the body are written."""

    name: str | None = None
    description: str | None = None
    category: str | None = None
    price: Any = None
    stock: Any = None
    images: list[str] | None = None
    status: str | None = None


class StatsBatchRequest(CamelModel):
    product_ids: list[str] = Field(..., max_length=100)
