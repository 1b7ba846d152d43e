"""DTOs for order listings."""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class OrderPage:
    """First page of a buyer's orders, newest first."""

    orders: list[dict[str, Any]]
    total: int
    has_more: bool
    from_cache: bool = False


@dataclass(frozen=True)
class DeliveryMethods:
    seller_id: str
    allow_shipping: bool
    allow_pickup: bool
