"""DTOs for product statistics."""

from dataclasses import asdict, dataclass
from typing import Any


@dataclass(frozen=True)
class ProductStats:
    """Rating summary and units sold for one product."""

    average_rating: float = 0.0
    review_count: int = 0
    sales_count: int = 0

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        return {
            "averageRating": data["average_rating"],
            "reviewCount": data["review_count"],
            "salesCount": data["sales_count"],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ProductStats":
        return cls(
            average_rating=float(data.get("averageRating", 0)),
            review_count=int(data.get("reviewCount", 0)),
            sales_count=int(data.get("salesCount", 0)),
        )
