"""Client-side models for the payloads the repositories keep locally."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ClientModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    def to_payload(self) -> dict:
        return self.model_dump(by_alias=True)


class SessionUser(ClientModel):
    uid: str
    email: str = ""
    display_name: str = ""
    roles: list[str] = Field(default_factory=list)
    token: str | None = None

    @property
    def is_seller(self) -> bool:
        return "seller" in self.roles

    @property
    def is_admin(self) -> bool:
        return "admin" in self.roles


class CartItem(ClientModel):
    id: str = ""
    product_id: str = ""
    name: str = ""
    price: float = 0.0
    quantity: int = 1
    image: str = ""
    created_by: str = ""
    stock: int = 0
    category: str = ""

    @property
    def subtotal(self) -> float:
        return self.price * self.quantity


class ProductStats(ClientModel):
    average_rating: float = 0.0
    review_count: int = 0
    sales_count: int = 0
