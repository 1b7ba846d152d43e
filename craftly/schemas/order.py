"""Order API schemas.

Checkout fields are loosely typed: validate_order_request() checks them in
a fixed order and reports the first problem with a specific message, which
strict pydantic types would replace with a generic 422.
"""

from typing import Any

from craftly.schemas.common import CamelModel


class OrderCreateRequest(CamelModel):
    items: Any = None
    total_amount: Any = None
    shipping_method: Any = None
    shipping_address: Any = None
    delivery_fee: Any = None
    payment_method: Any = None
    receipt_image_url: str | None = None


class OrderStatusUpdateRequest(CamelModel):
    status: str | None = None


class PaymentStatusUpdateRequest(CamelModel):
    payment_status: str | None = None
