"""Cart API schemas."""

from typing import Any

from craftly.schemas.common import CamelModel


class CartSaveRequest(CamelModel):
    # Checked by the service so a non-list gets "Items must be an array".
    items: Any = None
