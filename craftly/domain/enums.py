"""Domain enumerations for the Craftly marketplace.

Enums represent fixed sets of domain values stored on Firestore documents
(order status, payment method, roles). Values match the strings the mobile
and web clients send and display.
"""

from enum import Enum


class _ValuesMixin:
    @classmethod
    def values(cls) -> list[str]:
        """Return all valid values as strings (e.g. for error messages)."""
        return [member.value for member in cls]  # type: ignore[attr-defined]

    @classmethod
    def has_value(cls, value: object) -> bool:
        return isinstance(value, str) and value in cls.values()


class Role(_ValuesMixin, str, Enum):
    """Account role. A user may hold several (e.g. buyer and seller)."""

    BUYER = "buyer"
    SELLER = "seller"
    ADMIN = "admin"


class OrderStatus(_ValuesMixin, str, Enum):
    """Fulfilment status of an order, advanced by the seller."""

    PENDING = "pending"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class PaymentStatus(_ValuesMixin, str, Enum):
    """Payment status of an order. Marking a pending order paid moves it to processing."""

    UNPAID = "unpaid"
    PENDING = "pending"
    PAID = "paid"


class ShippingMethod(_ValuesMixin, str, Enum):
    """How the buyer receives the order."""

    LOCAL_DELIVERY = "local-delivery"
    STORE_PICKUP = "store-pickup"


class PaymentMethod(_ValuesMixin, str, Enum):
    """Cash on delivery or GCash e-wallet transfer."""

    COD = "cod"
    GCASH = "gcash"


class ProductStatus(_ValuesMixin, str, Enum):
    """Listing status. Only active products appear in the marketplace."""

    ACTIVE = "active"
    INACTIVE = "inactive"


class NotificationType(_ValuesMixin, str, Enum):
    """Notification kinds written to users/{uid}/notifications."""

    NEW_ORDER = "new_order"
    NEW_REVIEW = "new_review"
