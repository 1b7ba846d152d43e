"""Result DTOs returned by application services."""

from craftly.application.dtos.order import DeliveryMethods, OrderPage
from craftly.application.dtos.product import ProductStats
from craftly.application.dtos.user import AuthResult, UserResult

__all__ = ["AuthResult", "DeliveryMethods", "OrderPage", "ProductStats", "UserResult"]
