"""Application services (use cases)."""

from craftly.application.services.auth_service import AuthService
from craftly.application.services.cart_service import CartService
from craftly.application.services.dashboard_service import DashboardService
from craftly.application.services.favorite_service import FavoriteService
from craftly.application.services.messaging_service import MessagingService
from craftly.application.services.notification_service import NotificationService
from craftly.application.services.order_service import OrderService
from craftly.application.services.product_service import ProductService
from craftly.application.services.profile_service import ProfileService
from craftly.application.services.review_service import ReviewService

__all__ = [
    "AuthService",
    "CartService",
    "DashboardService",
    "FavoriteService",
    "MessagingService",
    "NotificationService",
    "OrderService",
    "ProductService",
    "ProfileService",
    "ReviewService",
]
