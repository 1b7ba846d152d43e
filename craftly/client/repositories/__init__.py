from craftly.client.repositories.auth import AuthRepository, SignUpResult
from craftly.client.repositories.cart import CartRepository
from craftly.client.repositories.favorites import FavoritesRepository
from craftly.client.repositories.messaging import MessagingRepository
from craftly.client.repositories.notifications import NotificationRepository
from craftly.client.repositories.orders import OrderRepository
from craftly.client.repositories.products import ProductRepository
from craftly.client.repositories.profile import ProfileRepository
from craftly.client.repositories.reviews import ReviewRepository

__all__ = [
    "AuthRepository",
    "CartRepository",
    "FavoritesRepository",
    "MessagingRepository",
    "NotificationRepository",
    "OrderRepository",
    "ProductRepository",
    "ProfileRepository",
    "ReviewRepository",
    "SignUpResult",
]
