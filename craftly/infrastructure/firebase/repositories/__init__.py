"""Firestore repositories, one per collection."""

from craftly.infrastructure.firebase.repositories.cart_repo_firestore import (
    FirestoreCartRepository,
)
from craftly.infrastructure.firebase.repositories.conversation_repo_firestore import (
    FirestoreConversationRepository,
)
from craftly.infrastructure.firebase.repositories.favorite_repo_firestore import (
    FirestoreFavoriteRepository,
)
from craftly.infrastructure.firebase.repositories.notification_repo_firestore import (
    FirestoreNotificationRepository,
)
from craftly.infrastructure.firebase.repositories.order_repo_firestore import (
    FirestoreOrderRepository,
)
from craftly.infrastructure.firebase.repositories.product_repo_firestore import (
    FirestoreProductRepository,
)
from craftly.infrastructure.firebase.repositories.review_repo_firestore import (
    FirestoreReviewRepository,
)
from craftly.infrastructure.firebase.repositories.user_repo_firestore import (
    FirestoreUserRepository,
)

__all__ = [
    "FirestoreCartRepository",
    "FirestoreConversationRepository",
    "FirestoreFavoriteRepository",
    "FirestoreNotificationRepository",
    "FirestoreOrderRepository",
    "FirestoreProductRepository",
    "FirestoreReviewRepository",
    "FirestoreUserRepository",
]
