"""Presentation-layer dependency injection (composition root).

Provides FastAPI Depends() for the Firestore client, the cache, the
WebSocket manager, repositories and application services. Routes depend
only on these dependencies, not on infrastructure directly; tests swap the
Firestore client through app.dependency_overrides[get_firestore].
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Annotated, Any

from fastapi import Depends, Path, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from craftly.application.services import (
    AuthService,
    CartService,
    DashboardService,
    FavoriteService,
    MessagingService,
    NotificationService,
    OrderService,
    ProductService,
    ProfileService,
    ReviewService,
)
from craftly.core.config import get_settings
from craftly.domain.exceptions import (
    AuthenticationException,
    AuthorizationException,
    FirestoreUnavailableException,
)
from craftly.domain.validators import DOCUMENT_ID_PATTERN, is_valid_document_id
from craftly.infrastructure.firebase._rest_client import FirestoreRESTClient
from craftly.infrastructure.firebase.client import get_firestore_client
from craftly.infrastructure.firebase.repositories import (
    FirestoreCartRepository,
    FirestoreConversationRepository,
    FirestoreFavoriteRepository,
    FirestoreNotificationRepository,
    FirestoreOrderRepository,
    FirestoreProductRepository,
    FirestoreReviewRepository,
    FirestoreUserRepository,
)
from craftly.infrastructure.security.jwt import create_access_token, verify_token
from craftly.infrastructure.security.password import (
    get_password_hash,
    needs_rehash,
    verify_password,
)

# Path parameter that ends up in a Firestore document path or a cache key.
DocId = Annotated[str, Path(pattern=f"^{DOCUMENT_ID_PATTERN.pattern}$")]

MISSING_USER_MESSAGE = "User ID is required (x-user-id header)"


@dataclass
class AuthSecurity:
    """Token and password hashing provided via DI (no direct infra imports in services)."""

    def create_access_token(self, data: dict) -> str:
        return create_access_token(data)

    def hash_password(self, password: str) -> str:
        return get_password_hash(password)

    def verify_password(self, password: str, hashed: str) -> bool:
        return verify_password(password, hashed)

    def needs_rehash(self, hashed: str | None) -> bool:
        return needs_rehash(hashed)


def get_auth_security() -> AuthSecurity:
    """Auth token creation and password hashing (composition root)."""
    return AuthSecurity()


def get_firestore() -> FirestoreRESTClient:
    """Return the Firestore client or raise 503 when it is not configured."""
    client = get_firestore_client()
    if client is None:
        raise FirestoreUnavailableException()
    return client


def get_cache(request: Request) -> Any:
    """Shared cache (Redis or in-process) from app.state."""
    return request.app.state.cache


def get_ws_manager(request: Request) -> Any:
    return request.app.state.ws_manager


FirestoreDep = Annotated[FirestoreRESTClient, Depends(get_firestore)]
CacheDep = Annotated[Any, Depends(get_cache)]


# ---- Identity ----

_http_bearer = HTTPBearer(auto_error=False)


async def get_optional_user_id(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(_http_bearer)],
) -> str | None:
    """Caller's uid from a Bearer token, else from the X-User-ID header (when allowed).

    A token that is present but invalid is rejected rather than ignored.
    """
    if credentials is not None:
        try:
            uid = verify_token(credentials.credentials)["sub"]
        except ValueError as e:
            raise AuthenticationException("Invalid or expired token") from e
    else:
        settings = get_settings()
        if not settings.allow_user_id_header:
            return None
        uid = request.headers.get(settings.user_id_header)
        if not uid:
            return None
    if not is_valid_document_id(uid):
        raise AuthenticationException("Invalid user ID")
    return uid


async def get_current_user_id(
    uid: Annotated[str | None, Depends(get_optional_user_id)],
) -> str:
    """Caller's uid; 401 when the request carries no identity."""
    if uid is None:
        raise AuthenticationException(MISSING_USER_MESSAGE)
    return uid


CurrentUserId = Annotated[str, Depends(get_current_user_id)]


# ---- Repositories ----


def get_user_repo(db: FirestoreDep) -> FirestoreUserRepository:
    return FirestoreUserRepository(db)


def get_product_repo(db: FirestoreDep) -> FirestoreProductRepository:
    return FirestoreProductRepository(db)


def get_cart_repo(db: FirestoreDep) -> FirestoreCartRepository:
    return FirestoreCartRepository(db)


def get_favorite_repo(db: FirestoreDep) -> FirestoreFavoriteRepository:
    return FirestoreFavoriteRepository(db)


def get_order_repo(db: FirestoreDep) -> FirestoreOrderRepository:
    return FirestoreOrderRepository(db)


def get_notification_repo(db: FirestoreDep) -> FirestoreNotificationRepository:
    return FirestoreNotificationRepository(db)


def get_review_repo(db: FirestoreDep) -> FirestoreReviewRepository:
    return FirestoreReviewRepository(db)


def get_conversation_repo(db: FirestoreDep) -> FirestoreConversationRepository:
    return FirestoreConversationRepository(db)


# ---- Services ----


def get_auth_service(
    user_repo: Annotated[FirestoreUserRepository, Depends(get_user_repo)],
    auth_security: Annotated[AuthSecurity, Depends(get_auth_security)],
) -> AuthService:
    return AuthService(user_repo, auth_security)


def get_product_service(
    product_repo: Annotated[FirestoreProductRepository, Depends(get_product_repo)],
    review_repo: Annotated[FirestoreReviewRepository, Depends(get_review_repo)],
    order_repo: Annotated[FirestoreOrderRepository, Depends(get_order_repo)],
    user_repo: Annotated[FirestoreUserRepository, Depends(get_user_repo)],
    cache: CacheDep,
) -> ProductService:
    return ProductService(
        product_repo,
        review_repo,
        order_repo,
        user_repo,
        cache,
        stats_ttl=get_settings().stats_cache_ttl_seconds,
    )


def get_cart_service(
    cart_repo: Annotated[FirestoreCartRepository, Depends(get_cart_repo)],
) -> CartService:
    return CartService(cart_repo)


def get_favorite_service(
    favorite_repo: Annotated[FirestoreFavoriteRepository, Depends(get_favorite_repo)],
) -> FavoriteService:
    return FavoriteService(favorite_repo)


def get_order_service(
    order_repo: Annotated[FirestoreOrderRepository, Depends(get_order_repo)],
    product_repo: Annotated[FirestoreProductRepository, Depends(get_product_repo)],
    user_repo: Annotated[FirestoreUserRepository, Depends(get_user_repo)],
    notification_repo: Annotated[
        FirestoreNotificationRepository, Depends(get_notification_repo)
    ],
    cache: CacheDep,
) -> OrderService:
    settings = get_settings()
    return OrderService(
        order_repo,
        product_repo,
        user_repo,
        notification_repo,
        cache,
        cache_ttl=settings.orders_cache_ttl_seconds,
        seller_scan_limit=settings.seller_orders_scan_limit,
    )


def get_profile_service(
    user_repo: Annotated[FirestoreUserRepository, Depends(get_user_repo)],
) -> ProfileService:
    return ProfileService(user_repo)


def get_review_service(
    review_repo: Annotated[FirestoreReviewRepository, Depends(get_review_repo)],
    product_repo: Annotated[FirestoreProductRepository, Depends(get_product_repo)],
    product_service: Annotated[ProductService, Depends(get_product_service)],
) -> ReviewService:
    return ReviewService(review_repo, product_repo, product_service)


def get_notification_service(
    notification_repo: Annotated[
        FirestoreNotificationRepository, Depends(get_notification_repo)
    ],
) -> NotificationService:
    return NotificationService(notification_repo)


def get_messaging_service(
    request: Request,
    conversation_repo: Annotated[
        FirestoreConversationRepository, Depends(get_conversation_repo)
    ],
) -> MessagingService:
    settings = get_settings()
    return MessagingService(
        conversation_repo,
        get_ws_manager(request),
        conversations_limit=settings.conversations_limit,
        messages_limit=settings.messages_limit,
    )


def get_dashboard_service(
    product_repo: Annotated[FirestoreProductRepository, Depends(get_product_repo)],
    order_repo: Annotated[FirestoreOrderRepository, Depends(get_order_repo)],
) -> DashboardService:
    return DashboardService(product_repo, order_repo)


def ensure_same_user(caller: str, user_id: str, resource: str) -> None:
    """403 unless the caller is acting on their own data."""
    if caller != user_id:
        raise AuthorizationException(f"Unauthorized to access this {resource}", resource=resource)
