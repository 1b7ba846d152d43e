"""Pydantic request/response schemas for the API."""

from craftly.schemas.auth import (
    ChangePasswordRequest,
    CheckRecoveryCodesRequest,
    RecoveryResetRequest,
    SignInRequest,
    SignUpRequest,
    ViewRecoveryCodesRequest,
)
from craftly.schemas.cart import CartSaveRequest
from craftly.schemas.common import CamelModel, success_response
from craftly.schemas.favorite import FavoriteAddRequest
from craftly.schemas.health import HealthResponse
from craftly.schemas.messaging import ConversationCreateRequest, MessageSendRequest
from craftly.schemas.order import (
    OrderCreateRequest,
    OrderStatusUpdateRequest,
    PaymentStatusUpdateRequest,
)
from craftly.schemas.product import (
    ProductCreateRequest,
    ProductUpdateRequest,
    StatsBatchRequest,
)
from craftly.schemas.profile import ProfileUpdateRequest
from craftly.schemas.review import ReviewSubmitRequest

__all__ = [
    "CamelModel",
    "CartSaveRequest",
    "ChangePasswordRequest",
    "CheckRecoveryCodesRequest",
    "ConversationCreateRequest",
    "FavoriteAddRequest",
    "HealthResponse",
    "MessageSendRequest",
    "OrderCreateRequest",
    "OrderStatusUpdateRequest",
    "PaymentStatusUpdateRequest",
    "ProductCreateRequest",
    "ProductUpdateRequest",
    "ProfileUpdateRequest",
    "RecoveryResetRequest",
    "ReviewSubmitRequest",
    "SignInRequest",
    "SignUpRequest",
    "StatsBatchRequest",
    "ViewRecoveryCodesRequest",
    "success_response",
]
