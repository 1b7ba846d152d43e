"""Domain layer: enums, exceptions, roles and validation rules.

Independent of FastAPI and Firestore; shared by the server and the client SDK.
"""

from craftly.domain.exceptions import (
    AuthenticationException,
    AuthorizationException,
    ConflictException,
    CraftlyException,
    FirestoreUnavailableException,
    RecoveryCodesExhaustedException,
    ResourceNotFoundException,
    ValidationException,
)

__all__ = [
    "AuthenticationException",
    "AuthorizationException",
    "ConflictException",
    "CraftlyException",
    "FirestoreUnavailableException",
    "RecoveryCodesExhaustedException",
    "ResourceNotFoundException",
    "ValidationException",
]
