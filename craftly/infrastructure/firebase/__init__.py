"""Firestore integration over the REST API."""

from craftly.infrastructure.firebase._rest_client import (
    ASCENDING,
    DESCENDING,
    CollectionReference,
    DocumentExistsError,
    DocumentNotFoundError,
    DocumentReference,
    DocumentSnapshot,
    FirestoreRESTClient,
    WriteBatch,
)
from craftly.infrastructure.firebase._rest_encoding import SERVER_TIMESTAMP, Increment
from craftly.infrastructure.firebase.client import (
    close_firebase,
    get_firestore_client,
    init_firebase,
)

__all__ = [
    "ASCENDING",
    "DESCENDING",
    "SERVER_TIMESTAMP",
    "CollectionReference",
    "DocumentExistsError",
    "DocumentNotFoundError",
    "DocumentReference",
    "DocumentSnapshot",
    "FirestoreRESTClient",
    "Increment",
    "WriteBatch",
    "close_firebase",
    "get_firestore_client",
    "init_firebase",
]
