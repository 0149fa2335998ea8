"""Firestore backend: REST client and value encoding."""

from venuehub.infrastructure.firebase._rest_client import (
    CollectionReference,
    DocumentReference,
    DocumentSnapshot,
    FirestoreRESTClient,
)
from venuehub.infrastructure.firebase.client import (
    close_firebase,
    get_firestore_client,
    init_firebase,
)

__all__ = [
    "CollectionReference",
    "DocumentReference",
    "DocumentSnapshot",
    "FirestoreRESTClient",
    "close_firebase",
    "get_firestore_client",
    "init_firebase",
]
