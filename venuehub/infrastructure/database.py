"""Document store selection and lifecycle.

One process-wide store chosen by settings.database_backend:
"firestore" (REST client) or "memory" (in-process). Repositories receive the
store through FastAPI dependencies and only use the API both backends share.
"""

import logging

from venuehub.core.config import get_settings
from venuehub.infrastructure.firebase import (
    FirestoreRESTClient,
    close_firebase,
    init_firebase,
)
from venuehub.infrastructure.memory import MemoryDocumentStore

logger = logging.getLogger(__name__)

DocumentStore = FirestoreRESTClient | MemoryDocumentStore

_store: DocumentStore | None = None


def init_document_store() -> DocumentStore:
    """Create the configured store (idempotent).

    Raises:
        RuntimeError: Firestore selected but the client could not be initialized.
    """
    global _store
    if _store is not None:
        return _store
    settings = get_settings()
    if settings.database_backend == "memory":
        _store = MemoryDocumentStore()
        logger.warning("Using in-memory document store; data is lost on restart")
    else:
        client = init_firebase()
        if client is None:
            raise RuntimeError(
                "Firestore backend selected but the client could not be initialized; "
                "check FIREBASE_SERVICE_ACCOUNT_KEY / FIREBASE_SERVICE_ACCOUNT_PATH"
            )
        _store = client
    return _store


def get_document_store() -> DocumentStore:
    """Return the process-wide store, creating it on first use."""
    return _store if _store is not None else init_document_store()


def set_document_store(store: DocumentStore | None) -> None:
    """Replace the process-wide store (tests use a fresh memory store per test)."""
    global _store
    _store = store


async def close_document_store() -> None:
    """Release store resources. Call from app shutdown."""
    global _store
    if isinstance(_store, FirestoreRESTClient):
        await close_firebase()
    _store = None
