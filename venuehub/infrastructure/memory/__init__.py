"""In-memory document store backend."""

from venuehub.infrastructure.memory.store import (
    MemoryCollection,
    MemoryDocumentSnapshot,
    MemoryDocumentStore,
)

__all__ = ["MemoryCollection", "MemoryDocumentSnapshot", "MemoryDocumentStore"]
