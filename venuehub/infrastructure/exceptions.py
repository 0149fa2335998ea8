"""Infrastructure exceptions for document store operations.

Raised by both document store backends (Firestore REST and in-memory) so
repositories handle a single set of errors.
"""


class DocumentStoreError(Exception):
    """Base exception for document store failures."""


class DocumentExistsError(DocumentStoreError):
    """Raised when creating a document whose ID already exists."""


class PreconditionFailedError(DocumentStoreError):
    """Raised when a conditional write finds the document changed or missing."""
