from docsync.errors import DocSyncError, ErrorKind


class SyncError(DocSyncError):
    """Base exception for all synchronization errors."""

    kind = ErrorKind.PERSISTENCE_FAILURE


class AuthRequiredError(SyncError):
    """Raised when a mutating operation runs without an authenticated user."""

    kind = ErrorKind.AUTH_REQUIRED


class PersistenceFailureError(SyncError):
    """Raised when a store call fails for any reason."""

    kind = ErrorKind.PERSISTENCE_FAILURE


class DocumentNotFoundError(PersistenceFailureError):
    """Raised when a document cannot be found in the store."""


class NoActiveDocumentError(Exception):
    """Raised when an operation needs an open document and none is active."""
