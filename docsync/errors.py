from enum import Enum
from typing import ClassVar


class ErrorKind(str, Enum):
    """Failure categories reported to callers and attached to upload tasks."""

    UNSUPPORTED_FORMAT = "UnsupportedFormat"
    EXTRACTION_FAILURE = "ExtractionFailure"
    AUTH_REQUIRED = "AuthRequired"
    PERSISTENCE_FAILURE = "PersistenceFailure"


class DocSyncError(Exception):
    """Base exception for all recoverable docsync errors.

    Subclasses narrow ``kind``; an error raised without a narrower class is
    reported as an extraction failure, the same as an unexpected exception
    during ingestion.
    """

    kind: ClassVar[ErrorKind] = ErrorKind.EXTRACTION_FAILURE
