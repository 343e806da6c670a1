from docsync.errors import DocSyncError, ErrorKind


class IngestionError(DocSyncError):
    """Base exception for all ingestion-related errors."""

    kind = ErrorKind.EXTRACTION_FAILURE


class UnsupportedFormatError(IngestionError):
    """Raised when a recognized format has no text extraction support."""

    kind = ErrorKind.UNSUPPORTED_FORMAT


class ExtractionFailureError(IngestionError):
    """Raised when an extractor fails to produce text for a supported format."""

    kind = ErrorKind.EXTRACTION_FAILURE
