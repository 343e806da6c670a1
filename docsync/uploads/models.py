from dataclasses import dataclass
from enum import Enum

from docsync.errors import ErrorKind
from docsync.ingestion.models import UploadedFile


class UploadStatus(str, Enum):
    QUEUED = "queued"
    UPLOADING = "uploading"
    PROCESSING = "processing"
    COMPLETE = "complete"
    ERROR = "error"

    @property
    def is_terminal(self) -> bool:
        return self in (UploadStatus.COMPLETE, UploadStatus.ERROR)


ALLOWED_TRANSITIONS: dict[UploadStatus, frozenset[UploadStatus]] = {
    UploadStatus.QUEUED: frozenset({UploadStatus.UPLOADING}),
    UploadStatus.UPLOADING: frozenset({UploadStatus.UPLOADING, UploadStatus.PROCESSING}),
    UploadStatus.PROCESSING: frozenset({UploadStatus.COMPLETE, UploadStatus.ERROR}),
    UploadStatus.COMPLETE: frozenset(),
    UploadStatus.ERROR: frozenset(),
}


@dataclass(frozen=True)
class UploadTask:
    """Snapshot of one in-flight upload."""

    id: str
    file: UploadedFile
    progress: float = 0.0
    status: UploadStatus = UploadStatus.QUEUED
    error_kind: ErrorKind | None = None
    error_message: str | None = None
    document_id: str | None = None


@dataclass(frozen=True)
class ProgressEvent:
    """Message from an upload worker to the queue aggregator."""

    task_id: str
    status: UploadStatus
    progress: float
    error_kind: ErrorKind | None = None
    error_message: str | None = None
    document_id: str | None = None
