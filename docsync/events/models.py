from dataclasses import dataclass

from docsync.errors import ErrorKind
from docsync.sync.models import Document, Tone
from docsync.uploads.models import UploadTask


@dataclass(frozen=True)
class UploadTaskChanged:
    task: UploadTask


@dataclass(frozen=True)
class UploadTaskRemoved:
    task_id: str
    reason: str  # "cancelled", "cleared" or "expired"


@dataclass(frozen=True)
class DocumentSaved:
    document: Document


@dataclass(frozen=True)
class DocumentChanged:
    document: Document


@dataclass(frozen=True)
class DocumentDeleted:
    document_id: str


@dataclass(frozen=True)
class ActiveDocumentChanged:
    document: Document | None


@dataclass(frozen=True)
class ToneSelected:
    tone: Tone


@dataclass(frozen=True)
class SyncFailed:
    operation: str
    document_id: str | None
    kind: ErrorKind
    message: str


Event = (
    UploadTaskChanged
    | UploadTaskRemoved
    | DocumentSaved
    | DocumentChanged
    | DocumentDeleted
    | ActiveDocumentChanged
    | ToneSelected
    | SyncFailed
)
