from docsync.ingestion.ingestor import FileIngestor
from docsync.ingestion.models import MediaKind, UploadedFile, classify

__all__ = ["FileIngestor", "MediaKind", "UploadedFile", "classify"]
