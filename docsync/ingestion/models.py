import mimetypes
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

TEXT_PLAIN = "text/plain"
PDF = "application/pdf"
DOC = "application/msword"
DOCX = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
PPT = "application/vnd.ms-powerpoint"
PPTX = "application/vnd.openxmlformats-officedocument.presentationml.presentation"

_EXTENSION_TYPES: dict[str, str] = {
    ".txt": TEXT_PLAIN,
    ".pdf": PDF,
    ".doc": DOC,
    ".docx": DOCX,
    ".ppt": PPT,
    ".pptx": PPTX,
}


class MediaKind(str, Enum):
    TEXT = "text"
    WORD = "word"
    PRESENTATION = "presentation"
    PDF = "pdf"
    OTHER = "other"


@dataclass(frozen=True)
class UploadedFile:
    """One upload item: name, declared media type, byte length and payload."""

    name: str
    media_type: str
    size: int
    content: bytes | str

    @classmethod
    def from_path(cls, path: Path) -> "UploadedFile":
        """Read a file from disk, guessing its media type from the extension."""
        data = path.read_bytes()
        return cls(
            name=path.name,
            media_type=guess_media_type(path.name),
            size=len(data),
            content=data,
        )


def guess_media_type(filename: str) -> str:
    """Media type for a filename; empty string when nothing is known."""
    suffix = Path(filename).suffix.lower()
    if suffix in _EXTENSION_TYPES:
        return _EXTENSION_TYPES[suffix]
    guessed, _encoding = mimetypes.guess_type(filename)
    return guessed or ""


def classify(media_type: str, filename: str = "") -> MediaKind:
    """Map a declared media type (or, when empty, the extension) to a MediaKind.

    Presentation and PDF checks run before the word-processor check because
    OOXML presentation types also contain "document".
    """
    declared = (media_type or guess_media_type(filename)).lower()
    if declared == TEXT_PLAIN:
        return MediaKind.TEXT
    if declared == PDF:
        return MediaKind.PDF
    if "presentation" in declared or "powerpoint" in declared:
        return MediaKind.PRESENTATION
    if "word" in declared or "document" in declared:
        return MediaKind.WORD
    return MediaKind.OTHER
