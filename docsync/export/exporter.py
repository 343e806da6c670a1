from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from docsync.logging.logger import Log


class ViewMode(str, Enum):
    DOCUMENT = "document"
    SUMMARY = "summary"


class ExportFormat(str, Enum):
    TXT = "txt"
    MD = "md"


class UnsupportedExportFormatError(ValueError):
    """Raised when an export format other than txt or md is requested."""


_MEDIA_TYPES = {
    ExportFormat.TXT: "text/plain;charset=utf-8",
    ExportFormat.MD: "text/markdown;charset=utf-8",
}


@dataclass(frozen=True)
class ExportBlob:
    filename: str
    media_type: str
    content: str

    def to_bytes(self) -> bytes:
        return self.content.encode("utf-8")


def export_filename(title: str, mode: ViewMode, fmt: ExportFormat) -> str:
    """{title-without-extension}_{mode}.{ext}"""
    stem = Path(title).stem or title
    return f"{stem}_{mode.value}.{fmt.value}"


def export_content(
    content: str,
    title: str,
    mode: ViewMode | str,
    fmt: ExportFormat | str,
) -> ExportBlob:
    """Render the shown content as a plain-text or Markdown download."""
    mode = ViewMode(mode)
    try:
        fmt = ExportFormat(fmt)
    except ValueError as exc:
        raise UnsupportedExportFormatError(
            f"{str(fmt).upper()} export is not supported"
        ) from exc

    if fmt is ExportFormat.MD:
        heading = f"Summary of {title}" if mode is ViewMode.SUMMARY else title
        body = f"# {heading}\n\n{content}"
    else:
        body = content
    return ExportBlob(
        filename=export_filename(title, mode, fmt),
        media_type=_MEDIA_TYPES[fmt],
        content=body,
    )


def write_blob(blob: ExportBlob, directory: Path) -> Path:
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / blob.filename
    path.write_bytes(blob.to_bytes())
    Log.info(f"Exported {len(blob.content)} chars to {path}")
    return path
