import asyncio

from docsync.extraction.base import BaseTextExtractor
from docsync.ingestion.exceptions import UnsupportedFormatError
from docsync.ingestion.models import MediaKind, UploadedFile, classify
from docsync.logging.logger import Log


def decode_text(content: bytes | str) -> str:
    """Best-effort UTF-8 decode; strings pass through unchanged."""
    if isinstance(content, str):
        return content
    return content.decode("utf-8-sig", errors="replace")


class FileIngestor:
    """Turns an uploaded payload into plain text, dispatching on media type.

    Extraction is all-or-nothing: either the full text is returned or an
    IngestionError is raised.
    """

    def __init__(self, word_extractor: BaseTextExtractor) -> None:
        self._word_extractor = word_extractor

    async def ingest(self, file: UploadedFile) -> str:
        """Extract plain text from an uploaded file.

        Raises:
            UnsupportedFormatError: for PDF and presentation formats.
            ExtractionFailureError: if the word-processor extractor fails.
        """
        kind = classify(file.media_type, file.name)
        Log.debug(f"Ingesting {file.name} ({file.media_type or 'no type'}) as {kind.value}")

        if kind is MediaKind.TEXT:
            return decode_text(file.content)
        if kind in (MediaKind.PDF, MediaKind.PRESENTATION):
            raise UnsupportedFormatError(
                f"{kind.value} text extraction is not supported: {file.name}"
            )
        if kind is MediaKind.WORD:
            return await self._extract_word(file)
        return decode_text(file.content)

    async def _extract_word(self, file: UploadedFile) -> str:
        data = file.content.encode("utf-8") if isinstance(file.content, str) else file.content
        result = await asyncio.to_thread(self._word_extractor.extract, data)
        if result.messages:
            Log.warning(
                f"Word document processing warnings for {file.name}: "
                f"{'; '.join(result.messages)}"
            )
        Log.info(f"Extracted {len(result.text)} chars from {file.name}")
        return result.text
