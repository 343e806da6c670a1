import io

import docx

from docsync.extraction.base import BaseTextExtractor
from docsync.extraction.models import ExtractionResult
from docsync.ingestion.exceptions import ExtractionFailureError


class DocxAdapter(BaseTextExtractor):
    """Extracts paragraph text from Word documents using python-docx."""

    def extract(self, data: bytes) -> ExtractionResult:
        try:
            document = docx.Document(io.BytesIO(data))
            paragraphs = [p.text for p in document.paragraphs]
            table_count = len(document.tables)
            image_count = len(document.inline_shapes)
        except Exception as exc:
            raise ExtractionFailureError(f"python-docx extraction failed: {exc}") from exc

        messages: list[str] = []
        if table_count:
            messages.append(f"Skipped {table_count} table(s)")
        if image_count:
            messages.append(f"Skipped {image_count} inline image(s)")
        text = "\n\n".join(p for p in paragraphs if p.strip())
        return ExtractionResult(text=text, messages=messages)
