from abc import ABC, abstractmethod

from docsync.extraction.models import ExtractionResult


class BaseTextExtractor(ABC):
    """Contract for all word-processor text extraction adapters."""

    @abstractmethod
    def extract(self, data: bytes) -> ExtractionResult:
        """Extract raw text from a binary document container.

        Args:
            data: Raw file content.

        Returns:
            ExtractionResult with the full text and any warnings.

        Raises:
            ExtractionFailureError: if extraction fails for any reason.
        """
