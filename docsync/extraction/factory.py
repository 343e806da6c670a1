from docsync.config.settings import Settings
from docsync.extraction.base import BaseTextExtractor
from docsync.extraction.docx_adapter import DocxAdapter


class ExtractorFactory:
    """Creates the word-processor extractor selected in settings."""

    ADAPTERS: dict[str, type[BaseTextExtractor]] = {
        "python-docx": DocxAdapter,
    }

    @classmethod
    def create(cls, settings: Settings) -> BaseTextExtractor:
        engine = settings.docx_engine.lower()
        adapter_cls = cls.ADAPTERS.get(engine)
        if adapter_cls is None:
            raise ValueError(
                f"Unknown docx engine '{engine}'. Choose from: {list(cls.ADAPTERS)}"
            )
        return adapter_cls()
