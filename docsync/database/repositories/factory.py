from docsync.config.settings import Settings
from docsync.database.repositories.base import DocumentStore
from docsync.database.repositories.documents_repository import DocumentsRepository
from docsync.database.repositories.memory_repository import MemoryDocumentRepository


class StoreFactory:
    """Creates the document store selected in settings."""

    ADAPTERS: dict[str, type[DocumentStore]] = {
        "postgres": DocumentsRepository,
        "memory": MemoryDocumentRepository,
    }

    @classmethod
    def create(cls, settings: Settings) -> DocumentStore:
        backend = settings.store_backend.lower()
        adapter_cls = cls.ADAPTERS.get(backend)
        if adapter_cls is None:
            raise ValueError(
                f"Unknown store backend '{backend}'. Choose from: {list(cls.ADAPTERS)}"
            )
        return adapter_cls()
