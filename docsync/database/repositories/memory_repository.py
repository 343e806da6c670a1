import uuid
from dataclasses import replace
from datetime import datetime, timezone

from docsync.database.repositories.base import DocumentStore, check_changes
from docsync.sync.exceptions import DocumentNotFoundError
from docsync.sync.models import Document, NewDocument


class MemoryDocumentRepository(DocumentStore):
    """Process-local document store, for running without a database."""

    def __init__(self) -> None:
        self._rows: dict[str, Document] = {}
        self._sequence: dict[str, int] = {}

    async def create(self, new_document: NewDocument) -> Document:
        now = datetime.now(timezone.utc)
        document = Document(
            id=str(uuid.uuid4()),
            user_id=new_document.user_id,
            title=new_document.title,
            original_content=new_document.original_content,
            processed_content=new_document.processed_content,
            tone=new_document.tone,
            file_type=new_document.file_type,
            file_size=new_document.file_size,
            word_count=new_document.word_count,
            character_count=new_document.character_count,
            created_at=now,
            updated_at=now,
        )
        self._rows[document.id] = document
        self._sequence[document.id] = len(self._sequence)
        return document

    async def find_by_id(self, document_id: str) -> Document:
        document = self._rows.get(document_id)
        if document is None:
            raise DocumentNotFoundError(f"Document {document_id} not found")
        return document

    async def list_for_user(self, user_id: str) -> list[Document]:
        owned = [d for d in self._rows.values() if d.user_id == user_id]
        return sorted(
            owned,
            key=lambda d: (d.created_at, self._sequence[d.id]),
            reverse=True,
        )

    async def update(self, document_id: str, changes: dict[str, object]) -> Document:
        check_changes(changes)
        current = await self.find_by_id(document_id)
        updated = replace(current, **changes, updated_at=datetime.now(timezone.utc))  # type: ignore[arg-type]
        self._rows[document_id] = updated
        return updated

    async def delete(self, document_id: str) -> None:
        if self._rows.pop(document_id, None) is None:
            raise DocumentNotFoundError(f"Document {document_id} not found")
        del self._sequence[document_id]
