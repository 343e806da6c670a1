from abc import ABC, abstractmethod

from docsync.sync.models import Document, NewDocument

UPDATABLE_FIELDS = frozenset(
    {"title", "processed_content", "tone", "word_count", "character_count"}
)


class DocumentStore(ABC):
    """Contract for persistent document record stores."""

    @abstractmethod
    async def create(self, new_document: NewDocument) -> Document:
        """Persist a new record and return it with id and timestamps set.

        Raises:
            PersistenceFailureError: on any store failure.
        """

    @abstractmethod
    async def find_by_id(self, document_id: str) -> Document:
        """Load one record.

        Raises:
            DocumentNotFoundError: if no document with this ID exists.
            PersistenceFailureError: on any other store failure.
        """

    @abstractmethod
    async def list_for_user(self, user_id: str) -> list[Document]:
        """All records owned by user_id, newest first."""

    @abstractmethod
    async def update(self, document_id: str, changes: dict[str, object]) -> Document:
        """Overwrite the given fields, stamp updated_at and return the record.

        Only UPDATABLE_FIELDS may be changed.

        Raises:
            DocumentNotFoundError: if no document with this ID exists.
            PersistenceFailureError: on any other store failure.
        """

    @abstractmethod
    async def delete(self, document_id: str) -> None:
        """Remove a record.

        Raises:
            DocumentNotFoundError: if no document with this ID exists.
            PersistenceFailureError: on any other store failure.
        """


def check_changes(changes: dict[str, object]) -> None:
    unknown = set(changes) - UPDATABLE_FIELDS
    if unknown:
        raise ValueError(f"Fields cannot be updated: {sorted(unknown)}")
    if not changes:
        raise ValueError("No fields to update")
