from collections.abc import Awaitable
from dataclasses import replace
from typing import TypeVar

from docsync.analysis.stats import count_characters, count_words
from docsync.auth.provider import BaseAuthProvider
from docsync.database.repositories.base import DocumentStore
from docsync.events.bus import EventBus
from docsync.events.models import (
    ActiveDocumentChanged,
    DocumentChanged,
    DocumentDeleted,
    DocumentSaved,
    SyncFailed,
    ToneSelected,
)
from docsync.logging.logger import Log
from docsync.sync.exceptions import (
    AuthRequiredError,
    NoActiveDocumentError,
    SyncError,
)
from docsync.sync.models import Document, NewDocument, Tone

T = TypeVar("T")


def content_counts(content: str) -> dict[str, object]:
    """Derived count fields that must accompany every content write."""
    return {
        "word_count": count_words(content),
        "character_count": count_characters(content),
    }


class SyncManager:
    """Keeps the local document cache and the active document in step with the store.

    Sole owner of the cache, the active-document slot and the tone selection.
    Store failures are reported (SyncFailed event, then re-raised) and never
    retried automatically. A local edit to the active document survives a
    failed sync; the document stays unsynced until resync() succeeds.
    """

    def __init__(
        self,
        store: DocumentStore,
        auth: BaseAuthProvider,
        bus: EventBus,
        default_tone: Tone = Tone.FORMAL,
    ) -> None:
        self._store = store
        self._auth = auth
        self._bus = bus
        self._cache: dict[str, Document] = {}
        self._active: Document | None = None
        self._selected_tone = default_tone
        self._unsynced: dict[str, set[str]] = {}

    @property
    def active(self) -> Document | None:
        return self._active

    @property
    def selected_tone(self) -> Tone:
        return self._selected_tone

    def documents(self) -> list[Document]:
        """Cached documents, newest first."""
        return sorted(
            self._cache.values(),
            key=lambda d: d.created_at.timestamp() if d.created_at else 0.0,
            reverse=True,
        )

    def is_synced(self, document_id: str) -> bool:
        return document_id not in self._unsynced

    async def refresh(self) -> list[Document]:
        """Reload the cache from the store; signed-out users get an empty cache."""
        user_id = self._auth.current_user_id()
        if user_id is None:
            self._cache.clear()
            return []
        documents = await self._guard(
            "refresh", None, self._store.list_for_user(user_id)
        )
        self._cache = {d.id: d for d in documents}
        Log.info(f"Loaded {len(documents)} document(s) for user {user_id}")
        return documents

    async def create(
        self,
        title: str,
        content: str,
        tone: Tone | None = None,
        media_type: str | None = None,
        file_size: int | None = None,
    ) -> Document:
        """Persist a new document whose processed content starts as the original."""
        user_id = self._require_user("create", None)
        new_document = NewDocument(
            user_id=user_id,
            title=title,
            original_content=content,
            processed_content=content,
            tone=tone or self._selected_tone,
            file_type=media_type,
            file_size=file_size,
            word_count=count_words(content),
            character_count=count_characters(content),
        )
        document = await self._guard("create", None, self._store.create(new_document))
        self._cache[document.id] = document
        Log.info(f"Saved {title} ({document.word_count} words)", document=document.id)
        self._bus.publish(DocumentSaved(document))
        return document

    async def open(self, document_id: str) -> Document:
        """Make a stored document active, loading it when it is not cached."""
        document = self._cache.get(document_id)
        if document is None:
            document = await self._guard(
                "open", document_id, self._store.find_by_id(document_id)
            )
            self._cache[document.id] = document
        return self.promote(document)

    def promote(self, document: Document) -> Document:
        """Replace the active document. No store state is touched."""
        self._active = document
        self._bus.publish(ActiveDocumentChanged(document))
        return document

    def close_active(self) -> None:
        if self._active is not None:
            self._active = None
            self._bus.publish(ActiveDocumentChanged(None))

    async def update_content(self, document_id: str, content: str) -> Document:
        changes = {"processed_content": content, **content_counts(content)}
        return await self._push("update_content", document_id, changes)

    async def update_tone(self, document_id: str, tone: Tone) -> Document:
        return await self._push("update_tone", document_id, {"tone": tone})

    async def update_title(self, document_id: str, title: str) -> Document:
        return await self._push("update_title", document_id, {"title": title})

    async def delete(self, document_id: str) -> None:
        """Delete from the store; the cache entry goes only once the store agrees."""
        self._require_user("delete", document_id)
        await self._guard("delete", document_id, self._store.delete(document_id))
        self._cache.pop(document_id, None)
        self._unsynced.pop(document_id, None)
        Log.info("Deleted document", document=document_id)
        self._bus.publish(DocumentDeleted(document_id))
        if self._active is not None and self._active.id == document_id:
            self.close_active()

    async def select_tone(self, tone: Tone) -> None:
        """Record the tone choice and, with a document open, persist it there."""
        self._selected_tone = tone
        self._bus.publish(ToneSelected(tone))
        if self._active is None:
            return
        self._active = replace(self._active, tone=tone)
        await self._push_active("update_tone", {"tone": tone})

    async def edit_active_content(self, content: str) -> Document:
        """Apply an editor change locally, then persist it.

        The local change is kept even if persisting fails.
        """
        if self._active is None:
            raise NoActiveDocumentError("No document is open")
        changes = {"processed_content": content, **content_counts(content)}
        self._active = replace(self._active, **changes)  # type: ignore[arg-type]
        return await self._push_active("update_content", changes)

    async def resync(self) -> Document | None:
        """Push the active document's unsynced fields again. None when nothing is pending."""
        if self._active is None:
            raise NoActiveDocumentError("No document is open")
        fields = self._unsynced.get(self._active.id)
        if not fields:
            return None
        changes = {name: getattr(self._active, name) for name in sorted(fields)}
        if "processed_content" in changes:
            changes.update(content_counts(self._active.processed_content))
        return await self._push_active("resync", changes)

    async def _push_active(self, operation: str, changes: dict[str, object]) -> Document:
        """Persist a local change to the active document.

        Fields stay marked unsynced until a push of their current local value
        succeeds, so a newer edit made while this push is in flight is kept.
        """
        if self._active is None:
            raise NoActiveDocumentError("No document is open")
        document_id = self._active.id
        self._unsynced.setdefault(document_id, set()).update(changes)
        document = await self._push(operation, document_id, changes, local_edit=True)

        pending = self._unsynced.get(document_id, set())
        pending.difference_update(
            name for name, value in changes.items() if self._holds_local(document_id, name, value)
        )
        if not pending:
            self._unsynced.pop(document_id, None)
        return document

    def _holds_local(self, document_id: str, name: str, value: object) -> bool:
        """True unless the active document has a newer local value for this field."""
        if self._active is None or self._active.id != document_id:
            return True
        return getattr(self._active, name) == value

    async def _push(
        self,
        operation: str,
        document_id: str,
        changes: dict[str, object],
        local_edit: bool = False,
    ) -> Document:
        self._require_user(operation, document_id)
        stored = await self._guard(
            operation, document_id, self._store.update(document_id, changes)
        )
        merged = {name: getattr(stored, name) for name in changes}
        cached = self._cache.get(document_id)
        base = cached if cached is not None else stored
        document = replace(base, **merged, updated_at=stored.updated_at)
        self._cache[document_id] = document

        if self._active is not None and self._active.id == document_id:
            # a local edit never takes back a field the user changed again meanwhile
            if local_edit:
                merged = {
                    name: value
                    for name, value in merged.items()
                    if self._holds_local(document_id, name, changes[name])
                }
            self._active = replace(self._active, **merged, updated_at=stored.updated_at)
        Log.debug(f"Synced {sorted(changes)}", document=document_id)
        self._bus.publish(DocumentChanged(document))
        return document

    def _require_user(self, operation: str, document_id: str | None) -> str:
        user_id = self._auth.current_user_id()
        if user_id is None:
            exc = AuthRequiredError(f"Sign in required to {operation.replace('_', ' ')}")
            self._report(operation, document_id, exc)
            raise exc
        return user_id

    async def _guard(self, operation: str, document_id: str | None, call: Awaitable[T]) -> T:
        try:
            return await call
        except SyncError as exc:
            self._report(operation, document_id, exc)
            raise

    def _report(self, operation: str, document_id: str | None, exc: SyncError) -> None:
        Log.error(f"Sync {operation} failed ({exc.kind.value}): {exc}", document=document_id)
        self._bus.publish(
            SyncFailed(
                operation=operation,
                document_id=document_id,
                kind=exc.kind,
                message=str(exc),
            )
        )


