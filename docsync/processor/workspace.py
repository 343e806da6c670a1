import random
from collections.abc import Iterable
from datetime import datetime, timezone

from docsync.analysis.models import DocumentStats, LibraryOverview
from docsync.analysis.stats import analyze, summarize_documents
from docsync.auth.provider import BaseAuthProvider, build_auth_provider
from docsync.config.settings import Settings
from docsync.database.repositories.base import DocumentStore
from docsync.database.repositories.factory import StoreFactory
from docsync.events.bus import EventBus
from docsync.export.exporter import ExportBlob, ExportFormat, ViewMode, export_content
from docsync.extraction.factory import ExtractorFactory
from docsync.ingestion.ingestor import FileIngestor
from docsync.ingestion.models import TEXT_PLAIN, UploadedFile
from docsync.logging.logger import Log
from docsync.sync.exceptions import NoActiveDocumentError
from docsync.sync.manager import SyncManager
from docsync.sync.models import Document, Tone
from docsync.templates.loader import load_template
from docsync.transform.transformer import format_text, summarize
from docsync.uploads.queue import UploadQueue


class Workspace:
    """Orchestrates the flow: upload -> ingest -> persist -> analyze/transform.

    Every successfully ingested file becomes a new stored document and is
    promoted to the active document. Analysis and transforms read the active
    document's processed content and never write to the store.
    """

    def __init__(
        self,
        ingestor: FileIngestor,
        sync: SyncManager,
        bus: EventBus,
        settings: Settings,
        rng: random.Random | None = None,
    ) -> None:
        self.bus = bus
        self.sync = sync
        self.uploads = UploadQueue(
            ingestor,
            self._persist_ingested,
            bus,
            tick_seconds=settings.upload_tick_seconds,
            max_progress_step=settings.upload_max_progress_step,
            clear_delay_seconds=settings.upload_clear_delay_seconds,
            rng=rng,
        )

    def upload(self, files: Iterable[UploadedFile]) -> list[str]:
        return self.uploads.enqueue(files)

    async def use_template(self, template_id: str) -> Document:
        """Start a new active document from a bundled template."""
        template = load_template(template_id)
        document = await self.sync.create(
            title=template.info.filename,
            content=template.content,
            media_type=TEXT_PLAIN,
            file_size=len(template.content.encode("utf-8")),
        )
        return self.sync.promote(document)

    def stats(self) -> DocumentStats:
        return analyze(self._active_content())

    def formatted(self) -> str:
        return format_text(self._active_content())

    def summary(self) -> str:
        return summarize(self._active_content())

    def export(self, mode: ViewMode | str, fmt: ExportFormat | str) -> ExportBlob:
        """Export the active document, or its summary, as txt or md."""
        active = self._require_active()
        mode = ViewMode(mode)
        content = active.processed_content if mode is ViewMode.DOCUMENT else self.summary()
        return export_content(content, active.title, mode, fmt)

    def overview(self, now: datetime | None = None) -> LibraryOverview:
        return summarize_documents(self.sync.documents(), now or datetime.now(timezone.utc))

    async def close(self) -> None:
        await self.uploads.close()

    async def _persist_ingested(self, file: UploadedFile, text: str) -> Document:
        document = await self.sync.create(
            title=file.name,
            content=text,
            media_type=file.media_type,
            file_size=file.size,
        )
        Log.info(f"Promoting {file.name} to the active document")
        return self.sync.promote(document)

    def _require_active(self) -> Document:
        if self.sync.active is None:
            raise NoActiveDocumentError("No document is open")
        return self.sync.active

    def _active_content(self) -> str:
        return self._require_active().processed_content


def build_workspace(
    settings: Settings,
    store: DocumentStore | None = None,
    auth: BaseAuthProvider | None = None,
) -> Workspace:
    """Build a Workspace with all collaborators resolved from settings."""
    bus = EventBus()
    ingestor = FileIngestor(word_extractor=ExtractorFactory.create(settings))
    sync = SyncManager(
        store=store if store is not None else StoreFactory.create(settings),
        auth=auth if auth is not None else build_auth_provider(settings),
        bus=bus,
        default_tone=Tone(settings.default_tone),
    )
    return Workspace(ingestor=ingestor, sync=sync, bus=bus, settings=settings)
