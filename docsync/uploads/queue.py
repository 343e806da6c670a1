import asyncio
import random
import uuid
from collections.abc import Awaitable, Callable, Iterable
from dataclasses import replace

from docsync.errors import DocSyncError, ErrorKind
from docsync.events.bus import EventBus
from docsync.events.models import UploadTaskChanged, UploadTaskRemoved
from docsync.ingestion.ingestor import FileIngestor
from docsync.ingestion.models import UploadedFile
from docsync.logging.logger import Log
from docsync.sync.models import Document
from docsync.uploads.models import (
    ALLOWED_TRANSITIONS,
    ProgressEvent,
    UploadStatus,
    UploadTask,
)

IngestedHandler = Callable[[UploadedFile, str], Awaitable[Document]]


class UploadQueue:
    """Tracks a batch of concurrent file ingestions.

    Each admitted file gets its own worker coroutine. Workers never touch the
    task records: they send ProgressEvent messages to one aggregator, which
    validates the transition, updates the arena and notifies subscribers.

    Upload progress is a cosmetic estimate. Each tick adds a random step until
    it reaches 100, then the file is handed to the ingestor.
    """

    def __init__(
        self,
        ingestor: FileIngestor,
        on_ingested: IngestedHandler,
        bus: EventBus,
        *,
        tick_seconds: float = 0.1,
        max_progress_step: float = 15.0,
        clear_delay_seconds: float | None = 2.0,
        rng: random.Random | None = None,
    ) -> None:
        if max_progress_step <= 0:
            raise ValueError("max_progress_step must be positive")
        self._ingestor = ingestor
        self._on_ingested = on_ingested
        self._bus = bus
        self._tick_seconds = tick_seconds
        self._max_progress_step = max_progress_step
        self._clear_delay_seconds = clear_delay_seconds
        self._rng = rng or random.Random()

        self._tasks: dict[str, UploadTask] = {}
        self._workers: dict[str, asyncio.Task[None]] = {}
        self._expiry: dict[str, asyncio.TimerHandle] = {}
        self._events: asyncio.Queue[ProgressEvent] | None = None
        self._aggregator: asyncio.Task[None] | None = None

    def enqueue(self, files: Iterable[UploadedFile]) -> list[str]:
        """Admit a batch; every file is queued before any worker starts.

        Must be called from a running event loop.
        """
        batch = [UploadTask(id=uuid.uuid4().hex, file=file) for file in files]
        if not batch:
            return []
        self._ensure_aggregator()

        for task in batch:
            self._tasks[task.id] = task
        for task in batch:
            self._bus.publish(UploadTaskChanged(task))
        for task in batch:
            self._workers[task.id] = asyncio.create_task(
                self._run(task.id, task.file), name=f"upload-{task.id}"
            )
        Log.info(f"Queued {len(batch)} file(s) for upload")
        return [task.id for task in batch]

    def remove(self, task_id: str) -> bool:
        """Drop a task. A non-terminal task is cancelled and reports nothing further."""
        task = self._tasks.pop(task_id, None)
        if task is None:
            return False
        worker = self._workers.pop(task_id, None)
        if worker is not None and not worker.done():
            worker.cancel()
        self._cancel_expiry(task_id)

        reason = "cleared" if task.status.is_terminal else "cancelled"
        Log.info(f"Upload {task.file.name} {reason}", task=task_id)
        self._bus.publish(UploadTaskRemoved(task_id=task_id, reason=reason))
        return True

    def get(self, task_id: str) -> UploadTask | None:
        return self._tasks.get(task_id)

    def tasks(self) -> list[UploadTask]:
        """Current tasks in admission order."""
        return list(self._tasks.values())

    def clear_finished(self) -> int:
        """Remove every task in a terminal state; returns how many were removed."""
        finished = [t.id for t in self._tasks.values() if t.status.is_terminal]
        for task_id in finished:
            self.remove(task_id)
        return len(finished)

    async def wait_idle(self) -> None:
        """Wait until every worker has finished and all its events are applied."""
        while self._workers:
            await asyncio.gather(*self._workers.values(), return_exceptions=True)
            for task_id, worker in list(self._workers.items()):
                if worker.done():
                    self._workers.pop(task_id, None)
        if self._events is not None:
            await self._events.join()

    async def close(self) -> None:
        """Cancel workers, pending auto-clears and the aggregator."""
        workers = list(self._workers.values())
        for worker in workers:
            worker.cancel()
        await asyncio.gather(*workers, return_exceptions=True)
        self._workers.clear()
        for task_id in list(self._expiry):
            self._cancel_expiry(task_id)
        if self._aggregator is not None:
            self._aggregator.cancel()
            await asyncio.gather(self._aggregator, return_exceptions=True)
            self._aggregator = None
            self._events = None

    def _ensure_aggregator(self) -> None:
        if self._aggregator is None or self._aggregator.done():
            events: asyncio.Queue[ProgressEvent] = asyncio.Queue()
            self._events = events
            self._aggregator = asyncio.create_task(
                self._aggregate(events), name="upload-aggregator"
            )

    async def _run(self, task_id: str, file: UploadedFile) -> None:
        try:
            await self._simulate_transfer(task_id)
            self._emit(task_id, UploadStatus.PROCESSING, 100.0)
            try:
                text = await self._ingestor.ingest(file)
                document = await self._on_ingested(file, text)
            except DocSyncError as exc:
                Log.warning(f"Upload {file.name} failed ({exc.kind.value}): {exc}", task=task_id)
                self._emit(
                    task_id,
                    UploadStatus.ERROR,
                    100.0,
                    error_kind=exc.kind,
                    error_message=str(exc),
                )
                return
            except Exception as exc:
                Log.error(f"Upload {file.name} failed unexpectedly: {exc}", task=task_id)
                self._emit(
                    task_id,
                    UploadStatus.ERROR,
                    100.0,
                    error_kind=ErrorKind.EXTRACTION_FAILURE,
                    error_message=str(exc),
                )
                return
            Log.info(f"Upload {file.name} complete", task=task_id, document=document.id)
            self._emit(task_id, UploadStatus.COMPLETE, 100.0, document_id=document.id)
        finally:
            self._workers.pop(task_id, None)

    async def _simulate_transfer(self, task_id: str) -> None:
        progress = 0.0
        self._emit(task_id, UploadStatus.UPLOADING, progress)
        while progress < 100.0:
            await asyncio.sleep(self._tick_seconds)
            step = self._rng.random() * self._max_progress_step
            progress = min(100.0, progress + step)
            self._emit(task_id, UploadStatus.UPLOADING, progress)

    def _emit(
        self,
        task_id: str,
        status: UploadStatus,
        progress: float,
        *,
        error_kind: ErrorKind | None = None,
        error_message: str | None = None,
        document_id: str | None = None,
    ) -> None:
        if self._events is None:
            return
        self._events.put_nowait(
            ProgressEvent(
                task_id=task_id,
                status=status,
                progress=progress,
                error_kind=error_kind,
                error_message=error_message,
                document_id=document_id,
            )
        )

    async def _aggregate(self, events: asyncio.Queue[ProgressEvent]) -> None:
        while True:
            event = await events.get()
            try:
                self._apply(event)
            finally:
                events.task_done()

    def _apply(self, event: ProgressEvent) -> None:
        task = self._tasks.get(event.task_id)
        if task is None:
            return
        if event.status not in ALLOWED_TRANSITIONS[task.status]:
            Log.warning(
                f"Ignoring upload transition {task.status.value} -> "
                f"{event.status.value} for {task.file.name}"
            )
            return

        updated = replace(
            task,
            status=event.status,
            progress=min(100.0, max(task.progress, event.progress)),
            error_kind=event.error_kind,
            error_message=event.error_message,
            document_id=event.document_id or task.document_id,
        )
        self._tasks[task.id] = updated
        self._bus.publish(UploadTaskChanged(updated))

        if updated.status is UploadStatus.COMPLETE and self._clear_delay_seconds is not None:
            loop = asyncio.get_running_loop()
            self._expiry[task.id] = loop.call_later(
                self._clear_delay_seconds, self._expire, task.id
            )

    def _expire(self, task_id: str) -> None:
        self._expiry.pop(task_id, None)
        task = self._tasks.get(task_id)
        if task is None or task.status is not UploadStatus.COMPLETE:
            return
        del self._tasks[task_id]
        self._bus.publish(UploadTaskRemoved(task_id=task_id, reason="expired"))

    def _cancel_expiry(self, task_id: str) -> None:
        timer = self._expiry.pop(task_id, None)
        if timer is not None:
            timer.cancel()
