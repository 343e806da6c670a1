import argparse
import asyncio
from pathlib import Path

from docsync.config.settings import Settings
from docsync.database.connection import close_pool, init_pool
from docsync.database.schema import ensure_schema
from docsync.events.models import Event, UploadTaskChanged
from docsync.export.exporter import ExportFormat, ViewMode, write_blob
from docsync.ingestion.models import UploadedFile
from docsync.logging.logger import Log
from docsync.processor.workspace import Workspace, build_workspace
from docsync.uploads.models import UploadStatus


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="docsync",
        description="Ingest documents, store them and report text statistics.",
    )
    parser.add_argument("files", nargs="+", type=Path, help="files to ingest")
    parser.add_argument(
        "--export", choices=[f.value for f in ExportFormat], help="export the last document"
    )
    parser.add_argument(
        "--mode",
        choices=[m.value for m in ViewMode],
        default=ViewMode.DOCUMENT.value,
        help="export the full document or its summary",
    )
    parser.add_argument("--output-dir", type=Path, default=Path("."))
    return parser.parse_args(argv)


def _log_terminal_status(event: Event) -> None:
    if not isinstance(event, UploadTaskChanged):
        return
    task = event.task
    if task.status is UploadStatus.COMPLETE:
        Log.info(f"{task.file.name}: complete")
    elif task.status is UploadStatus.ERROR:
        kind = task.error_kind.value if task.error_kind else "error"
        Log.error(f"{task.file.name}: {kind} - {task.error_message}")


async def run(args: argparse.Namespace, settings: Settings) -> int:
    """Ingest the given files and report on the resulting active document."""
    uses_postgres = settings.store_backend.lower() == "postgres"
    if uses_postgres:
        await init_pool(settings)
        await ensure_schema()

    workspace: Workspace | None = None
    try:
        workspace = build_workspace(settings)
        workspace.bus.subscribe(_log_terminal_status)
        await workspace.sync.refresh()

        workspace.upload(UploadedFile.from_path(path) for path in args.files)
        await workspace.uploads.wait_idle()
        failed = [t for t in workspace.uploads.tasks() if t.status is UploadStatus.ERROR]

        if workspace.sync.active is None:
            Log.error("No document was ingested")
            return 1

        stats = workspace.stats()
        print(f"Document:    {workspace.sync.active.title}")
        print(f"Words:       {stats.words}")
        print(f"Characters:  {stats.characters} ({stats.characters_no_spaces} without spaces)")
        print(f"Sentences:   {stats.sentences} ({stats.avg_words_per_sentence} avg words)")
        print(f"Paragraphs:  {stats.paragraphs}")
        print(f"Reading:     {stats.reading_time_minutes} min")
        print(f"Readability: {stats.readability.value}")

        if args.export:
            blob = workspace.export(args.mode, args.export)
            write_blob(blob, args.output_dir)
        return 1 if failed else 0
    finally:
        if workspace is not None:
            await workspace.close()
        if uses_postgres:
            await close_pool()


def main(argv: list[str] | None = None) -> int:
    """Entry point: load settings -> configure logging -> run the pipeline."""
    args = parse_args(argv)
    settings = Settings()
    Log.configure(settings.log_level)
    return asyncio.run(run(args, settings))


if __name__ == "__main__":
    raise SystemExit(main())
