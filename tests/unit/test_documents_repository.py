from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock, patch

import psycopg
import pytest

from docsync.database.repositories.documents_repository import DocumentsRepository
from docsync.sync.exceptions import DocumentNotFoundError, PersistenceFailureError
from docsync.sync.models import Document, NewDocument, Tone

CREATED = datetime(2026, 10, 19, 9, 30, tzinfo=timezone.utc)


def _make_row(**overrides: object) -> dict:
    row = {
        "id": "550e8400-e29b-41d4-a716-446655440000",
        "user_id": "user-1",
        "title": "notes.txt",
        "original_content": "Hello world.",
        "processed_content": "Hello world.",
        "tone": "formal",
        "file_type": "text/plain",
        "file_size": 12,
        "word_count": 2,
        "character_count": 12,
        "created_at": CREATED,
        "updated_at": CREATED,
    }
    row.update(overrides)
    return row


def _new_document() -> NewDocument:
    return NewDocument(
        user_id="user-1",
        title="notes.txt",
        original_content="Hello world.",
        processed_content="Hello world.",
        tone=Tone.FORMAL,
        file_type="text/plain",
        file_size=12,
        word_count=2,
        character_count=12,
    )


def _mock_connection(mock_get_conn: MagicMock) -> tuple[MagicMock, MagicMock]:
    """Wire up a mock async connection + cursor and return (mock_conn, mock_cursor)."""
    mock_cursor = MagicMock()
    mock_cursor.execute = AsyncMock()
    mock_cursor.fetchone = AsyncMock()
    mock_cursor.fetchall = AsyncMock()
    mock_conn = MagicMock()
    mock_conn.commit = AsyncMock()
    mock_conn.cursor.return_value.__aenter__.return_value = mock_cursor
    mock_get_conn.return_value.__aenter__.return_value = mock_conn
    return mock_conn, mock_cursor


class TestCreate:
    @pytest.mark.asyncio
    @patch("docsync.database.repositories.documents_repository.get_connection")
    async def test_returns_inserted_document(self, mock_get_conn: MagicMock) -> None:
        mock_conn, mock_cursor = _mock_connection(mock_get_conn)
        mock_cursor.fetchone.return_value = _make_row()

        result = await DocumentsRepository().create(_new_document())

        assert isinstance(result, Document)
        assert result.id == "550e8400-e29b-41d4-a716-446655440000"
        assert result.tone is Tone.FORMAL
        assert result.created_at == CREATED
        mock_conn.commit.assert_awaited_once()

    @pytest.mark.asyncio
    @patch("docsync.database.repositories.documents_repository.get_connection")
    async def test_passes_tone_as_plain_text(self, mock_get_conn: MagicMock) -> None:
        _conn, mock_cursor = _mock_connection(mock_get_conn)
        mock_cursor.fetchone.return_value = _make_row()

        await DocumentsRepository().create(_new_document())

        params = mock_cursor.execute.await_args.args[1]
        assert params[4] == "formal"
        assert params[7:] == (2, 12)

    @pytest.mark.asyncio
    @patch("docsync.database.repositories.documents_repository.get_connection")
    async def test_wraps_database_errors(self, mock_get_conn: MagicMock) -> None:
        _conn, mock_cursor = _mock_connection(mock_get_conn)
        mock_cursor.execute.side_effect = psycopg.OperationalError("connection lost")

        with pytest.raises(PersistenceFailureError, match="connection lost"):
            await DocumentsRepository().create(_new_document())


class TestFindById:
    @pytest.mark.asyncio
    @patch("docsync.database.repositories.documents_repository.get_connection")
    async def test_returns_document_when_found(self, mock_get_conn: MagicMock) -> None:
        _conn, mock_cursor = _mock_connection(mock_get_conn)
        mock_cursor.fetchone.return_value = _make_row(tone=None, processed_content=None)

        result = await DocumentsRepository().find_by_id("550e8400-e29b-41d4-a716-446655440000")

        assert result.tone is None
        assert result.processed_content == ""
        assert result.title == "notes.txt"

    @pytest.mark.asyncio
    @patch("docsync.database.repositories.documents_repository.get_connection")
    async def test_raises_document_not_found_when_missing(self, mock_get_conn: MagicMock) -> None:
        _conn, mock_cursor = _mock_connection(mock_get_conn)
        mock_cursor.fetchone.return_value = None

        with pytest.raises(DocumentNotFoundError, match="Document doc-9 not found"):
            await DocumentsRepository().find_by_id("doc-9")


class TestListForUser:
    @pytest.mark.asyncio
    @patch("docsync.database.repositories.documents_repository.get_connection")
    async def test_maps_rows_in_order(self, mock_get_conn: MagicMock) -> None:
        _conn, mock_cursor = _mock_connection(mock_get_conn)
        mock_cursor.fetchall.return_value = [_make_row(id="b"), _make_row(id="a")]

        result = await DocumentsRepository().list_for_user("user-1")

        assert [d.id for d in result] == ["b", "a"]
        assert mock_cursor.execute.await_args.args[1] == ("user-1",)


class TestUpdate:
    @pytest.mark.asyncio
    @patch("docsync.database.repositories.documents_repository.get_connection")
    async def test_sends_only_changed_fields(self, mock_get_conn: MagicMock) -> None:
        mock_conn, mock_cursor = _mock_connection(mock_get_conn)
        mock_cursor.fetchone.return_value = _make_row(processed_content="New text", word_count=2)

        result = await DocumentsRepository().update(
            "doc-1", {"processed_content": "New text", "word_count": 2, "character_count": 8}
        )

        assert result.processed_content == "New text"
        assert mock_cursor.execute.await_args.args[1] == ["New text", 2, 8, "doc-1"]
        mock_conn.commit.assert_awaited_once()

    @pytest.mark.asyncio
    @patch("docsync.database.repositories.documents_repository.get_connection")
    async def test_converts_tone(self, mock_get_conn: MagicMock) -> None:
        _conn, mock_cursor = _mock_connection(mock_get_conn)
        mock_cursor.fetchone.return_value = _make_row(tone="casual")

        result = await DocumentsRepository().update("doc-1", {"tone": Tone.CASUAL})

        assert result.tone is Tone.CASUAL
        assert mock_cursor.execute.await_args.args[1] == ["casual", "doc-1"]

    @pytest.mark.asyncio
    async def test_rejects_unknown_fields(self) -> None:
        with pytest.raises(ValueError, match="original_content"):
            await DocumentsRepository().update("doc-1", {"original_content": "x"})

    @pytest.mark.asyncio
    @patch("docsync.database.repositories.documents_repository.get_connection")
    async def test_raises_document_not_found_when_missing(self, mock_get_conn: MagicMock) -> None:
        _conn, mock_cursor = _mock_connection(mock_get_conn)
        mock_cursor.fetchone.return_value = None

        with pytest.raises(DocumentNotFoundError):
            await DocumentsRepository().update("doc-1", {"title": "x"})


class TestDelete:
    @pytest.mark.asyncio
    @patch("docsync.database.repositories.documents_repository.get_connection")
    async def test_deletes_row(self, mock_get_conn: MagicMock) -> None:
        mock_conn, mock_cursor = _mock_connection(mock_get_conn)
        mock_cursor.rowcount = 1

        await DocumentsRepository().delete("doc-1")

        assert mock_cursor.execute.await_args.args[1] == ("doc-1",)
        mock_conn.commit.assert_awaited_once()

    @pytest.mark.asyncio
    @patch("docsync.database.repositories.documents_repository.get_connection")
    async def test_raises_document_not_found_when_missing(self, mock_get_conn: MagicMock) -> None:
        _conn, mock_cursor = _mock_connection(mock_get_conn)
        mock_cursor.rowcount = 0

        with pytest.raises(DocumentNotFoundError, match="Document doc-1 not found"):
            await DocumentsRepository().delete("doc-1")
