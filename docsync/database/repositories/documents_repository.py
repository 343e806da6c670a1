from enum import Enum
from typing import Any

import psycopg
from psycopg import sql
from psycopg.rows import dict_row

from docsync.database.connection import get_connection
from docsync.database.repositories.base import DocumentStore, check_changes
from docsync.sync.exceptions import DocumentNotFoundError, PersistenceFailureError
from docsync.sync.models import Document, NewDocument, Tone

_COLUMNS = sql.SQL(
    "id, user_id, title, original_content, processed_content, tone, file_type, "
    "file_size, word_count, character_count, created_at, updated_at"
)


def _to_db(value: object) -> object:
    if isinstance(value, Enum):
        return value.value
    return value


def _row_to_document(row: dict[str, Any]) -> Document:
    return Document(
        id=str(row["id"]),
        user_id=str(row["user_id"]),
        title=row["title"],
        original_content=row["original_content"],
        processed_content=row["processed_content"] or "",
        tone=Tone(row["tone"]) if row["tone"] else None,
        file_type=row["file_type"],
        file_size=row["file_size"],
        word_count=row["word_count"] or 0,
        character_count=row["character_count"] or 0,
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


class DocumentsRepository(DocumentStore):
    """Database operations for the documents table."""

    async def create(self, new_document: NewDocument) -> Document:
        query = sql.SQL(
            """
            INSERT INTO documents (
                user_id, title, original_content, processed_content, tone,
                file_type, file_size, word_count, character_count
            )
            VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s)
            RETURNING {columns}
            """
        ).format(columns=_COLUMNS)
        params = (
            new_document.user_id,
            new_document.title,
            new_document.original_content,
            new_document.processed_content,
            _to_db(new_document.tone),
            new_document.file_type,
            new_document.file_size,
            new_document.word_count,
            new_document.character_count,
        )
        try:
            async with get_connection() as conn:
                async with conn.cursor(row_factory=dict_row) as cur:
                    await cur.execute(query, params)
                    row = await cur.fetchone()
                await conn.commit()
        except psycopg.Error as exc:
            raise PersistenceFailureError(f"Failed to create document: {exc}") from exc

        if row is None:
            raise PersistenceFailureError("Insert returned no row")
        return _row_to_document(row)

    async def find_by_id(self, document_id: str) -> Document:
        query = sql.SQL("SELECT {columns} FROM documents WHERE id = %s").format(
            columns=_COLUMNS
        )
        try:
            async with get_connection() as conn:
                async with conn.cursor(row_factory=dict_row) as cur:
                    await cur.execute(query, (document_id,))
                    row = await cur.fetchone()
        except psycopg.Error as exc:
            raise PersistenceFailureError(f"Failed to load document {document_id}: {exc}") from exc

        if row is None:
            raise DocumentNotFoundError(f"Document {document_id} not found")
        return _row_to_document(row)

    async def list_for_user(self, user_id: str) -> list[Document]:
        query = sql.SQL(
            "SELECT {columns} FROM documents WHERE user_id = %s ORDER BY created_at DESC"
        ).format(columns=_COLUMNS)
        try:
            async with get_connection() as conn:
                async with conn.cursor(row_factory=dict_row) as cur:
                    await cur.execute(query, (user_id,))
                    rows = await cur.fetchall()
        except psycopg.Error as exc:
            raise PersistenceFailureError(f"Failed to list documents: {exc}") from exc
        return [_row_to_document(row) for row in rows]

    async def update(self, document_id: str, changes: dict[str, object]) -> Document:
        check_changes(changes)
        assignments = sql.SQL(", ").join(
            sql.SQL("{} = %s").format(sql.Identifier(name)) for name in changes
        )
        query = sql.SQL(
            """
            UPDATE documents
            SET {assignments}, updated_at = NOW()
            WHERE id = %s
            RETURNING {columns}
            """
        ).format(assignments=assignments, columns=_COLUMNS)
        params = [_to_db(value) for value in changes.values()]
        params.append(document_id)
        try:
            async with get_connection() as conn:
                async with conn.cursor(row_factory=dict_row) as cur:
                    await cur.execute(query, params)
                    row = await cur.fetchone()
                await conn.commit()
        except psycopg.Error as exc:
            raise PersistenceFailureError(
                f"Failed to update document {document_id}: {exc}"
            ) from exc

        if row is None:
            raise DocumentNotFoundError(f"Document {document_id} not found")
        return _row_to_document(row)

    async def delete(self, document_id: str) -> None:
        try:
            async with get_connection() as conn:
                async with conn.cursor() as cur:
                    await cur.execute("DELETE FROM documents WHERE id = %s", (document_id,))
                    deleted = cur.rowcount
                await conn.commit()
        except psycopg.Error as exc:
            raise PersistenceFailureError(
                f"Failed to delete document {document_id}: {exc}"
            ) from exc

        if deleted == 0:
            raise DocumentNotFoundError(f"Document {document_id} not found")
