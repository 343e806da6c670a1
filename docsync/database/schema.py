from docsync.database.connection import get_connection

DOCUMENTS_DDL = """
CREATE TABLE IF NOT EXISTS documents (
    id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
    user_id TEXT NOT NULL,
    title TEXT NOT NULL,
    original_content TEXT NOT NULL,
    processed_content TEXT,
    tone TEXT,
    file_type TEXT,
    file_size INTEGER,
    word_count INTEGER NOT NULL DEFAULT 0,
    character_count INTEGER NOT NULL DEFAULT 0,
    created_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
    updated_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
);
CREATE INDEX IF NOT EXISTS documents_user_created_idx
    ON documents (user_id, created_at DESC);
"""


async def ensure_schema() -> None:
    """Create the documents table and its listing index if missing."""
    async with get_connection() as conn:
        await conn.execute(DOCUMENTS_DDL)
        await conn.commit()
