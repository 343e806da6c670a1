from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class Tone(str, Enum):
    FORMAL = "formal"
    CASUAL = "casual"
    ACADEMIC = "academic"
    CREATIVE = "creative"
    JOURNALISTIC = "journalistic"
    FRIENDLY = "friendly"


@dataclass(frozen=True)
class NewDocument:
    """Fields supplied when a document record is first persisted."""

    user_id: str
    title: str
    original_content: str
    processed_content: str
    tone: Tone | None
    file_type: str | None
    file_size: int | None
    word_count: int
    character_count: int


@dataclass(frozen=True)
class Document:
    """Represents a row from the documents table."""

    id: str
    user_id: str
    title: str
    original_content: str
    processed_content: str
    tone: Tone | None = None
    file_type: str | None = None
    file_size: int | None = None
    word_count: int = 0
    character_count: int = 0
    created_at: datetime | None = None
    updated_at: datetime | None = None
