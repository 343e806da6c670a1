from dataclasses import dataclass
from enum import Enum


class Readability(str, Enum):
    EASY = "Easy"
    MEDIUM = "Medium"
    COMPLEX = "Complex"


@dataclass(frozen=True)
class DocumentStats:
    """Descriptive metrics for one piece of text."""

    words: int
    characters: int
    characters_no_spaces: int
    sentences: int
    paragraphs: int
    avg_words_per_sentence: int
    reading_time_minutes: int
    readability: Readability


@dataclass(frozen=True)
class LibraryOverview:
    """Aggregate figures over a user's stored documents."""

    total_documents: int
    documents_this_month: int
    total_words: int
