import math
import re
from collections.abc import Iterable
from datetime import datetime

from docsync.analysis.models import DocumentStats, LibraryOverview, Readability
from docsync.sync.models import Document

WORDS_PER_MINUTE = 200

_SENTENCE_SPLIT = re.compile(r"[.!?]+")
_PARAGRAPH_SPLIT = re.compile(r"\n\s*\n")
_WHITESPACE = re.compile(r"\s")


def count_words(text: str) -> int:
    return len(text.split())


def count_characters(text: str) -> int:
    return len(text)


def split_sentences(text: str) -> list[str]:
    """Non-empty trimmed fragments between sentence-terminating punctuation."""
    return [s.strip() for s in _SENTENCE_SPLIT.split(text) if s.strip()]


def split_paragraphs(text: str) -> list[str]:
    return [p.strip() for p in _PARAGRAPH_SPLIT.split(text) if p.strip()]


def readability_for(avg_words_per_sentence: float) -> Readability:
    if avg_words_per_sentence <= 15:
        return Readability.EASY
    if avg_words_per_sentence <= 20:
        return Readability.MEDIUM
    return Readability.COMPLEX


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def analyze(text: str) -> DocumentStats:
    """Compute all metrics for text from scratch."""
    words = count_words(text)
    sentences = len(split_sentences(text))
    avg = _round_half_up(words / sentences) if sentences else 0
    return DocumentStats(
        words=words,
        characters=count_characters(text),
        characters_no_spaces=len(_WHITESPACE.sub("", text)),
        sentences=sentences,
        paragraphs=len(split_paragraphs(text)),
        avg_words_per_sentence=avg,
        reading_time_minutes=math.ceil(words / WORDS_PER_MINUTE),
        readability=readability_for(avg),
    )


def summarize_documents(documents: Iterable[Document], now: datetime) -> LibraryOverview:
    """Count documents, those created in now's calendar month, and stored words."""
    docs = list(documents)
    this_month = [
        d
        for d in docs
        if d.created_at is not None
        and d.created_at.year == now.year
        and d.created_at.month == now.month
    ]
    return LibraryOverview(
        total_documents=len(docs),
        documents_this_month=len(this_month),
        total_words=sum(d.word_count or 0 for d in docs),
    )
