"""Deterministic text reformatting and extractive summarization.

Both operations return new strings and never touch their input. Tone is
document metadata only and does not influence either output.
"""

import math
import re

MAX_KEY_POINTS = 8
MIN_SENTENCE_LENGTH = 20
NO_KEY_POINTS = "• No key points identified."

_LEADING_WORD_CHAR = re.compile(r"^\w")
_SENTENCE_SPLIT = re.compile(r"[.!?]+")


def capitalize_first(text: str) -> str:
    """Uppercase the first character when it is a word character."""
    return _LEADING_WORD_CHAR.sub(lambda m: m.group().upper(), text)


def format_text(text: str) -> str:
    """Put each non-empty trimmed line in its own capitalized paragraph.

    Blank lines are dropped before rejoining, so the output is a fixed point:
    format_text(format_text(t)) == format_text(t).
    """
    lines = (line.strip() for line in text.split("\n"))
    return "\n\n".join(capitalize_first(line) for line in lines if line)


def key_sentences(text: str) -> list[str]:
    """Trimmed sentences longer than MIN_SENTENCE_LENGTH, in original order."""
    sentences = (s.strip() for s in _SENTENCE_SPLIT.split(text))
    return [s for s in sentences if len(s) > MIN_SENTENCE_LENGTH]


def summarize(text: str) -> str:
    """Render the leading third of the qualifying sentences as bullets."""
    sentences = key_sentences(text)
    limit = min(MAX_KEY_POINTS, math.ceil(len(sentences) / 3))
    bullets = [f"• {capitalize_first(s)}." for s in sentences[:limit]]
    return "\n\n".join(bullets) or NO_KEY_POINTS
