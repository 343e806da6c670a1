from dataclasses import dataclass, field


@dataclass(frozen=True)
class ExtractionResult:
    """Raw text produced by an extractor plus non-fatal diagnostics."""

    text: str
    messages: list[str] = field(default_factory=list)
