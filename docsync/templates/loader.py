import re
from dataclasses import dataclass
from pathlib import Path

from docsync.templates.exceptions import TemplateError

_DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "bundled"
_WHITESPACE = re.compile(r"\s+")


@dataclass(frozen=True)
class TemplateInfo:
    id: str
    name: str
    category: str
    description: str

    @property
    def filename(self) -> str:
        """Title given to documents started from this template."""
        slug = _WHITESPACE.sub("-", self.name.lower())
        return f"{slug}.txt"


@dataclass(frozen=True)
class DocumentTemplate:
    info: TemplateInfo
    content: str


CATALOG: tuple[TemplateInfo, ...] = (
    TemplateInfo(
        "business-report", "Business Report", "Business",
        "Professional business analysis template",
    ),
    TemplateInfo(
        "academic-essay", "Academic Essay", "Academic",
        "Structured academic writing format",
    ),
    TemplateInfo(
        "meeting-minutes", "Meeting Minutes", "Business",
        "Template for recording meeting discussions",
    ),
    TemplateInfo(
        "project-proposal", "Project Proposal", "Business",
        "Comprehensive project planning template",
    ),
    TemplateInfo(
        "professional-email", "Professional Email", "Communication",
        "Well-structured email template",
    ),
    TemplateInfo(
        "research-notes", "Research Notes", "Academic",
        "Organized research documentation",
    ),
)


def list_templates() -> list[TemplateInfo]:
    return list(CATALOG)


def load_template(template_id: str, directory: Path | None = None) -> DocumentTemplate:
    """Load a bundled starter template by id.

    Args:
        template_id: One of the CATALOG ids.
        directory: Folder holding {template_id}.md files.
                   Defaults to the bundled templates.

    Raises:
        TemplateError: if the id is unknown or the file cannot be read.
    """
    info = next((t for t in CATALOG if t.id == template_id), None)
    if info is None:
        raise TemplateError(f"Unknown template '{template_id}'")
    path = (directory or _DEFAULT_TEMPLATE_DIR) / f"{template_id}.md"
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise TemplateError(f"Failed to load template: {exc}") from exc
    return DocumentTemplate(info=info, content=content)
