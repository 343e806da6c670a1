"""Tests for bundled starter template loading."""

from pathlib import Path

import pytest

from docsync.templates import list_templates, load_template
from docsync.templates.exceptions import TemplateError


class TestListTemplates:
    def test_lists_six_templates(self) -> None:
        ids = [t.id for t in list_templates()]
        assert ids == [
            "business-report",
            "academic-essay",
            "meeting-minutes",
            "project-proposal",
            "professional-email",
            "research-notes",
        ]

    def test_filename_is_slugged_name(self) -> None:
        [info] = [t for t in list_templates() if t.id == "meeting-minutes"]
        assert info.filename == "meeting-minutes.txt"


class TestLoadTemplate:
    @pytest.mark.parametrize("template_id", [t.id for t in list_templates()])
    def test_every_bundled_template_loads(self, template_id: str) -> None:
        template = load_template(template_id)
        assert template.info.id == template_id
        assert template.content.strip()

    def test_business_report_content(self) -> None:
        template = load_template("business-report")
        assert template.content.startswith("# Executive Summary")
        assert template.info.category == "Business"

    def test_loads_from_custom_directory(self, tmp_path: Path) -> None:
        (tmp_path / "research-notes.md").write_text("Custom notes", encoding="utf-8")
        template = load_template("research-notes", directory=tmp_path)
        assert template.content == "Custom notes"

    def test_unknown_id_raises_error(self) -> None:
        with pytest.raises(TemplateError, match="Unknown template 'cover-letter'"):
            load_template("cover-letter")

    def test_missing_file_raises_error(self, tmp_path: Path) -> None:
        with pytest.raises(TemplateError, match="Failed to load template"):
            load_template("business-report", directory=tmp_path)
