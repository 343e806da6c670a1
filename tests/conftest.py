import io

import docx
import pytest
from docx.document import Document as WordDocument


def _save(document: WordDocument) -> bytes:
    buf = io.BytesIO()
    document.save(buf)
    return buf.getvalue()


@pytest.fixture()
def sample_docx_bytes() -> bytes:
    """Generate a Word document with two text paragraphs and one blank one."""
    document = docx.Document()
    document.add_paragraph("First paragraph of the report.")
    document.add_paragraph("")
    document.add_paragraph("Second paragraph with more detail.")
    return _save(document)


@pytest.fixture()
def docx_with_table_bytes() -> bytes:
    """Generate a Word document containing a paragraph and a 2x2 table."""
    document = docx.Document()
    document.add_paragraph("Quarterly figures follow.")
    table = document.add_table(rows=2, cols=2)
    table.cell(0, 0).text = "Q1"
    table.cell(0, 1).text = "100"
    return _save(document)


@pytest.fixture()
def empty_docx_bytes() -> bytes:
    """Generate a valid Word document with no text."""
    return _save(docx.Document())
