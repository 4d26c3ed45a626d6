import fitz
import pytest


def write_statement_pdf(path, pages):
    """Write a PDF where each page holds the given lines, one per text row."""
    doc = fitz.open()
    for lines in pages:
        page = doc.new_page()
        y = 72
        for line in lines:
            page.insert_text((72, y), line, fontsize=11)
            y += 16
    doc.save(str(path))
    doc.close()
    return path


@pytest.fixture
def statement_pdf(tmp_path):
    def _make(*pages, name="statement.pdf"):
        return write_statement_pdf(tmp_path / name, pages)
    return _make


@pytest.fixture
def expenses_csv(tmp_path):
    return tmp_path / "data" / "expenses.csv"
