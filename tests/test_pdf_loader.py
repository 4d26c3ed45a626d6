import fitz
import pytest

from extractors.statement_extractor import extract_transactions_from_text
from loaders.pdf_loader import ExtractionError, PDFLoadError, load_pdf, load_pdf_bytes


def test_load_pdf_reads_all_pages(statement_pdf):
    path = statement_pdf(
        ["01-02-2023 GROCERY STORE", "45.50", "DR"],
        ["02-02-2023 SALARY", "1000.00", "CR"],
    )
    text = load_pdf(str(path))
    assert "GROCERY STORE" in text
    assert "SALARY" in text
    assert text.index("GROCERY STORE") < text.index("SALARY")


def test_loaded_text_feeds_extractor(statement_pdf):
    path = statement_pdf(
        ["Statement of account", "01-02-2023 GROCERY STORE", "45.50", "DR"],
        ["02-02-2023 SALARY", "1000.00", "CR", "03-02-2023 FUEL", "60.00", "DR"],
    )
    transactions = extract_transactions_from_text(load_pdf(str(path)))
    assert [(txn.date, txn.description, txn.amount) for txn in transactions] == [
        ("01-02-2023", "GROCERY STORE", "45.50"),
        ("03-02-2023", "FUEL", "60.00"),
    ]


def test_missing_file(tmp_path):
    with pytest.raises(PDFLoadError, match="not found"):
        load_pdf(str(tmp_path / "missing.pdf"))


def test_wrong_suffix(tmp_path):
    path = tmp_path / "statement.txt"
    path.write_text("01-02-2023 SHOP")
    with pytest.raises(PDFLoadError, match="not a PDF"):
        load_pdf(str(path))


def test_corrupt_bytes():
    with pytest.raises(PDFLoadError):
        load_pdf_bytes(b"this is not a pdf document")


def test_empty_bytes():
    with pytest.raises(PDFLoadError, match="Empty"):
        load_pdf_bytes(b"")


def test_pdf_load_error_is_extraction_error():
    assert issubclass(PDFLoadError, ExtractionError)


def test_blank_pdf_yields_empty_text(tmp_path):
    doc = fitz.open()
    doc.new_page()
    data = doc.tobytes()
    doc.close()
    assert load_pdf_bytes(data) == ""


def test_encrypted_pdf(tmp_path):
    path = tmp_path / "locked.pdf"
    doc = fitz.open()
    doc.new_page().insert_text((72, 72), "01-02-2023 SHOP")
    doc.save(
        str(path),
        encryption=fitz.PDF_ENCRYPT_AES_256,
        owner_pw="owner",
        user_pw="user",
    )
    doc.close()
    with pytest.raises(PDFLoadError, match="encrypted"):
        load_pdf(str(path))
