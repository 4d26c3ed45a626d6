"""
PDF Loader Module
Extracts text from multi-page bank statement PDFs using PyMuPDF (fitz).
"""

import fitz  # PyMuPDF
import logging
from pathlib import Path

logger = logging.getLogger(__name__)


class ExtractionError(Exception):
    """Raised when a document cannot be turned into text."""
    pass


class PDFLoadError(ExtractionError):
    """Custom exception for PDF loading errors."""
    pass


def load_pdf(file_path: str) -> str:
    """
    Extract text from all pages of a PDF file.

    Args:
        file_path: Path to the PDF file

    Returns:
        Combined text from all pages as a single string

    Raises:
        PDFLoadError: If the PDF cannot be loaded or read
    """
    # Validate file exists
    pdf_path = Path(file_path)
    if not pdf_path.exists():
        logger.error(f"PDF file not found: {file_path}")
        raise PDFLoadError(f"PDF file not found: {file_path}")

    if not pdf_path.suffix.lower() == '.pdf':
        logger.error(f"File is not a PDF: {file_path}")
        raise PDFLoadError(f"File is not a PDF: {file_path}")

    try:
        data = pdf_path.read_bytes()
    except OSError as e:
        logger.error(f"Cannot read PDF file {file_path}: {e}")
        raise PDFLoadError(f"Cannot read PDF file: {file_path}") from e

    return load_pdf_bytes(data, source=str(file_path))


def load_pdf_bytes(data: bytes, source: str = "<upload>") -> str:
    """
    Extract text from all pages of an in-memory PDF document.

    Args:
        data: Raw PDF bytes
        source: Name used in log and error messages

    Returns:
        Page texts joined with newlines; empty if the PDF holds no text

    Raises:
        PDFLoadError: If the bytes are not a readable PDF
    """
    if not data:
        logger.error(f"Empty PDF data: {source}")
        raise PDFLoadError(f"Empty PDF data: {source}")

    doc = None
    try:
        doc = fitz.open(stream=data, filetype="pdf")

        if doc.needs_pass:
            logger.error(f"PDF is encrypted: {source}")
            raise PDFLoadError(f"PDF is encrypted and needs a password: {source}")

        # Check if PDF has pages
        if doc.page_count == 0:
            logger.error(f"PDF has no pages: {source}")
            raise PDFLoadError(f"PDF has no pages: {source}")

        logger.info(f"Loading PDF: {source} ({doc.page_count} pages)")

        text_chunks = []
        empty_pages = 0
        for page_num in range(doc.page_count):
            text = doc[page_num].get_text()
            if text.strip():
                text_chunks.append(text)
                logger.debug(f"Page {page_num + 1}: extracted {len(text)} characters")
            else:
                empty_pages += 1
                logger.warning(f"Page {page_num + 1}: empty or no extractable text")

        if not text_chunks:
            logger.warning(f"No text could be extracted from PDF: {source}")
            return ""

        combined_text = "\n".join(text_chunks)

        logger.info(
            f"Extraction complete: {len(combined_text)} characters from "
            f"{len(text_chunks)} pages ({empty_pages} empty pages skipped)"
        )

        return combined_text

    except fitz.FileDataError as e:
        logger.error(f"Invalid or corrupted PDF file: {source}", exc_info=True)
        raise PDFLoadError(f"Invalid or corrupted PDF file: {source}") from e

    except PDFLoadError:
        raise

    except Exception as e:
        logger.error(f"Unexpected error loading PDF {source}: {e}", exc_info=True)
        raise PDFLoadError(f"Failed to load PDF {source}: {str(e)}") from e

    finally:
        # Ensure PDF is always closed
        if doc is not None:
            doc.close()
            logger.debug(f"PDF document closed: {source}")
