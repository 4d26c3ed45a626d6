"""
Loaders Module - PDF text extraction and loading.
"""

from .pdf_loader import (
    load_pdf,
    load_pdf_bytes,
    ExtractionError,
    PDFLoadError
)

__all__ = [
    'load_pdf',
    'load_pdf_bytes',
    'ExtractionError',
    'PDFLoadError',
]
