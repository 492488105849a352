# Test fixtures
from .sample_documents import (
    SAMPLE_INVOICE_TEXT,
    SAMPLE_INVOICE_NO_TOTAL,
    PAGE_FRAGMENTS,
    build_docx,
    build_pdf,
)

__all__ = [
    "SAMPLE_INVOICE_TEXT",
    "SAMPLE_INVOICE_NO_TOTAL",
    "PAGE_FRAGMENTS",
    "build_docx",
    "build_pdf",
]
