"""
Pytest configuration and shared fixtures.
"""

import sys
from pathlib import Path
import pytest

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from docmark.core import DocumentConverter
from docmark.converters.pdf_converter import PositionedFragment
from tests.fixtures import build_docx, build_pdf


# ============================================================================
# Pytest Hooks
# ============================================================================


def pytest_configure(config):
    """Configure custom markers."""
    config.addinivalue_line("markers", "slow: mark test as slow running")
    config.addinivalue_line("markers", "integration: mark as integration test")


# ============================================================================
# Base Fixtures
# ============================================================================


@pytest.fixture
def converter():
    """Create a converter with default settings."""
    return DocumentConverter()


@pytest.fixture
def threaded_converter():
    """Create a converter that rebuilds PDF pages on a thread pool."""
    return DocumentConverter(max_workers=4)


# ============================================================================
# Fragment Fixtures
# ============================================================================


@pytest.fixture
def two_line_fragments():
    """Fragments forming two visual lines, supplied out of order."""
    return [
        PositionedFragment("world", 120.0, 700.0),
        PositionedFragment("second", 72.0, 680.0),
        PositionedFragment("Hello", 72.0, 702.0),
        PositionedFragment("line", 130.0, 681.0),
    ]


# ============================================================================
# Document Fixtures
# ============================================================================


@pytest.fixture
def report_docx():
    """A Word document with a title heading, emphasis and a subheading."""
    return build_docx([
        ("heading", 1, "Quarterly Report"),
        [("Revenue grew ", False, False), ("strongly", True, False), (" this quarter.", False, False)],
        ("heading", 2, "Outlook"),
        [("Expect ", False, False), ("modest", False, True), (" growth.", False, False)],
    ])


@pytest.fixture
def empty_docx():
    """A Word document without any content."""
    return build_docx([])


@pytest.fixture
def structured_pdf():
    """A one-page PDF with an all-caps title, a numbered section and body text."""
    return build_pdf([[
        (72, 72, "ANNUAL REPORT SUMMARY"),
        (72, 110, "1. Introduction"),
        (72, 140, "Hello world"),
    ]])


@pytest.fixture
def three_page_pdf():
    """A three-page PDF with one line per page."""
    return build_pdf([
        [(72, 72, "First page content")],
        [(72, 72, "Second page content")],
        [(72, 72, "Third page content")],
    ])


@pytest.fixture
def invoice_pdf():
    """A PDF carrying a lot number and a total."""
    return build_pdf([[
        (72, 72, "Distribuidora Norte"),
        (72, 100, "Lote: A-123"),
        (72, 130, "Total a pagar: $1,234.56"),
    ]])


# ============================================================================
# Temporary File Fixtures
# ============================================================================


@pytest.fixture
def temp_docx_file(tmp_path, report_docx):
    """Write the sample report to a temporary .docx file."""
    file_path = tmp_path / "report.docx"
    file_path.write_bytes(report_docx)
    return file_path


@pytest.fixture
def temp_pdf_file(tmp_path, invoice_pdf):
    """Write the sample invoice to a temporary .pdf file."""
    file_path = tmp_path / "invoice.pdf"
    file_path.write_bytes(invoice_pdf)
    return file_path
