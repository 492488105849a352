"""
docmark Core Engine

The orchestrator that routes document bytes to the right pipeline by
declared kind: Word documents go through the style-aware serializer, PDFs
through positional text reconstruction and heading heuristics. PDFs can
also be reduced to a mapping of extracted fields.

The engine performs no file I/O; callers pass bytes in and get text back.
"""

import logging
import os
from enum import Enum
from typing import Mapping, Optional, Union

from .converters.office_converter import OfficeConverter
from .converters.pdf_converter import PDFConverter
from .errors import UnsupportedFormatError
from .fields import DEFAULT_REGISTRY, FieldRegistry, extract_fields
from .styles import DEFAULT_STYLE_MAP, MarkdownMarker

logger = logging.getLogger(__name__)


class DocumentKind(Enum):
    """Document kinds the engine can convert."""
    DOCX = "docx"
    PDF = "pdf"

    @classmethod
    def parse(cls, value: Union["DocumentKind", str]) -> "DocumentKind":
        """Accept a DocumentKind or an extension such as 'pdf' or '.DOCX'."""
        if isinstance(value, cls):
            return value
        normalized = str(value).strip().lower().lstrip(".")
        for kind in cls:
            if kind.value == normalized:
                return kind
        raise UnsupportedFormatError(f"Unsupported document format: {value!r}")


def kind_from_filename(filename: str) -> DocumentKind:
    """Derive the declared kind from a file name's extension."""
    _, ext = os.path.splitext(filename)
    if not ext:
        raise UnsupportedFormatError(f"Cannot determine the format of {filename!r}: no extension")
    return DocumentKind.parse(ext)


class DocumentConverter:
    """
    Main conversion engine.

    The style map and field registry are read-only and may be shared
    between converters and threads.
    """

    def __init__(
        self,
        style_map: Mapping[str, MarkdownMarker] = DEFAULT_STYLE_MAP,
        registry: FieldRegistry = DEFAULT_REGISTRY,
        max_workers: Optional[int] = None,
    ):
        """
        Args:
            style_map: Word style name to Markdown marker table.
            registry: Patterns used in field-extraction mode.
            max_workers: Threads for PDF page reconstruction (None = sequential).
        """
        self.style_map = style_map
        self.registry = registry
        self.max_workers = max_workers

    def convert(
        self,
        data: bytes,
        kind: Union[DocumentKind, str],
        *,
        fields: bool = False,
        filename: str = "",
    ) -> Union[str, dict[str, str]]:
        """
        Convert document bytes to Markdown, or to extracted fields.

        Args:
            data: Raw document bytes.
            kind: Declared document kind (DocumentKind or extension string).
            fields: If True, return the field mapping instead of Markdown.
                Only available for PDF documents.
            filename: Original file name, reported under the "filename" field.

        Returns:
            The Markdown text, or a field name to value mapping.

        Raises:
            UnsupportedFormatError: If the kind (or mode) is not supported.
            CorruptInputError: If the document cannot be parsed.
        """
        kind = DocumentKind.parse(kind)
        if fields and kind is not DocumentKind.PDF:
            raise UnsupportedFormatError(
                f"Field extraction is only available for PDF documents, not {kind.value}"
            )

        logger.debug("Converting %s (%d bytes, kind=%s)", filename or "<bytes>", len(data), kind.value)

        if fields:
            return self.extract_fields(data, filename)
        if kind is DocumentKind.DOCX:
            return OfficeConverter.convert(data, self.style_map)
        return PDFConverter.convert(data, max_workers=self.max_workers)

    def extract_fields(self, data: bytes, filename: str = "") -> dict[str, str]:
        """Extract the registry's fields from a PDF's reconstructed text."""
        full_text = PDFConverter.extract_text(data, max_workers=self.max_workers)
        logger.debug("Extracted %d characters of text for field matching", len(full_text))
        return extract_fields(full_text, filename, self.registry)

    @staticmethod
    def supported_formats() -> dict:
        """Return a dictionary of all supported formats."""
        return {
            "Word Documents": sorted(OfficeConverter.SUPPORTED_EXTENSIONS),
            "PDF": sorted(PDFConverter.SUPPORTED_EXTENSIONS),
            "PDF Field Extraction (--fields)": sorted(PDFConverter.SUPPORTED_EXTENSIONS),
        }


def markdown_filename(filename: str) -> str:
    """Generate a .md filename from the source file."""
    basename = os.path.basename(filename)
    name, _ = os.path.splitext(basename)
    # Sanitize filename
    safe_name = "".join(c if c.isalnum() or c in "-_ " else "_" for c in name)
    return f"{safe_name or 'document'}.md"
