"""
docmark - Office Document-to-Markdown Converter

Converts Word documents and PDFs into Markdown. Word documents are
serialized from their paragraph and run styles; PDFs are rebuilt into
reading order from positioned text and given heuristic headings. PDFs
can also be reduced to a small set of pattern-matched fields.
"""

__version__ = "1.0.0"

from .core import DocumentConverter, DocumentKind, kind_from_filename
from .errors import (
    NO_CONTENT_MESSAGE,
    ConversionError,
    CorruptInputError,
    PatternRegistryError,
    UnsupportedFormatError,
)
from .fields import NOT_FOUND, ExtractionPattern, FieldRegistry

__all__ = [
    "DocumentConverter",
    "DocumentKind",
    "kind_from_filename",
    "NO_CONTENT_MESSAGE",
    "ConversionError",
    "CorruptInputError",
    "PatternRegistryError",
    "UnsupportedFormatError",
    "NOT_FOUND",
    "ExtractionPattern",
    "FieldRegistry",
]
