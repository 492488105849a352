"""
Error types raised by the conversion engine.

An empty result is not an error: it is reported to the caller as
NO_CONTENT_MESSAGE in place of the Markdown text.
"""

NO_CONTENT_MESSAGE = "No content could be extracted from the document."


class ConversionError(Exception):
    """Base class for errors surfaced to callers of the converter."""
    pass


class UnsupportedFormatError(ConversionError):
    """Raised when the declared document kind is not recognized."""
    pass


class CorruptInputError(ConversionError):
    """Raised when a document's internal structure cannot be parsed."""
    pass


class PatternRegistryError(ValueError):
    """Raised when a field-extraction registry is defined incorrectly."""
    pass
