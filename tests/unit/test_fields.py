"""
Unit tests for field extraction and the pattern registry.
"""

import re

import pytest

from docmark.errors import PatternRegistryError
from docmark.fields import (
    DEFAULT_REGISTRY,
    NOT_FOUND,
    ExtractionPattern,
    FieldRegistry,
    extract_fields,
    fields_to_markdown,
)
from tests.fixtures import SAMPLE_INVOICE_NO_TOTAL, SAMPLE_INVOICE_TEXT


class TestExtractFields:
    """Tests for extract_fields()."""

    def test_lote_extracted(self):
        """Test the lot number example."""
        fields = extract_fields("Lote N°: A-123", "invoice.pdf")
        assert fields["lote"] == "A-123"

    def test_missing_total_is_not_found(self):
        """Test the sentinel for a pattern without a match."""
        fields = extract_fields(SAMPLE_INVOICE_NO_TOTAL, "invoice.pdf")
        assert fields["lote"] == "B-77"
        assert fields["total"] == NOT_FOUND

    def test_total_extracted(self):
        """Test total extraction with currency formatting."""
        fields = extract_fields("TOTAL A PAGAR: $1,234.56", "x.pdf")
        assert fields["total"] == "1,234.56"

    def test_total_matches_case_insensitively(self):
        """Test that the default patterns ignore case."""
        assert extract_fields(SAMPLE_INVOICE_TEXT, "x.pdf")["total"] == "1,000.00"

    def test_lote_without_number_marker(self):
        """Test that the N° marker is optional."""
        assert extract_fields("lote: Z9", "x.pdf")["lote"] == "Z9"

    def test_filename_always_present_and_first(self):
        """Test the reserved filename key."""
        fields = extract_fields("", "scan.pdf")
        assert list(fields) == ["filename", "lote", "total"]
        assert fields == {"filename": "scan.pdf", "lote": NOT_FOUND, "total": NOT_FOUND}

    def test_custom_registry(self):
        """Test extraction with a caller-supplied registry."""
        registry = FieldRegistry([
            ExtractionPattern.compile("fecha", r"Fecha\s*de\s*emisi[oó]n:\s*(\d{2}/\d{2}/\d{4})"),
        ])
        fields = extract_fields(SAMPLE_INVOICE_TEXT, "x.pdf", registry)
        assert fields == {"filename": "x.pdf", "fecha": "12/03/2025"}

    def test_deterministic(self):
        """Test that repeated extraction gives identical mappings."""
        first = extract_fields(SAMPLE_INVOICE_TEXT, "x.pdf")
        assert list(first.items()) == list(extract_fields(SAMPLE_INVOICE_TEXT, "x.pdf").items())


class TestFieldRegistry:
    """Tests for registry validation."""

    def test_default_registry(self):
        """Test the default pattern names and order."""
        assert DEFAULT_REGISTRY.names == ["lote", "total"]
        assert len(DEFAULT_REGISTRY) == 2

    def test_duplicate_names_rejected(self):
        """Test that duplicate field names are rejected."""
        with pytest.raises(PatternRegistryError, match="Duplicate"):
            FieldRegistry([
                ExtractionPattern.compile("a", r"a(\d)"),
                ExtractionPattern.compile("a", r"b(\d)"),
            ])

    def test_reserved_name_rejected(self):
        """Test that 'filename' cannot be used as a pattern name."""
        with pytest.raises(PatternRegistryError, match="reserved"):
            FieldRegistry([ExtractionPattern.compile("filename", r"name:\s*(\S+)")])

    def test_missing_capture_group_rejected(self):
        """Test that patterns need the configured capture group."""
        with pytest.raises(PatternRegistryError, match="capture group"):
            FieldRegistry([ExtractionPattern.compile("x", r"no groups here")])
        with pytest.raises(PatternRegistryError, match="capture group"):
            FieldRegistry([ExtractionPattern.compile("x", r"(one)", group=2)])

    @pytest.mark.parametrize("pattern", [
        r"(a+)+b",
        r"(\w*)*x",
        r"(x|y+){2,}",
    ])
    def test_nested_quantifiers_rejected(self, pattern):
        """Test that backtracking-prone nested quantifiers are rejected."""
        with pytest.raises(PatternRegistryError, match="nested quantifier"):
            FieldRegistry([ExtractionPattern.compile("x", pattern)])

    @pytest.mark.parametrize("pattern", [
        r"Lote((?:a|aa)+)b",
        r"(x|xy)*z",
        r"ref(?:\d|\w){2,}(\w)",
    ])
    def test_quantified_alternations_rejected(self, pattern):
        """Test that repeated groups of overlapping alternatives are rejected."""
        with pytest.raises(PatternRegistryError, match="quantified alternation"):
            FieldRegistry([ExtractionPattern.compile("x", pattern)])

    @pytest.mark.parametrize("pattern", [r"(\w*\w*\w*)x", r"id:\s*[a-z]+[a-z]+(\d)"])
    def test_repeated_quantified_tokens_rejected(self, pattern):
        """Test that back-to-back repeats of one token are rejected."""
        with pytest.raises(PatternRegistryError, match="repeats a quantified token"):
            FieldRegistry([ExtractionPattern.compile("x", pattern)])

    @pytest.mark.parametrize("pattern", [
        r"Total.*?(\d+)",
        r"Name:(.+)",
        r"Name:(.{0,})",
        r"Name:([\s\S]*)",
        r"Name:([\w\W]+)",
    ])
    def test_unbounded_wildcards_rejected(self, pattern):
        """Test that unbounded wildcards in any spelling are rejected."""
        with pytest.raises(PatternRegistryError, match="unbounded wildcard"):
            FieldRegistry([ExtractionPattern.compile("x", pattern)])

    def test_escaped_dot_allowed(self):
        """Test that a literal dot followed by a quantifier is accepted."""
        registry = FieldRegistry([ExtractionPattern.compile("v", r"v(\d+)\.+")])
        assert registry.names == ["v"]

    def test_bounded_wildcard_allowed(self):
        """Test that bounded repeats pass validation."""
        registry = FieldRegistry([
            ExtractionPattern("ref", re.compile(r"Ref.{0,20}?:\s*(\w+)", re.IGNORECASE)),
        ])
        assert extract_fields("ref number: X1", "a.pdf", registry)["ref"] == "X1"


class TestFieldsToMarkdown:
    """Tests for report rendering."""

    def test_report_layout(self):
        """Test the rendered Markdown report."""
        report = fields_to_markdown({"filename": "invoice.pdf", "lote": "A-123", "total": NOT_FOUND})
        assert report == (
            "# Extracted Data from invoice.pdf\n"
            "\n"
            "**Lote:** A-123\n"
            "\n"
            "**Total:** Not found\n"
        )
