"""
Field extraction from document text.

A registry of named regular expressions is run over the full text of a
document; each field gets the first capture group of its pattern, or the
NOT_FOUND sentinel when the pattern does not match.
"""

import logging
import re
from dataclasses import dataclass
from typing import Iterable, Iterator

from .errors import PatternRegistryError

logger = logging.getLogger(__name__)

NOT_FOUND = "Not found"
FILENAME_KEY = "filename"

# Shapes prone to catastrophic backtracking on long, hostile input
_NESTED_QUANTIFIER = re.compile(r"\((?:[^()\\]|\\.)*(?:[+*]|\{\d*,\d*\})(?:[^()\\]|\\.)*\)(?:[+*]|\{)")
_QUANTIFIED_ALTERNATION = re.compile(r"\((?:[^()\\]|\\.)*\|(?:[^()\\]|\\.)*\)(?:[+*]|\{)")
_REPEATED_QUANTIFIED_TOKEN = re.compile(r"(\\[wWsSdD]|\[[^\]]*\])[+*]\1[+*]")
_UNBOUNDED_WILDCARD = re.compile(
    r"(?:(?<!\\)\.|\[\\s\\S\]|\[\\S\\s\]|\[\\w\\W\]|\[\\W\\w\]|\[\\d\\D\]|\[\\D\\d\])"
    r"(?:[+*]|\{\d*,\})"
)


@dataclass(frozen=True)
class ExtractionPattern:
    """A named pattern whose capture group holds the field value."""
    name: str
    regex: re.Pattern
    group: int = 1

    @classmethod
    def compile(cls, name: str, pattern: str, flags: int = re.IGNORECASE, group: int = 1) -> "ExtractionPattern":
        return cls(name=name, regex=re.compile(pattern, flags), group=group)


class FieldRegistry:
    """
    Ordered, read-only collection of extraction patterns.

    Patterns are validated on construction: names must be unique and must
    not collide with the reserved filename key, the capture group must
    exist. Patterns with nested quantifiers, quantified alternations,
    back-to-back repeats of one token or unbounded wildcards are rejected
    since they run over untrusted document text.
    """

    def __init__(self, patterns: Iterable[ExtractionPattern]):
        self._patterns = tuple(patterns)
        seen = set()
        for pattern in self._patterns:
            if pattern.name == FILENAME_KEY:
                raise PatternRegistryError(f"'{FILENAME_KEY}' is a reserved field name")
            if pattern.name in seen:
                raise PatternRegistryError(f"Duplicate field name: {pattern.name}")
            seen.add(pattern.name)
            validate_pattern(pattern)

    def __iter__(self) -> Iterator[ExtractionPattern]:
        return iter(self._patterns)

    def __len__(self) -> int:
        return len(self._patterns)

    @property
    def names(self) -> list[str]:
        return [p.name for p in self._patterns]


def validate_pattern(pattern: ExtractionPattern) -> None:
    """
    Check a single pattern for registry use.

    Raises:
        PatternRegistryError: If the capture group is missing or the pattern
            has a backtracking-prone shape.
    """
    if pattern.group < 1 or pattern.regex.groups < pattern.group:
        raise PatternRegistryError(
            f"Pattern '{pattern.name}' has no capture group {pattern.group}"
        )
    source = pattern.regex.pattern
    if _NESTED_QUANTIFIER.search(source):
        raise PatternRegistryError(f"Pattern '{pattern.name}' contains a nested quantifier")
    if _QUANTIFIED_ALTERNATION.search(source):
        raise PatternRegistryError(f"Pattern '{pattern.name}' contains a quantified alternation")
    if _REPEATED_QUANTIFIED_TOKEN.search(source):
        raise PatternRegistryError(f"Pattern '{pattern.name}' repeats a quantified token")
    if _UNBOUNDED_WILDCARD.search(source):
        raise PatternRegistryError(
            f"Pattern '{pattern.name}' contains an unbounded wildcard; use a bounded repeat such as .{{0,200}}"
        )


DEFAULT_REGISTRY = FieldRegistry([
    ExtractionPattern.compile("lote", r"Lote\s*N?°?:\s*(\S+)"),
    ExtractionPattern.compile("total", r"Total[^\n]{0,200}?:?\s*\$?([\d,.-]+)"),
])


def extract_fields(full_text: str, filename: str, registry: FieldRegistry = DEFAULT_REGISTRY) -> dict[str, str]:
    """
    Run every registered pattern over the text.

    Args:
        full_text: Complete extracted text of the document.
        filename: Original file name, always stored under "filename".
        registry: Patterns to apply, in order.

    Returns:
        Mapping of field name to trimmed value or NOT_FOUND, with
        "filename" first.
    """
    fields = {FILENAME_KEY: filename}
    for pattern in registry:
        match = pattern.regex.search(full_text)
        value = match.group(pattern.group) if match else None
        fields[pattern.name] = value.strip() if value else NOT_FOUND
        logger.debug("Field %s: %s", pattern.name, "matched" if value else "not found")
    return fields


def fields_to_markdown(fields: dict[str, str]) -> str:
    """Render extracted fields as a small Markdown report."""
    filename = fields.get(FILENAME_KEY, "document")
    lines = [f"# Extracted Data from {filename}", ""]
    for key, value in fields.items():
        if key == FILENAME_KEY:
            continue
        lines.append(f"**{key[:1].upper() + key[1:]}:** {value}")
        lines.append("")
    return "\n".join(lines)
