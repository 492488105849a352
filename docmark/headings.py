"""
Heading heuristics for reconstructed PDF text.

Best-effort promotion of structural-looking lines to Markdown headings.
Works on text alone (no font or coordinate information), so false
positives and misses are expected.
"""

import re

CAPS_HEADING_MIN_LENGTH = 11

_INLINE_WHITESPACE = re.compile(r"[^\S\n]+")
_BLANK_LINES = re.compile(r"\n{3,}")
_NUMBERED_SECTION = re.compile(r"^\d+\. (\S.*)$")


def normalize_whitespace(text: str) -> str:
    """Collapse spaces within lines and blank-line runs to a single blank line."""
    lines = [_INLINE_WHITESPACE.sub(" ", line).strip() for line in text.split("\n")]
    return _BLANK_LINES.sub("\n\n", "\n".join(lines)).strip("\n")


def is_caps_heading(line: str) -> bool:
    """Uppercase letters and spaces only, at least CAPS_HEADING_MIN_LENGTH long."""
    if len(line) < CAPS_HEADING_MIN_LENGTH:
        return False
    return all(c == " " or (c.isalpha() and c.isupper()) for c in line)


def is_numbered_section(line: str) -> bool:
    """'<number>. <Capitalised title>' with no further period on the line."""
    match = _NUMBERED_SECTION.match(line)
    if not match:
        return False
    title = match.group(1)
    return title[0].isupper() and "." not in title


def annotate_line(line: str) -> str:
    # Caps rule first; the rules cannot both match since one needs digits
    if is_caps_heading(line):
        return f"## {line}"
    if is_numbered_section(line):
        return f"### {line}"
    return line


def annotate(full_text: str) -> str:
    """Normalize whitespace and prefix heading-like lines with Markdown markers."""
    normalized = normalize_whitespace(full_text)
    return "\n".join(annotate_line(line) for line in normalized.split("\n"))
