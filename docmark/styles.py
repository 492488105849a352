"""
Style map: Word style names to Markdown structural markers.
"""

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional


class MarkerKind(Enum):
    """Kinds of Markdown markers a style can map to."""
    HEADING = "heading"
    STRONG = "strong"
    EMPHASIS = "emphasis"


@dataclass(frozen=True)
class MarkdownMarker:
    """A Markdown structural marker (heading level, strong, emphasis)."""
    kind: MarkerKind
    level: int = 0  # Only meaningful for headings (1-6)

    def __post_init__(self):
        if self.kind is MarkerKind.HEADING and not 1 <= self.level <= 6:
            raise ValueError(f"Heading level must be between 1 and 6, got {self.level}")

    @classmethod
    def heading(cls, level: int) -> "MarkdownMarker":
        return cls(MarkerKind.HEADING, level)


STRONG = MarkdownMarker(MarkerKind.STRONG)
EMPHASIS = MarkdownMarker(MarkerKind.EMPHASIS)


# Keys are matched exactly as python-docx reports style names
DEFAULT_STYLE_MAP: Mapping[str, MarkdownMarker] = MappingProxyType({
    "Title": MarkdownMarker.heading(1),
    "Heading 1": MarkdownMarker.heading(1),
    "Heading 2": MarkdownMarker.heading(2),
    "Heading 3": MarkdownMarker.heading(3),
    "Heading 4": MarkdownMarker.heading(4),
    "Heading 5": MarkdownMarker.heading(5),
    "Heading 6": MarkdownMarker.heading(6),
    "Strong": STRONG,
    "Emphasis": EMPHASIS,
})


def lookup_marker(style_name: Optional[str],
                  style_map: Mapping[str, MarkdownMarker] = DEFAULT_STYLE_MAP) -> Optional[MarkdownMarker]:
    """Return the marker for a style name, or None if the style is unmapped."""
    if not style_name:
        return None
    return style_map.get(style_name)
