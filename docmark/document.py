"""
Typed rich-text document model consumed by the Markdown serializer.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Union


class RunStyle(Enum):
    """Style tag carried by a run. Tags are mutually exclusive per run."""
    NONE = "none"
    HEADING = "heading"
    BOLD = "bold"
    ITALIC = "italic"


@dataclass(frozen=True)
class Run:
    """
    A contiguous span of text with a single style tag.

    Compound emphasis is modelled by nesting: a bold-italic span is a BOLD
    run whose only child is an ITALIC run. A run's content is its own text
    followed by its children, in order.
    """
    text: str = ""
    style: RunStyle = RunStyle.NONE
    level: int = 0  # Heading level (1-6), only for HEADING runs
    children: tuple["Run", ...] = ()

    def __post_init__(self):
        if self.style is RunStyle.HEADING and not 1 <= self.level <= 6:
            raise ValueError(f"Heading level must be between 1 and 6, got {self.level}")

    @classmethod
    def heading(cls, level: int, text: str = "", children: tuple["Run", ...] = ()) -> "Run":
        return cls(text=text, style=RunStyle.HEADING, level=level, children=children)

    @classmethod
    def bold(cls, text: str = "", children: tuple["Run", ...] = ()) -> "Run":
        return cls(text=text, style=RunStyle.BOLD, children=children)

    @classmethod
    def italic(cls, text: str = "", children: tuple["Run", ...] = ()) -> "Run":
        return cls(text=text, style=RunStyle.ITALIC, children=children)


@dataclass(frozen=True)
class Paragraph:
    """A paragraph made of runs."""
    runs: tuple[Run, ...] = ()


@dataclass(frozen=True)
class LineBreak:
    """A standalone line break between paragraphs."""
    pass


Block = Union[Paragraph, LineBreak]


@dataclass(frozen=True)
class RichDocument:
    """An ordered, immutable sequence of blocks."""
    blocks: tuple[Block, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.blocks
