"""
Word Document-to-Markdown Converter

Reads a .docx package into a typed RichDocument (paragraphs, runs and
emphasis) and serializes it to Markdown by walking the structure. Style
names are resolved through the style map; nothing is inferred from fonts.
"""

import io
import logging
import os
import re
import zipfile
from typing import Mapping

from ..document import Block, LineBreak, Paragraph, RichDocument, Run, RunStyle
from ..errors import NO_CONTENT_MESSAGE, CorruptInputError
from ..styles import DEFAULT_STYLE_MAP, MarkdownMarker, MarkerKind, lookup_marker

logger = logging.getLogger(__name__)

_EXCESS_NEWLINES = re.compile(r"\n{3,}")


class OfficeConverter:
    """Converts Word documents (.docx) to clean Markdown."""

    SUPPORTED_EXTENSIONS = {".docx"}

    @staticmethod
    def can_handle(filename: str) -> bool:
        _, ext = os.path.splitext(filename.lower())
        return ext in OfficeConverter.SUPPORTED_EXTENSIONS

    @staticmethod
    def convert(data: bytes, style_map: Mapping[str, MarkdownMarker] = DEFAULT_STYLE_MAP) -> str:
        """
        Convert the bytes of a .docx file to Markdown.

        Args:
            data: Raw bytes of the Word document.
            style_map: Style name to Markdown marker table.

        Returns:
            The Markdown text, or NO_CONTENT_MESSAGE if nothing was extracted.

        Raises:
            CorruptInputError: If the bytes are not a readable .docx package.
        """
        return serialize(read_docx(data, style_map))


# ──────────────────────────────────────────────────────────────
# DOCX READER
# ──────────────────────────────────────────────────────────────

def read_docx(data: bytes, style_map: Mapping[str, MarkdownMarker] = DEFAULT_STYLE_MAP) -> RichDocument:
    """Parse .docx bytes into a RichDocument."""
    try:
        from docx import Document
        from docx.opc.exceptions import PackageNotFoundError
        from docx.text.hyperlink import Hyperlink
    except ImportError:
        raise RuntimeError("python-docx is not installed. Run: pip install python-docx")

    try:
        doc = Document(io.BytesIO(data))
    except (PackageNotFoundError, zipfile.BadZipFile, KeyError, ValueError, SyntaxError) as e:
        raise CorruptInputError(
            "Could not read the Word document. Make sure the file is not corrupt."
        ) from e

    blocks: list[Block] = []
    for para in doc.paragraphs:
        segments = []
        for item in para.iter_inner_content():
            runs = item.runs if isinstance(item, Hyperlink) else [item]
            for run in runs:
                segments.append(_segment(run, style_map))

        block = _paragraph_block(_merge_segments(segments), para.style, style_map)
        if block is not None:
            blocks.append(block)

    logger.debug("Read %d blocks from %d paragraphs", len(blocks), len(doc.paragraphs))
    return RichDocument(blocks=tuple(blocks))


def _segment(run, style_map: Mapping[str, MarkdownMarker]) -> tuple[str, bool, bool]:
    """Reduce a python-docx run to (text, bold, italic)."""
    text = run.text
    char_marker = lookup_marker(run.style.name if run.style else None, style_map)
    bold = bool(run.bold) or (char_marker is not None and char_marker.kind is MarkerKind.STRONG)
    italic = bool(run.italic) or (char_marker is not None and char_marker.kind is MarkerKind.EMPHASIS)
    # Formatting on whitespace alone would produce markers like "** **"
    if not text.strip():
        bold = italic = False
    return text, bold, italic


def _merge_segments(segments: list[tuple[str, bool, bool]]) -> list[tuple[str, bool, bool]]:
    """Join adjacent segments that share formatting (Word splits runs freely)."""
    merged: list[tuple[str, bool, bool]] = []
    for text, bold, italic in segments:
        if not text:
            continue
        if merged and merged[-1][1:] == (bold, italic):
            merged[-1] = (merged[-1][0] + text, bold, italic)
        else:
            merged.append((text, bold, italic))
    return merged


def _inline_run(text: str, bold: bool, italic: bool) -> Run:
    if bold and italic:
        return Run.bold(children=(Run.italic(text),))
    if bold:
        return Run.bold(text)
    if italic:
        return Run.italic(text)
    return Run(text)


def _paragraph_block(segments, style, style_map: Mapping[str, MarkdownMarker]):
    """Build the block for one paragraph, or None for an empty paragraph."""
    joined = "".join(text for text, _, _ in segments)
    if not joined.strip():
        # Paragraphs holding nothing but breaks become standalone line breaks
        return LineBreak() if "\n" in joined else None

    inline = tuple(_inline_run(*segment) for segment in segments)
    marker = lookup_marker(style.name if style else None, style_map)

    if marker is None:
        return Paragraph(runs=inline)
    if marker.kind is MarkerKind.HEADING:
        return Paragraph(runs=(Run.heading(marker.level, children=inline),))
    if marker.kind is MarkerKind.STRONG:
        return Paragraph(runs=(Run.bold(children=inline),))
    return Paragraph(runs=(Run.italic(children=inline),))


# ──────────────────────────────────────────────────────────────
# MARKDOWN SERIALIZER
# ──────────────────────────────────────────────────────────────

def serialize(document: RichDocument) -> str:
    """
    Serialize a RichDocument to Markdown.

    Headings occupy their own line and are closed by a blank line, bold and
    italic runs are wrapped in ** and *, and paragraphs are separated by a
    blank line. Runs of three or more newlines are collapsed to two and the
    result is stripped.

    Returns:
        The Markdown text, or NO_CONTENT_MESSAGE for a document that yields
        no text.
    """
    out: list[str] = []
    for block in document.blocks:
        if isinstance(block, LineBreak):
            out.append("\n")
            continue
        for run in block.runs:
            _emit_run(run, out)
        out.append("\n\n")

    markdown = _EXCESS_NEWLINES.sub("\n\n", "".join(out)).strip()
    logger.debug("Serialized %d blocks into %d characters", len(document.blocks), len(markdown))
    return markdown or NO_CONTENT_MESSAGE


def _emit_run(run: Run, out: list[str]) -> None:
    if run.style is not RunStyle.HEADING:
        out.append(_render_inline(run))
        return

    if _needs_newline(out):
        out.append("\n")
    out.append("#" * run.level + " ")
    out.append(_content(run))
    out.append("\n\n")


def _content(run: Run) -> str:
    return run.text + "".join(_render_inline(child) for child in run.children)


def _render_inline(run: Run) -> str:
    content = _content(run)
    if run.style is RunStyle.BOLD:
        return f"**{content}**" if content else ""
    if run.style is RunStyle.ITALIC:
        return f"*{content}*" if content else ""
    # Headings nested inside inline content contribute their text only
    return content


def _needs_newline(out: list[str]) -> bool:
    """True when the output so far ends mid-line."""
    for chunk in reversed(out):
        if chunk:
            return not chunk.endswith("\n")
    return False
