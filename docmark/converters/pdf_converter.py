"""
PDF-to-Markdown Converter

Rebuilds reading-order text from the positioned text spans of each PDF
page, then hands the whole-document text to the heading heuristics.
No layout analysis: columns, fonts and images are not considered.
"""

import functools
import logging
import os
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from typing import Callable, Optional, Sequence

from ..errors import NO_CONTENT_MESSAGE, CorruptInputError
from ..headings import annotate

logger = logging.getLogger(__name__)

# Maximum vertical distance (PDF units) for two fragments to share a line.
# Used by both the sort comparator and the line-break decision.
SAME_LINE_THRESHOLD = 5.0


@dataclass(frozen=True)
class PositionedFragment:
    """A run of page text at its baseline origin (origin bottom-left, y up)."""
    text: str
    x: float
    y: float


class PDFConverter:
    """Converts PDF files to Markdown via positional text reconstruction."""

    SUPPORTED_EXTENSIONS = {".pdf"}

    @staticmethod
    def can_handle(filename: str) -> bool:
        _, ext = os.path.splitext(filename.lower())
        return ext in PDFConverter.SUPPORTED_EXTENSIONS

    @staticmethod
    def extract_text(data: bytes, max_workers: Optional[int] = None) -> str:
        """
        Extract the reading-order plain text of a whole PDF.

        Args:
            data: Raw bytes of the PDF.
            max_workers: Threads used to reconstruct pages; None or 1 runs
                sequentially.

        Returns:
            Page texts in page order, each followed by a blank line.

        Raises:
            CorruptInputError: If the document or any page cannot be decoded.
        """
        return assemble_pages(read_pdf_pages(data), max_workers=max_workers)

    @staticmethod
    def convert(data: bytes, max_workers: Optional[int] = None) -> str:
        """Convert the bytes of a PDF to Markdown with heuristic headings."""
        full_text = PDFConverter.extract_text(data, max_workers=max_workers)
        markdown = annotate(full_text)
        return markdown or NO_CONTENT_MESSAGE


# ──────────────────────────────────────────────────────────────
# PAGE EXTRACTION
# ──────────────────────────────────────────────────────────────

def read_pdf_pages(data: bytes) -> list[list[PositionedFragment]]:
    """
    Open a PDF from bytes and collect the fragments of every page.

    PyMuPDF is not thread-safe, so pages are read sequentially here and
    only the pure reconstruction step is parallelised.
    """
    try:
        import fitz  # pymupdf
    except ImportError:
        raise RuntimeError("pymupdf is not installed. Run: pip install pymupdf")

    try:
        doc = fitz.open(stream=data, filetype="pdf")
    except (RuntimeError, ValueError) as e:
        raise CorruptInputError(
            "Could not open the PDF. Make sure the file is not corrupt."
        ) from e

    try:
        if doc.needs_pass:
            raise CorruptInputError("The PDF is encrypted and cannot be read without a password.")
        try:
            page_count = doc.page_count
        except (RuntimeError, ValueError) as e:
            raise CorruptInputError("Could not read the page tree of the PDF.") from e
        if page_count == 0:
            raise CorruptInputError("The PDF contains no pages.")

        pages = []
        for page_number in range(1, page_count + 1):
            try:
                fragments = extract_fragments(doc[page_number - 1])
            except (RuntimeError, ValueError) as e:
                raise CorruptInputError(f"Could not decode page {page_number} of the PDF.") from e
            logger.debug("Page %d: %d fragments", page_number, len(fragments))
            pages.append(fragments)
        return pages
    finally:
        doc.close()


def extract_fragments(page) -> list[PositionedFragment]:
    """Collect the non-blank positioned text fragments of a PyMuPDF page."""
    import fitz  # pymupdf

    text_dict = page.get_text("dict", flags=fitz.TEXTFLAGS_TEXT)
    return fragments_from_text_dict(text_dict, page.rect.height)


def fragments_from_text_dict(text_dict: dict, page_height: float) -> list[PositionedFragment]:
    """
    Map the spans of a PyMuPDF "dict" extraction to positioned fragments.

    PyMuPDF reports span origins with y growing downward from the top of the
    page; they are flipped so that y grows upward from the bottom. Blank
    spans are dropped here so they never take part in line detection.
    """
    fragments = []
    for block in text_dict.get("blocks", []):
        if block.get("type", 0) != 0:  # image block
            continue
        for line in block.get("lines", []):
            for span in line.get("spans", []):
                text = span.get("text", "")
                if not text.strip():
                    continue
                x, y = span["origin"]
                fragments.append(PositionedFragment(text=text, x=float(x), y=float(page_height - y)))
    return fragments


# ──────────────────────────────────────────────────────────────
# READING ORDER
# ──────────────────────────────────────────────────────────────

def on_same_line(y1: float, y2: float) -> bool:
    return abs(y1 - y2) <= SAME_LINE_THRESHOLD


def compare_fragments(a: PositionedFragment, b: PositionedFragment) -> int:
    """Top to bottom, then left to right for fragments on the same line."""
    if not on_same_line(a.y, b.y):
        return -1 if a.y > b.y else 1
    if a.x != b.x:
        return -1 if a.x < b.x else 1
    return 0


def sort_fragments(fragments: Sequence[PositionedFragment]) -> list[PositionedFragment]:
    """
    Sort fragments into reading order.

    The pairwise comparator is not transitive for chains of fragments a few
    units apart, so the input is first put into a canonical order. That way
    the result depends only on the fragments, not on the order supplied.
    """
    canonical = sorted(fragments, key=lambda f: (-f.y, f.x, f.text))
    return sorted(canonical, key=functools.cmp_to_key(compare_fragments))


def reconstruct(fragments: Sequence[PositionedFragment]) -> str:
    """Rebuild the text of one page, one output line per visual line.

    Fragments on a line are joined by single spaces; lines carry no
    trailing whitespace.
    """
    parts = []
    last_y = None
    for fragment in sort_fragments(fragments):
        if last_y is not None and not on_same_line(fragment.y, last_y):
            parts[-1] = parts[-1].rstrip()
            parts.append("\n")
        parts.append(fragment.text.strip() + " ")
        last_y = fragment.y
    return "".join(parts).rstrip()


def assemble_pages(
    pages: Sequence[Sequence[PositionedFragment]],
    reconstruct_page: Callable[[Sequence[PositionedFragment]], str] = reconstruct,
    max_workers: Optional[int] = None,
) -> str:
    """
    Reconstruct every page and join the results in page order.

    With max_workers > 1 pages are reconstructed on a thread pool; results
    are stored by page index, so completion order never affects the output.
    """
    if max_workers and max_workers > 1 and len(pages) > 1:
        texts: list[Optional[str]] = [None] * len(pages)
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            futures = {
                executor.submit(reconstruct_page, fragments): index
                for index, fragments in enumerate(pages)
            }
            for future in as_completed(futures):
                texts[futures[future]] = future.result()
    else:
        texts = [reconstruct_page(fragments) for fragments in pages]

    return "".join(f"{text}\n\n" for text in texts if text)
