#!/usr/bin/env python3
"""
docmark CLI

Command-line interface for Word/PDF to Markdown conversion.

Usage:
    python -m docmark <source> [options]
    python -m docmark report.docx
    python -m docmark invoice.pdf --fields       # extract fields as a report
    python -m docmark file1.pdf file2.docx        # convert multiple files

Options:
    -o, --output DIR     Output directory (default: ./docmark_output)
    --stdout             Print to stdout instead of saving files
    --fields             Extract PDF fields instead of converting
    -w, --workers N      Threads used to rebuild PDF pages
    --formats            Show all supported formats
    -v, --verbose        Enable debug logging
"""

import argparse
import logging
import os
import sys

from .core import DocumentConverter, kind_from_filename, markdown_filename
from .errors import ConversionError
from .fields import fields_to_markdown

logger = logging.getLogger("docmark")


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog="docmark",
        description=(
            "Office Document-to-Markdown Converter\n\n"
            "Converts Word documents and PDFs into Markdown, or extracts\n"
            "key fields (Lote, Total) from PDFs into a Markdown report."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  python -m docmark policy.docx\n"
            "  python -m docmark report.pdf --stdout              # print to terminal\n"
            "  python -m docmark invoice.pdf --fields             # field report\n"
            "  python -m docmark doc1.pdf doc2.docx -o ./md_out   # custom output dir\n"
        ),
    )

    parser.add_argument(
        "sources",
        nargs="*",
        help="Files to convert",
    )
    parser.add_argument(
        "-o", "--output",
        default=None,
        help="Output directory (default: ./docmark_output)",
    )
    parser.add_argument(
        "--stdout",
        action="store_true",
        help="Print Markdown to stdout instead of saving to files",
    )
    parser.add_argument(
        "--fields",
        action="store_true",
        help="Extract fields from PDFs and write them as a Markdown report",
    )
    parser.add_argument(
        "-w", "--workers",
        type=int,
        default=None,
        help="Number of threads used to rebuild PDF pages (default: sequential)",
    )
    parser.add_argument(
        "--formats",
        action="store_true",
        help="Show all supported input formats and exit",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    if args.formats:
        _show_formats()
        return

    if not args.sources:
        parser.print_help()
        print("\nError: No sources provided. Specify files to convert.")
        sys.exit(1)

    engine = DocumentConverter(max_workers=args.workers)
    output_dir = args.output or os.path.join(os.getcwd(), "docmark_output")
    save = not args.stdout
    if save:
        os.makedirs(output_dir, exist_ok=True)

    print("=" * 60)
    print("  DOCMARK - Office Document-to-Markdown Converter")
    print("=" * 60)
    print()

    success_count = 0
    error_count = 0

    for source in args.sources:
        try:
            md_text = _convert_source(engine, source, fields=args.fields)
            if args.stdout:
                print(md_text)
                print("\n" + "=" * 60 + "\n")
            else:
                out_path = os.path.join(output_dir, markdown_filename(source))
                with open(out_path, "w", encoding="utf-8") as f:
                    f.write(md_text)
                print(f"[SAVED] {out_path}")
            success_count += 1
        except (ConversionError, OSError, RuntimeError) as e:
            logger.error("Failed to convert %s: %s", source, e)
            print(f"[ERROR] {source}: {e}", file=sys.stderr)
            error_count += 1

    print()
    print("-" * 60)
    print(f"  Done: {success_count} converted, {error_count} errors")
    if save:
        print(f"  Output: {output_dir}")
    print("-" * 60)

    if error_count:
        sys.exit(1)


def _convert_source(engine: DocumentConverter, source: str, fields: bool = False) -> str:
    """Read one file and return the Markdown to write for it."""
    # Fail on the extension before touching the file
    kind = kind_from_filename(source)
    print(f"[{kind.value.upper()}] {'Extracting fields' if fields else 'Converting'}: {source}")

    with open(source, "rb") as f:
        data = f.read()

    filename = os.path.basename(source)
    if fields:
        return fields_to_markdown(engine.convert(data, kind, fields=True, filename=filename))
    return engine.convert(data, kind, filename=filename)


def _show_formats():
    """Display all supported formats."""
    formats = DocumentConverter.supported_formats()
    print("\nSupported Input Formats:")
    print("-" * 40)
    for category, extensions in formats.items():
        print(f"\n  {category}:")
        for ext in extensions:
            print(f"    {ext}")
    print()


if __name__ == "__main__":
    main()
