"""
Command-line interface for pdfstencil.

Usage:
    pdfstencil render out.pdf --pages 5 --header "Quarterly report"
    pdfstencil render out.pdf --footer "Draft" --footer-pages even
    pdfstencil version
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .adapter import ReportLabCanvas
from .exceptions import StencilError
from .version import __version__

logger = logging.getLogger(__name__)

MARGIN = 36.0


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="pdfstencil",
        description="pdfstencil - reusable page templates on a ReportLab canvas",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  pdfstencil render out.pdf --pages 4 --header "Annual report"
  pdfstencil render out.pdf --footer "Confidential" --footer-pages odd
  pdfstencil version
        """,
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default="WARNING",
        help="Log level (default: WARNING)"
    )
    parser.add_argument(
        "--no-rich",
        action="store_true",
        help="Use plain logging instead of rich"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    render_parser = subparsers.add_parser("render", help="Render a sample document with running templates")
    render_parser.add_argument("output", help="Output PDF file")
    render_parser.add_argument("--pages", type=int, default=3, help="Number of pages (default: 3)")
    render_parser.add_argument("--header", default="pdfstencil", help="Running header text, placed on every page")
    render_parser.add_argument("--footer", default="", help="Footer text")
    render_parser.add_argument(
        "--footer-pages",
        choices=["all", "odd", "even", "nextodd", "nexteven"],
        default="all",
        help="Pages the footer is placed on (default: all)"
    )
    render_parser.add_argument("--paper", default="letter", help="Paper size (default: letter)")
    render_parser.add_argument(
        "--orientation",
        choices=["portrait", "landscape"],
        default="portrait",
        help="Page orientation"
    )
    render_parser.add_argument(
        "--no-page-numbers",
        action="store_true",
        help="Do not print 'page X of Y'"
    )
    render_parser.add_argument(
        "--no-compress",
        action="store_true",
        help="Write uncompressed content streams"
    )

    subparsers.add_parser("version", help="Show version information")
    return parser


def render_sample(
    output: Path,
    pages: int = 3,
    header: str = "pdfstencil",
    footer: str = "",
    footer_pages: str = "all",
    paper: str = "letter",
    orientation: str = "portrait",
    page_numbers: bool = True,
    compress: bool = True,
) -> Path:
    """
    Render a sample document whose header and footer are template objects.

    Returns:
        Path of the written PDF
    """
    if pages < 1:
        raise ValueError("pages must be at least 1")

    pdf = ReportLabCanvas(paper, orientation, {"compress": compress})
    width = pdf.get_width()
    height = pdf.get_height()

    header_id = pdf.open_object()
    pdf.text(MARGIN, MARGIN / 2, header, "helvetica", 10, [0.2, 0.2, 0.2])
    pdf.line(MARGIN, MARGIN, width - MARGIN, MARGIN, [0.6, 0.6, 0.6], 0.5)
    pdf.close_object()
    pdf.add_object(header_id, "all")

    if footer:
        footer_id = pdf.open_object()
        pdf.line(MARGIN, height - MARGIN, width - MARGIN, height - MARGIN, [0.6, 0.6, 0.6], 0.5)
        pdf.text(MARGIN, height - MARGIN + 6, footer, "helvetica", 8, [0.4, 0.4, 0.4])
        pdf.close_object()
        pdf.add_object(footer_id, footer_pages)

    for page in range(1, pages + 1):
        if page > 1:
            pdf.new_page()
        pdf.text(MARGIN, MARGIN * 2, f"Page {page}", "helvetica", 24)
        pdf.rectangle(MARGIN, MARGIN * 3, width - 2 * MARGIN, height - 5 * MARGIN, [0.8, 0.8, 0.8], 1)

    if page_numbers:
        pdf.page_text(width - MARGIN - 60, height - MARGIN + 6, "page {PAGE_NUM} of {PAGE_COUNT}", "helvetica", 8)

    return pdf.stream(output)


def cmd_render(args) -> int:
    """Handle render command."""
    try:
        path = render_sample(
            Path(args.output),
            pages=args.pages,
            header=args.header,
            footer=args.footer,
            footer_pages=args.footer_pages,
            paper=args.paper,
            orientation=args.orientation,
            page_numbers=not args.no_page_numbers,
            compress=not args.no_compress,
        )
    except (StencilError, ValueError, OSError) as e:
        logger.error(f"Rendering failed: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return 1
    print(f"Saved: {path}")
    return 0


def cmd_version(args=None) -> int:
    """Handle version command."""
    print(f"pdfstencil {__version__}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for CLI."""
    from .utils.rich_logger import setup_logging

    parser = create_parser()
    args = parser.parse_args(argv)
    setup_logging(args.log_level, use_rich=not args.no_rich)

    if args.command == "render":
        return cmd_render(args)
    elif args.command == "version":
        return cmd_version(args)

    parser.print_help()
    return 0
