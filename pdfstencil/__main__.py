"""
Entry point for running pdfstencil as a module.

Usage:
    python -m pdfstencil render out.pdf --pages 4 --header "Report"
"""

import sys

from .cli import main

if __name__ == "__main__":
    sys.exit(main())
