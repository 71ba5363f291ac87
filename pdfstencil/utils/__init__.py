"""
Utility helpers for pdfstencil.
"""

from .color_utils import color_alpha, to_color
from .logger import configure_logging, get_logger
from .rich_logger import setup_logging

__all__ = ["color_alpha", "configure_logging", "get_logger", "setup_logging", "to_color"]
