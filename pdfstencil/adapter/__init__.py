"""
Canvas adapters mapping the generic canvas interface onto PDF libraries.
"""

from .reportlab_canvas import ReportLabCanvas

__all__ = ["ReportLabCanvas"]
