"""
Drawing surfaces: the rendering-engine side of the template machinery.
"""

from .base import DrawingSurface
from .memory import MemorySurface
from .reportlab_surface import DeferredPageCanvas, ReportLabSurface

__all__ = ["DeferredPageCanvas", "DrawingSurface", "MemorySurface", "ReportLabSurface"]
