"""
pdfstencil - reusable page templates for PDF canvases.

Records drawing commands into template objects (running headers, footers,
watermarks) independently of the page being drawn, and splices them onto the
current page, the next page, every page, or odd/even pages.

Quick Start:
    from pdfstencil import ReportLabCanvas

    pdf = ReportLabCanvas("a4")
    header = pdf.open_object()
    pdf.text(36, 18, "Annual report", "helvetica", 10)
    pdf.close_object()
    pdf.add_object(header, "all")
    ...
    data = pdf.output()
"""

from .version import __version__, __version_info__

from .exceptions import (
    StencilError,
    UnknownObjectError,
    EmptyStackError,
    PlacementError,
    SurfaceError,
    ConfigurationError,
)
from .config import CanvasOptions, resolve_page_size
from .templates import (
    BufferSnapshot,
    ObjectStore,
    PagePlacementScheduler,
    PlacementKind,
    PlacementPolicy,
    Recording,
    SessionStack,
    TemplateEngine,
    TemplateRecorder,
)
from .surface import DrawingSurface, MemorySurface, ReportLabSurface
from .adapter import ReportLabCanvas

__all__ = [
    "__version__",
    "__version_info__",
    "StencilError",
    "UnknownObjectError",
    "EmptyStackError",
    "PlacementError",
    "SurfaceError",
    "ConfigurationError",
    "CanvasOptions",
    "resolve_page_size",
    "BufferSnapshot",
    "ObjectStore",
    "PagePlacementScheduler",
    "PlacementKind",
    "PlacementPolicy",
    "Recording",
    "SessionStack",
    "TemplateEngine",
    "TemplateRecorder",
    "DrawingSurface",
    "MemorySurface",
    "ReportLabSurface",
    "ReportLabCanvas",
]
