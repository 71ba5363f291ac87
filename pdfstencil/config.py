"""
Canvas configuration.

Options may be given as a CanvasOptions instance or as a plain dict; paper
sizes come from ReportLab's page size table.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields, replace
from typing import Any, Dict, Optional, Sequence, Tuple, Union

from reportlab.lib import pagesizes

from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)

PAPER_SIZES: Dict[str, Tuple[float, float]] = {
    name.lower(): (float(value[0]), float(value[1]))
    for name, value in vars(pagesizes).items()
    if name.isupper() and isinstance(value, tuple) and len(value) == 2
}

DEFAULT_PAPER = "letter"
ORIENTATIONS = ("portrait", "landscape")

# Reported font heights are scaled to match the metrics dompdf-style layouts expect
FONT_HEIGHT_SCALE_NORMAL = 1.116
FONT_HEIGHT_SCALE_BOLD = 1.153

PaperSpec = Union[str, Sequence[float]]


@dataclass(slots=True)
class CanvasOptions:
    """Options for a ReportLabCanvas."""

    paper: PaperSpec = DEFAULT_PAPER
    orientation: str = "portrait"
    compress: bool = True
    creator: str = "pdfstencil"
    font_height_ratio: float = 1.1
    default_font: str = "Helvetica"

    def __post_init__(self):
        self.orientation = str(self.orientation or "portrait").lower()
        if self.orientation not in ORIENTATIONS:
            raise ConfigurationError(f"Invalid orientation '{self.orientation}'", "expected portrait or landscape")
        try:
            self.font_height_ratio = float(self.font_height_ratio)
        except (TypeError, ValueError):
            raise ConfigurationError("font_height_ratio must be a number", repr(self.font_height_ratio)) from None
        if self.font_height_ratio <= 0:
            raise ConfigurationError("font_height_ratio must be positive", str(self.font_height_ratio))

    @classmethod
    def from_value(cls, value: Optional[Union["CanvasOptions", Dict[str, Any]]] = None, **overrides) -> "CanvasOptions":
        """
        Build options from None, a dict or an existing instance.

        Unknown dict keys are logged and ignored.
        """
        if value is None:
            options = cls()
        elif isinstance(value, cls):
            options = value
        elif isinstance(value, dict):
            known = {f.name for f in fields(cls)}
            unknown = sorted(set(value) - known)
            if unknown:
                logger.warning(f"Ignoring unknown canvas options: {unknown}")
            options = cls(**{key: val for key, val in value.items() if key in known})
        else:
            raise ConfigurationError(f"Unsupported options type {type(value).__name__}")
        overrides = {key: val for key, val in overrides.items() if val is not None}
        return replace(options, **overrides) if overrides else options

    @property
    def page_size(self) -> Tuple[float, float]:
        return resolve_page_size(self.paper, self.orientation)


def resolve_page_size(paper: PaperSpec = DEFAULT_PAPER, orientation: str = "portrait") -> Tuple[float, float]:
    """
    Resolve a paper size to (width, height) in points.

    Args:
        paper: Paper name ("a4", "letter", ...), (width, height) or
            [x0, y0, x1, y1]. Unknown names fall back to letter.
        orientation: "portrait" or "landscape"
    """
    if isinstance(paper, str):
        size = PAPER_SIZES.get(paper.strip().lower())
        if size is None:
            logger.warning(f"Unknown paper size '{paper}', using {DEFAULT_PAPER}")
            size = PAPER_SIZES[DEFAULT_PAPER]
        width, height = size
    else:
        try:
            values = [float(v) for v in paper]
        except (TypeError, ValueError):
            raise ConfigurationError(f"Invalid paper size {paper!r}") from None
        if len(values) == 2:
            width, height = values
        elif len(values) == 4:
            width, height = values[2] - values[0], values[3] - values[1]
        else:
            raise ConfigurationError(f"Invalid paper size {paper!r}", "expected 2 or 4 numbers")
        if width <= 0 or height <= 0:
            raise ConfigurationError(f"Invalid paper size {paper!r}", "dimensions must be positive")

    if str(orientation).lower() == "landscape":
        width, height = height, width
    return width, height
