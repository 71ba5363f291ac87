"""Color conversion for canvas calls."""

import logging
from typing import Any, Optional

from reportlab.lib.colors import Color, HexColor, black

logger = logging.getLogger(__name__)


def to_color(value: Any, fallback: Color = black) -> Color:
    """
    Convert a canvas color to a ReportLab Color.

    Accepts ReportLab colors, ``[r, g, b]`` floats in 0..1 (or 0..255 ints),
    dicts with ``0``/``1``/``2`` keys and an optional ``alpha`` (dompdf style),
    and hex strings.
    """
    if value is None:
        return fallback
    if isinstance(value, Color):
        return value

    alpha = 1.0
    if isinstance(value, dict):
        alpha = float(value.get("alpha", 1.0))
        value = [value.get(0, 0), value.get(1, 0), value.get(2, 0)]

    if isinstance(value, (tuple, list)) and len(value) >= 3:
        try:
            r, g, b = (float(v) for v in value[:3])
        except (TypeError, ValueError):
            logger.warning(f"Could not parse color: {value!r}, using fallback")
            return fallback
        if r > 1.0 or g > 1.0 or b > 1.0:
            r, g, b = r / 255.0, g / 255.0, b / 255.0
        if len(value) >= 4:
            alpha = float(value[3])
        return Color(r, g, b, alpha=alpha)

    token = str(value).strip()
    if token and not token.startswith("#") and len(token) in (3, 6):
        token = f"#{token}"
    try:
        return HexColor(token)
    except (ValueError, TypeError):
        logger.warning(f"Could not parse color: {value!r}, using fallback")
        return fallback


def color_alpha(value: Any) -> Optional[float]:
    """Explicit alpha carried by a color, if any."""
    if isinstance(value, dict) and "alpha" in value:
        return float(value["alpha"])
    if isinstance(value, (tuple, list)) and len(value) >= 4:
        return float(value[3])
    return None
