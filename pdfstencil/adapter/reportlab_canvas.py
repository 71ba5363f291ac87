"""
ReportLab canvas adapter.

Implements the generic canvas interface (lines, shapes, text, images,
transparency, links, page scripts and template objects) on top of ReportLab.
Coordinates are in points with the origin in the top left corner and y
growing downwards; every call is flipped into ReportLab's bottom-left space.

Template objects are handled by TemplateEngine on a ReportLabSurface, so
anything drawn between ``open_object()`` and ``close_object()`` is kept out
of the page and can later be placed on one or many pages.
"""

import logging
import re
from contextlib import contextmanager
from pathlib import Path
from typing import Callable, Dict, List, Optional, Sequence, Tuple, Union

from PIL import Image
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.pdfdoc import PDFArray, PDFDictionary, PDFName, PDFString

from ..config import FONT_HEIGHT_SCALE_BOLD, FONT_HEIGHT_SCALE_NORMAL, CanvasOptions
from ..surface.reportlab_surface import ReportLabSurface
from ..templates.engine import TemplateEngine
from ..templates.snapshot import ObjectId, Recording
from ..utils.color_utils import color_alpha, to_color

logger = logging.getLogger(__name__)

PageScript = Callable[[int, int, "ReportLabCanvas"], None]

_FONT_FAMILIES: Dict[str, Tuple[str, str, str, str]] = {
    "helvetica": ("Helvetica", "Helvetica-Bold", "Helvetica-Oblique", "Helvetica-BoldOblique"),
    "times": ("Times-Roman", "Times-Bold", "Times-Italic", "Times-BoldItalic"),
    "courier": ("Courier", "Courier-Bold", "Courier-Oblique", "Courier-BoldOblique"),
    "symbol": ("Symbol",) * 4,
    "zapfdingbats": ("ZapfDingbats",) * 4,
}
_FONT_ALIASES = {
    "arial": "helvetica",
    "sans-serif": "helvetica",
    "times-roman": "times",
    "times new roman": "times",
    "serif": "times",
    "monospace": "courier",
    "fixed": "courier",
}
_SUBTYPES = {
    "": 0, "normal": 0,
    "b": 1, "bold": 1,
    "i": 2, "italic": 2,
    "bi": 3, "ib": 3, "bold_italic": 3,
}
_LINE_CAPS = {"butt": 0, "round": 1, "square": 2}
_LINE_JOINS = {"miter": 0, "round": 1, "bevel": 2}
_CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f]")

BLEND_MODES = (
    "Normal", "Multiply", "Screen", "Overlay", "Darken", "Lighten", "ColorDodge", "ColorBurn",
    "HardLight", "SoftLight", "Difference", "Exclusion", "Hue", "Saturation", "Color", "Luminosity",
)
# Bezier control distance for a quarter circle
_KAPPA = 0.5522847498
VIEWS = ("XYZ", "Fit", "FitH", "FitV", "FitR", "FitB", "FitBH", "FitBV")
# Python codecs for the byte encodings of the base-14 Type 1 fonts
_TYPE1_CODECS = {"WinAnsiEncoding": "cp1252", "MacRomanEncoding": "mac_roman", "StandardEncoding": "latin-1"}


class ReportLabCanvas:
    """
    Canvas interface backed by ReportLab.

    Unless otherwise mentioned, all dimensions are in points (1/72 in).
    """

    def __init__(self, paper=None, orientation: Optional[str] = None, options=None):
        """
        Initialize canvas.

        Args:
            paper: Paper name, (width, height) or [x0, y0, x1, y1]
            orientation: "portrait" or "landscape"
            options: CanvasOptions or dict of options
        """
        self.options = CanvasOptions.from_value(options, paper=paper, orientation=orientation)
        self._width, self._height = self.options.page_size

        self._surface = ReportLabSurface((self._width, self._height), self.options.compress)
        self._canvas = self._surface.canvas
        self._canvas.setCreator(self.options.creator)
        self._engine = TemplateEngine(self._surface)

        self._current_opacity = 1.0
        self._blend_mode = "Normal"
        self._opacity_stack: List[Tuple[float, str]] = []
        self._page_count_override: Optional[int] = None
        self._default_view: Optional[Tuple[int, str, Tuple[float, ...]]] = None
        self._javascript: List[str] = []
        self._named_dests: Dict[int, List[str]] = {}
        self._links: Dict[int, List[Tuple[str, Tuple[float, float, float, float]]]] = {}
        self._page_scripts: List[PageScript] = []
        self._pdf_data: Optional[bytes] = None
        self._surface.add_page_hook(self._finish_page)

        logger.debug(f"ReportLabCanvas initialized: {self._width}x{self._height} pt")

    @property
    def surface(self) -> ReportLabSurface:
        return self._surface

    @property
    def engine(self) -> TemplateEngine:
        return self._engine

    def get_lib_obj(self):
        """The underlying ReportLab canvas."""
        return self._canvas

    def add_info(self, label: str, value: str) -> None:
        """Set a document information field (Title, Author, Subject, Keywords, Creator, Producer)."""
        setters = {
            "title": self._canvas.setTitle,
            "author": self._canvas.setAuthor,
            "subject": self._canvas.setSubject,
            "keywords": self._canvas.setKeywords,
            "creator": self._canvas.setCreator,
            "producer": self._canvas.setProducer,
        }
        setter = setters.get(str(label).lower())
        if setter is None:
            logger.warning(f"Unsupported document info field: {label}")
            return
        setter(value)

    # Template objects

    def open_object(self) -> ObjectId:
        """
        Open a new template object.

        Drawing calls made until ``close_object()`` are recorded into the
        object instead of the page.
        """
        object_id = self._engine.open_object()
        self._opacity_stack.append((self._current_opacity, self._blend_mode))
        return object_id

    def reopen_object(self, object_id: ObjectId) -> None:
        """Reopen a closed object to append to it."""
        self._engine.reopen_object(object_id)
        self._opacity_stack.append((self._current_opacity, self._blend_mode))

    def close_object(self) -> None:
        """Close the innermost open object."""
        self._engine.close_object()
        self._current_opacity, self._blend_mode = self._opacity_stack.pop()

    def add_object(self, object_id: ObjectId, where: str = "all") -> None:
        """
        Add an object to the document.

        ``where`` can be "add", "all", "odd", "even", "next", "nextodd" or
        "nexteven"; see TemplateEngine.add_object.
        """
        self._engine.add_object(object_id, where)

    def stop_object(self, object_id: ObjectId) -> None:
        """Stop an object from appearing after the current page."""
        self._engine.stop_object(object_id)

    def get_object(self, object_id: ObjectId) -> Recording:
        return self._engine.get_object(object_id)

    # Geometry and pages

    def get_width(self) -> float:
        return self._width

    def get_height(self) -> float:
        return self._height

    def get_page_number(self) -> int:
        return self._surface.current_page()

    def set_page_number(self, num: int) -> None:
        """
        Continue drawing on an earlier page.

        ``new_page()`` always returns to the last page before adding one.
        """
        self._surface.set_current_page(int(num))

    def get_page_count(self) -> int:
        if self._page_count_override is not None:
            return self._page_count_override
        return self._surface.page_count

    def set_page_count(self, count: int) -> None:
        """Override the total reported by ``get_page_count()`` and ``{PAGE_COUNT}``."""
        count = int(count)
        if count < 1:
            raise ValueError(f"page count must be at least 1, got {count}")
        self._page_count_override = count

    def new_page(self) -> int:
        """
        Start a new page. Objects due on the current page are placed first.

        Returns:
            Number of pages in the document
        """
        if self.get_page_number() != self._surface.page_count:
            self._surface.set_current_page(self._surface.page_count)
        self._engine.on_new_page()
        self._surface.advance_to_next_page()
        return self._surface.page_count

    # Drawing

    def line(self, x1, y1, x2, y2, color, width, style: Sequence[float] = (), cap: str = "butt"):
        """Draw a line from x1,y1 to x2,y2."""
        with self._paint() as c:
            self._set_line_style(color, width, cap, "miter", style)
            c.line(x1, self._y(y1), x2, self._y(y2))

    def arc(self, x, y, r1, r2, astart, aend, color, width, style: Sequence[float] = (), cap: str = "butt"):
        """Draw an elliptical arc centred on x,y from angle astart to aend (degrees)."""
        cy = self._y(y)
        with self._paint() as c:
            self._set_line_style(color, width, cap, "miter", style)
            c.arc(x - r1, cy - r2, x + r1, cy + r2, startAng=astart, extent=aend - astart)

    def rectangle(self, x1, y1, w, h, color, width, style: Sequence[float] = (), cap: str = "butt"):
        """Draw the outline of a rectangle with its top left corner at x1,y1."""
        with self._paint() as c:
            self._set_line_style(color, width, cap, "miter", style)
            c.rect(x1, self._y(y1) - h, w, h, stroke=1, fill=0)

    def filled_rectangle(self, x1, y1, w, h, color):
        """Draw a filled rectangle with its top left corner at x1,y1."""
        alpha = color_alpha(color)
        opacity = self._current_opacity if alpha is None else alpha * self._current_opacity
        with self._paint(opacity) as c:
            c.setFillColor(to_color(color))
            c.rect(x1, self._y(y1) - h, w, h, stroke=0, fill=1)

    def polygon(self, points: Sequence[float], color, width=None, style: Sequence[float] = (),
                fill: bool = False, blend: str = "Normal", opacity: float = 1.0):
        """
        Draw a polygon through ``points`` given as [x1, y1, x2, y2, ...].
        """
        if len(points) < 4 or len(points) % 2:
            raise ValueError(f"polygon needs an even number of at least 4 coordinates, got {len(points)}")
        with self._paint(opacity, blend) as c:
            path = c.beginPath()
            path.moveTo(points[0], self._y(points[1]))
            for i in range(2, len(points), 2):
                path.lineTo(points[i], self._y(points[i + 1]))
            path.close()
            if fill:
                c.setFillColor(to_color(color))
                c.drawPath(path, stroke=0, fill=1)
            else:
                self._set_line_style(color, width, "square", "miter", style)
                c.drawPath(path, stroke=1, fill=0)

    def circle(self, x, y, r, color, width=None, style: Sequence[float] = (),
               fill: bool = False, blend: str = "Normal", opacity: float = 1.0):
        """Draw a circle centred on x,y."""
        with self._paint(opacity, blend) as c:
            if fill:
                c.setFillColor(to_color(color))
                c.circle(x, self._y(y), r, stroke=0, fill=1)
            else:
                self._set_line_style(color, width, "round", "round", style)
                c.circle(x, self._y(y), r, stroke=1, fill=0)

    def image(self, img: Union[str, Path, Image.Image], x, y, w, h, resolution: str = "normal"):
        """
        Draw an image with its top left corner at x,y scaled to w x h.

        Images are written inline so they stay valid inside template objects.
        """
        if isinstance(img, Image.Image):
            self._canvas.drawInlineImage(img, x, self._y(y) - h, width=w, height=h)
            return
        path = Path(img)
        if not path.exists():
            logger.warning(f"Image not found: {path}")
            return
        with Image.open(path) as source:
            source.load()
            self._canvas.drawInlineImage(source, x, self._y(y) - h, width=w, height=h)

    def text(self, x, y, text: str, font: str, size: float, color=(0, 0, 0), word_space: float = 0.0,
             char_space: float = 0.0, angle: float = 0.0, blend: str = "Normal", opacity: float = 1.0):
        """
        Write text with the top of its line box at x,y.

        ``angle`` is measured clockwise from the x axis, in degrees.
        """
        font_name = self.get_font(font)
        baseline = self._y(y) - pdfmetrics.getAscent(font_name, size)
        with self._paint(opacity, blend) as c:
            if angle:
                c.saveState()
                c.translate(x, self._y(y))
                c.rotate(-angle)
                x, baseline = 0.0, -pdfmetrics.getAscent(font_name, size)
            text_object = c.beginText()
            text_object.setTextOrigin(x, baseline)
            text_object.setFont(font_name, size)
            text_object.setFillColor(to_color(color))
            if word_space:
                text_object.setWordSpace(word_space)
            if char_space:
                text_object.setCharSpace(char_space)
            text_object.textOut(text)
            c.drawText(text_object)
            if angle:
                c.restoreState()

    # Graphics state

    def save(self):
        self._canvas.saveState()

    def restore(self):
        self._canvas.restoreState()

    def clipping_rectangle(self, x1, y1, w, h):
        """Start clipping to a rectangle; end with ``clipping_end()``."""
        c = self._canvas
        c.saveState()
        path = c.beginPath()
        path.rect(x1, self._y(y1) - h, w, h)
        c.clipPath(path, stroke=0, fill=0)

    def clipping_roundrectangle(self, x1, y1, w, h, r_tl, r_tr, r_br, r_bl):
        """Start clipping to a rectangle with its own radius at every corner."""
        c = self._canvas
        c.saveState()
        path = c.beginPath()
        top = self._y(y1)
        bottom, right = top - h, x1 + w
        limit = min(w, h) / 2.0
        r_tl, r_tr, r_br, r_bl = (max(0.0, min(float(r), limit)) for r in (r_tl, r_tr, r_br, r_bl))
        if r_tl == r_tr == r_br == r_bl:
            path.roundRect(x1, bottom, w, h, r_tl)
        else:
            k = _KAPPA
            path.moveTo(x1 + r_tl, top)
            path.lineTo(right - r_tr, top)
            path.curveTo(right - r_tr + k * r_tr, top, right, top - r_tr + k * r_tr, right, top - r_tr)
            path.lineTo(right, bottom + r_br)
            path.curveTo(right, bottom + r_br - k * r_br, right - r_br + k * r_br, bottom, right - r_br, bottom)
            path.lineTo(x1 + r_bl, bottom)
            path.curveTo(x1 + r_bl - k * r_bl, bottom, x1, bottom + r_bl - k * r_bl, x1, bottom + r_bl)
            path.lineTo(x1, top - r_tl)
            path.curveTo(x1, top - r_tl + k * r_tl, x1 + r_tl - k * r_tl, top, x1 + r_tl, top)
            path.close()
        c.clipPath(path, stroke=0, fill=0)

    def clipping_polygon(self, points: Sequence[float]):
        """Start clipping to a polygon given as [x1, y1, x2, y2, ...]."""
        if len(points) < 6 or len(points) % 2:
            raise ValueError(f"clipping polygon needs an even number of at least 6 coordinates, got {len(points)}")
        c = self._canvas
        c.saveState()
        path = c.beginPath()
        path.moveTo(points[0], self._y(points[1]))
        for i in range(2, len(points), 2):
            path.lineTo(points[i], self._y(points[i + 1]))
        path.close()
        c.clipPath(path, stroke=0, fill=0)

    def clipping_end(self):
        self._canvas.restoreState()

    def rotate(self, angle, x, y):
        """Rotate clockwise by ``angle`` degrees around x,y."""
        with self._around(x, y) as c:
            c.rotate(-angle)

    def skew(self, angle_x, angle_y, x, y):
        with self._around(x, y) as c:
            c.skew(-angle_x, -angle_y)

    def scale(self, s_x, s_y, x, y):
        with self._around(x, y) as c:
            c.scale(s_x, s_y)

    def translate(self, t_x, t_y):
        self._canvas.translate(t_x, -t_y)

    def transform(self, a, b, c, d, e, f):
        """Apply a matrix given in top-left coordinates."""
        h = self._height
        self._canvas.transform(a, -b, -c, d, e + c * h, h - f - d * h)

    def set_opacity(self, opacity: float, mode: str = "Normal") -> None:
        """Set the opacity and blend mode used by subsequent drawing calls."""
        self._current_opacity = max(0.0, min(1.0, float(opacity)))
        self._blend_mode = _blend_mode(mode)

    # Fonts

    def get_font(self, fontname: str, subtype: str = "") -> str:
        """
        Resolve a font family and subtype to a ReportLab font name.

        Families may carry the subtype as a suffix ("helveticab"); registered
        TrueType fonts are used as-is.
        """
        if not fontname:
            return self.options.default_font
        if fontname in pdfmetrics.getRegisteredFontNames() or fontname in pdfmetrics.standardFonts:
            return fontname

        family = fontname.strip().lower()
        subtype = (subtype or "").strip().lower()
        family = _FONT_ALIASES.get(family, family)
        if family not in _FONT_FAMILIES:
            match = re.match(r"^(.*?)([bi]+)$", family)
            if match and _FONT_ALIASES.get(match.group(1), match.group(1)) in _FONT_FAMILIES:
                family = _FONT_ALIASES.get(match.group(1), match.group(1))
                subtype = match.group(2)
        if family not in _FONT_FAMILIES:
            logger.warning(f"Unknown font '{fontname}', using {self.options.default_font}")
            return self.options.default_font
        return _FONT_FAMILIES[family][_SUBTYPES.get(subtype, 0)]

    def get_text_width(self, text: str, font: str, size: float, word_spacing: float = 0.0,
                       char_spacing: float = 0.0) -> float:
        """Width of ``text`` in points, including extra word and character spacing."""
        text = _CONTROL_CHARS.sub("", text)
        width = pdfmetrics.stringWidth(text, self.get_font(font), size)
        return width + word_spacing * text.count(" ") + char_spacing * len(text)

    def get_font_height(self, font: str, size: float) -> float:
        font_name = self.get_font(font)
        scale = FONT_HEIGHT_SCALE_BOLD if "Bold" in font_name else FONT_HEIGHT_SCALE_NORMAL
        return scale * size

    def get_font_baseline(self, font: str, size: float) -> float:
        return self.get_font_height(font, size) / self.options.font_height_ratio

    def font_supports_char(self, font: str, char: str) -> bool:
        """Whether ``font`` has a glyph for the single character ``char``."""
        if len(char) != 1:
            raise ValueError(f"expected a single character, got {char!r}")
        font_obj = pdfmetrics.getFont(self.get_font(font))
        char_to_glyph = getattr(font_obj.face, "charToGlyph", None)
        if char_to_glyph is not None:
            return ord(char) in char_to_glyph
        encoding = font_obj.encoding
        codec = _TYPE1_CODECS.get(encoding.name)
        if codec is None:
            code = ord(char)
            if code > 255:
                return False
        else:
            try:
                code = char.encode(codec)[0]
            except UnicodeEncodeError:
                return False
        return encoding.vector[code] is not None

    # Links

    def add_named_dest(self, anchorname: str) -> None:
        """Add a named destination on the current page."""
        self._named_dests.setdefault(self.get_page_number(), []).append(anchorname)

    def add_link(self, url: str, x, y, width, height) -> None:
        """
        Add a link over a rectangle; ``#name`` links to a named destination.
        """
        rect = (x, self._y(y) - height, x + width, self._y(y))
        if url.startswith("#") and not url[1:]:
            return
        self._links.setdefault(self.get_page_number(), []).append((url, rect))

    # Page scripts

    def page_text(self, x, y, text: str, font: str, size: float, color=(0, 0, 0), word_space: float = 0.0,
                  char_space: float = 0.0, angle: float = 0.0):
        """
        Write text on every page. ``{PAGE_NUM}`` and ``{PAGE_COUNT}`` are replaced
        with their values when the document is output.
        """
        def draw(page_number: int, page_count: int, pdf: "ReportLabCanvas") -> None:
            value = text.replace("{PAGE_NUM}", str(page_number)).replace("{PAGE_COUNT}", str(page_count))
            pdf.text(x, y, value, font, size, color, word_space, char_space, angle)

        self.page_script(draw)

    def page_line(self, x1, y1, x2, y2, color, width, style: Sequence[float] = ()):
        """Draw a line on every page."""
        self.page_script(lambda page_number, page_count, pdf: pdf.line(x1, y1, x2, y2, color, width, style))

    def page_script(self, callback: PageScript) -> None:
        """
        Run ``callback(page_number, page_count, canvas)`` on every page at output.
        """
        if not callable(callback):
            raise TypeError(f"page_script expects a callable, got {type(callback).__name__}")
        self._page_scripts.append(callback)

    # Document actions

    def set_default_view(self, view: str = "Fit", options: Sequence[float] = ()) -> None:
        """
        Open the document on the current page with a PDF destination view.

        Args:
            view: One of XYZ, Fit, FitH, FitV, FitR, FitB, FitBH, FitBV
            options: Numeric operands of the view, e.g. ``(left, top, zoom)`` for XYZ
        """
        if view not in VIEWS:
            raise ValueError(f"Unknown view '{view}', expected one of {', '.join(VIEWS)}")
        self._default_view = (self.get_page_number(), view, tuple(float(value) for value in options))

    def javascript(self, code: str) -> None:
        """Add document-level JavaScript, run when the document is opened."""
        if not isinstance(code, str):
            raise TypeError(f"javascript expects a string, got {type(code).__name__}")
        self._javascript.append(code)

    # Output

    def output(self) -> bytes:
        """Finish the document and return the PDF bytes."""
        if self._pdf_data is None:
            if not self._surface.recording and self.get_page_number() != self._surface.page_count:
                self._surface.set_current_page(self._surface.page_count)
            self._engine.on_finalize()
            if self._default_view is None and self._javascript:
                self._set_open_action(None)
            self._surface.save()
            self._pdf_data = self._surface.getvalue()
            logger.info(f"PDF generated: {self._surface.page_count} page(s), {len(self._pdf_data)} bytes")
        return self._pdf_data

    def stream(self, filename: Union[str, Path]) -> Path:
        """Write the PDF to ``filename``, adding a .pdf extension if missing."""
        path = Path(filename)
        if path.suffix.lower() != ".pdf":
            path = path.with_name(path.name + ".pdf")
        path.write_bytes(self.output())
        return path

    # Helpers

    def _y(self, y: float) -> float:
        return self._height - y

    def _set_line_style(self, color, width, cap: str, join: str, dash: Sequence[float]) -> None:
        c = self._canvas
        if color is not None:
            c.setStrokeColor(to_color(color))
        if width is not None:
            c.setLineWidth(width)
        c.setLineCap(_LINE_CAPS.get(cap, 0))
        c.setLineJoin(_LINE_JOINS.get(join, 0))
        c.setDash(list(dash) if dash else [])

    @contextmanager
    def _paint(self, opacity: Optional[float] = None, blend: Optional[str] = None):
        opacity = self._current_opacity if opacity is None else opacity
        blend = _blend_mode(blend) if blend else self._blend_mode
        isolated = opacity < 1.0 or blend != "Normal"
        c = self._canvas
        if isolated:
            c.saveState()
            c.setFillAlpha(opacity)
            c.setStrokeAlpha(opacity)
            c.setBlendMode(blend)
        try:
            yield c
        finally:
            if isolated:
                c.restoreState()

    @contextmanager
    def _around(self, x, y):
        c = self._canvas
        py = self._y(y)
        c.translate(x, py)
        yield c
        c.translate(-x, -py)

    def _finish_page(self, page_number: int, page_count: int) -> None:
        c = self._canvas
        for name in self._named_dests.get(page_number, ()):
            c.bookmarkPage(name)
        for url, rect in self._links.get(page_number, ()):
            if url.startswith("#"):
                c.linkRect("", url[1:], rect, relative=0)
            else:
                c.linkURL(url, rect, relative=0)
        if self._default_view is not None and self._default_view[0] == page_number:
            _, view, options = self._default_view
            self._set_open_action(PDFArray([c._doc.thisPageRef(), PDFName(view), *options]))
        if self._page_count_override is not None:
            page_count = self._page_count_override
        for script in self._page_scripts:
            script(page_number, page_count, self)

    def _set_open_action(self, destination: Optional[PDFArray]) -> None:
        actions = [
            PDFDictionary({"S": PDFName("JavaScript"), "JS": PDFString(code)})
            for code in self._javascript
        ]
        if destination is not None:
            actions.insert(0, PDFDictionary({"S": PDFName("GoTo"), "D": destination}))
        first = actions[0]
        if len(actions) > 1:
            first["Next"] = PDFArray(actions[1:])
        self._canvas._doc.Catalog.OpenAction = first


def _blend_mode(mode: str) -> str:
    if mode in BLEND_MODES:
        return mode
    logger.warning(f"Unknown blend mode '{mode}', using Normal")
    return "Normal"
