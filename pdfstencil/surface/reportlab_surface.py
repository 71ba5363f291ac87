"""
ReportLab drawing surface.

ReportLab normally writes a page out as soon as ``showPage()`` is called. The
canvas below holds finished pages back until ``save()`` (the same trick used
for "page X of Y" footers), so the content of any page stays addressable while
the document is being drawn. The content of a page is ReportLab's list of PDF
operator strings; the surface exposes it as latin-1 bytes.
"""

import io
import logging
from typing import Any, Callable, Dict, List, Optional, Tuple

from reportlab.lib.pagesizes import LETTER
from reportlab.pdfgen import canvas

from ..exceptions import SurfaceError
from .base import DrawingSurface

logger = logging.getLogger(__name__)

PageHook = Callable[[int, int], None]

_ENCODING = "latin-1"


class DeferredPageCanvas(canvas.Canvas):
    """
    Canvas that keeps finished pages in memory until ``save()``.

    Pages that are not being drawn on are parked as snapshots of the canvas
    state, so drawing can move back to an earlier page. Graphics state
    resource names (``/gRLsN gs``) come from one registry for the whole
    document, so content recorded on one page stays valid on any other.
    """

    _CONTROL_ATTRIBUTES = ("_parked_pages", "_page_hooks", "_last_page", "_extgstate_names")

    def __init__(self, *args, **kwargs):
        canvas.Canvas.__init__(self, *args, **kwargs)
        self._parked_pages: Dict[int, Dict[str, Any]] = {}
        self._page_hooks: List[PageHook] = []
        self._last_page = self.getPageNumber()

    def init_graphics_state(self):
        canvas.Canvas.init_graphics_state(self)
        self._extgstate._c = self.__dict__.setdefault("_extgstate_names", {})

    def showPage(self):
        if self.getPageNumber() != self._last_page:
            self.switch_to_page(self._last_page)
        self._parked_pages[self.getPageNumber()] = self._page_state()
        self._startPage()
        self._last_page = self.getPageNumber()

    def switch_to_page(self, page_number: int) -> None:
        """Park the current page and continue drawing on ``page_number``."""
        current = self.getPageNumber()
        if page_number == current:
            return
        if page_number not in self._parked_pages:
            raise SurfaceError(f"Page {page_number} does not exist", f"{self.page_count} page(s) started")
        self._parked_pages[current] = self._page_state()
        self.__dict__.update(self._parked_pages.pop(page_number))

    def add_page_hook(self, hook: PageHook) -> None:
        """Run ``hook(page_number, page_count)`` on every page at save time."""
        self._page_hooks.append(hook)

    @property
    def page_count(self) -> int:
        return self._last_page

    def page_code(self, page_number: int) -> List[str]:
        """Operator list of a parked page or of the current page."""
        if page_number == self.getPageNumber():
            return self._code
        if page_number not in self._parked_pages:
            raise SurfaceError(f"Page {page_number} does not exist", f"{self.page_count} page(s) started")
        return self._parked_pages[page_number]["_code"]

    def save(self):
        self._parked_pages[self.getPageNumber()] = self._page_state()
        page_count = self._last_page
        for page_number in range(1, page_count + 1):
            self.__dict__.update(self._parked_pages.pop(page_number))
            for hook in self._page_hooks:
                hook(page_number, page_count)
            canvas.Canvas.showPage(self)
        canvas.Canvas.save(self)

    def _page_state(self) -> Dict[str, Any]:
        return {key: value for key, value in self.__dict__.items() if key not in self._CONTROL_ATTRIBUTES}


class ReportLabSurface(DrawingSurface):
    """DrawingSurface over a DeferredPageCanvas."""

    def __init__(self, pagesize: Tuple[float, float] = LETTER, compress: bool = True, output=None):
        """
        Initialize ReportLab surface.

        Args:
            pagesize: (width, height) in points
            compress: Compress page content streams
            output: File path or binary file object; defaults to an in-memory buffer
        """
        super().__init__()
        self._output = output if output is not None else io.BytesIO()
        self.canvas = DeferredPageCanvas(self._output, pagesize=pagesize, pageCompression=1 if compress else 0)
        self._saved = False

    @property
    def saved(self) -> bool:
        return self._saved

    def current_page(self) -> int:
        return self.canvas.getPageNumber()

    @property
    def page_count(self) -> int:
        return self.canvas.page_count

    def get_buffer(self, page: Optional[int] = None) -> bytes:
        code = self._code_for(page)
        return "\n".join(code).encode(_ENCODING)

    def set_buffer(self, data: bytes, page: Optional[int] = None, append: bool = False) -> None:
        code = self._code_for(page)
        text = bytes(data).decode(_ENCODING)
        if append:
            if text:
                code.append(text)
            return
        code[:] = [text] if text else []

    def capture_graphics_state(self) -> Dict[str, Any]:
        attrs = self.canvas.__dict__
        state = {name: attrs[name] for name in self.canvas.STATE_ATTRIBUTES if name in attrs}
        state["state_stack"] = list(self.canvas.state_stack)
        return state

    def restore_graphics_state(self, state: Optional[Dict[str, Any]]) -> None:
        if not state:
            return
        state = dict(state)
        self.canvas.state_stack = list(state.pop("state_stack", []))
        self.canvas.__dict__.update(state)

    def advance_to_next_page(self) -> int:
        self._check_writable()
        if self._recording:
            raise SurfaceError("Cannot start a new page while an object is being recorded")
        self.canvas.showPage()
        return self.current_page()

    def set_current_page(self, page: int) -> None:
        self._check_writable()
        if self._recording:
            raise SurfaceError("Cannot change page while an object is being recorded")
        self.canvas.switch_to_page(page)

    def set_page_size(self, pagesize: Tuple[float, float]) -> None:
        self.canvas.setPageSize(pagesize)

    def add_page_hook(self, hook: PageHook) -> None:
        self._check_writable()
        self.canvas.add_page_hook(hook)

    def save(self) -> None:
        """Write every parked page out and close the document."""
        self._check_writable()
        logger.debug(f"Saving {self.page_count} page(s)")
        self.canvas.save()
        self._saved = True

    def getvalue(self) -> bytes:
        """PDF bytes of a saved document written to the in-memory buffer."""
        if not self._saved:
            raise SurfaceError("Document has not been saved yet")
        if not hasattr(self._output, "getvalue"):
            raise SurfaceError("Document was written to a file", str(self._output))
        return self._output.getvalue()

    def _code_for(self, page: Optional[int]) -> List[str]:
        self._check_writable()
        return self.canvas.page_code(self.current_page() if page is None else page)

    def _check_writable(self) -> None:
        if self._saved:
            raise SurfaceError("Document already saved")
