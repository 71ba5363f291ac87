"""
In-memory drawing surface.

Keeps every page as a byte buffer and the graphics state as a plain dict. Used
for dry runs and to exercise the template machinery without a PDF library.
"""

import logging
from typing import Any, Dict, List, Optional

from ..exceptions import SurfaceError
from .base import DrawingSurface

logger = logging.getLogger(__name__)


class MemorySurface(DrawingSurface):
    """DrawingSurface backed by bytearrays."""

    def __init__(self, start_page: bool = True):
        """
        Initialize memory surface.

        Args:
            start_page: Begin with page 1 already open. Without it the surface
                sits on page 0 and drops writes until a page is started.
        """
        super().__init__()
        self._pages: List[bytearray] = []
        self._preamble = bytearray()
        self._page = 0
        self.state: Dict[str, Any] = {}
        if start_page:
            self.advance_to_next_page()

    def current_page(self) -> int:
        return self._page

    @property
    def page_count(self) -> int:
        return len(self._pages)

    def write(self, data: bytes) -> None:
        """Append drawing output to the live buffer."""
        if self._page == 0 and not self._recording:
            logger.debug(f"Dropped {len(data)} bytes written before the first page")
            return
        self._live().extend(data)

    def set_state(self, **values: Any) -> None:
        self.state.update(values)

    def get_buffer(self, page: Optional[int] = None) -> bytes:
        return bytes(self._buffer(page))

    def set_buffer(self, data: bytes, page: Optional[int] = None, append: bool = False) -> None:
        buffer = self._buffer(page)
        if not append:
            del buffer[:]
        buffer.extend(data)

    def capture_graphics_state(self) -> Dict[str, Any]:
        return dict(self.state)

    def restore_graphics_state(self, state: Optional[Dict[str, Any]]) -> None:
        self.state = dict(state or {})

    def advance_to_next_page(self) -> int:
        if self._recording:
            raise SurfaceError("Cannot start a new page while an object is being recorded")
        self._pages.append(bytearray())
        self._page = len(self._pages)
        return self._page

    def set_current_page(self, page: int) -> None:
        if self._recording:
            raise SurfaceError("Cannot change page while an object is being recorded")
        if not 1 <= page <= len(self._pages):
            raise SurfaceError(f"Page {page} does not exist", f"{len(self._pages)} page(s) started")
        self._page = page

    def _live(self) -> bytearray:
        if self._page == 0:
            return self._preamble
        return self._pages[self._page - 1]

    def _buffer(self, page: Optional[int]) -> bytearray:
        if page is None or page == self._page:
            return self._live()
        if not 1 <= page <= len(self._pages):
            raise SurfaceError(f"Page {page} does not exist", f"{len(self._pages)} page(s) started")
        return self._pages[page - 1]
