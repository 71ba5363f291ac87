"""
Drawing surface interface.

The narrow view of a rendering engine that the template machinery needs: read
and write page content buffers, capture and restore graphics state, and turn
pages. The live buffer is the current page's buffer.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional


class DrawingSurface(ABC):
    """Page buffers and graphics state of a rendering engine."""

    def __init__(self):
        self._recording = False

    @property
    def recording(self) -> bool:
        """True while a template session has redirected the live buffer."""
        return self._recording

    def set_recording(self, flag: bool) -> None:
        self._recording = bool(flag)

    @abstractmethod
    def current_page(self) -> int:
        """1-based number of the page being drawn."""

    @property
    @abstractmethod
    def page_count(self) -> int:
        """Number of pages started so far."""

    @abstractmethod
    def get_buffer(self, page: Optional[int] = None) -> bytes:
        """Content of ``page``, or of the live buffer when ``page`` is None."""

    @abstractmethod
    def set_buffer(self, data: bytes, page: Optional[int] = None, append: bool = False) -> None:
        """Replace (or extend, with ``append``) the content of ``page``."""

    @abstractmethod
    def capture_graphics_state(self) -> Any:
        """Opaque copy of the current graphics state."""

    @abstractmethod
    def restore_graphics_state(self, state: Any) -> None:
        """Reinstate a state returned by ``capture_graphics_state``."""

    @abstractmethod
    def advance_to_next_page(self) -> int:
        """Start a new page and return its number."""

    @abstractmethod
    def set_current_page(self, page: int) -> None:
        """Continue drawing on an already started page."""
