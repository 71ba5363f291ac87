"""
Template engine - the object API exposed to canvas adapters.

Wires a TemplateRecorder and a PagePlacementScheduler to one drawing surface
and one ObjectStore. Canvas adapters forward their object calls here and must
call ``on_new_page()`` before turning a page and ``on_finalize()`` before the
document is serialized.
"""

import logging
from typing import List

from ..exceptions import SurfaceError
from .object_store import ObjectStore
from .placement import PagePlacementScheduler, PlacementKind
from .recorder import TemplateRecorder
from .snapshot import ObjectId, Recording

logger = logging.getLogger(__name__)


class TemplateEngine:
    """Reusable page templates on top of a DrawingSurface."""

    def __init__(self, surface):
        self.surface = surface
        self.store = ObjectStore()
        self.recorder = TemplateRecorder(surface, self.store)
        self.scheduler = PagePlacementScheduler(surface, self.store)
        self._finalized = False

    @property
    def finalized(self) -> bool:
        return self._finalized

    def open_object(self) -> ObjectId:
        """Start recording a new object and return its id."""
        self._check_open()
        return self.recorder.begin()

    def reopen_object(self, object_id: ObjectId) -> None:
        """Resume recording into a closed object."""
        self._check_open()
        self.recorder.begin_nested(object_id)

    def close_object(self) -> None:
        """Close the innermost open object."""
        self.recorder.end()

    def add_object(self, object_id: ObjectId, where="all") -> None:
        """
        Place an object on pages.

        ``where`` is one of:
        - "add" the current page only
        - "all" every page from the current one onwards
        - "odd" odd numbered pages from the current one onwards
        - "even" even numbered pages from the current one onwards
        - "next" the next page only
        - "nextodd" odd numbered pages from the next one onwards
        - "nexteven" even numbered pages from the next one onwards
        """
        self._check_open()
        self.scheduler.register(object_id, PlacementKind.from_where(where))

    def stop_object(self, object_id: ObjectId) -> None:
        """Stop placing an object after the current page. Unknown ids are ignored."""
        self.scheduler.stop(object_id)

    def get_object(self, object_id: ObjectId) -> Recording:
        return self.store.get(object_id)

    def on_new_page(self) -> List[ObjectId]:
        """Place due objects on the current page; call before turning it."""
        self._check_open()
        if self.recorder.is_recording:
            raise SurfaceError("Cannot start a new page while an object is being recorded")
        return self.scheduler.on_page_advance()

    def on_finalize(self) -> List[ObjectId]:
        """
        Close any sessions left open and make the final placement sweep.

        Returns:
            Ids of sessions that had to be force-closed
        """
        if self._finalized:
            return []
        forced = self.recorder.force_close_all()
        if forced:
            logger.warning(f"Force-closed {len(forced)} unclosed object(s) before output: {forced}")
        self.scheduler.on_finalize()
        self._finalized = True
        return forced

    def _check_open(self) -> None:
        if self._finalized:
            raise SurfaceError("Document already finalized")
