"""
Template recorder.

Redirects the drawing surface's live buffer into a scratch recording and
restores it afterwards. Opening a session snapshots the live buffer and graphics
state onto the session stack and clears the buffer in place; closing it stores
whatever was drawn as a recording and puts the snapshot back, so the surface is
left exactly as it was before the session began.
"""

import logging
from typing import List, Optional

from ..exceptions import SurfaceError
from .object_store import ObjectStore
from .session_stack import SessionStack
from .snapshot import BufferSnapshot, ObjectId, Recording

logger = logging.getLogger(__name__)


class TemplateRecorder:
    """Opens, reopens and closes recording sessions on a drawing surface."""

    def __init__(self, surface, store: Optional[ObjectStore] = None, stack: Optional[SessionStack] = None):
        """
        Initialize recorder.

        Args:
            surface: DrawingSurface whose live buffer is redirected
            store: ObjectStore receiving closed recordings
            stack: SessionStack for open sessions
        """
        self.surface = surface
        self.store = store if store is not None else ObjectStore()
        self.stack = stack if stack is not None else SessionStack()
        self._last_id: ObjectId = 0

    @property
    def depth(self) -> int:
        return self.stack.depth

    @property
    def is_recording(self) -> bool:
        return bool(self.stack)

    def begin(self) -> ObjectId:
        """
        Start recording a new object.

        Returns:
            Id of the new object
        """
        self._last_id += 1
        object_id = self._last_id
        self._push(object_id)
        self.surface.set_buffer(b"")
        logger.debug(f"Recording object {object_id} (depth {self.depth})")
        return object_id

    def begin_nested(self, object_id: ObjectId) -> None:
        """
        Reopen a closed object so more content can be appended to it.

        Raises:
            UnknownObjectError: If the object was never closed
        """
        recording = self.store.get(object_id)
        self._push(object_id)
        self.surface.set_buffer(recording.content)
        if recording.graphics_state is not None:
            self.surface.restore_graphics_state(recording.graphics_state)
        logger.debug(f"Reopened object {object_id} (depth {self.depth})")

    def end(self) -> ObjectId:
        """
        Close the innermost session and restore the surface.

        Returns:
            Id of the object that was closed

        Raises:
            EmptyStackError: If no session is open
            SurfaceError: If the page changed while recording
        """
        frame = self.stack.peek()
        page = self.surface.current_page()
        if page != frame.snapshot.page:
            raise SurfaceError(
                f"Page changed from {frame.snapshot.page} to {page} while recording object {frame.object_id}"
            )

        recording = Recording(
            content=bytes(self.surface.get_buffer()),
            anchor_page=page,
            graphics_state=self.surface.capture_graphics_state(),
        )
        object_id, snapshot = self.stack.pop()
        self.store.store(object_id, recording)

        self.surface.set_buffer(snapshot.content)
        self.surface.restore_graphics_state(snapshot.graphics_state)
        self.surface.set_recording(self.is_recording)
        logger.debug(f"Closed object {object_id}: {len(recording)} bytes recorded")
        return object_id

    def force_close_all(self) -> List[ObjectId]:
        """Close every open session, innermost first."""
        closed = []
        while self.stack:
            object_id = self.stack.peek().object_id
            logger.warning(f"Object {object_id} was still open at finalize; closing it")
            closed.append(self.end())
        return closed

    def _push(self, object_id: ObjectId) -> None:
        self.stack.push(object_id, BufferSnapshot.capture(self.surface))
        self.surface.set_recording(True)
