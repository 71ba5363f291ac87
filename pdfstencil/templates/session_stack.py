"""LIFO stack of open recording sessions."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Tuple

from ..exceptions import EmptyStackError
from .snapshot import BufferSnapshot, ObjectId


@dataclass(frozen=True, slots=True)
class SessionFrame:
    object_id: ObjectId
    snapshot: BufferSnapshot


class SessionStack:
    """
    Stack of buffer snapshots, one per open recording session.

    Each frame remembers which object the session records into, so closing a
    reopened object writes back to that object and not to the newest id.
    """

    def __init__(self) -> None:
        self._frames: List[SessionFrame] = []

    def push(self, object_id: ObjectId, snapshot: BufferSnapshot) -> None:
        self._frames.append(SessionFrame(object_id, snapshot))

    def pop(self) -> Tuple[ObjectId, BufferSnapshot]:
        """
        Remove the most recently opened session.

        Raises:
            EmptyStackError: If no session is open
        """
        if not self._frames:
            raise EmptyStackError("No open recording session to close")
        frame = self._frames.pop()
        return frame.object_id, frame.snapshot

    def peek(self) -> SessionFrame:
        if not self._frames:
            raise EmptyStackError("No open recording session")
        return self._frames[-1]

    def open_ids(self) -> List[ObjectId]:
        """Object ids of open sessions, outermost first."""
        return [frame.object_id for frame in self._frames]

    @property
    def depth(self) -> int:
        return len(self._frames)

    def __len__(self) -> int:
        return len(self._frames)

    def __bool__(self) -> bool:
        return bool(self._frames)
