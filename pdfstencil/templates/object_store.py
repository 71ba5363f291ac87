"""
Object store for finalized template recordings.

Maps object ids to their closed recordings. Ids that have been removed are
remembered as retired so callers can tell a consumed object apart from one
that was never closed.
"""

import logging
from typing import Dict, Iterator, List, Set

from ..exceptions import UnknownObjectError
from .snapshot import ObjectId, Recording

logger = logging.getLogger(__name__)


class ObjectStore:
    """Holds finalized recordings keyed by object id."""

    def __init__(self):
        self._recordings: Dict[ObjectId, Recording] = {}
        self._retired: Set[ObjectId] = set()

    def store(self, object_id: ObjectId, recording: Recording) -> None:
        """
        Insert or overwrite the recording for an object.

        Args:
            object_id: Object id returned by the recorder
            recording: Finalized recording
        """
        self._recordings[object_id] = recording
        self._retired.discard(object_id)
        logger.debug(f"Stored object {object_id} ({len(recording)} bytes)")

    def get(self, object_id: ObjectId) -> Recording:
        """
        Get the recording for an object.

        Raises:
            UnknownObjectError: If the object has no finalized recording
        """
        try:
            return self._recordings[object_id]
        except KeyError:
            raise UnknownObjectError(object_id) from None

    def remove(self, object_id: ObjectId) -> None:
        """Delete an object's recording. Unknown ids are ignored."""
        if self._recordings.pop(object_id, None) is not None:
            self._retired.add(object_id)
            logger.debug(f"Removed object {object_id}")

    def is_retired(self, object_id: ObjectId) -> bool:
        """Whether the object was stored once and has since been removed."""
        return object_id in self._retired

    def ids(self) -> List[ObjectId]:
        return sorted(self._recordings)

    def __contains__(self, object_id: object) -> bool:
        return object_id in self._recordings

    def __len__(self) -> int:
        return len(self._recordings)

    def __iter__(self) -> Iterator[ObjectId]:
        return iter(self.ids())
