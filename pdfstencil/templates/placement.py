"""
Page placement for template objects.

Each placed object carries a policy saying on which pages its recording is
spliced: the current page only, every page from here, odd or even pages, or the
same starting from the next page. Policies are evaluated against the page that
is being completed, whenever a page is turned and once more when the document
is finalized.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Set

from ..exceptions import PlacementError
from .object_store import ObjectStore
from .snapshot import ObjectId

logger = logging.getLogger(__name__)


class PlacementKind(Enum):
    """Where an object is placed, keyed by its placement keyword."""

    CURRENT_PAGE_ONLY = "add"
    ALL_FROM_HERE = "all"
    ODD_FROM_HERE = "odd"
    EVEN_FROM_HERE = "even"
    NEXT_PAGE_ONLY = "next"
    NEXT_ODD_PAGE = "nextodd"
    NEXT_EVEN_PAGE = "nexteven"

    @classmethod
    def from_where(cls, where) -> "PlacementKind":
        """Parse a placement keyword; an empty or missing one means "all"."""
        if isinstance(where, cls):
            return where
        token = str(where or "").strip().lower()
        if not token:
            return cls.ALL_FROM_HERE
        try:
            return cls(token)
        except ValueError:
            choices = ", ".join(kind.value for kind in cls)
            raise PlacementError(f"Unknown placement '{where}'", f"expected one of {choices}") from None

    @property
    def starts_next_page(self) -> bool:
        return self in (PlacementKind.NEXT_PAGE_ONLY, PlacementKind.NEXT_ODD_PAGE, PlacementKind.NEXT_EVEN_PAGE)

    @property
    def single_page(self) -> bool:
        return self in (PlacementKind.CURRENT_PAGE_ONLY, PlacementKind.NEXT_PAGE_ONLY)

    @property
    def parity(self) -> Optional[int]:
        """Required ``page % 2`` for odd/even kinds, None otherwise."""
        if self in (PlacementKind.ODD_FROM_HERE, PlacementKind.NEXT_ODD_PAGE):
            return 1
        if self in (PlacementKind.EVEN_FROM_HERE, PlacementKind.NEXT_EVEN_PAGE):
            return 0
        return None


@dataclass(slots=True)
class PlacementPolicy:
    kind: PlacementKind
    start_page: int
    placed_pages: Set[int] = field(default_factory=set)
    last_page: Optional[int] = None

    def is_due(self, page_number: int) -> bool:
        if page_number in self.placed_pages:
            return False
        if self.last_page is not None and page_number > self.last_page:
            return False
        if self.kind.single_page:
            return page_number == self.start_page
        if page_number < self.start_page:
            return False
        parity = self.kind.parity
        return parity is None or page_number % 2 == parity


class PagePlacementScheduler:
    """Tracks placement policies and splices recordings onto pages."""

    def __init__(self, surface, store: ObjectStore):
        self.surface = surface
        self.store = store
        self._active: Dict[ObjectId, PlacementPolicy] = {}

    def register(self, object_id: ObjectId, kind=PlacementKind.ALL_FROM_HERE) -> Optional[PlacementPolicy]:
        """
        Attach a placement policy to a closed object.

        Args:
            object_id: Id of a finalized object
            kind: PlacementKind or placement keyword

        Returns:
            The new policy, or None if the object was already consumed

        Raises:
            UnknownObjectError: If the object was never closed
            PlacementError: If ``kind`` is not a known placement
        """
        kind = PlacementKind.from_where(kind)
        if self.store.is_retired(object_id):
            logger.debug(f"Ignoring placement of consumed object {object_id}")
            return None
        self.store.get(object_id)

        start_page = self.surface.current_page()
        if kind.starts_next_page:
            start_page += 1
        policy = PlacementPolicy(kind=kind, start_page=start_page)
        previous = self._active.get(object_id)
        if previous is not None:
            policy.placed_pages.update(previous.placed_pages)
        self._active[object_id] = policy
        logger.debug(f"Object {object_id} placed '{kind.value}' from page {start_page}")
        return policy

    def stop(self, object_id: ObjectId) -> None:
        """
        Stop placing an object, flushing it onto the current page if due.

        Unknown ids are ignored. While a recording session is open the page
        buffer is redirected, so the object is kept until the current page is
        completed instead.
        """
        policy = self._active.get(object_id)
        if policy is None:
            logger.debug(f"stop requested for inactive object {object_id}")
            return
        page_number = self.surface.current_page()
        if self.surface.recording:
            policy.last_page = page_number
            logger.debug(f"Object {object_id} stops after page {page_number}")
            return
        del self._active[object_id]
        if policy.is_due(page_number):
            self._splice(object_id, policy, page_number)
        self.store.remove(object_id)

    def on_page_advance(self, page_number: Optional[int] = None) -> List[ObjectId]:
        """
        Splice every due object onto the page being completed.

        Args:
            page_number: Page to place onto, defaults to the current page

        Returns:
            Ids placed on the page
        """
        if page_number is None:
            page_number = self.surface.current_page()
        placed = []
        for object_id, policy in list(self._active.items()):
            if not policy.is_due(page_number):
                continue
            self._splice(object_id, policy, page_number)
            placed.append(object_id)
        for object_id, policy in list(self._active.items()):
            finished = policy.kind.single_page and page_number in policy.placed_pages
            if finished or (policy.last_page is not None and page_number >= policy.last_page):
                del self._active[object_id]
                self.store.remove(object_id)
        return placed

    def on_finalize(self) -> List[ObjectId]:
        """Place due objects on the last page and drop every policy."""
        placed = self.on_page_advance()
        for object_id, policy in self._active.items():
            if policy.kind.single_page and not policy.placed_pages:
                logger.info(f"Object {object_id} was never placed: page {policy.start_page} not reached")
            self.store.remove(object_id)
        self._active.clear()
        return placed

    def policy_for(self, object_id: ObjectId) -> Optional[PlacementPolicy]:
        return self._active.get(object_id)

    def active_ids(self) -> List[ObjectId]:
        return sorted(self._active)

    def __contains__(self, object_id: object) -> bool:
        return object_id in self._active

    def __len__(self) -> int:
        return len(self._active)

    def _splice(self, object_id: ObjectId, policy: PlacementPolicy, page_number: int) -> None:
        recording = self.store.get(object_id)
        self.surface.set_buffer(recording.content, page=page_number, append=True)
        policy.placed_pages.add(page_number)
        logger.debug(f"Placed object {object_id} on page {page_number}")
