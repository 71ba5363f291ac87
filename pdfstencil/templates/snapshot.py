"""Value types captured and stored by the template recorder."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

ObjectId = int


@dataclass(frozen=True, slots=True)
class BufferSnapshot:
    """Live buffer content, page and graphics state at one point in time."""

    content: bytes
    page: int
    graphics_state: Any = None

    @classmethod
    def capture(cls, surface) -> "BufferSnapshot":
        return cls(
            content=bytes(surface.get_buffer()),
            page=surface.current_page(),
            graphics_state=surface.capture_graphics_state(),
        )

    def __len__(self) -> int:
        return len(self.content)


@dataclass(frozen=True, slots=True)
class Recording:
    """Finalized content of a template object."""

    content: bytes
    anchor_page: int
    graphics_state: Any = None

    def __len__(self) -> int:
        return len(self.content)
