"""
Template objects: record drawing into reusable objects and place them on pages.
"""

from .engine import TemplateEngine
from .object_store import ObjectStore
from .placement import PagePlacementScheduler, PlacementKind, PlacementPolicy
from .recorder import TemplateRecorder
from .session_stack import SessionFrame, SessionStack
from .snapshot import BufferSnapshot, ObjectId, Recording

__all__ = [
    "BufferSnapshot",
    "ObjectId",
    "ObjectStore",
    "PagePlacementScheduler",
    "PlacementKind",
    "PlacementPolicy",
    "Recording",
    "SessionFrame",
    "SessionStack",
    "TemplateEngine",
    "TemplateRecorder",
]
