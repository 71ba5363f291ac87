"""Custom exceptions for pdfstencil."""

from typing import Optional


class StencilError(Exception):
    """Base exception for pdfstencil errors."""

    def __init__(self, message: str, details: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def __str__(self) -> str:
        if self.details:
            return f"{self.message}: {self.details}"
        return self.message


class UnknownObjectError(StencilError, KeyError):
    """Raised when an object id has no finalized recording."""

    def __init__(self, object_id: int, details: Optional[str] = None):
        super().__init__(f"Unknown template object {object_id}", details)
        self.object_id = object_id

    # KeyError.__str__ would wrap the message in quotes
    __str__ = StencilError.__str__


class EmptyStackError(StencilError):
    """Raised when a recording session is closed without being opened."""

    pass


class PlacementError(StencilError, ValueError):
    """Raised for an unrecognised placement keyword."""

    pass


class SurfaceError(StencilError):
    """Raised when the drawing surface is used out of order."""

    pass


class ConfigurationError(StencilError, ValueError):
    """Raised for invalid canvas options."""

    pass
