"""
Tests for the pdfstencil exception hierarchy.
"""

import pytest

from pdfstencil.exceptions import (
    ConfigurationError,
    EmptyStackError,
    PlacementError,
    StencilError,
    SurfaceError,
    UnknownObjectError,
)


class TestExceptions:
    """Test cases for exception classes."""

    def test_message_and_details(self):
        error = StencilError("Something failed", "page 3")

        assert error.message == "Something failed"
        assert error.details == "page 3"
        assert str(error) == "Something failed: page 3"

    def test_message_only(self):
        assert str(StencilError("Something failed")) == "Something failed"

    def test_unknown_object(self):
        error = UnknownObjectError(7)

        assert error.object_id == 7
        assert str(error) == "Unknown template object 7"
        assert isinstance(error, KeyError)

    @pytest.mark.parametrize("error_class", [
        UnknownObjectError, EmptyStackError, PlacementError, SurfaceError, ConfigurationError,
    ])
    def test_hierarchy(self, error_class):
        assert issubclass(error_class, StencilError)

    def test_value_errors(self):
        assert issubclass(PlacementError, ValueError)
        assert issubclass(ConfigurationError, ValueError)
