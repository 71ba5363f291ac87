"""
Pytest configuration for pdfstencil
"""

import pytest
import logging
import sys
from pathlib import Path

from pdfstencil.surface import MemorySurface
from pdfstencil.templates import TemplateEngine


@pytest.fixture(autouse=True)
def configure_logging():
    """Configure logging for tests to avoid file handler issues."""
    # Clear all existing handlers
    root_logger = logging.getLogger()
    root_logger.handlers.clear()

    # Set up console-only logging for tests
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(logging.WARNING)  # Only show warnings and errors during tests

    formatter = logging.Formatter(
        '%(name)s - %(levelname)s - %(message)s'
    )
    console_handler.setFormatter(formatter)

    root_logger.addHandler(console_handler)
    root_logger.setLevel(logging.WARNING)

    yield

    # Cleanup after test
    root_logger.handlers.clear()


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    import tempfile
    with tempfile.TemporaryDirectory() as temp_dir:
        yield Path(temp_dir)


@pytest.fixture
def surface():
    """Memory surface sitting on page 1."""
    return MemorySurface()


@pytest.fixture
def engine(surface):
    """Template engine over the memory surface."""
    return TemplateEngine(surface)


@pytest.fixture
def record(engine):
    """Record bytes into a new object and return its id."""
    def _record(content: bytes) -> int:
        object_id = engine.open_object()
        engine.surface.write(content)
        engine.close_object()
        return object_id
    return _record


@pytest.fixture
def turn_pages(engine):
    """Complete the current page n times, placing due objects."""
    def _turn(count: int = 1) -> None:
        for _ in range(count):
            engine.on_new_page()
            engine.surface.advance_to_next_page()
    return _turn


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
    # Ignore logging errors during tests
    logging.raiseExceptions = False
