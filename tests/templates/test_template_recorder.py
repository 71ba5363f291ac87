"""
Tests for TemplateRecorder against the memory surface.
"""

import pytest

from pdfstencil.exceptions import EmptyStackError, SurfaceError, UnknownObjectError
from pdfstencil.surface import MemorySurface
from pdfstencil.templates import TemplateRecorder


class TestTemplateRecorder:
    """Test cases for TemplateRecorder."""

    @pytest.fixture
    def surface(self):
        surface = MemorySurface()
        surface.write(b"page content")
        surface.set_state(font="Helvetica", size=12)
        return surface

    @pytest.fixture
    def recorder(self, surface):
        return TemplateRecorder(surface)

    def test_begin_allocates_increasing_ids(self, recorder):
        """Test ids start at 1 and grow."""
        first = recorder.begin()
        recorder.end()
        second = recorder.begin()
        recorder.end()

        assert (first, second) == (1, 2)

    def test_begin_clears_live_buffer(self, recorder, surface):
        """Test the live buffer is empty inside a session."""
        recorder.begin()

        assert surface.get_buffer() == b""
        assert surface.recording
        assert recorder.is_recording

    def test_end_restores_buffer_and_state(self, recorder, surface):
        """Test the surface is left as it was before the session."""
        before_buffer = surface.get_buffer()
        before_state = surface.capture_graphics_state()

        object_id = recorder.begin()
        surface.write(b"BT (Header) Tj ET")
        surface.set_state(font="Courier", size=8)
        assert recorder.end() == object_id

        assert surface.get_buffer() == before_buffer
        assert surface.capture_graphics_state() == before_state
        assert not surface.recording

    def test_end_stores_recording(self, recorder, surface):
        """Test closed content lands in the store."""
        object_id = recorder.begin()
        surface.write(b"BT (Header) Tj ET")
        recorder.end()

        recording = recorder.store.get(object_id)
        assert recording.content == b"BT (Header) Tj ET"
        assert recording.anchor_page == 1

    def test_stack_symmetry(self, recorder):
        """Test depth returns to its previous value after each close."""
        assert recorder.depth == 0
        recorder.begin()
        recorder.begin()
        assert recorder.depth == 2
        recorder.end()
        assert recorder.depth == 1
        recorder.end()
        assert recorder.depth == 0

    def test_nested_sessions_are_independent(self, recorder, surface):
        """Test an inner session does not leak into the outer one."""
        outer = recorder.begin()
        surface.write(b"outer")
        inner = recorder.begin()
        surface.write(b"inner")
        recorder.end()
        surface.write(b"-tail")
        recorder.end()

        assert recorder.store.get(inner).content == b"inner"
        assert recorder.store.get(outer).content == b"outer-tail"
        assert surface.get_buffer() == b"page content"

    def test_stays_recording_while_outer_open(self, recorder, surface):
        """Test the recording flag follows the outermost session."""
        recorder.begin()
        recorder.begin()
        recorder.end()

        assert surface.recording
        recorder.end()
        assert not surface.recording

    def test_reopen_appends(self, recorder, surface):
        """Test reopening a closed object appends to its content."""
        object_id = recorder.begin()
        surface.write(b"A")
        recorder.end()

        recorder.begin_nested(object_id)
        assert surface.get_buffer() == b"A"
        surface.write(b"B")
        assert recorder.end() == object_id

        assert recorder.store.get(object_id).content == b"AB"
        assert surface.get_buffer() == b"page content"

    def test_reopen_restores_recorded_state(self, recorder, surface):
        """Test reopening loads the object's graphics state."""
        object_id = recorder.begin()
        surface.set_state(font="Times-Roman")
        recorder.end()

        recorder.begin_nested(object_id)
        assert surface.state["font"] == "Times-Roman"
        recorder.end()
        assert surface.state["font"] == "Helvetica"

    def test_reopen_unknown(self, recorder):
        """Test reopening an id that was never closed."""
        with pytest.raises(UnknownObjectError):
            recorder.begin_nested(5)

        assert recorder.depth == 0

    def test_end_without_begin(self, recorder):
        """Test closing with no open session."""
        with pytest.raises(EmptyStackError):
            recorder.end()

    def test_end_after_page_change(self, recorder, surface):
        """Test the page may not change under an open session."""
        recorder.begin()
        surface._page = 2

        with pytest.raises(SurfaceError):
            recorder.end()

    def test_force_close_all(self, recorder, surface, caplog):
        """Test force-closing every open session."""
        first = recorder.begin()
        surface.write(b"one")
        second = recorder.begin()
        surface.write(b"two")

        with caplog.at_level("WARNING"):
            closed = recorder.force_close_all()

        assert closed == [second, first]
        assert recorder.depth == 0
        assert surface.get_buffer() == b"page content"
        assert recorder.store.get(first).content == b"one"
        assert "still open" in caplog.text
