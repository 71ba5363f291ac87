"""
Tests for TemplateEngine, the object API used by canvas adapters.
"""

import pytest

from pdfstencil.exceptions import EmptyStackError, PlacementError, SurfaceError, UnknownObjectError


class TestTemplateEngine:
    """Test cases for TemplateEngine over a MemorySurface."""

    def test_open_close_roundtrip(self, engine, surface):
        """Test a session leaves the page untouched."""
        surface.write(b"body ")
        object_id = engine.open_object()
        surface.write(b"template")
        engine.close_object()

        assert surface.get_buffer() == b"body "
        assert engine.get_object(object_id).content == b"template"

    def test_running_header(self, engine, surface, record, turn_pages):
        """Test an 'all' object appears once on every page."""
        header = record(b"[H]")
        engine.add_object(header, "all")
        for page in range(1, 4):
            surface.write(f"page{page}".encode())
            if page < 3:
                turn_pages()
        engine.on_finalize()

        assert [surface.get_buffer(page) for page in (1, 2, 3)] == [b"page1[H]", b"page2[H]", b"page3[H]"]

    def test_odd_from_page_three(self, engine, surface, record, turn_pages):
        """Test odd from page 3 lands on pages 3 and 5 of 6."""
        turn_pages(2)
        object_id = record(b"[odd]")
        engine.add_object(object_id, "odd")
        turn_pages(3)
        engine.on_finalize()

        assert [page for page in range(1, 7) if surface.get_buffer(page) == b"[odd]"] == [3, 5]

    def test_nested_reopen(self, engine, surface, record):
        """Test reopening appends and the outer buffer stays intact."""
        surface.write(b"outer")
        object_id = record(b"A")
        engine.reopen_object(object_id)
        surface.write(b"B")
        engine.close_object()

        assert engine.get_object(object_id).content == b"AB"
        assert surface.get_buffer() == b"outer"

    def test_object_opened_inside_another(self, engine, surface):
        outer = engine.open_object()
        surface.write(b"frame")
        inner = engine.open_object()
        surface.write(b"logo")
        engine.close_object()
        engine.close_object()

        assert inner == outer + 1
        assert engine.get_object(outer).content == b"frame"
        assert engine.get_object(inner).content == b"logo"

    def test_stop_object_unknown(self, engine):
        """Test stop_object tolerates ids it does not know."""
        engine.stop_object(999)

    def test_stop_object_flushes(self, engine, surface, record, turn_pages):
        object_id = record(b"[F]")
        engine.add_object(object_id, "all")
        turn_pages()
        engine.stop_object(object_id)
        turn_pages()
        engine.on_finalize()

        assert [surface.get_buffer(page) for page in (1, 2, 3)] == [b"[F]", b"[F]", b""]

    def test_stop_object_inside_recording(self, engine, surface, record, turn_pages):
        """Test stopping an object from inside another object's session."""
        header = record(b"[H]")
        engine.add_object(header, "all")
        other = engine.open_object()
        surface.write(b"[other]")
        engine.stop_object(header)
        engine.close_object()
        turn_pages()
        engine.on_finalize()

        assert engine.get_object(other).content == b"[other]"
        assert surface.get_buffer(1) == b"[H]"
        assert surface.get_buffer(2) == b""

    def test_add_consumed_object_is_noop(self, engine, surface, record, turn_pages):
        """Test re-adding an object after it was consumed."""
        object_id = record(b"[once]")
        engine.add_object(object_id, "add")
        turn_pages()
        engine.add_object(object_id, "all")
        turn_pages()

        assert surface.get_buffer(1) == b"[once]"
        assert surface.get_buffer(2) == b""

    def test_add_unknown_object(self, engine):
        with pytest.raises(UnknownObjectError):
            engine.add_object(12, "all")

    def test_add_object_bad_where(self, engine, record):
        object_id = record(b"x")

        with pytest.raises(PlacementError):
            engine.add_object(object_id, "everywhere")

    def test_add_object_while_open(self, engine):
        """Test an object cannot be placed before it is closed."""
        object_id = engine.open_object()

        with pytest.raises(UnknownObjectError):
            engine.add_object(object_id, "all")

    def test_close_without_open(self, engine):
        with pytest.raises(EmptyStackError):
            engine.close_object()

    def test_new_page_while_recording(self, engine, surface):
        """Test the page cannot be turned inside a session."""
        engine.open_object()

        with pytest.raises(SurfaceError):
            engine.on_new_page()
        with pytest.raises(SurfaceError):
            surface.advance_to_next_page()

    def test_finalize_force_closes(self, engine, surface, caplog):
        """Test unclosed sessions are closed and reported at finalize."""
        surface.write(b"body")
        object_id = engine.open_object()
        surface.write(b"dangling")

        with caplog.at_level("WARNING"):
            forced = engine.on_finalize()

        assert forced == [object_id]
        assert surface.get_buffer() == b"body"
        assert not surface.recording
        assert "Force-closed" in caplog.text

    def test_finalize_is_idempotent(self, engine, record):
        engine.add_object(record(b"x"), "all")

        assert engine.on_finalize() == []
        assert engine.on_finalize() == []
        assert engine.finalized

    def test_operations_after_finalize(self, engine):
        engine.on_finalize()

        with pytest.raises(SurfaceError):
            engine.open_object()
        with pytest.raises(SurfaceError):
            engine.on_new_page()
