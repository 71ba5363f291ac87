"""
Tests for SessionStack.
"""

import pytest

from pdfstencil.exceptions import EmptyStackError
from pdfstencil.templates import BufferSnapshot, SessionStack


def snapshot(content=b"", page=1):
    return BufferSnapshot(content=content, page=page, graphics_state={"font": "Helvetica"})


class TestSessionStack:
    """Test cases for SessionStack."""

    def test_empty(self):
        """Test a new stack."""
        stack = SessionStack()

        assert stack.depth == 0
        assert len(stack) == 0
        assert not stack

    def test_push_pop_lifo(self):
        """Test frames come back in reverse order."""
        stack = SessionStack()
        stack.push(1, snapshot(b"outer"))
        stack.push(2, snapshot(b"inner"))

        assert stack.depth == 2
        assert stack.open_ids() == [1, 2]

        object_id, snap = stack.pop()
        assert object_id == 2
        assert snap.content == b"inner"

        object_id, snap = stack.pop()
        assert object_id == 1
        assert snap.content == b"outer"
        assert stack.depth == 0

    def test_peek_does_not_pop(self):
        """Test peeking at the top frame."""
        stack = SessionStack()
        stack.push(7, snapshot(b"page", page=3))

        frame = stack.peek()

        assert frame.object_id == 7
        assert frame.snapshot.page == 3
        assert stack.depth == 1

    def test_pop_empty(self):
        """Test popping an empty stack."""
        with pytest.raises(EmptyStackError):
            SessionStack().pop()

    def test_peek_empty(self):
        """Test peeking at an empty stack."""
        with pytest.raises(EmptyStackError):
            SessionStack().peek()

    def test_snapshot_is_a_copy(self):
        """Test that snapshot content does not follow later buffer edits."""
        buffer = bytearray(b"live")
        snap = BufferSnapshot(content=bytes(buffer), page=1)
        buffer.extend(b" more")

        assert snap.content == b"live"
        assert len(snap) == 4
