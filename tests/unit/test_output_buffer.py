"""Unit tests for OutputBuffer class."""

import pytest

from viewkit.contexts.rendering.buffer import OutputBuffer
from viewkit.contexts.rendering.exceptions import OutputBufferError


@pytest.mark.unit
def test_output_buffer_init():
    """Test that a new buffer has no open frames."""
    buffer = OutputBuffer()
    assert buffer.level == 0


@pytest.mark.unit
def test_writes_go_to_innermost_frame():
    """Test LIFO frame discipline."""
    buffer = OutputBuffer()
    buffer.start()
    buffer.write("outer ")
    buffer.start()
    buffer.write("inner")

    assert buffer.level == 2
    assert buffer.get_clean() == "inner"
    buffer.write("again")
    assert buffer.get_clean() == "outer again"
    assert buffer.level == 0


@pytest.mark.unit
def test_unwind_only_discards_frames_above_level():
    """Test that unwind keeps frames opened before the given level."""
    buffer = OutputBuffer()
    buffer.start()
    buffer.write("kept")
    level = buffer.level

    buffer.start()
    buffer.start()
    buffer.write("dropped")
    buffer.unwind(level)

    assert buffer.level == 1
    assert buffer.get_clean() == "kept"


@pytest.mark.unit
def test_print_writes_into_buffer():
    """Test that the buffer works as a print() target."""
    buffer = OutputBuffer()
    buffer.start()
    print("a", "b", file=buffer)

    assert buffer.get_clean() == "a b\n"


@pytest.mark.unit
def test_write_without_frame_raises():
    """Test error handling for writes with nothing open."""
    buffer = OutputBuffer()

    with pytest.raises(OutputBufferError):
        buffer.write("lost")

    with pytest.raises(OutputBufferError):
        buffer.end_clean()
