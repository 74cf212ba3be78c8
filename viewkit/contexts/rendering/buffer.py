"""
Output buffering for view execution.

Views write their output into the innermost open frame of an OutputBuffer. Each
render pass and each block capture opens one frame; frames are closed in strict
LIFO order.
"""

from io import StringIO
from typing import List

from viewkit.contexts.rendering.exceptions import OutputBufferError


class OutputBuffer:
    """
    Stack of text frames capturing everything a view writes.

    The object itself is file-like (``write``/``flush``) so it can be handed to
    ``print(..., file=buffer)``; writes always land in the innermost open frame.

    Example:
        buffer = OutputBuffer()
        buffer.start()
        buffer.write("Hello")
        buffer.get_clean()  # "Hello"
    """

    def __init__(self):
        self._frames: List[StringIO] = []

    @property
    def level(self) -> int:
        """Number of currently open frames."""
        return len(self._frames)

    def start(self) -> None:
        """Open a new frame on top of the stack."""
        self._frames.append(StringIO())

    def get_clean(self) -> str:
        """
        Close the innermost frame and return its text.

        Raises:
            OutputBufferError: If no frame is open
        """
        if not self._frames:
            raise OutputBufferError("Cannot close an output frame: no frame is open.")
        return self._frames.pop().getvalue()

    def end_clean(self) -> None:
        """Close the innermost frame, discarding its text."""
        self.get_clean()

    def unwind(self, level: int) -> None:
        """Discard frames until only ``level`` frames remain open."""
        while len(self._frames) > level:
            self._frames.pop()

    def write(self, text: str) -> int:
        if not self._frames:
            raise OutputBufferError("Cannot write output: no frame is open.")
        return self._frames[-1].write(text)

    def flush(self) -> None:
        pass
