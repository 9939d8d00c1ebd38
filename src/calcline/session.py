"""
Read-eval session around the expression pipeline.

``LineFramer`` turns raw character input into bounded lines the way a serial
console does: a carriage return or line feed ends a non-empty line, and
characters past the buffer size are dropped. ``Session`` greets the user,
answers each line and stops at the exit command.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable

from calcline.config import CalculatorConfig
from calcline.expression import render_reply

logger = logging.getLogger(__name__)

LINE_TERMINATORS = "\r\n"


class LineFramer:
    """Assemble character chunks into complete lines.

    A line holds at most ``max_line_length - 1`` characters; one slot of the
    buffer is reserved for the terminator.
    """

    def __init__(self, max_line_length: int = 32) -> None:
        if max_line_length < 2:
            raise ValueError("max_line_length must be at least 2")
        self.capacity = max_line_length - 1
        self._buffer: list[str] = []
        self.dropped = 0

    def feed(self, data: str) -> list[str]:
        """Consume a chunk and return the lines it completed."""
        lines: list[str] = []
        for c in data:
            if c in LINE_TERMINATORS:
                if self._buffer:
                    lines.append("".join(self._buffer))
                    self._buffer.clear()
            elif len(self._buffer) < self.capacity:
                self._buffer.append(c)
            else:
                # Characters beyond the buffer size are dropped
                self.dropped += 1
        return lines

    def flush(self) -> str | None:
        """Return the pending partial line, if any, and reset the buffer."""
        if not self._buffer:
            return None
        line = "".join(self._buffer)
        self._buffer.clear()
        return line


class Session:
    """Greet, then answer one line at a time until the exit command."""

    def __init__(self, config: CalculatorConfig, write: Callable[[str], None]) -> None:
        self.config = config
        self.write = write
        self.evaluated = 0

    def greet(self) -> None:
        for line in self.config.greeting:
            self.write(line + "\n")

    def handle_line(self, line: str) -> bool:
        """Answer one line. Returns False when the line is the exit command."""
        if line == self.config.exit_command:
            logger.debug("Exit command received")
            return False

        reply = render_reply(line, self.config)
        if self.config.echo_input:
            self.write(f"{line} {reply}\n")
        else:
            self.write(reply + "\n")
        self.evaluated += 1
        return True

    def run(self, chunks: Iterable[str]) -> int:
        """Run the session over raw input chunks.

        Returns:
            Number of lines evaluated.
        """
        framer = LineFramer(self.config.max_line_length)
        self.greet()

        running = True
        for chunk in chunks:
            for line in framer.feed(chunk):
                running = self.handle_line(line)
                if not running:
                    break
            if not running:
                break
        else:
            pending = framer.flush()
            if pending is not None:
                self.handle_line(pending)

        if framer.dropped:
            logger.debug("Dropped %d characters from over-long lines", framer.dropped)
        self.write(self.config.farewell + "\n")
        return self.evaluated
