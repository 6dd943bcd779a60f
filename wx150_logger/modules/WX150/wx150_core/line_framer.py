"""Byte-to-line framing for the instrument's serial stream."""

from __future__ import annotations

import time
from typing import Callable, Iterator, Optional

from .constants import DEFAULT_IDLE_BACKOFF, LINE_TERMINATORS, MAX_LINE_LENGTH
from .transports import BaseByteSource


class LineFramer:
    """Accumulates bytes into lines split on CR or LF.

    Empty lines are never emitted, so CRLF pairs and runs of terminators
    produce nothing extra. Bytes past ``max_line_length`` are dropped until
    the next terminator.
    """

    def __init__(self, max_line_length: int = MAX_LINE_LENGTH):
        if max_line_length <= 0:
            raise ValueError("max_line_length must be positive")
        self.max_line_length = max_line_length
        self._buffer = bytearray()
        self._dropped_bytes = 0

    @property
    def pending(self) -> int:
        """Number of bytes buffered for the current line."""
        return len(self._buffer)

    @property
    def dropped_bytes(self) -> int:
        """Total bytes discarded because a line exceeded the capacity."""
        return self._dropped_bytes

    def reset(self) -> None:
        self._buffer.clear()

    def feed(self, byte: Optional[int]) -> Optional[str]:
        """Consume one byte; return a completed line or None.

        ``None`` means no byte was available and leaves the buffer untouched.
        """
        if byte is None:
            return None

        if byte in LINE_TERMINATORS:
            if not self._buffer:
                return None
            line = self._buffer.decode("latin-1")
            self._buffer.clear()
            return line

        if len(self._buffer) < self.max_line_length:
            self._buffer.append(byte)
        else:
            self._dropped_bytes += 1
        return None


def iter_lines(
    source: BaseByteSource,
    framer: Optional[LineFramer] = None,
    *,
    idle_backoff: float = DEFAULT_IDLE_BACKOFF,
    should_continue: Callable[[], bool] = lambda: True,
) -> Iterator[str]:
    """Yield complete lines from ``source`` until ``should_continue`` is false.

    Sleeps ``idle_backoff`` seconds after each read that returned no byte.
    """
    framer = framer or LineFramer()
    while should_continue():
        byte = source.read_byte()
        if byte is None:
            if idle_backoff > 0:
                time.sleep(idle_backoff)
            continue
        line = framer.feed(byte)
        if line is not None:
            yield line
