"""Abstract byte source interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional


class BaseByteSource(ABC):
    """Read-only source that yields one byte at a time.

    ``read_byte`` blocks for a bounded time and returns ``None`` when no byte
    arrived, so callers never wait forever on a silent link.
    """

    def __init__(self) -> None:
        self._last_error: Optional[str] = None

    @property
    @abstractmethod
    def is_open(self) -> bool:
        """True while the underlying device is open."""

    @property
    def last_error(self) -> Optional[str]:
        """Get the last error message, if any."""
        return self._last_error

    @abstractmethod
    def open(self) -> bool:
        """Open the device. Returns False and sets ``last_error`` on failure."""

    @abstractmethod
    def close(self) -> None:
        """Close the device. Safe to call when already closed."""

    @abstractmethod
    def read_byte(self) -> Optional[int]:
        """Return the next byte (0-255), or None after the read timeout."""

    def __enter__(self) -> "BaseByteSource":
        if not self.open():
            raise OSError(self._last_error or "byte source failed to open")
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
