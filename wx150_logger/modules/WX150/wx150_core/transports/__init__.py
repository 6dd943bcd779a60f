"""Byte source implementations for the instrument link."""

from .base_transport import BaseByteSource
from .serial_transport import SerialByteSource

__all__ = ["BaseByteSource", "SerialByteSource"]
