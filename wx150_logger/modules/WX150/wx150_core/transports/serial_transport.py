"""Serial UART byte source for the WX150 weather station.

Uses pyserial with a read timeout so a silent link reports "no byte"
instead of blocking forever.
"""

from __future__ import annotations

import contextlib
from typing import Optional

import serial

from wx150_logger.core.logging_utils import get_module_logger
from .base_transport import BaseByteSource
from ..constants import DEFAULT_BAUD_RATE, DEFAULT_READ_TIMEOUT

logger = get_module_logger(__name__)


class SerialByteSource(BaseByteSource):
    """Raw 8N1 serial link without flow control.

    Example:
        source = SerialByteSource("/dev/ttyUSB0")
        with source:
            byte = source.read_byte()
    """

    def __init__(
        self,
        port: str,
        baudrate: int = DEFAULT_BAUD_RATE,
        read_timeout: float = DEFAULT_READ_TIMEOUT,
    ):
        """Initialize the serial byte source.

        Args:
            port: Serial port path (e.g., '/dev/ttyUSB0')
            baudrate: Serial baudrate (the WX150 talks at 4800)
            read_timeout: Seconds a single read may block before giving up
        """
        super().__init__()
        self.port = port
        self.baudrate = baudrate
        self.read_timeout = read_timeout
        self._serial: Optional[serial.Serial] = None
        self._read_errors = 0

    @property
    def is_open(self) -> bool:
        return self._serial is not None and bool(self._serial.is_open)

    def open(self) -> bool:
        """Open and configure the serial port.

        Returns:
            True if the port is open and configured
        """
        if self.is_open:
            logger.debug("Already open: %s", self.port)
            return True

        try:
            self._serial = serial.Serial(
                port=self.port,
                baudrate=self.baudrate,
                bytesize=serial.EIGHTBITS,
                parity=serial.PARITY_NONE,
                stopbits=serial.STOPBITS_ONE,
                timeout=self.read_timeout,
                xonxoff=False,
                rtscts=False,
                dsrdtr=False,
            )
        except (serial.SerialException, ValueError, OSError) as exc:
            self._serial = None
            self._last_error = str(exc)
            logger.error("Could not open serial port %s at %d baud: %s", self.port, self.baudrate, exc)
            return False

        self._last_error = None
        logger.info("Opened %s at %d baud (8N1, read timeout %.1fs)", self.port, self.baudrate, self.read_timeout)
        return True

    def close(self) -> None:
        port = self._serial
        self._serial = None
        if port is None:
            return
        with contextlib.suppress(serial.SerialException, OSError):
            port.close()
        logger.info("Closed %s", self.port)

    def read_byte(self) -> Optional[int]:
        if not self.is_open:
            return None

        try:
            data = self._serial.read(1)
        except (serial.SerialException, OSError) as exc:
            self._last_error = str(exc)
            self._read_errors += 1
            if self._read_errors % 100 == 1:
                logger.warning("Read error on %s (%d so far): %s", self.port, self._read_errors, exc)
            return None

        if not data:
            return None
        return data[0]
