"""WX150 core package - framing, parsing and logging for the weather station."""

from .constants import (
    DEFAULT_BAUD_RATE,
    DEFAULT_READ_TIMEOUT,
    DEFAULT_IDLE_BACKOFF,
    MAX_LINE_LENGTH,
    DEFAULT_FILE_PREFIX,
    WX150_LOG_HEADER,
)
from .parsers import (
    DateReading,
    GPSFixReading,
    Observation,
    SentenceParser,
    SentenceTemplate,
    WeatherReading,
)
from .context import RotationState, StationContext
from .transports import BaseByteSource, SerialByteSource
from .line_framer import LineFramer, iter_lines
from .data_logger import WX150DataLogger
from .handlers import StationHandler

__all__ = [
    # Constants
    "DEFAULT_BAUD_RATE",
    "DEFAULT_READ_TIMEOUT",
    "DEFAULT_IDLE_BACKOFF",
    "MAX_LINE_LENGTH",
    "DEFAULT_FILE_PREFIX",
    "WX150_LOG_HEADER",
    # Types
    "Observation",
    "WeatherReading",
    "GPSFixReading",
    "DateReading",
    "RotationState",
    "StationContext",
    # Parser
    "SentenceTemplate",
    "SentenceParser",
    # Transport
    "BaseByteSource",
    "SerialByteSource",
    # Framing
    "LineFramer",
    "iter_lines",
    # Data Logger
    "WX150DataLogger",
    # Handlers
    "StationHandler",
]
