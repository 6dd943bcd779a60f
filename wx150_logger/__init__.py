"""Logger for the Airmar WX150 weather station's NMEA output."""

from __future__ import annotations

from importlib import metadata

try:
    __version__ = metadata.version("wx150-logger")
except metadata.PackageNotFoundError:  # pragma: no cover - local dev
    __version__ = "0.0.0"

__all__ = ["__version__"]
