"""WX150 device handlers."""

from .station_handler import StationHandler

__all__ = ["StationHandler"]
