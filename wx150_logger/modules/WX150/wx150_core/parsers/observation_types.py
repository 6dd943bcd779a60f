"""Observation and sentence reading types."""

from dataclasses import dataclass, replace
from typing import Tuple

from ..constants import UNSET_YEAR


@dataclass(slots=True)
class Observation:
    """Latest time, position and fix quality, updated field by field.

    GPS and date sentences arrive independently, so a weather record may be
    paired with stale or default values.
    """

    year: int = UNSET_YEAR
    month: int = 0
    day: int = 0
    hour: int = 0
    minute: int = 0
    second: int = 0
    latitude: float = 0.0
    longitude: float = 0.0
    hdop: float = 0.0
    altitude_metres: float = 0.0
    gps_fixed: int = 0

    def set_time_of_day(self, hhmmss: int) -> None:
        """Split a packed HHMMSS integer into hour, minute and second."""
        self.hour = hhmmss // 10000
        self.minute = (hhmmss // 100) % 100
        self.second = hhmmss % 100

    def file_key(self) -> Tuple[int, int, int, int]:
        """Return the (year, month, day, hour) tuple that selects the log file."""
        return (self.year, self.month, self.day, self.hour)

    def copy(self) -> "Observation":
        return replace(self)


@dataclass(frozen=True, slots=True)
class WeatherReading:
    """Fields bound from a $WIMDA sentence."""

    pressure_inhg: float
    pressure_bar: float
    temperature_c: float
    relative_humidity: float
    dewpoint_c: float


@dataclass(frozen=True, slots=True)
class GPSFixReading:
    """Fields bound from a $GPGGA sentence."""

    time_of_day: int
    latitude: float
    lat_hemisphere: str
    longitude: float
    lon_hemisphere: str
    fix_quality: int
    satellites: int
    hdop: float
    altitude_m: float


@dataclass(frozen=True, slots=True)
class DateReading:
    """Fields bound from a $GPZDA sentence."""

    time_of_day: int
    day: int
    month: int
    year: int
