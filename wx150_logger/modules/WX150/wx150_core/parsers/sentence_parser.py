"""Sentence classification and observation merging for the WX150.

Lines are tried against an ordered list of templates; the first one that
binds every field is applied and the rest are skipped. Lines matching no
template are ignored.
"""

from __future__ import annotations

from collections import Counter
from typing import TYPE_CHECKING, Any, Callable, List, Optional, Sequence, Tuple

from wx150_logger.core.logging_utils import get_module_logger
from ..constants import DATE_PREFIX, GPS_FIX_PREFIX, WEATHER_PREFIX
from .observation_types import DateReading, GPSFixReading, Observation, WeatherReading
from .templates import CHAR, FLOAT, INT, SKIP, SentenceTemplate

if TYPE_CHECKING:
    from ..context import StationContext
    from ..data_logger import WX150DataLogger

logger = get_module_logger(__name__)

# $WIMDA,<inHg>,I,<bar>,B,<air C>,C,<water C>,<unit>,<RH %>,<abs hum>,<dew C>,C,...
WEATHER_TEMPLATE = SentenceTemplate(
    "MDA",
    WEATHER_PREFIX,
    (FLOAT, "I", FLOAT, "B", FLOAT, "C", SKIP, SKIP, FLOAT, SKIP, FLOAT),
)

# $GPGGA,<hhmmss>,<lat>,<N|S>,<lon>,<E|W>,<quality>,<satellites>,<hdop>,<alt m>,...
GPS_FIX_TEMPLATE = SentenceTemplate(
    "GGA",
    GPS_FIX_PREFIX,
    (INT, FLOAT, CHAR, FLOAT, CHAR, INT, INT, FLOAT, FLOAT),
)

# $GPZDA,<hhmmss>,<day>,<month>,<year>,...
DATE_TEMPLATE = SentenceTemplate(
    "ZDA",
    DATE_PREFIX,
    (INT, INT, INT, INT),
)


def _packed_degrees(value: float) -> float:
    """DDMM.MMMM as received -> DD.MMMMMM (degrees, then minutes after the point)."""
    return value / 100.0


class SentenceParser:
    """Applies WX150 sentences to the shared station context.

    Weather sentences are handed to the data logger together with the
    latest observation; GPS fix and date sentences overwrite observation
    fields in place.
    """

    def __init__(
        self,
        context: "StationContext",
        data_logger: Optional["WX150DataLogger"] = None,
    ):
        self.context = context
        self.data_logger = data_logger
        self.counts: Counter[str] = Counter()
        self.ignored = 0
        self._matchers: Sequence[Tuple[SentenceTemplate, Callable[[List[Any]], None]]] = (
            (WEATHER_TEMPLATE, self._apply_weather),
            (GPS_FIX_TEMPLATE, self._apply_gps_fix),
            (DATE_TEMPLATE, self._apply_date),
        )

    @property
    def observation(self) -> Observation:
        """Current observation held by the context."""
        return self.context.observation

    def process_line(self, line: str) -> Optional[str]:
        """Apply the first matching template. Returns its name or None."""
        for template, apply in self._matchers:
            values = template.match(line)
            if values is None:
                continue
            apply(values)
            self.counts[template.name] += 1
            return template.name

        self.ignored += 1
        logger.debug("Ignored line: %.40r", line)
        return None

    def _apply_weather(self, values: List[Any]) -> None:
        reading = WeatherReading(*values)
        if self.data_logger is not None:
            self.data_logger.log_weather(reading, self.observation)

    def _apply_gps_fix(self, values: List[Any]) -> None:
        reading = GPSFixReading(*values)
        obs = self.observation

        latitude = _packed_degrees(reading.latitude)
        if reading.lat_hemisphere.upper() == "S":
            latitude = -latitude
        longitude = _packed_degrees(reading.longitude)
        # Eastern longitudes are negated.
        if reading.lon_hemisphere.upper() == "E":
            longitude = -longitude

        obs.set_time_of_day(reading.time_of_day)
        obs.latitude = latitude
        obs.longitude = longitude
        obs.gps_fixed = reading.fix_quality
        obs.hdop = reading.hdop
        obs.altitude_metres = reading.altitude_m

    def _apply_date(self, values: List[Any]) -> None:
        reading = DateReading(*values)
        obs = self.observation
        obs.set_time_of_day(reading.time_of_day)
        obs.day = reading.day
        obs.month = reading.month
        obs.year = reading.year
