"""Sentence parsing components."""

from .observation_types import DateReading, GPSFixReading, Observation, WeatherReading
from .templates import SentenceTemplate
from .sentence_parser import (
    DATE_TEMPLATE,
    GPS_FIX_TEMPLATE,
    WEATHER_TEMPLATE,
    SentenceParser,
)

__all__ = [
    "Observation",
    "WeatherReading",
    "GPSFixReading",
    "DateReading",
    "SentenceTemplate",
    "SentenceParser",
    "WEATHER_TEMPLATE",
    "GPS_FIX_TEMPLATE",
    "DATE_TEMPLATE",
]
