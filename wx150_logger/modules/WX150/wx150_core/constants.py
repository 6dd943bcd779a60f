"""WX150 protocol constants and configuration defaults."""

# Serial link (WX150 ships at 4800 8N1)
DEFAULT_BAUD_RATE = 4800
DEFAULT_READ_TIMEOUT = 10.0
DEFAULT_IDLE_BACKOFF = 0.01

# Line framing
MAX_LINE_LENGTH = 1024
LINE_TERMINATORS = frozenset((0x0D, 0x0A))

# Sentence prefixes
WEATHER_PREFIX = "$WIMDA"
GPS_FIX_PREFIX = "$GPGGA"
DATE_PREFIX = "$GPZDA"

# Observation defaults before any GPS/date sentence arrives
UNSET_YEAR = 1900

# Output files: <prefix>-YYYY.MM.DD.HH
DEFAULT_FILE_PREFIX = "wx150log"
LOG_DELIMITER = ";"

# Log record columns (15 fields)
WX150_LOG_HEADER = [
    "year",
    "month",
    "day",
    "hour",
    "minute",
    "second",
    "temperature_c",
    "relative_humidity",
    "air_pressure_bar",
    "dewpoint_c",
    "latitude",
    "longitude",
    "altitude",
    "hdop",
    "gps_fixed",
]

# Open failures are reported on the first and then every Nth attempt
OPEN_FAILURE_REPORT_INTERVAL = 50
