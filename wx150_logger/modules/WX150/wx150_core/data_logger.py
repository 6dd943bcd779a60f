"""Hourly rotating weather log writer.

A new file is opened whenever the hour decoded from the instrument changes;
the host clock is never consulted. The file is named after the observation's
(year, month, day, hour) at the moment it is opened. Rows are
semicolon-separated and the header is written on the first row of a file.
"""

from __future__ import annotations

import csv
import os
from pathlib import Path
from typing import Optional, TextIO

from wx150_logger.core.logging_utils import get_module_logger
from .constants import (
    DEFAULT_FILE_PREFIX,
    LOG_DELIMITER,
    OPEN_FAILURE_REPORT_INTERVAL,
    WX150_LOG_HEADER,
)
from .context import RotationState, StationContext
from .parsers.observation_types import Observation, WeatherReading

logger = get_module_logger(__name__)


class WX150DataLogger:
    """Writes weather records into hourly files.

    Features:
    - Rotation when the observation hour changes
    - Header row per file, or once per process with ``header_per_file=False``
    - Flush to disk only when the observation minute changes

    Example:
        context = StationContext()
        data_logger = WX150DataLogger(Path("/data/wx"), context)
        data_logger.log_weather(reading, context.observation)
        data_logger.close()
    """

    def __init__(
        self,
        output_dir: Path,
        context: StationContext,
        *,
        file_prefix: str = DEFAULT_FILE_PREFIX,
        header_per_file: bool = True,
        fsync_on_flush: bool = True,
    ):
        """Initialize the data logger.

        Args:
            output_dir: Directory for the hourly log files
            context: Station context owning the rotation state
            file_prefix: Filename prefix before the date stamp
            header_per_file: Write a header into every new file when True,
                only into the first file of the process when False
            fsync_on_flush: Call os.fsync after each minute-boundary flush
        """
        self.output_dir = Path(output_dir)
        self.context = context
        self.file_prefix = file_prefix
        self.header_per_file = header_per_file
        self.fsync_on_flush = fsync_on_flush
        self._records_written = 0

    @property
    def state(self) -> RotationState:
        return self.context.rotation

    @property
    def filepath(self) -> Optional[Path]:
        """Return the current log file path."""
        return self.state.path

    @property
    def records_written(self) -> int:
        return self._records_written

    def filename_for(self, observation: Observation) -> str:
        """Name of the file that holds records for ``observation``'s hour."""
        return "%s-%04d.%02d.%02d.%02d" % (
            self.file_prefix,
            observation.year,
            observation.month,
            observation.day,
            observation.hour,
        )

    def ensure_current_file(self, observation: Observation) -> Optional[TextIO]:
        """Return the handle for the observation's hour, rotating if needed.

        Does nothing while the open file's hour matches the observation's
        hour, even if the date has changed since the file was opened. Returns
        None when the file cannot be opened; the next call tries again.
        """
        state = self.state
        key = observation.file_key()
        if state.handle is not None and state.file_key[3] == observation.hour:
            return state.handle

        self._close_current()

        path = self.output_dir / self.filename_for(observation)
        try:
            self.output_dir.mkdir(parents=True, exist_ok=True)
            handle = path.open("w", encoding="ascii", errors="replace", newline="")
        except OSError as exc:
            state.open_failures += 1
            if state.open_failures % OPEN_FAILURE_REPORT_INTERVAL == 1:
                logger.warning(
                    "Cannot open log file %s (failures: %d): %s",
                    path,
                    state.open_failures,
                    exc,
                )
            return None

        if state.open_failures:
            logger.info("Log file open recovered after %d failures", state.open_failures)
        state.open_failures = 0
        state.handle = handle
        state.file_key = key
        state.path = path
        state.header_written = False
        logger.info("Logging to %s", path)
        return handle

    def append_record(
        self,
        handle: TextIO,
        reading: WeatherReading,
        observation: Observation,
    ) -> None:
        """Write one record row, preceded by the header when still due."""
        writer = csv.writer(handle, delimiter=LOG_DELIMITER, lineterminator="\n")
        state = self.state
        if not state.header_written:
            if self.header_per_file or not state.header_ever_written:
                writer.writerow(WX150_LOG_HEADER)
                state.header_ever_written = True
            state.header_written = True

        writer.writerow([
            observation.year,
            observation.month,
            observation.day,
            observation.hour,
            observation.minute,
            observation.second,
            reading.temperature_c,
            reading.relative_humidity,
            reading.pressure_bar,
            reading.dewpoint_c,
            observation.latitude,
            observation.longitude,
            observation.altitude_metres,
            observation.hdop,
            observation.gps_fixed,
        ])
        self._records_written += 1

    def log_weather(self, reading: WeatherReading, observation: Observation) -> bool:
        """Rotate if needed, append the record and flush on a new minute.

        Returns:
            True if the record was written, False if no file could be opened
        """
        handle = self.ensure_current_file(observation)
        if handle is None:
            return False

        try:
            self.append_record(handle, reading, observation)
            if self.state.previous_minute != observation.minute:
                self._flush(handle)
        except OSError as exc:
            logger.error("Failed to write weather record to %s: %s", self.state.path, exc)
            self._close_current()
            return False
        finally:
            self.state.previous_minute = observation.minute

        return True

    def close(self) -> None:
        """Flush and close the current file, if any."""
        self._close_current()

    def _flush(self, handle: TextIO) -> None:
        handle.flush()
        if self.fsync_on_flush:
            os.fsync(handle.fileno())

    def _close_current(self) -> None:
        state = self.state
        handle = state.handle
        if handle is None:
            return
        state.handle = None
        state.file_key = None
        try:
            handle.close()
        except OSError as exc:
            logger.error("Error closing log file %s: %s", state.path, exc)
        else:
            logger.debug("Closed %s", state.path)
