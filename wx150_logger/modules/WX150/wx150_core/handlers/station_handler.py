"""Station handler: the single-threaded read, frame, parse and log loop."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Optional

from wx150_logger.core.logging_utils import get_module_logger
from ..constants import (
    DEFAULT_FILE_PREFIX,
    DEFAULT_IDLE_BACKOFF,
    MAX_LINE_LENGTH,
)
from ..context import StationContext
from ..data_logger import WX150DataLogger
from ..line_framer import LineFramer, iter_lines
from ..parsers.observation_types import Observation
from ..parsers.sentence_parser import SentenceParser
from ..transports import BaseByteSource

logger = get_module_logger(__name__)


class StationHandler:
    """Owns one instrument link and everything downstream of it.

    Each byte is framed, each complete line parsed, and each weather
    record written before the next byte is read. There is no other thread;
    ``stop()`` is meant to be called from a signal handler.
    """

    def __init__(
        self,
        source: BaseByteSource,
        output_dir: Path,
        *,
        max_line_length: int = MAX_LINE_LENGTH,
        idle_backoff: float = DEFAULT_IDLE_BACKOFF,
        file_prefix: str = DEFAULT_FILE_PREFIX,
        header_per_file: bool = True,
        fsync_on_flush: bool = True,
    ):
        """Initialize the handler.

        Args:
            source: Byte source for the instrument link
            output_dir: Directory for the hourly log files
            max_line_length: Line capacity before bytes are dropped
            idle_backoff: Pause in seconds after a read returned no byte
            file_prefix: Log filename prefix
            header_per_file: See WX150DataLogger
            fsync_on_flush: See WX150DataLogger
        """
        self.source = source
        self.output_dir = Path(output_dir)
        self.idle_backoff = idle_backoff

        self.context = StationContext()
        self.framer = LineFramer(max_line_length)
        self.data_logger = WX150DataLogger(
            self.output_dir,
            self.context,
            file_prefix=file_prefix,
            header_per_file=header_per_file,
            fsync_on_flush=fsync_on_flush,
        )
        self.parser = SentenceParser(self.context, self.data_logger)

        self._running = False
        self._lines_seen = 0

    @property
    def observation(self) -> Observation:
        return self.context.observation

    @property
    def is_running(self) -> bool:
        return self._running

    def stop(self) -> None:
        """Ask the read loop to exit after the current read returns."""
        self._running = False

    def process_byte(self, byte: Optional[int]) -> Optional[str]:
        """Feed one byte; parse the line it completes. Returns the sentence type."""
        line = self.framer.feed(byte)
        if line is None:
            return None
        return self.process_line(line)

    def process_line(self, line: str) -> Optional[str]:
        self._lines_seen += 1
        return self.parser.process_line(line)

    def run(self) -> None:
        """Read until stop() is called or the source closes."""
        if self._running:
            logger.warning("Handler already running")
            return

        self._running = True
        logger.info("Reading from %s, logging to %s", self._source_name(), self.output_dir)
        try:
            lines = iter_lines(
                self.source,
                self.framer,
                idle_backoff=self.idle_backoff,
                should_continue=lambda: self._running and self.source.is_open,
            )
            for line in lines:
                self.process_line(line)
        finally:
            self._running = False
            self.data_logger.close()
            logger.info("Read loop finished: %s", self.stats())

    def stats(self) -> Dict[str, Any]:
        """Snapshot of loop counters."""
        return {
            "lines": self._lines_seen,
            "sentences": dict(self.parser.counts),
            "ignored": self.parser.ignored,
            "records": self.data_logger.records_written,
            "dropped_bytes": self.framer.dropped_bytes,
        }

    def _source_name(self) -> str:
        return getattr(self.source, "port", type(self.source).__name__)
