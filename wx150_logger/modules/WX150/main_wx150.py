"""WX150 logger entry point.

Usage: wx150-logger <serial_port> <output_dir> [options]
"""

from __future__ import annotations

import argparse
import sys
from dataclasses import asdict
from pathlib import Path
from typing import Optional, Sequence

from wx150_logger.cli.common import (
    install_signal_handlers,
    log_module_shutdown,
    log_module_startup,
    positive_float,
    positive_int,
)
from wx150_logger.core.config_loader import ConfigLoader
from wx150_logger.core.logging_config import configure_logging
from wx150_logger.core.logging_utils import get_module_logger

from .config import DEFAULT_CONFIG_PATH, WX150Config
from .wx150_core import SerialByteSource, StationHandler

logger = get_module_logger("MainWX150")
MODULE_NAME = "WX150"


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="wx150-logger",
        description="Log Airmar WX150 weather and GPS sentences to hourly files.",
    )
    parser.add_argument("serial_port", help="Serial device the WX150 is attached to.")
    parser.add_argument("output_dir", type=Path, help="Directory for the hourly log files.")
    parser.add_argument(
        "--config",
        dest="config_path",
        type=Path,
        default=DEFAULT_CONFIG_PATH,
        help="Path to a key = value config file (default: %(default)s).",
    )
    parser.add_argument(
        "--baud-rate",
        dest="baud_rate",
        type=positive_int,
        default=None,
        help="Serial baud rate (default from config: 4800).",
    )
    parser.add_argument(
        "--read-timeout",
        dest="read_timeout",
        type=positive_float,
        default=None,
        help="Seconds a single serial read may block.",
    )
    parser.add_argument(
        "--log-level",
        dest="log_level",
        choices=["debug", "info", "warning", "error", "critical"],
        default=None,
        help="Diagnostics log level.",
    )
    parser.add_argument(
        "--log-file",
        dest="log_file",
        default=None,
        help="Also write diagnostics to this rotating file.",
    )
    parser.add_argument(
        "--no-console",
        dest="console_output",
        action="store_false",
        default=None,
        help="Do not print diagnostics to stderr.",
    )
    parser.add_argument(
        "--header-once",
        dest="header_per_file",
        action="store_false",
        default=None,
        help="Write the header row only into the first file of the run.",
    )
    return parser.parse_args(argv)


def load_config(args: argparse.Namespace) -> WX150Config:
    """Merge defaults, the config file and command-line overrides."""
    values = ConfigLoader.load(args.config_path, defaults=asdict(WX150Config()))
    return WX150Config.from_dict(values, args)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the logger. Returns the process exit status."""
    args = parse_args(argv)
    config = load_config(args)

    configure_logging(
        config.log_level,
        force=True,
        console=config.console_output,
        log_file=config.log_file or None,
    )

    source = SerialByteSource(
        config.serial_port,
        baudrate=config.baud_rate,
        read_timeout=config.read_timeout_s,
    )
    if not source.open():
        print(
            f"Could not open serial port '{config.serial_port}': {source.last_error}",
            file=sys.stderr,
        )
        return 1

    handler = StationHandler(
        source,
        config.output_dir,
        max_line_length=config.max_line_length,
        idle_backoff=config.idle_backoff_s,
        file_prefix=config.file_prefix,
        header_per_file=config.header_per_file,
        fsync_on_flush=config.fsync_on_flush,
    )
    install_signal_handlers(handler.stop, logger)

    log_module_startup(
        logger,
        args,
        MODULE_NAME,
        serial_port=config.serial_port,
        baud_rate=config.baud_rate,
        output_dir=config.output_dir,
        header_per_file=config.header_per_file,
    )

    try:
        handler.run()
    finally:
        source.close()
        log_module_shutdown(logger, MODULE_NAME)

    return 0


def run() -> None:
    """Console-script wrapper."""
    sys.exit(main())


if __name__ == "__main__":
    run()
