"""Argument validators, signal wiring and banners for entry points."""

from __future__ import annotations

import argparse
import signal
from typing import Any, Callable

from wx150_logger.core.logging_utils import StructuredLogger


def _positive_number(value: str, typ: type, name: str):
    """Generic positive number validator for argparse."""
    try:
        parsed = typ(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"Value must be a {name}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("Value must be positive")
    return parsed


def positive_int(value: str) -> int:
    return _positive_number(value, int, "integer")


def positive_float(value: str) -> float:
    return _positive_number(value, float, "number")


def install_signal_handlers(stop: Callable[[], None], logger: StructuredLogger) -> None:
    """Register SIGINT/SIGTERM handlers that ask the read loop to stop."""

    def signal_handler(signum, frame):
        logger.info("Signal %d received, stopping", signum)
        stop()

    for sig in (signal.SIGINT, signal.SIGTERM):
        signal.signal(sig, signal_handler)


def log_module_startup(
    logger: StructuredLogger,
    args: Any,
    module_name: str = "MODULE",
    **extra_info
) -> None:
    logger.info("=" * 60)
    logger.info("%s SESSION START", module_name.upper())
    logger.info("=" * 60)

    for key, value in extra_info.items():
        display_key = key.replace('_', ' ').title()
        logger.info("%s: %s", display_key, value)

    if hasattr(args, 'log_file') and args.log_file:
        logger.info("Diagnostics file: %s", args.log_file)

    logger.info("=" * 60)


def log_module_shutdown(
    logger: StructuredLogger,
    module_name: str = "MODULE"
) -> None:
    logger.info("=" * 60)
    logger.info("%s stopped", module_name)
    logger.info("=" * 60)


__all__ = [
    "positive_int",
    "positive_float",
    "install_signal_handlers",
    "log_module_startup",
    "log_module_shutdown",
]
