"""Typed configuration for the WX150 module."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, Mapping

from .wx150_core.constants import (
    DEFAULT_BAUD_RATE,
    DEFAULT_FILE_PREFIX,
    DEFAULT_IDLE_BACKOFF,
    DEFAULT_READ_TIMEOUT,
    MAX_LINE_LENGTH,
)

DEFAULT_CONFIG_PATH = Path(__file__).resolve().parent / "config.txt"


@dataclass(slots=True)
class WX150Config:
    """Typed configuration for the WX150 module."""

    # Required at runtime, supplied on the command line
    serial_port: str = ""
    output_dir: Path = field(default_factory=lambda: Path("."))

    # Serial link
    baud_rate: int = DEFAULT_BAUD_RATE
    read_timeout_s: float = DEFAULT_READ_TIMEOUT
    idle_backoff_s: float = DEFAULT_IDLE_BACKOFF

    # Framing
    max_line_length: int = MAX_LINE_LENGTH

    # Output
    file_prefix: str = DEFAULT_FILE_PREFIX
    header_per_file: bool = True
    fsync_on_flush: bool = True

    # Diagnostics
    log_level: str = "info"
    console_output: bool = True
    log_file: str = ""

    @classmethod
    def from_dict(cls, values: Mapping[str, Any], args: Any = None) -> "WX150Config":
        """Build config from loaded key/value pairs with optional CLI overrides.

        Unknown keys are ignored.
        """
        known = {f.name for f in fields(cls)}
        config = cls(**{key: value for key, value in values.items() if key in known})
        config.output_dir = Path(config.output_dir)

        if args is not None:
            config = config._apply_args_override(args)

        return config

    def _apply_args_override(self, args: Any) -> "WX150Config":
        """Apply CLI argument overrides to config values."""
        values = asdict(self)

        arg_mappings = {
            "serial_port": "serial_port",
            "output_dir": "output_dir",
            "baud_rate": "baud_rate",
            "read_timeout": "read_timeout_s",
            "log_level": "log_level",
            "log_file": "log_file",
            "console_output": "console_output",
            "header_per_file": "header_per_file",
        }

        for arg_name, config_key in arg_mappings.items():
            if hasattr(args, arg_name):
                val = getattr(args, arg_name)
                if val is not None:
                    values[config_key] = val

        values["output_dir"] = Path(values["output_dir"])
        return WX150Config(**values)

    def to_dict(self) -> dict[str, Any]:
        """Export config values as dictionary."""
        return asdict(self)


__all__ = ["WX150Config", "DEFAULT_CONFIG_PATH"]
