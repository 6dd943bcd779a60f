"""Single owned state shared by the sentence parser and the log writer."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, TextIO, Tuple

from .parsers.observation_types import Observation

FileKey = Tuple[int, int, int, int]


@dataclass(slots=True)
class RotationState:
    """Bookkeeping for the currently open hourly log file."""

    handle: Optional[TextIO] = None
    file_key: Optional[FileKey] = None
    path: Optional[Path] = None
    header_written: bool = False
    header_ever_written: bool = False
    previous_minute: Optional[int] = None
    open_failures: int = 0


@dataclass(slots=True)
class StationContext:
    """Latest observation plus rotation state for one station process."""

    observation: Observation = field(default_factory=Observation)
    rotation: RotationState = field(default_factory=RotationState)
