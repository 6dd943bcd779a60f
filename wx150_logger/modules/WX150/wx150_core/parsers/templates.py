"""Positional sentence templates.

Each template is a fixed prefix followed by comma-separated field specs.
A field spec is a field kind (FLOAT, INT, CHAR, SKIP) or a literal string that
must match the field exactly. Matching stops at the first field that does
not fit; the template matches only when every field bound.
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Any, List, Optional, Sequence, Union


class FieldKind(Enum):
    FLOAT = "float"
    INT = "int"
    CHAR = "char"
    SKIP = "skip"


FLOAT = FieldKind.FLOAT
INT = FieldKind.INT
CHAR = FieldKind.CHAR
SKIP = FieldKind.SKIP

FieldSpec = Union[FieldKind, str]

# Plain ASCII decimals only; no underscores, exponents, nan or inf.
_FLOAT_RE = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)")
_INT_RE = re.compile(r"[0-9]+")


def _parse_float(value: str) -> Optional[float]:
    """Parse a signed decimal field, None on failure."""
    if not _FLOAT_RE.fullmatch(value):
        return None
    return float(value)


def _parse_int(value: str) -> Optional[int]:
    """Parse an unsigned decimal field, None on failure.

    Every integer field (time of day, date parts, fix quality, satellites)
    is non-negative, so a sign makes the field malformed.
    """
    if not _INT_RE.fullmatch(value):
        return None
    return int(value)


def _parse_char(value: str) -> Optional[str]:
    """Accept exactly one character."""
    if len(value) != 1:
        return None
    return value


_CONVERTERS = {
    FieldKind.FLOAT: _parse_float,
    FieldKind.INT: _parse_int,
    FieldKind.CHAR: _parse_char,
}


def sentence_payload(line: str) -> str:
    """Strip surrounding whitespace and any ``*hh`` checksum suffix."""
    return line.strip().split("*", 1)[0]


class SentenceTemplate:
    """Typed positional matcher for one sentence type."""

    def __init__(self, name: str, prefix: str, fields: Sequence[FieldSpec]):
        self.name = name
        self.prefix = prefix
        self.fields = tuple(fields)
        self.expected = sum(1 for spec in self.fields if spec in _CONVERTERS)

    def __repr__(self) -> str:
        return f"SentenceTemplate({self.name!r}, {self.prefix!r}, binds={self.expected})"

    def bind(self, line: str) -> List[Any]:
        """Return the values bound before the first mismatch."""
        parts = sentence_payload(line).split(",")
        if parts[0] != self.prefix:
            return []

        values: List[Any] = []
        fields = parts[1:]
        for index, spec in enumerate(self.fields):
            if index >= len(fields):
                break
            raw = fields[index]
            if spec is SKIP:
                continue
            if isinstance(spec, str):
                if raw != spec:
                    break
                continue
            value = _CONVERTERS[spec](raw)
            if value is None:
                break
            values.append(value)
        return values

    def match(self, line: str) -> Optional[List[Any]]:
        """Return bound values when every field bound, else None."""
        values = self.bind(line)
        if len(values) != self.expected:
            return None
        return values
