"""Coerce one MegaCli "Key: Value" line into a typed value."""

import re
from dataclasses import dataclass
from typing import Optional, Union

from .errors import FieldFormatError, FieldParseError
from .grammar import MEGACLI_GRAMMAR, FieldKind, Grammar

_DIGITS_RE = re.compile(r"^\d+$")
_SECTORS_RE = re.compile(r"\s*\[0x[0-9A-Fa-f]*\s*Sectors\]\s*$")

UINT64_MAX = 2**64 - 1


@dataclass(frozen=True)
class FieldValue:
    """Parsed field tagged with the kind it was parsed as."""

    kind: FieldKind
    value: Union[str, int]

    def as_str(self) -> str:
        if self.kind != FieldKind.STRING:
            raise TypeError(f"{self.kind.value} field read as string")
        return self.value

    def as_int(self) -> int:
        if self.kind == FieldKind.STRING:
            raise TypeError("string field read as integer")
        return self.value


def strip_sector_count(value: str) -> str:
    """'4.000 TB [0x1d1c0beb0 Sectors]' -> '4.000 TB'."""
    return _SECTORS_RE.sub("", value)


def split_line(line: str):
    """Split on the first colon; return (key, trimmed value)."""
    parts = line.split(":", 1)
    if len(parts) != 2:
        raise FieldFormatError(line)
    return parts[0].strip(), parts[1].strip()


def parse_field(
    line: str,
    kind: FieldKind,
    key: Optional[str] = None,
    grammar: Grammar = MEGACLI_GRAMMAR,
) -> FieldValue:
    """
    Parse the value part of line as kind.

    key is the vocabulary literal the line was matched by; it selects the
    per-field transforms (only Raw Size has one). N/A in an integer field is
    the hardware saying it cannot report it and maps to grammar.na_sentinel.
    """
    label, data = split_line(line)
    label = key or label

    if key is not None and key == grammar.raw_size_key:
        return FieldValue(FieldKind.STRING, strip_sector_count(data))

    if kind == FieldKind.STRING:
        return FieldValue(kind, data)

    if kind == FieldKind.INT:
        # lots of white-box enclosures report no Enclosure Device ID
        if data == grammar.na_literal:
            return FieldValue(kind, grammar.na_sentinel)
        if not _DIGITS_RE.match(data):
            raise FieldParseError(label, data, "integer")
        return FieldValue(kind, int(data))

    if kind == FieldKind.UINT64:
        if not _DIGITS_RE.match(data) or int(data) > UINT64_MAX:
            raise FieldParseError(label, data, "unsigned 64-bit integer")
        return FieldValue(kind, int(data))

    raise FieldParseError(label, data, str(kind))
