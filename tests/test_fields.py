"""Tests for the Key: Value field parser."""

import pytest

from raidstat.errors import FieldFormatError, FieldParseError
from raidstat.fields import FieldValue, parse_field, strip_sector_count
from raidstat.grammar import FieldKind, MEGACLI_GRAMMAR


def test_string_value_is_trimmed():
    v = parse_field("State               : Optimal  ", FieldKind.STRING)
    assert v == FieldValue(FieldKind.STRING, "Optimal")
    assert v.as_str() == "Optimal"


def test_string_value_keeps_later_colons():
    v = parse_field("Drive's position: DiskGroup: 0, Span: 0, Arm: 1", FieldKind.STRING)
    assert v.as_str() == "DiskGroup: 0, Span: 0, Arm: 1"


@pytest.mark.parametrize("value", ["Optimal", "278.875 GB", "Online, Spun Up", ""])
def test_string_round_trip(value):
    assert parse_field(f"Key: {value}", FieldKind.STRING).as_str() == value.strip()


def test_missing_colon_is_format_error():
    with pytest.raises(FieldFormatError):
        parse_field("Slot Number 4", FieldKind.INT)


def test_int_value():
    assert parse_field("Slot Number: 4", FieldKind.INT).as_int() == 4


def test_int_na_maps_to_sentinel():
    v = parse_field("Enclosure Device ID: N/A", FieldKind.INT, "Enclosure Device ID")
    assert v.as_int() == 999
    assert v.as_int() == MEGACLI_GRAMMAR.na_sentinel


@pytest.mark.parametrize("value", ["abc", "-1", "1.5", ""])
def test_int_rejects_non_numeric(value):
    with pytest.raises(FieldParseError) as exc:
        parse_field(f"Media Error Count: {value}", FieldKind.INT, "Media Error Count")
    assert exc.value.key == "Media Error Count"


def test_uint64_value_and_bounds():
    assert parse_field("Count: 18446744073709551615", FieldKind.UINT64).as_int() == 2**64 - 1
    with pytest.raises(FieldParseError):
        parse_field("Count: 18446744073709551616", FieldKind.UINT64)
    with pytest.raises(FieldParseError):
        parse_field("Count: N/A", FieldKind.UINT64)


def test_raw_size_sector_count_stripped():
    v = parse_field("Raw Size: 4.000 TB [0x1d1c0beb0 Sectors]", FieldKind.STRING, "Raw Size")
    assert v.as_str() == "4.000 TB"


def test_sector_count_only_stripped_for_raw_size():
    v = parse_field("Coerced Size: 3.637 TB [0x1d1a94800 Sectors]", FieldKind.STRING, "Coerced Size")
    assert v.as_str() == "3.637 TB [0x1d1a94800 Sectors]"


def test_strip_sector_count_without_annotation():
    assert strip_sector_count("279.396 GB") == "279.396 GB"


def test_kind_mismatch_on_access():
    v = parse_field("Slot Number: 4", FieldKind.INT)
    with pytest.raises(TypeError):
        v.as_str()
    with pytest.raises(TypeError):
        parse_field("Name: x", FieldKind.STRING).as_int()
