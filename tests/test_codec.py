"""Tests for field-level text codecs."""

from __future__ import annotations

from datetime import date

import pytest

from fern.codec import (
    empty_string,
    enum_from_text,
    enum_to_text,
    fill_string,
    format_date,
    format_decimal,
    format_editable_decimal,
    format_status,
    parse_date,
    parse_decimal,
    parse_editable_decimal,
    parse_integer,
    parse_status,
)
from fern.exceptions import InvalidDateError, UnknownEnumValueError
from fern.forms import OverstoryStatus, SnagStatus


def test_fill_string_and_empty_string() -> None:
    assert fill_string("") == "N/A"
    assert fill_string("Oak, red") == "Oak- red"
    assert fill_string("Birch") == "Birch"
    assert empty_string("N/A") == ""
    assert empty_string("Birch") == "Birch"


def test_format_decimal_trims_integral_values() -> None:
    assert format_decimal(3.0) == "3"
    assert format_decimal(0) == "0"
    assert format_decimal(-12.0) == "-12"
    assert format_decimal(4.5) == "4.5"
    assert format_decimal(50.539) == "50.539"


def test_decimal_precision_survives_round_trip() -> None:
    value = 44.36565812
    assert parse_decimal(format_decimal(value)) == value


@pytest.mark.parametrize("token", ["", "N/A", "abc", " 3", "1_000", "3,5"])
def test_parse_decimal_rejects_bad_tokens(token: str) -> None:
    with pytest.raises(ValueError):
        parse_decimal(token)


def test_parse_integer() -> None:
    assert parse_integer("120") == 120
    assert parse_integer("-3") == -3
    with pytest.raises(ValueError):
        parse_integer("3.0")


def test_editable_decimal_placeholder() -> None:
    assert format_editable_decimal(None) == "?"
    assert format_editable_decimal(2.0) == "2"
    assert parse_editable_decimal("?") is None
    assert parse_editable_decimal("") is None
    assert parse_editable_decimal(" 7.25 ") == 7.25


def test_enum_text_round_trip() -> None:
    assert enum_to_text(OverstoryStatus.DEAD_DOWNED) == "Dead Downed"
    assert enum_from_text(OverstoryStatus, "Dead Downed") is OverstoryStatus.DEAD_DOWNED


def test_enum_from_text_is_case_and_spacing_insensitive() -> None:
    assert enum_from_text(SnagStatus, "complete   CROWN") is SnagStatus.COMPLETE_CROWN
    assert enum_from_text(SnagStatus, " downed ") is SnagStatus.DOWNED
    assert enum_from_text(SnagStatus, "missing_crown") is SnagStatus.MISSING_CROWN


def test_enum_from_text_rejects_unknown_values() -> None:
    with pytest.raises(UnknownEnumValueError) as exc:
        enum_from_text(SnagStatus, "Standing")
    assert exc.value.token == "Standing"
    assert "SnagStatus" in str(exc.value)


def test_status_codec() -> None:
    assert format_status(True) == "Present"
    assert format_status(False) == "Absent"
    assert parse_status("present") is True
    assert parse_status("Absent") is False
    with pytest.raises(UnknownEnumValueError):
        parse_status("Maybe")


def test_date_codec() -> None:
    assert format_date(date(2025, 6, 4)) == "04_06_2025"
    assert parse_date("04_06_2025") == date(2025, 6, 4)
    with pytest.raises(InvalidDateError):
        parse_date("2025-06-04")


@pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf")])
def test_format_decimal_rejects_non_finite_values(value: float) -> None:
    with pytest.raises(ValueError):
        format_decimal(value)


def test_parse_decimal_rejects_overflow() -> None:
    with pytest.raises(ValueError):
        parse_decimal("1e999")
    assert parse_decimal("1e3") == 1000.0
