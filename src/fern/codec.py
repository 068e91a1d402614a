"""Field-level text codecs shared by every form column."""

from __future__ import annotations

import math
import re
from datetime import date, datetime
from enum import Enum
from typing import Optional, Type, TypeVar

from .exceptions import InvalidDateError, UnknownEnumValueError


NOT_APPLICABLE = "N/A"
PLACEHOLDER = "?"
DATE_FORMAT = "%d_%m_%Y"

PRESENT = "Present"
ABSENT = "Absent"

E = TypeVar("E", bound=Enum)

_NUMBER = re.compile(r"[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?")
_INTEGER = re.compile(r"[+-]?\d+")
_WHITESPACE = re.compile(r"\s+")


def fill_string(text: str) -> str:
    """Encode free text for a file: empty becomes N/A, commas become dashes."""

    return (NOT_APPLICABLE if text == "" else text).replace(",", "-")


def empty_string(token: str) -> str:
    return "" if token == NOT_APPLICABLE else token


def format_decimal(value: float) -> str:
    number = float(value)
    if not math.isfinite(number):
        raise ValueError(f"cannot write non-finite number {number!r}")
    if number.is_integer():
        return str(int(number))
    return repr(number)


def parse_decimal(token: str) -> float:
    if not _NUMBER.fullmatch(token):
        raise ValueError(f"invalid number '{token}'")
    number = float(token)
    if not math.isfinite(number):
        raise ValueError(f"number '{token}' is out of range")
    return number


def parse_integer(token: str) -> int:
    if not _INTEGER.fullmatch(token):
        raise ValueError(f"invalid integer '{token}'")
    return int(token)


def format_editable_decimal(value: Optional[float]) -> str:
    """Render an optional number for an edit field; unset shows as '?'."""

    if value is None:
        return PLACEHOLDER
    return format_decimal(value)


def parse_editable_decimal(text: str) -> Optional[float]:
    stripped = text.strip()
    if stripped in ("", PLACEHOLDER):
        return None
    return parse_decimal(stripped)


def enum_to_text(member: Enum) -> str:
    words = str(member.value).split("_")
    return " ".join(word.capitalize() for word in words)


def enum_from_text(enum_cls: Type[E], token: str) -> E:
    key = _WHITESPACE.sub("_", token.strip().lower())
    try:
        return enum_cls(key)
    except ValueError:
        raise UnknownEnumValueError(enum=enum_cls.__name__, token=token) from None


def format_status(present: bool) -> str:
    return PRESENT if present else ABSENT


def parse_status(token: str) -> bool:
    lowered = token.strip().lower()
    if lowered == PRESENT.lower():
        return True
    if lowered == ABSENT.lower():
        return False
    raise UnknownEnumValueError(enum="status", token=token)


def format_date(value: date) -> str:
    return value.strftime(DATE_FORMAT)


def parse_date(token: str) -> date:
    try:
        return datetime.strptime(token.strip(), DATE_FORMAT).date()
    except ValueError as exc:
        raise InvalidDateError(token) from exc
