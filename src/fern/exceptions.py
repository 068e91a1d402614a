"""Custom exception hierarchy for fern."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional


class FernError(Exception):
    """Base error for the fern package."""


class ConfigError(FernError):
    """Raised when a configuration file fails validation."""

    def __init__(self, path: Path, message: str):
        self.path = Path(path)
        self.message = message
        super().__init__(f"{self.path.name}: {self.message}")


class DecodeError(FernError):
    """Base class for failures while reading exported plot text."""


class MalformedInfoError(DecodeError):
    """Raised when an Info.txt payload has the wrong number of lines."""

    def __init__(self, expected: int, found: int):
        self.expected = expected
        self.found = found
        super().__init__(f"info must have {expected} lines, found {found}")


class UnknownFormKindError(DecodeError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"unknown form '{name}'")


class FormKindMismatchError(DecodeError):
    """Raised when a form folder's Info.txt names a different form."""

    def __init__(self, expected: str, found: str):
        self.expected = expected
        self.found = found
        super().__init__(f"{expected} folder holds a {found} form")


class InvalidDateError(DecodeError):
    def __init__(self, token: str):
        self.token = token
        super().__init__(f"invalid date '{token}' (expected DD_MM_YYYY)")


class InvalidLocationError(DecodeError):
    def __init__(self, token: str):
        self.token = token
        super().__init__(f"invalid location '{token}' (expected lat,lon)")


@dataclass
class UnknownEnumValueError(DecodeError):
    """Raised when a token matches no member of a closed set of codes."""

    enum: str
    token: str

    def __post_init__(self) -> None:
        super().__init__(f"'{self.token}' is not a valid {self.enum}")


@dataclass
class MalformedRecordError(DecodeError):
    """Raised when a Content.csv row cannot be decoded."""

    kind: str
    column: Optional[str]
    message: str
    line: Optional[int] = None

    def __post_init__(self) -> None:
        location = self.kind
        if self.line is not None:
            location = f"{location}:line {self.line}"
        if self.column is not None:
            location = f"{location},col {self.column}"
        super().__init__(f"{location}: {self.message}")


class PlotCompositionError(FernError):
    """Raised when a plot is assembled without exactly one form per kind."""


class FixedRowsError(FernError):
    """Raised when adding or removing rows on a fixed-row form."""

    def __init__(self, kind: str):
        self.kind = kind
        super().__init__(f"{kind} rows are fixed; only in-place updates are allowed")


class RecordNotFoundError(FernError):
    def __init__(self, record_id: object):
        self.record_id = record_id
        super().__init__(f"no record with id {record_id}")


@dataclass
class PlotIOError(FernError):
    """Raised when plot files cannot be read."""

    path: Path
    message: str

    def __post_init__(self) -> None:
        super().__init__(f"{self.message} ({self.path})")


class MissingFileError(PlotIOError):
    def __init__(self, path: Path):
        super().__init__(path=Path(path), message="required file not found")


@dataclass
class PlotExportError(FernError):
    """Raised when plot files cannot be written."""

    path: Path
    message: str

    def __post_init__(self) -> None:
        super().__init__(f"{self.message} ({self.path})")


class PlotNotFoundError(FernError):
    def __init__(self, plot_id: str):
        self.plot_id = plot_id
        super().__init__(f"plot '{plot_id}' is not in the library")
