"""Per-kind column schemas and the generic record encoder/decoder."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Literal, Optional, Sequence, Tuple, Type

from ..codec import (
    empty_string,
    enum_from_text,
    enum_to_text,
    fill_string,
    format_decimal,
    format_status,
    parse_decimal,
    parse_integer,
    parse_status,
)
from ..exceptions import MalformedRecordError, UnknownEnumValueError
from .kinds import FormKind
from .records import (
    HARDWOOD_PHENOPHASES,
    SOFTWOOD_PHENOPHASES,
    AnimalClass,
    BoleDamageType,
    CrownDamageType,
    DebrisRecord,
    InvasiveSpeciesRecord,
    OverstoryRecord,
    OverstoryStatus,
    PhenologyRecord,
    Record,
    SaplingRecord,
    SeedlingRecord,
    SnagRecord,
    SnagStatus,
    TreeHealthRecord,
    WildlifeRecord,
)


PercentMode = Literal["corrected", "legacy"]


@dataclass(frozen=True)
class CodecOptions:
    """Decode-time switches for behaviour that differs between app versions."""

    tree_health_percent: PercentMode = "corrected"


DEFAULT_OPTIONS = CodecOptions()


class ColumnCodec:
    def check(self, value: Any) -> None:
        """Raise ValueError for an in-memory value that cannot be written."""

    def encode(self, value: Any) -> str:
        raise NotImplementedError

    def decode(self, token: str, options: CodecOptions) -> Any:
        raise NotImplementedError


class TextColumn(ColumnCodec):
    def encode(self, value: str) -> str:
        return fill_string(value)

    def decode(self, token: str, options: CodecOptions) -> str:
        return empty_string(token)


class DecimalColumn(ColumnCodec):
    def check(self, value: float) -> None:
        if not math.isfinite(value):
            raise ValueError(f"{value!r} is not a finite number")

    def encode(self, value: float) -> str:
        return format_decimal(value)

    def decode(self, token: str, options: CodecOptions) -> float:
        return parse_decimal(empty_string(token))


class IntegerColumn(ColumnCodec):
    def __init__(
        self,
        minimum: Optional[int] = None,
        maximum: Optional[int] = None,
        choices: Optional[Sequence[int]] = None,
    ) -> None:
        self.minimum = minimum
        self.maximum = maximum
        self.choices = tuple(choices) if choices is not None else None

    def encode(self, value: int) -> str:
        return str(int(value))

    def decode(self, token: str, options: CodecOptions) -> int:
        number = parse_integer(token)
        if self.choices is not None and number not in self.choices:
            allowed = ", ".join(str(choice) for choice in self.choices)
            raise ValueError(f"{number} is not one of {allowed}")
        if self.minimum is not None and number < self.minimum:
            raise ValueError(f"{number} is below {self.minimum}")
        if self.maximum is not None and number > self.maximum:
            raise ValueError(f"{number} is above {self.maximum}")
        return number


class EnumColumn(ColumnCodec):
    def __init__(self, enum_cls: Type[Enum]) -> None:
        self.enum_cls = enum_cls

    def encode(self, value: Enum) -> str:
        return enum_to_text(value)

    def decode(self, token: str, options: CodecOptions) -> Enum:
        return enum_from_text(self.enum_cls, empty_string(token))


class StatusColumn(ColumnCodec):
    def encode(self, value: bool) -> str:
        return format_status(value)

    def decode(self, token: str, options: CodecOptions) -> bool:
        return parse_status(token)


def percent_range(percent_class: int) -> str:
    """Text for a damage class 0-3, e.g. 2 -> '51% - 75%'."""

    low = percent_class * 25 + min(percent_class, 1)
    high = percent_class * 25 + 25
    return f"{low}% - {high}%"


PERCENT_RANGES = tuple(percent_range(k) for k in range(4))


class PercentClassColumn(ColumnCodec):
    """Damage percent stored as an ordinal class and written as its range."""

    def encode(self, value: int) -> str:
        return percent_range(value)

    def decode(self, token: str, options: CodecOptions) -> int:
        try:
            percent_class = PERCENT_RANGES.index(token.strip())
        except ValueError:
            raise UnknownEnumValueError(enum="damage percent range", token=token) from None
        # Field-app exports read '76% - 100%' back as class 1.
        if options.tree_health_percent == "legacy" and percent_class == 3:
            return 1
        return percent_class


@dataclass(frozen=True)
class Column:
    name: str
    codec: ColumnCodec


@dataclass(frozen=True)
class RecordSchema:
    kind: FormKind
    record_type: Type[Any]
    columns: Tuple[Column, ...]
    fixed_rows: Optional[Callable[[], List[Record]]] = None

    @property
    def column_names(self) -> List[str]:
        return [column.name for column in self.columns]

    @property
    def is_fixed(self) -> bool:
        return self.fixed_rows is not None

    def default_rows(self) -> List[Record]:
        if self.fixed_rows is None:
            return []
        return self.fixed_rows()

    def new_record(self, **values: Any) -> Record:
        return self.record_type(**values)

    def check(self, record: Record) -> None:
        for column in self.columns:
            try:
                column.codec.check(getattr(record, column.name))
            except ValueError as exc:
                raise ValueError(
                    f"{self.kind.display_name} {column.name}: {exc}"
                ) from exc

    def encode(self, record: Record) -> str:
        return ",".join(
            column.codec.encode(getattr(record, column.name)) for column in self.columns
        )

    def decode(
        self,
        tokens: Sequence[str],
        *,
        line: Optional[int] = None,
        options: CodecOptions = DEFAULT_OPTIONS,
    ) -> Record:
        kind = self.kind.display_name
        if len(tokens) != len(self.columns):
            raise MalformedRecordError(
                kind=kind,
                column=None,
                message=f"expected {len(self.columns)} columns, found {len(tokens)}",
                line=line,
            )
        values: Dict[str, Any] = {}
        for column, token in zip(self.columns, tokens):
            try:
                values[column.name] = column.codec.decode(token, options)
            except (ValueError, UnknownEnumValueError) as exc:
                raise MalformedRecordError(
                    kind=kind, column=column.name, message=str(exc), line=line
                ) from exc
        return self.record_type(**values)


_TEXT = TextColumn()
_DECIMAL = DecimalColumn()
_COUNT = IntegerColumn(minimum=0)
_PERCENT = PercentClassColumn()


def _tree_columns(status: Type[Enum]) -> Tuple[Column, ...]:
    return (
        Column("tree_id", _TEXT),
        Column("species", _TEXT),
        Column("status", EnumColumn(status)),
        Column("dbh", _DECIMAL),
        Column("height", _DECIMAL),
    )


_PHENOLOGY_COLUMNS = (
    Column("title", _TEXT),
    Column("present", StatusColumn()),
    Column("note", _TEXT),
)

_CLASS_COUNT_COLUMNS = (
    Column("species", _TEXT),
    Column("class_1", _COUNT),
    Column("class_2", _COUNT),
    Column("class_3", _COUNT),
    Column("class_4", _COUNT),
)


def _wildlife_rows() -> List[Record]:
    return [WildlifeRecord(animal_class=animal_class) for animal_class in AnimalClass]


def _phenology_rows(titles: Sequence[str]) -> Callable[[], List[Record]]:
    def build() -> List[Record]:
        return [PhenologyRecord(title=title) for title in titles]

    return build


SCHEMAS: Dict[FormKind, RecordSchema] = {
    FormKind.OVERSTORY: RecordSchema(
        FormKind.OVERSTORY, OverstoryRecord, _tree_columns(OverstoryStatus)
    ),
    FormKind.SNAGS: RecordSchema(FormKind.SNAGS, SnagRecord, _tree_columns(SnagStatus)),
    FormKind.WILDLIFE: RecordSchema(
        FormKind.WILDLIFE,
        WildlifeRecord,
        (
            Column("animal_class", EnumColumn(AnimalClass)),
            Column("signs", _TEXT),
            Column("sightings", _TEXT),
        ),
        fixed_rows=_wildlife_rows,
    ),
    FormKind.HARDWOOD_PHENOLOGY: RecordSchema(
        FormKind.HARDWOOD_PHENOLOGY,
        PhenologyRecord,
        _PHENOLOGY_COLUMNS,
        fixed_rows=_phenology_rows(HARDWOOD_PHENOPHASES),
    ),
    FormKind.SOFTWOOD_PHENOLOGY: RecordSchema(
        FormKind.SOFTWOOD_PHENOLOGY,
        PhenologyRecord,
        _PHENOLOGY_COLUMNS,
        fixed_rows=_phenology_rows(SOFTWOOD_PHENOPHASES),
    ),
    FormKind.INVASIVE_SPECIES: RecordSchema(
        FormKind.INVASIVE_SPECIES,
        InvasiveSpeciesRecord,
        (
            Column("species", _TEXT),
            Column("direction", _DECIMAL),
            Column("distance", _DECIMAL),
            Column("height_class", IntegerColumn(minimum=1, maximum=4)),
            Column("area", _DECIMAL),
        ),
    ),
    FormKind.TREE_HEALTH: RecordSchema(
        FormKind.TREE_HEALTH,
        TreeHealthRecord,
        (
            Column("tree_id", _TEXT),
            Column("species", _TEXT),
            Column("crown_damage", EnumColumn(CrownDamageType)),
            Column("crown_damage_percent", _PERCENT),
            Column("bole_damage", EnumColumn(BoleDamageType)),
            Column("bole_damage_percent", _PERCENT),
        ),
    ),
    FormKind.SAPLINGS: RecordSchema(FormKind.SAPLINGS, SaplingRecord, _CLASS_COUNT_COLUMNS),
    FormKind.SEEDLINGS: RecordSchema(
        FormKind.SEEDLINGS, SeedlingRecord, _CLASS_COUNT_COLUMNS
    ),
    FormKind.DEBRIS: RecordSchema(
        FormKind.DEBRIS,
        DebrisRecord,
        (
            Column("transect", IntegerColumn(choices=(0, 120, 240))),
            Column("diameter", _DECIMAL),
            Column("decay_class", IntegerColumn(minimum=1, maximum=5)),
            Column("species", _TEXT),
        ),
    ),
}

# The two phenology kinds share PhenologyRecord and its columns.
_SCHEMAS_BY_TYPE: Dict[type, RecordSchema] = {
    schema.record_type: schema for schema in SCHEMAS.values()
}


def schema_for(kind: FormKind) -> RecordSchema:
    return SCHEMAS[kind]


def decode_record(
    kind: FormKind,
    tokens: Sequence[str],
    *,
    line: Optional[int] = None,
    options: CodecOptions = DEFAULT_OPTIONS,
) -> Record:
    return SCHEMAS[kind].decode(tokens, line=line, options=options)


def encode_record(record: Record) -> str:
    schema = _SCHEMAS_BY_TYPE.get(type(record))
    if schema is None:
        raise TypeError(f"Unsupported record type: {type(record)!r}")
    return schema.encode(record)


def split_row(line: str) -> List[str]:
    """Split one Content.csv line; empty fields are kept."""

    return line.rstrip("\r").split(",")
