"""Form metadata and the editable form container."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date
from typing import Iterator, List, Optional
from uuid import UUID

from ..exceptions import FixedRowsError, RecordNotFoundError
from .kinds import FormKind
from .records import Record
from .schema import RecordSchema, schema_for


@dataclass(frozen=True)
class Location:
    latitude: float
    longitude: float


@dataclass(frozen=True)
class FormMetadata:
    steward: str = ""
    date: date = field(default_factory=date.today)
    location: Optional[Location] = None


_UNSET = object()


@dataclass
class Form:
    """One survey form: shared metadata plus its ordered rows.

    The row order is the order written to Content.csv.  Rows are edited
    through the methods below so that the record type always matches
    ``kind`` and fixed-row forms never gain or lose rows.
    """

    kind: FormKind
    metadata: FormMetadata = field(default_factory=FormMetadata)
    records: List[Record] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.records = list(self.records)
        for record in self.records:
            self._check_type(record)

    @classmethod
    def empty(cls, kind: FormKind, metadata: Optional[FormMetadata] = None) -> "Form":
        schema = schema_for(kind)
        return cls(
            kind=kind,
            metadata=metadata or FormMetadata(),
            records=schema.default_rows(),
        )

    @property
    def schema(self) -> RecordSchema:
        return schema_for(self.kind)

    @property
    def is_fixed(self) -> bool:
        return self.schema.is_fixed

    def __iter__(self) -> Iterator[Record]:
        return iter(self.records)

    def __len__(self) -> int:
        return len(self.records)

    def get_record(self, record_id: UUID) -> Record:
        return self.records[self._index_of(record_id)]

    def add_record(self, record: Optional[Record] = None) -> Record:
        if self.is_fixed:
            raise FixedRowsError(self.kind.display_name)
        if record is None:
            record = self.schema.new_record()
        self._check_type(record)
        self.records.append(record)
        return record

    def update_record(self, record_id: UUID, record: Record) -> Record:
        """Replace a row in place; the replacement keeps the original id."""

        self._check_type(record)
        index = self._index_of(record_id)
        updated = replace(record, id=record_id)
        self.records[index] = updated
        return updated

    def remove_record(self, record_id: UUID) -> Record:
        if self.is_fixed:
            raise FixedRowsError(self.kind.display_name)
        return self.records.pop(self._index_of(record_id))

    def update_metadata(
        self,
        *,
        steward: Optional[str] = None,
        on: Optional[date] = None,
        location: object = _UNSET,
    ) -> FormMetadata:
        changes = {}
        if steward is not None:
            changes["steward"] = steward
        if on is not None:
            changes["date"] = on
        if location is not _UNSET:
            changes["location"] = location
        self.metadata = replace(self.metadata, **changes)
        return self.metadata

    # ------------------------------------------------------------------
    def _index_of(self, record_id: UUID) -> int:
        for index, record in enumerate(self.records):
            if record.id == record_id:
                return index
        raise RecordNotFoundError(record_id)

    def _check_type(self, record: Record) -> None:
        schema = self.schema
        expected = schema.record_type
        if not isinstance(record, expected):
            raise TypeError(
                f"{self.kind.display_name} rows must be {expected.__name__}, "
                f"got {type(record).__name__}"
            )
        schema.check(record)
