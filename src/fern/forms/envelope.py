"""Encode and decode a form as its (Info.txt, Content.csv) pair."""

from __future__ import annotations

from typing import List, NamedTuple, Optional

from loguru import logger

from ..codec import (
    NOT_APPLICABLE,
    empty_string,
    fill_string,
    format_date,
    format_decimal,
    parse_date,
    parse_decimal,
)
from ..exceptions import InvalidLocationError, MalformedInfoError
from .kinds import FormKind
from .models import Form, FormMetadata, Location
from .records import Record
from .schema import DEFAULT_OPTIONS, CodecOptions, schema_for, split_row


INFO_LINES = 4


class FormEnvelope(NamedTuple):
    """Content.csv and Info.txt text for one form, in decode argument order."""

    content: str
    info: str


def format_location(location: Optional[Location]) -> str:
    if location is None:
        return NOT_APPLICABLE
    return f"{format_decimal(location.latitude)},{format_decimal(location.longitude)}"


def parse_location(token: str) -> Location:
    parts = token.strip().split(",")
    if len(parts) != 2:
        raise InvalidLocationError(token)
    try:
        latitude = parse_decimal(parts[0].strip())
        longitude = parse_decimal(parts[1].strip())
    except ValueError as exc:
        raise InvalidLocationError(token) from exc
    return Location(latitude=latitude, longitude=longitude)


def parse_optional_location(token: str) -> Optional[Location]:
    if token.strip() == NOT_APPLICABLE:
        return None
    return parse_location(token)


def info_lines(text: str) -> List[str]:
    """Split an Info.txt payload, dropping empty lines.

    Lines holding only spaces are kept: a steward of ``" "`` is written as-is
    and must read back as its own line.
    """

    lines = (line.rstrip("\r") for line in text.split("\n"))
    return [line for line in lines if line]


def encode_info(form: Form) -> str:
    metadata = form.metadata
    return "\n".join(
        [
            fill_string(metadata.steward),
            format_location(metadata.location),
            format_date(metadata.date),
            form.kind.display_name,
        ]
    )


def encode_content(form: Form) -> str:
    schema = form.schema
    return "\n".join(schema.encode(record) for record in form.records)


def encode_form(form: Form) -> FormEnvelope:
    return FormEnvelope(content=encode_content(form), info=encode_info(form))


def decode_form(
    content: str, info: str, *, options: CodecOptions = DEFAULT_OPTIONS
) -> Form:
    """Rebuild a form from its Content.csv and Info.txt text.

    Decoding is all-or-nothing: the first malformed line raises and no
    partially filled form is returned.
    """

    lines = info_lines(info)
    if len(lines) != INFO_LINES:
        raise MalformedInfoError(INFO_LINES, len(lines))
    steward_line, location_line, date_line, kind_line = lines

    kind = FormKind.from_display_name(kind_line)
    records = decode_records(kind, content, options=options)
    on = parse_date(date_line)
    location = parse_optional_location(location_line)

    metadata = FormMetadata(
        steward=empty_string(steward_line), date=on, location=location
    )
    return Form(kind=kind, metadata=metadata, records=records)


def decode_records(
    kind: FormKind, content: str, *, options: CodecOptions = DEFAULT_OPTIONS
) -> List[Record]:
    schema = schema_for(kind)
    records: List[Record] = []
    for line_no, line in enumerate(content.split("\n"), start=1):
        if not line.strip():
            continue
        records.append(schema.decode(split_row(line), line=line_no, options=options))
    logger.debug(f"Decoded {len(records)} {kind.display_name} rows")
    return records
