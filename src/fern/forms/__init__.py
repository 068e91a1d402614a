"""Survey form kinds, records and their text encoding."""

from .envelope import (
    FormEnvelope,
    decode_form,
    decode_records,
    encode_content,
    encode_form,
    encode_info,
    format_location,
    parse_location,
    parse_optional_location,
)
from .kinds import FormKind
from .models import Form, FormMetadata, Location
from .records import (
    AnimalClass,
    BoleDamageType,
    CrownDamageType,
    DebrisRecord,
    Direction,
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
from .schema import CodecOptions, RecordSchema, decode_record, encode_record, schema_for

__all__ = [
    "FormKind",
    "Form",
    "FormMetadata",
    "Location",
    "FormEnvelope",
    "CodecOptions",
    "RecordSchema",
    "schema_for",
    "decode_record",
    "encode_record",
    "decode_form",
    "decode_records",
    "encode_form",
    "encode_info",
    "encode_content",
    "format_location",
    "parse_location",
    "parse_optional_location",
    "Record",
    "OverstoryRecord",
    "OverstoryStatus",
    "SnagRecord",
    "SnagStatus",
    "WildlifeRecord",
    "AnimalClass",
    "PhenologyRecord",
    "InvasiveSpeciesRecord",
    "TreeHealthRecord",
    "CrownDamageType",
    "BoleDamageType",
    "SaplingRecord",
    "SeedlingRecord",
    "Direction",
    "DebrisRecord",
]
