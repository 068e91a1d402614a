"""Tests for per-kind record schemas."""

from __future__ import annotations

import pytest

from fern.exceptions import MalformedRecordError
from fern.forms import (
    AnimalClass,
    BoleDamageType,
    CodecOptions,
    CrownDamageType,
    DebrisRecord,
    Direction,
    FormKind,
    InvasiveSpeciesRecord,
    OverstoryRecord,
    OverstoryStatus,
    PhenologyRecord,
    SaplingRecord,
    SeedlingRecord,
    SnagRecord,
    SnagStatus,
    TreeHealthRecord,
    WildlifeRecord,
    decode_record,
    encode_record,
    schema_for,
)
from fern.forms.schema import PERCENT_RANGES, percent_range, split_row


SAMPLE_ROWS = {
    FormKind.OVERSTORY: "001,Northern Red Oak,Dead Harvested,12.5,60",
    FormKind.SNAGS: "010,Eastern Hemlock,Missing Crown,14,22",
    FormKind.WILDLIFE: "Amphibians,Egg masses,Wood frog",
    FormKind.HARDWOOD_PHENOLOGY: "Open Flowers,Present,Few",
    FormKind.SOFTWOOD_PHENOLOGY: "Pollen Cones,Absent,N/A",
    FormKind.INVASIVE_SPECIES: "Mint,50.539,20,1,6",
    FormKind.TREE_HEALTH: "003,Maple,Foliage,0% - 25%,Weather,51% - 75%",
    FormKind.SAPLINGS: "Ash,3,1,0,2",
    FormKind.SEEDLINGS: "Red Oak,5,2,0,0",
    FormKind.DEBRIS: "240,4.5,5,Pine",
}


@pytest.mark.parametrize("kind", list(FormKind), ids=lambda kind: kind.value)
def test_each_kind_round_trips_a_row(kind: FormKind) -> None:
    row = SAMPLE_ROWS[kind]
    record = decode_record(kind, split_row(row))

    assert isinstance(record, schema_for(kind).record_type)
    assert encode_record(record) == row


@pytest.mark.parametrize("kind", list(FormKind), ids=lambda kind: kind.value)
def test_wrong_column_count_is_rejected(kind: FormKind) -> None:
    tokens = split_row(SAMPLE_ROWS[kind])

    with pytest.raises(MalformedRecordError) as short:
        decode_record(kind, tokens[:-1], line=3)
    assert short.value.line == 3
    assert short.value.column is None

    with pytest.raises(MalformedRecordError):
        decode_record(kind, tokens + ["extra"])


def test_overstory_row_decodes_to_typed_fields() -> None:
    record = decode_record(FormKind.OVERSTORY, split_row("001,Oak,dead  standing,12.5,60"))

    assert record == OverstoryRecord(
        tree_id="001",
        species="Oak",
        status=OverstoryStatus.DEAD_STANDING,
        dbh=12.5,
        height=60.0,
    )


def test_unknown_status_names_the_column() -> None:
    with pytest.raises(MalformedRecordError) as exc:
        decode_record(FormKind.SNAGS, split_row("010,Hemlock,Standing,14,22"), line=2)

    assert exc.value.column == "status"
    assert str(exc.value).startswith("Snags:line 2,col status:")


def test_debris_example_row() -> None:
    record = decode_record(FormKind.DEBRIS, split_row("0,3,3,Oak"))

    assert record == DebrisRecord(transect=0, diameter=3.0, decay_class=3, species="Oak")
    assert encode_record(record) == "0,3,3,Oak"


def test_debris_missing_species_round_trips_as_not_applicable() -> None:
    record = decode_record(FormKind.DEBRIS, split_row("120,4.5,2,N/A"))

    assert record.species == ""
    assert encode_record(record) == "120,4.5,2,N/A"


def test_wildlife_empty_field_decodes_and_reencodes_as_not_applicable() -> None:
    record = decode_record(FormKind.WILDLIFE, split_row("Birds,,N/A"))

    assert record == WildlifeRecord(animal_class=AnimalClass.BIRDS, signs="", sightings="")
    assert encode_record(record) == "Birds,N/A,N/A"


def test_free_text_commas_are_replaced() -> None:
    record = SnagRecord(tree_id="7", species="Oak, red", status=SnagStatus.DOWNED, dbh=3, height=4)

    assert encode_record(record) == "7,Oak- red,Downed,3,4"


@pytest.mark.parametrize(
    ("kind", "row", "column"),
    [
        (FormKind.DEBRIS, "90,3,3,Oak", "transect"),
        (FormKind.DEBRIS, "0,3,6,Oak", "decay_class"),
        (FormKind.DEBRIS, "0,N/A,3,Oak", "diameter"),
        (FormKind.INVASIVE_SPECIES, "Mint,1,2,5,6", "height_class"),
        (FormKind.SAPLINGS, "Ash,-1,0,0,0", "class_1"),
        (FormKind.SEEDLINGS, "Oak,1,two,0,0", "class_2"),
        (FormKind.HARDWOOD_PHENOLOGY, "Leaves,Maybe,N/A", "present"),
        (FormKind.TREE_HEALTH, "1,Ash,Both,10%,None,0% - 25%", "crown_damage_percent"),
    ],
)
def test_out_of_range_values_are_rejected(kind: FormKind, row: str, column: str) -> None:
    with pytest.raises(MalformedRecordError) as exc:
        decode_record(kind, split_row(row))
    assert exc.value.column == column


def test_percent_ranges() -> None:
    assert PERCENT_RANGES == ("0% - 25%", "26% - 50%", "51% - 75%", "76% - 100%")
    assert percent_range(2) == "51% - 75%"


def test_tree_health_top_range_in_corrected_mode() -> None:
    row = split_row("002,Beech,Both,76% - 100%,Disease,0% - 25%")
    record = decode_record(FormKind.TREE_HEALTH, row)

    assert record == TreeHealthRecord(
        tree_id="002",
        species="Beech",
        crown_damage=CrownDamageType.BOTH,
        crown_damage_percent=3,
        bole_damage=BoleDamageType.DISEASE,
        bole_damage_percent=0,
    )
    assert encode_record(record) == "002,Beech,Both,76% - 100%,Disease,0% - 25%"


def test_tree_health_top_range_in_legacy_mode() -> None:
    row = split_row("002,Beech,Both,76% - 100%,Disease,26% - 50%")
    record = decode_record(
        FormKind.TREE_HEALTH, row, options=CodecOptions(tree_health_percent="legacy")
    )

    assert record.crown_damage_percent == 1
    assert record.bole_damage_percent == 1


def test_seedling_direction_is_not_written() -> None:
    record = SeedlingRecord("White Oak", 1, 0, 0, 0, direction=Direction.WEST)
    row = encode_record(record)

    assert row == "White Oak,1,0,0,0"
    restored = decode_record(FormKind.SEEDLINGS, split_row(row))
    assert restored.direction is Direction.NORTH
    assert restored.counts == (1, 0, 0, 0)


def test_records_compare_by_value_not_id() -> None:
    first = InvasiveSpeciesRecord("Mint", 1.0, 2.0, 1, 3.0)
    second = InvasiveSpeciesRecord("Mint", 1.0, 2.0, 1, 3.0)

    assert first.id != second.id
    assert first == second


def test_phenology_rows_share_a_record_type() -> None:
    record = decode_record(FormKind.SOFTWOOD_PHENOLOGY, split_row("Young Needle,present,N/A"))

    assert record == PhenologyRecord(title="Young Needle", present=True, note="")
    assert encode_record(record) == "Young Needle,Present,N/A"


def test_sapling_counts() -> None:
    record = decode_record(FormKind.SAPLINGS, split_row("Ash,3,1,0,2"))

    assert record == SaplingRecord("Ash", 3, 1, 0, 2)
    assert record.counts == (3, 1, 0, 2)


def test_encode_record_rejects_foreign_types() -> None:
    with pytest.raises(TypeError):
        encode_record(object())  # type: ignore[arg-type]


def test_fixed_rows_follow_schema_order() -> None:
    wildlife = schema_for(FormKind.WILDLIFE).default_rows()
    assert [row.animal_class for row in wildlife] == list(AnimalClass)
    assert len(schema_for(FormKind.HARDWOOD_PHENOLOGY).default_rows()) == 11
    assert len(schema_for(FormKind.SOFTWOOD_PHENOLOGY).default_rows()) == 7
    assert schema_for(FormKind.OVERSTORY).default_rows() == []


def test_encode_record_dispatches_on_exact_type() -> None:
    class TaggedDebris(DebrisRecord):
        pass

    with pytest.raises(TypeError):
        encode_record(TaggedDebris(transect=0, diameter=1, decay_class=1, species="Oak"))
    assert encode_record(DebrisRecord(0, 1, 1, "Oak")) == "0,1,1,Oak"
