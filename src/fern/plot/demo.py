"""Sample plot used for demonstrations and smoke tests."""

from __future__ import annotations

from datetime import date
from typing import Optional

from ..forms import (
    BoleDamageType,
    CrownDamageType,
    DebrisRecord,
    Direction,
    Form,
    FormKind,
    FormMetadata,
    InvasiveSpeciesRecord,
    Location,
    OverstoryRecord,
    OverstoryStatus,
    SaplingRecord,
    SeedlingRecord,
    SnagRecord,
    SnagStatus,
    TreeHealthRecord,
)
from .models import DEFAULT_LOCATION, Plot


DEMO_PLOT_ID = "Demo Plot"


def demo_plot(on: Optional[date] = None) -> Plot:
    on = on or date.today()
    andre = FormMetadata(steward="Andre", date=on)
    glen = FormMetadata(steward="Glen", date=on)
    origin = FormMetadata(steward="Glen", date=on, location=Location(0.0, 0.0))

    def trees(status):
        return [
            (tree_id, species, status)
            for tree_id, species in (("001", "Oak"), ("002", "Birch"), ("003", "Pine"))
        ]

    forms = [
        Form(
            FormKind.OVERSTORY,
            andre,
            [
                OverstoryRecord(tree_id, species, status, dbh=0, height=10)
                for tree_id, species, status in trees(OverstoryStatus.LIVE)
            ],
        ),
        Form(
            FormKind.SNAGS,
            andre,
            [
                SnagRecord(tree_id, species, status, dbh=0, height=10)
                for tree_id, species, status in trees(SnagStatus.DOWNED)
            ],
        ),
        Form.empty(FormKind.WILDLIFE, andre),
        Form.empty(FormKind.HARDWOOD_PHENOLOGY, andre),
        Form.empty(FormKind.SOFTWOOD_PHENOLOGY, andre),
        Form(
            FormKind.INVASIVE_SPECIES,
            andre,
            [
                InvasiveSpeciesRecord("Mint", direction=50.539, distance=20, height_class=1, area=6),
                InvasiveSpeciesRecord(
                    "Japanese Knotweed", direction=20.2, distance=4, height_class=3, area=14
                ),
            ],
        ),
        Form(
            FormKind.TREE_HEALTH,
            glen,
            [
                TreeHealthRecord(
                    tree_id="001",
                    species="Ash",
                    crown_damage=CrownDamageType.BRANCHES,
                    crown_damage_percent=2,
                    bole_damage=BoleDamageType.INSECT,
                    bole_damage_percent=1,
                )
            ],
        ),
        Form(FormKind.SAPLINGS, glen, [SaplingRecord("Ash")]),
        Form(
            FormKind.SEEDLINGS,
            origin,
            [
                SeedlingRecord("Red Oak", direction=Direction.NORTH),
                SeedlingRecord("White Oak", direction=Direction.WEST),
                SeedlingRecord("Yellow Oak", direction=Direction.NORTH),
                SeedlingRecord("Birch", direction=Direction.SOUTH),
            ],
        ),
        Form(
            FormKind.DEBRIS,
            origin,
            [DebrisRecord(transect=120, diameter=3, decay_class=3, species="Oak")],
        ),
    ]
    return Plot.from_forms(forms, plot_id=DEMO_PLOT_ID, location=DEFAULT_LOCATION)
