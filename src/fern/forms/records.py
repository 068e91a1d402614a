"""Row types for the ten survey forms.

Each record is a frozen dataclass whose fields follow the column order of the
form's Content.csv.  ``id`` is a process-local handle used to select a row
while editing; it is ignored by equality and never written to disk.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Tuple, Union
from uuid import UUID, uuid4


class OverstoryStatus(Enum):
    LIVE = "live"
    DEAD_DOWNED = "dead_downed"
    DEAD_HARVESTED = "dead_harvested"
    DEAD_STANDING = "dead_standing"


class SnagStatus(Enum):
    COMPLETE_CROWN = "complete_crown"
    DAMAGED_CROWN = "damaged_crown"
    MISSING_CROWN = "missing_crown"
    DOWNED = "downed"


class AnimalClass(Enum):
    MAMMALS = "mammals"
    BIRDS = "birds"
    REPTILES = "reptiles"
    AMPHIBIANS = "amphibians"
    SPIDERS = "spiders"
    INSECTS = "insects"
    OTHER = "other"


class CrownDamageType(Enum):
    NONE = "none"
    BRANCHES = "branches"
    FOLIAGE = "foliage"
    BOTH = "both"


class BoleDamageType(Enum):
    NONE = "none"
    INSECT = "insect"
    DISEASE = "disease"
    MECHANICAL = "mechanical"
    WEATHER = "weather"
    ALL = "all"
    OTHER = "other"


class Direction(Enum):
    NORTH = "north"
    EAST = "east"
    SOUTH = "south"
    WEST = "west"


def _new_id() -> UUID:
    return uuid4()


@dataclass(frozen=True)
class OverstoryRecord:
    tree_id: str = ""
    species: str = ""
    status: OverstoryStatus = OverstoryStatus.LIVE
    dbh: float = 0.0
    height: float = 0.0
    id: UUID = field(default_factory=_new_id, compare=False, repr=False)


@dataclass(frozen=True)
class SnagRecord:
    tree_id: str = ""
    species: str = ""
    status: SnagStatus = SnagStatus.COMPLETE_CROWN
    dbh: float = 0.0
    height: float = 0.0
    id: UUID = field(default_factory=_new_id, compare=False, repr=False)


@dataclass(frozen=True)
class WildlifeRecord:
    animal_class: AnimalClass = AnimalClass.OTHER
    signs: str = ""
    sightings: str = ""
    id: UUID = field(default_factory=_new_id, compare=False, repr=False)


@dataclass(frozen=True)
class PhenologyRecord:
    """One phenophase row, shared by the hardwood and softwood forms."""

    title: str = ""
    present: bool = False
    note: str = ""
    id: UUID = field(default_factory=_new_id, compare=False, repr=False)


@dataclass(frozen=True)
class InvasiveSpeciesRecord:
    species: str = ""
    direction: float = 0.0  # degrees
    distance: float = 0.0  # feet
    height_class: int = 1
    area: float = 0.0  # square feet
    id: UUID = field(default_factory=_new_id, compare=False, repr=False)


@dataclass(frozen=True)
class TreeHealthRecord:
    tree_id: str = ""
    species: str = ""
    crown_damage: CrownDamageType = CrownDamageType.NONE
    crown_damage_percent: int = 1
    bole_damage: BoleDamageType = BoleDamageType.NONE
    bole_damage_percent: int = 1
    id: UUID = field(default_factory=_new_id, compare=False, repr=False)


@dataclass(frozen=True)
class SaplingRecord:
    species: str = ""
    class_1: int = 0
    class_2: int = 0
    class_3: int = 0
    class_4: int = 0
    id: UUID = field(default_factory=_new_id, compare=False, repr=False)

    @property
    def counts(self) -> Tuple[int, int, int, int]:
        return (self.class_1, self.class_2, self.class_3, self.class_4)


@dataclass(frozen=True)
class SeedlingRecord:
    species: str = ""
    class_1: int = 0
    class_2: int = 0
    class_3: int = 0
    class_4: int = 0
    # Used to group rows for display; Content.csv has no column for it.
    direction: Direction = Direction.NORTH
    id: UUID = field(default_factory=_new_id, compare=False, repr=False)

    @property
    def counts(self) -> Tuple[int, int, int, int]:
        return (self.class_1, self.class_2, self.class_3, self.class_4)


@dataclass(frozen=True)
class DebrisRecord:
    transect: int = 0  # degrees: 0, 120 or 240
    diameter: float = 0.0  # inches
    decay_class: int = 1
    species: str = ""
    id: UUID = field(default_factory=_new_id, compare=False, repr=False)


Record = Union[
    OverstoryRecord,
    SnagRecord,
    WildlifeRecord,
    PhenologyRecord,
    InvasiveSpeciesRecord,
    TreeHealthRecord,
    SaplingRecord,
    SeedlingRecord,
    DebrisRecord,
]


HARDWOOD_PHENOPHASES = (
    "Breaking Leaf Buds",
    "Leaves",
    "Increasing Leaf Size",
    "Colored Leaves",
    "Falling Leaves",
    "Flowers or Flower Buds",
    "Open Flowers",
    "Pollen Release",
    "Developing Fruits",
    "Ripe Fruits",
    "Recent Fruits/Seed Drops",
)

SOFTWOOD_PHENOPHASES = (
    "Breaking Needle Buds",
    "Young Needle",
    "Pollen Cones",
    "Pollen Release",
    "Unripe Seed Cone",
    "Ripe Seed Cone",
    "Recent Cone/Seed Drops",
)
