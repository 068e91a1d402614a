"""The closed set of survey form kinds."""

from __future__ import annotations

from enum import Enum
from typing import List

from ..exceptions import UnknownFormKindError


class FormKind(Enum):
    OVERSTORY = "overstory"
    SNAGS = "snags"
    WILDLIFE = "wildlife"
    HARDWOOD_PHENOLOGY = "hardwood_phenology"
    SOFTWOOD_PHENOLOGY = "softwood_phenology"
    INVASIVE_SPECIES = "invasive_species"
    TREE_HEALTH = "tree_health"
    SAPLINGS = "saplings"
    SEEDLINGS = "seedlings"
    DEBRIS = "debris"

    @property
    def display_name(self) -> str:
        """Name written on line 4 of a form's Info.txt, e.g. 'Tree Health'."""

        return " ".join(word.capitalize() for word in self.value.split("_"))

    @property
    def folder_name(self) -> str:
        return "_".join(word.capitalize() for word in self.value.split("_"))

    @property
    def subplot(self) -> str:
        return _SUBPLOTS.get(self, "1/10th")

    @classmethod
    def ordered(cls) -> List["FormKind"]:
        return list(cls)

    @classmethod
    def from_display_name(cls, name: str) -> "FormKind":
        wanted = name.strip()
        for kind in cls:
            if kind.display_name == wanted:
                return kind
        raise UnknownFormKindError(name)

    @classmethod
    def parse(cls, text: str) -> "FormKind":
        """Resolve a CLI-style name: 'tree_health', 'tree-health' or 'Tree Health'."""

        key = text.strip().lower().replace("-", "_").replace(" ", "_")
        try:
            return cls(key)
        except ValueError:
            raise UnknownFormKindError(text) from None


_SUBPLOTS = {
    FormKind.SAPLINGS: "1/50th",
    FormKind.SEEDLINGS: "1/1000th",
    FormKind.DEBRIS: "Transect Lines",
}
