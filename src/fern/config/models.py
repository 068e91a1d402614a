"""Pydantic models describing fern.toml."""

from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, model_validator

from ..forms import CodecOptions, Location


class CodecConfig(BaseModel):
    tree_health_percent: Literal["corrected", "legacy"] = "corrected"

    def options(self) -> CodecOptions:
        return CodecOptions(tree_health_percent=self.tree_health_percent)


class DefaultsConfig(BaseModel):
    latitude: float = Field(44.365658, ge=-90, le=90)
    longitude: float = Field(-69.793207, ge=-180, le=180)
    plot_id_format: str = "Plot %d.%m.%Y"
    steward: str = ""

    @model_validator(mode="after")
    def ensure_plot_id_format(self) -> "DefaultsConfig":
        plot_id = date(2000, 1, 1).strftime(self.plot_id_format).strip()
        if not plot_id:
            raise ValueError("plot_id_format must produce a non-empty plot id")
        if "/" in plot_id or "\\" in plot_id:
            raise ValueError("plot_id_format must not produce path separators")
        return self

    def location(self) -> Location:
        return Location(latitude=self.latitude, longitude=self.longitude)


class LibraryConfig(BaseModel):
    root: Path = Path(".fern")


class FernConfig(BaseModel):
    codec: CodecConfig = Field(default_factory=CodecConfig)
    defaults: DefaultsConfig = Field(default_factory=DefaultsConfig)
    library: LibraryConfig = Field(default_factory=LibraryConfig)
