"""Filesystem-backed collection of saved plots."""

from __future__ import annotations

import shutil
import tempfile
from dataclasses import fields
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Dict, List

import pandas as pd
from loguru import logger

from ..codec import enum_to_text
from ..exceptions import PlotExportError, PlotNotFoundError
from ..forms import CodecOptions, Form, FormKind
from ..forms.schema import DEFAULT_OPTIONS
from ..plot import Plot
from .directory import export_plot, import_plot, plot_folder_name


INDEX_BASE_COLUMNS = ["plot_id", "folder", "latitude", "longitude", "saved_at"]
INDEX_COLUMNS = INDEX_BASE_COLUMNS + [kind.value for kind in FormKind.ordered()]


class PlotLibrary:
    """Saved plots, one exported directory each, plus an index.csv summary."""

    def __init__(self, root: Path, *, options: CodecOptions = DEFAULT_OPTIONS) -> None:
        self.root = Path(root)
        self.options = options
        self.plots_dir = self.root / "plots"
        self.index_csv = self.root / "index.csv"
        self.plots_dir.mkdir(parents=True, exist_ok=True)

    # ------------------------------------------------------------------
    def has_plot(self, plot_id: str) -> bool:
        return plot_id in self._read_index()["plot_id"].tolist()

    def list_plots(self) -> pd.DataFrame:
        return self._read_index()

    def save(self, plot: Plot, *, overwrite: bool = False) -> Path:
        folder = self.plots_dir / plot_folder_name(plot.plot_id)
        index = self._read_index()
        owners = set(index.loc[index["folder"] == folder.name, "plot_id"])
        others = sorted(owners - {plot.plot_id})
        if others:
            raise PlotExportError(path=folder, message=f"folder is used by plot '{others[0]}'")
        if plot.plot_id in owners and not overwrite:
            raise PlotExportError(
                path=folder, message=f"plot '{plot.plot_id}' is already saved"
            )
        path = self._replace_folder(plot, folder)

        index = index[index["plot_id"] != plot.plot_id]
        entry = pd.DataFrame([_index_entry(plot, path)], columns=INDEX_COLUMNS)
        index = entry if index.empty else pd.concat([index, entry], ignore_index=True)
        self._write_index(index)
        logger.info(f"Saved plot '{plot.plot_id}' to library {self.root}")
        return path

    def load(self, plot_id: str) -> Plot:
        return import_plot(self._folder_for(plot_id), options=self.options)

    def delete(self, plot_id: str) -> None:
        folder = self._folder_for(plot_id)
        if folder.exists():
            shutil.rmtree(folder)
        index = self._read_index()
        self._write_index(index[index["plot_id"] != plot_id])
        logger.info(f"Deleted plot '{plot_id}' from library {self.root}")

    # ------------------------------------------------------------------
    def _replace_folder(self, plot: Plot, folder: Path) -> Path:
        """Export into a staging folder, then swap it in for *folder*.

        The previously saved copy is only removed once the new export is
        complete, and is put back if the swap fails.
        """

        staging = Path(tempfile.mkdtemp(dir=self.plots_dir, prefix=".staging-"))
        try:
            exported = export_plot(plot, staging / "new")
            previous = staging / "old"
            try:
                if folder.exists():
                    folder.replace(previous)
                exported.replace(folder)
            except OSError as exc:
                if previous.exists() and not folder.exists():
                    previous.replace(folder)
                raise PlotExportError(
                    path=folder, message=f"failed to replace saved plot ({exc})"
                ) from exc
        finally:
            shutil.rmtree(staging, ignore_errors=True)
        return folder

    def _folder_for(self, plot_id: str) -> Path:
        index = self._read_index()
        matches = index[index["plot_id"] == plot_id]
        if matches.empty:
            raise PlotNotFoundError(plot_id)
        return self.plots_dir / str(matches.iloc[0]["folder"])

    def _read_index(self) -> pd.DataFrame:
        if not self.index_csv.exists():
            return pd.DataFrame(columns=INDEX_COLUMNS)
        return pd.read_csv(
            self.index_csv,
            dtype={"plot_id": str, "folder": str, "saved_at": str},
            keep_default_na=False,
        )

    def _write_index(self, index: pd.DataFrame) -> None:
        index = index.sort_values("plot_id", kind="mergesort").reset_index(drop=True)
        index.to_csv(self.index_csv, index=False, columns=INDEX_COLUMNS)


def _index_entry(plot: Plot, path: Path) -> Dict[str, object]:
    entry: Dict[str, object] = {
        "plot_id": plot.plot_id,
        "folder": path.name,
        "latitude": plot.location.latitude,
        "longitude": plot.location.longitude,
        "saved_at": datetime.now(timezone.utc).isoformat(),
    }
    for kind, count in plot.record_counts().items():
        entry[kind.value] = count
    return entry


def records_frame(form: Form) -> pd.DataFrame:
    """Tabulate a form's rows; enum values are shown as their display text."""

    columns = [f.name for f in fields(form.schema.record_type) if f.name != "id"]
    rows: List[Dict[str, object]] = []
    for record in form.records:
        row = {}
        for name in columns:
            value = getattr(record, name)
            row[name] = enum_to_text(value) if isinstance(value, Enum) else value
        rows.append(row)
    return pd.DataFrame(rows, columns=columns)
