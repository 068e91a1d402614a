"""Typer CLI entrypoint for fern."""

from __future__ import annotations

import json
import sys
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

import typer
from loguru import logger

from .codec import format_date
from .config import CONFIG_FILENAME, FernConfig, load_config
from .exceptions import (
    ConfigError,
    DecodeError,
    FernError,
    PlotExportError,
    PlotIOError,
    PlotNotFoundError,
    UnknownFormKindError,
)
from .forms import CodecOptions, FormKind, Location
from .plot import Plot, demo_plot
from .storage import (
    PlotLibrary,
    export_archive,
    export_plot,
    import_archive,
    import_plot,
    records_frame,
)


EXIT_SUCCESS = 0
EXIT_DECODE_ERROR = 2
EXIT_IO_ERROR = 4
EXIT_CONFIG_ERROR = 5


app = typer.Typer(help="FERN plot survey tools")
plot_app = typer.Typer(help="Plot commands")
library_app = typer.Typer(help="Saved plot library")
app.add_typer(plot_app, name="plot")
app.add_typer(library_app, name="library")


ConfigOption = typer.Option(
    None,
    "--config",
    "-c",
    help=f"Path to configuration file (defaults to ./{CONFIG_FILENAME} when present)",
)


@app.callback()
def main_callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log file activity"),
) -> None:
    """Configure logging shared by every command."""

    logger.remove()
    logger.add(
        lambda message: sys.stderr.write(message),
        level="DEBUG" if verbose else "WARNING",
        format="{level}: {message}",
    )


@plot_app.command("new")
def plot_new(
    out: Path = typer.Option(..., "--out", "-o", file_okay=False, help="Parent directory"),
    plot_id: Optional[str] = typer.Option(None, "--id", help="Plot id"),
    latitude: Optional[float] = typer.Option(None, "--lat", help="Plot latitude"),
    longitude: Optional[float] = typer.Option(None, "--lon", help="Plot longitude"),
    steward: Optional[str] = typer.Option(None, "--steward", help="Steward for every form"),
    force: bool = typer.Option(False, "--force", help="Overwrite an existing plot directory"),
    config_path: Optional[Path] = ConfigOption,
) -> None:
    """Write an empty plot export."""

    with _reporting():
        config = _load_config(config_path)
        defaults = config.defaults
        location = Location(
            latitude=defaults.latitude if latitude is None else latitude,
            longitude=defaults.longitude if longitude is None else longitude,
        )
        plot = Plot.new(
            plot_id,
            location,
            steward=defaults.steward if steward is None else steward,
            plot_id_format=defaults.plot_id_format,
        )
        root = export_plot(plot, out, overwrite=force)
    typer.echo(json.dumps({"output": str(root)}, indent=2))


@plot_app.command("demo")
def plot_demo(
    out: Path = typer.Option(..., "--out", "-o", file_okay=False, help="Parent directory"),
    force: bool = typer.Option(False, "--force", help="Overwrite an existing plot directory"),
) -> None:
    """Write the sample 'Demo Plot' export."""

    with _reporting():
        root = export_plot(demo_plot(), out, overwrite=force)
    typer.echo(json.dumps({"output": str(root)}, indent=2))


@plot_app.command("check")
def plot_check(
    source: Path = typer.Argument(..., exists=True, readable=True),
    config_path: Optional[Path] = ConfigOption,
) -> None:
    """Read a plot directory or .zip archive and summarize it."""

    with _reporting():
        options = _load_config(config_path).codec.options()
        plot = _read_source(source, options)
    typer.echo(json.dumps(_summarize(plot), indent=2))


@plot_app.command("show")
def plot_show(
    source: Path = typer.Argument(..., exists=True, readable=True),
    form: str = typer.Option(..., "--form", "-f", help="Form kind, e.g. debris or tree_health"),
    config_path: Optional[Path] = ConfigOption,
) -> None:
    """Print one form of a plot as a table."""

    try:
        kind = FormKind.parse(form)
    except UnknownFormKindError as exc:
        raise typer.BadParameter(str(exc), param_hint="--form") from exc

    with _reporting():
        options = _load_config(config_path).codec.options()
        plot = _read_source(source, options)
    frame = records_frame(plot.form(kind))
    if frame.empty:
        typer.echo(f"{kind.display_name}: no rows")
        return
    typer.echo(frame.to_string(index=False))


@plot_app.command("archive")
def plot_archive(
    source: Path = typer.Argument(..., exists=True, file_okay=False, readable=True),
    out: Path = typer.Option(..., "--out", "-o", dir_okay=False, help="Archive file to write"),
    config_path: Optional[Path] = ConfigOption,
) -> None:
    """Pack a plot directory into a .zip archive."""

    with _reporting():
        options = _load_config(config_path).codec.options()
        data = export_archive(import_plot(source, options=options))
        try:
            out.parent.mkdir(parents=True, exist_ok=True)
            out.write_bytes(data)
        except OSError as exc:
            raise PlotExportError(path=out, message=f"failed to write archive ({exc})") from exc
    typer.echo(json.dumps({"output": str(out)}, indent=2))


@plot_app.command("extract")
def plot_extract(
    source: Path = typer.Argument(..., exists=True, dir_okay=False, readable=True),
    out: Path = typer.Option(..., "--out", "-o", file_okay=False, help="Parent directory"),
    force: bool = typer.Option(False, "--force", help="Overwrite an existing plot directory"),
    config_path: Optional[Path] = ConfigOption,
) -> None:
    """Unpack a .zip archive into a plot directory."""

    with _reporting():
        options = _load_config(config_path).codec.options()
        plot = import_archive(source.read_bytes(), options=options)
        root = export_plot(plot, out, overwrite=force)
    typer.echo(json.dumps({"output": str(root)}, indent=2))


@library_app.command("add")
def library_add(
    source: Path = typer.Argument(..., exists=True, readable=True),
    force: bool = typer.Option(False, "--force", help="Replace a saved plot with the same id"),
    config_path: Optional[Path] = ConfigOption,
) -> None:
    """Save a plot directory or archive into the library."""

    with _reporting():
        config = _load_config(config_path)
        options = config.codec.options()
        plot = _read_source(source, options)
        library = PlotLibrary(config.library.root, options=options)
        path = library.save(plot, overwrite=force)
    typer.echo(json.dumps({"plot_id": plot.plot_id, "path": str(path)}, indent=2))


@library_app.command("list")
def library_list(config_path: Optional[Path] = ConfigOption) -> None:
    """List saved plots."""

    with _reporting():
        config = _load_config(config_path)
        index = PlotLibrary(config.library.root).list_plots()
    payload = {"plots": index.to_dict(orient="records")}
    typer.echo(json.dumps(payload, indent=2, default=str))


@library_app.command("delete")
def library_delete(
    plot_id: str = typer.Argument(...),
    config_path: Optional[Path] = ConfigOption,
) -> None:
    """Delete a saved plot."""

    with _reporting():
        config = _load_config(config_path)
        PlotLibrary(config.library.root).delete(plot_id)
    typer.echo(json.dumps({"deleted": plot_id}, indent=2))


@library_app.command("export")
def library_export(
    plot_id: str = typer.Argument(...),
    out: Path = typer.Option(..., "--out", "-o", file_okay=False, help="Parent directory"),
    force: bool = typer.Option(False, "--force", help="Overwrite an existing plot directory"),
    config_path: Optional[Path] = ConfigOption,
) -> None:
    """Export a saved plot to a directory."""

    with _reporting():
        config = _load_config(config_path)
        library = PlotLibrary(config.library.root, options=config.codec.options())
        root = export_plot(library.load(plot_id), out, overwrite=force)
    typer.echo(json.dumps({"output": str(root)}, indent=2))


def _load_config(path: Optional[Path]) -> FernConfig:
    if path is None:
        default = Path(CONFIG_FILENAME)
        return load_config(default if default.is_file() else None)
    return load_config(path)


def _read_source(source: Path, options: CodecOptions) -> Plot:
    if source.is_dir():
        return import_plot(source, options=options)
    try:
        data = source.read_bytes()
    except OSError as exc:
        raise PlotIOError(path=source, message=f"failed to read file ({exc})") from exc
    return import_archive(data, options=options)


def _summarize(plot: Plot) -> dict:
    return {
        "plot_id": plot.plot_id,
        "location": {
            "latitude": plot.location.latitude,
            "longitude": plot.location.longitude,
        },
        "forms": {
            form.kind.value: {
                "name": form.kind.display_name,
                "subplot": form.kind.subplot,
                "steward": form.metadata.steward,
                "date": format_date(form.metadata.date),
                "rows": len(form),
            }
            for form in plot
        },
    }


@contextmanager
def _reporting() -> Iterator[None]:
    try:
        yield
    except ConfigError as exc:
        typer.echo(f"Config error: {exc}", err=True)
        raise typer.Exit(EXIT_CONFIG_ERROR) from exc
    except DecodeError as exc:
        typer.echo(f"Could not read this plot: {exc}", err=True)
        raise typer.Exit(EXIT_DECODE_ERROR) from exc
    except PlotIOError as exc:
        typer.echo(f"Could not read this plot: {exc}", err=True)
        raise typer.Exit(EXIT_IO_ERROR) from exc
    except PlotExportError as exc:
        typer.echo(f"Export error: {exc}", err=True)
        raise typer.Exit(EXIT_IO_ERROR) from exc
    except PlotNotFoundError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(EXIT_IO_ERROR) from exc
    except FernError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(EXIT_IO_ERROR) from exc
