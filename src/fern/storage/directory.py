"""Read and write plots as a directory tree or a ZIP archive of one."""

from __future__ import annotations

import io
import os
import tempfile
import zipfile
from pathlib import Path, PurePosixPath
from typing import Callable, Dict, List, Set, Tuple

from loguru import logger

from ..exceptions import MissingFileError, PlotExportError, PlotIOError
from ..forms import CodecOptions, FormEnvelope, FormKind
from ..forms.schema import DEFAULT_OPTIONS
from ..plot import Plot, decode_plot, encode_plot


INFO_FILENAME = "Info.txt"
CONTENT_FILENAME = "Content.csv"

ReadText = Callable[[str], str]


def plot_folder_name(plot_id: str) -> str:
    """Directory name for a plot; raises if the id cannot name a folder."""

    name = plot_id.strip()
    if not name or name in {".", ".."} or "/" in name or "\\" in name:
        raise PlotExportError(path=Path(name or "."), message=f"invalid plot id '{plot_id}'")
    return name


def plot_files(plot: Plot) -> List[Tuple[str, str]]:
    """Relative paths and text of every file in a plot export."""

    info, envelopes = encode_plot(plot)
    files = [(INFO_FILENAME, info)]
    for kind, envelope in envelopes.items():
        files.append((f"{kind.folder_name}/{INFO_FILENAME}", envelope.info))
        files.append((f"{kind.folder_name}/{CONTENT_FILENAME}", envelope.content))
    return files


def export_plot(plot: Plot, parent: Path, *, overwrite: bool = False) -> Path:
    """Write *plot* under ``parent/<plot id>`` and return that directory."""

    root = Path(parent) / plot_folder_name(plot.plot_id)
    if root.exists() and not overwrite:
        raise PlotExportError(path=root, message="plot directory already exists")

    try:
        files = plot_files(plot)
    except ValueError as exc:
        raise PlotExportError(path=root, message=f"plot cannot be written ({exc})") from exc
    for relative, text in files:
        _write_text_atomic(root / relative, text)
    logger.info(f"Exported plot '{plot.plot_id}' to {root}")
    return root


def import_plot(root: Path, *, options: CodecOptions = DEFAULT_OPTIONS) -> Plot:
    """Read a plot directory; any missing or bad file fails the import."""

    root = Path(root)
    if not root.is_dir():
        raise MissingFileError(root)

    def read_text(relative: str) -> str:
        path = root / relative
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError as exc:
            logger.error(f"Missing plot file {path}")
            raise MissingFileError(path) from exc
        except UnicodeDecodeError as exc:
            logger.error(f"Plot file {path} is not UTF-8")
            raise PlotIOError(path=path, message="file is not valid UTF-8") from exc
        except OSError as exc:
            logger.error(f"Failed to read plot file {path}: {exc}")
            raise PlotIOError(path=path, message=f"failed to read file ({exc})") from exc

    plot = _read_plot(read_text, options)
    logger.info(f"Imported plot '{plot.plot_id}' from {root}")
    return plot


def export_archive(plot: Plot) -> bytes:
    folder = plot_folder_name(plot.plot_id)
    try:
        files = plot_files(plot)
    except ValueError as exc:
        raise PlotExportError(
            path=Path(folder), message=f"plot cannot be written ({exc})"
        ) from exc
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", compression=zipfile.ZIP_DEFLATED) as archive:
        for relative, text in files:
            archive.writestr(f"{folder}/{relative}", text.encode("utf-8"))
    logger.info(f"Packed plot '{plot.plot_id}' into archive")
    return buffer.getvalue()


def import_archive(data: bytes, *, options: CodecOptions = DEFAULT_OPTIONS) -> Plot:
    """Read a plot from ZIP bytes laid out as ``<PlotID>/...`` or flat."""

    archive_path = Path("<archive>")
    try:
        archive = zipfile.ZipFile(io.BytesIO(data))
    except zipfile.BadZipFile as exc:
        raise PlotIOError(path=archive_path, message="not a valid ZIP archive") from exc

    with archive:
        names = {name for name in archive.namelist() if not name.endswith("/")}
        prefix = _archive_prefix(names)

        def read_text(relative: str) -> str:
            name = f"{prefix}{relative}"
            if name not in names:
                raise MissingFileError(archive_path / name)
            try:
                return archive.read(name).decode("utf-8")
            except UnicodeDecodeError as exc:
                raise PlotIOError(
                    path=archive_path / name, message="file is not valid UTF-8"
                ) from exc
            except (zipfile.BadZipFile, OSError) as exc:
                raise PlotIOError(
                    path=archive_path / name, message=f"failed to read entry ({exc})"
                ) from exc

        plot = _read_plot(read_text, options)
    logger.info(f"Imported plot '{plot.plot_id}' from archive")
    return plot


def _read_plot(read_text: ReadText, options: CodecOptions) -> Plot:
    envelopes: Dict[FormKind, FormEnvelope] = {}
    for kind in FormKind.ordered():
        content = read_text(f"{kind.folder_name}/{CONTENT_FILENAME}")
        info = read_text(f"{kind.folder_name}/{INFO_FILENAME}")
        logger.debug(f"Read {kind.folder_name} ({len(content)} bytes of content)")
        envelopes[kind] = FormEnvelope(content=content, info=info)
    plot_info = read_text(INFO_FILENAME)
    return decode_plot(plot_info, envelopes, options=options)


def _archive_prefix(names: Set[str]) -> str:
    if INFO_FILENAME in names:
        return ""
    roots = {
        PurePosixPath(name).parts[0]
        for name in names
        if len(PurePosixPath(name).parts) > 1
    }
    roots.discard("__MACOSX")
    if len(roots) == 1:
        return f"{roots.pop()}/"
    return ""


def _write_text_atomic(path: Path, text: str) -> None:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.")
        try:
            with os.fdopen(fd, "w", encoding="utf-8", newline="") as fh:
                fh.write(text)
            # mkstemp creates 0600 files; exports get the usual umask mode.
            os.chmod(tmp_name, 0o666 & ~_current_umask())
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
    except OSError as exc:
        logger.error(f"Failed to write {path}: {exc}")
        raise PlotExportError(path=path, message=f"failed to write file ({exc})") from exc
    logger.debug(f"Wrote {path}")


def _current_umask() -> int:
    mask = os.umask(0)
    os.umask(mask)
    return mask
