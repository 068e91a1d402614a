"""Directory, archive and library storage for plots."""

from .directory import (
    CONTENT_FILENAME,
    INFO_FILENAME,
    export_archive,
    export_plot,
    import_archive,
    import_plot,
    plot_folder_name,
)
from .library import PlotLibrary, records_frame

__all__ = [
    "INFO_FILENAME",
    "CONTENT_FILENAME",
    "export_plot",
    "import_plot",
    "export_archive",
    "import_archive",
    "plot_folder_name",
    "PlotLibrary",
    "records_frame",
]
