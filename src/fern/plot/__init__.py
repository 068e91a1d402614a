"""Plot aggregate API."""

from .demo import DEMO_PLOT_ID, demo_plot
from .models import (
    DEFAULT_LOCATION,
    DEFAULT_PLOT_ID_FORMAT,
    Plot,
    decode_plot,
    encode_plot,
    encode_plot_info,
)

__all__ = [
    "Plot",
    "DEFAULT_LOCATION",
    "DEFAULT_PLOT_ID_FORMAT",
    "decode_plot",
    "encode_plot",
    "encode_plot_info",
    "demo_plot",
    "DEMO_PLOT_ID",
]
