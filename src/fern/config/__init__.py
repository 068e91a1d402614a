"""Public configuration API."""

from .loader import CONFIG_FILENAME, load_config
from .models import CodecConfig, DefaultsConfig, FernConfig, LibraryConfig

__all__ = [
    "CONFIG_FILENAME",
    "load_config",
    "FernConfig",
    "CodecConfig",
    "DefaultsConfig",
    "LibraryConfig",
]
