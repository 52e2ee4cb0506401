"""Stamp a line of text onto raster images."""
from .const import VERSION as __version__
from .config import StampConfig, load_config
from .exceptions import (
    StampError,
    InvalidColor,
    FontLoadError,
    ImageLoadError,
    DrawError,
    UnsupportedFormat,
    EncodeError,
    ConfigError,
)
from .imagegen import Stamper

__all__ = [
    "__version__",
    "Stamper",
    "StampConfig",
    "load_config",
    # Exceptions
    "StampError",
    "InvalidColor",
    "FontLoadError",
    "ImageLoadError",
    "DrawError",
    "UnsupportedFormat",
    "EncodeError",
    "ConfigError",
]
