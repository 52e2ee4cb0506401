"""YAML configuration for stamp defaults."""
from __future__ import annotations

import dataclasses
import logging
import os
from dataclasses import dataclass, field
from typing import Any, Dict

import yaml

from .const import AUTO, CONFIG_ENV, DEFAULT_COLOR, DEFAULT_FONT_SIZE, DEFAULT_TEXT
from .exceptions import ConfigError
from .imagegen.coordinates import parse_coordinate
from .imagegen.encoders import BmpOptions, EncoderOptions, GifOptions, JpegOptions, PngOptions
from .imagegen.types import AggregationPolicy

_LOGGER = logging.getLogger(__name__)

# Built-in defaults, config file values are merged over these
DEFAULT: Dict[str, Any] = {
    "text": DEFAULT_TEXT,
    "color": DEFAULT_COLOR,
    "size": DEFAULT_FONT_SIZE,
    "font": None,
    "x": AUTO,
    "y": AUTO,
    "policy": AggregationPolicy.BBOX.value,
    "antialias": True,
    "encoders": {
        "png": {},
        "jpeg": {},
        "gif": {},
        "bmp": {},
    },
}

_OPTION_TYPES = {
    "png": PngOptions,
    "jpeg": JpegOptions,
    "gif": GifOptions,
    "bmp": BmpOptions,
}

# Inclusive bounds of integer encoder options
_OPTION_RANGES = {
    "compress_level": (0, 9),
    "compress_type": (0, 4),
    "quality": (0, 100),
    "subsampling": (0, 2),
}


@dataclass(frozen=True)
class StampConfig:
    """Resolved stamp settings.

    Attributes:
        text: Text to draw
        color: Color token, resolved later by ColorResolver
        size: Font size in pixels
        font: Font file path, if known
        x: Explicit x, or None to center
        y: Explicit y, or None to center
        policy: Glyph aggregation policy for centering
        antialias: Grayscale glyph edges instead of a hard stamp
        encoders: Per-format encoder options
    """
    text: str = DEFAULT_TEXT
    color: str = DEFAULT_COLOR
    size: int = DEFAULT_FONT_SIZE
    font: str | None = None
    x: int | None = None
    y: int | None = None
    policy: AggregationPolicy = AggregationPolicy.BBOX
    antialias: bool = True
    encoders: EncoderOptions = field(default_factory=EncoderOptions)

    def replace(self, **changes: Any) -> "StampConfig":
        """Return a copy with changes applied, e.g. command line overrides."""
        return dataclasses.replace(self, **changes)


def _merge(base: Dict[str, Any], patch: Dict[str, Any]) -> Dict[str, Any]:
    out = dict(base)
    for k, v in patch.items():
        if isinstance(v, dict) and isinstance(base.get(k), dict):
            out[k] = _merge(base[k], v)
        else:
            out[k] = v
    return out


def _check_encoder_values(name: str, options_type: type, values: Dict[str, Any]) -> None:
    """Check encoder option values against the type of each field's default.

    Raises:
        ConfigError: If an option is unknown, has the wrong type or is out of range
    """
    defaults = {f.name: f.default for f in dataclasses.fields(options_type)}
    for key, value in values.items():
        if key not in defaults:
            raise ConfigError(
                translation_placeholders={"error": f"encoder '{name}': unknown option '{key}'"}
            )

        if isinstance(defaults[key], bool):
            if not isinstance(value, bool):
                raise ConfigError(
                    translation_placeholders={"error": f"encoder '{name}': '{key}' must be true or false"}
                )
            continue

        if isinstance(value, bool) or not isinstance(value, int):
            raise ConfigError(
                translation_placeholders={"error": f"encoder '{name}': '{key}' must be an integer, got {value!r}"}
            )
        low, high = _OPTION_RANGES[key]
        if not low <= value <= high:
            raise ConfigError(
                translation_placeholders={"error": f"encoder '{name}': '{key}' must be between {low} and {high}"}
            )


def _build_encoders(data: Any) -> EncoderOptions:
    if not isinstance(data, dict):
        raise ConfigError(translation_placeholders={"error": "'encoders' must be a mapping"})

    records = {}
    for name, values in data.items():
        options_type = _OPTION_TYPES.get(name)
        if options_type is None:
            raise ConfigError(
                translation_placeholders={"error": f"unknown encoder '{name}'"}
            )
        if not isinstance(values, dict):
            raise ConfigError(
                translation_placeholders={"error": f"encoder '{name}' options must be a mapping"}
            )
        _check_encoder_values(name, options_type, values)
        records[name] = options_type(**values)
    return EncoderOptions(**records)


def config_from_dict(data: Dict[str, Any]) -> StampConfig:
    """Build a validated StampConfig from a (merged) settings mapping.

    Raises:
        ConfigError: If a key is unknown or a value has the wrong type
    """
    unknown = sorted(set(data) - set(DEFAULT))
    if unknown:
        raise ConfigError(
            translation_placeholders={"error": f"unknown option(s): {', '.join(unknown)}"}
        )

    size = data["size"]
    if isinstance(size, bool) or not isinstance(size, int) or size <= 0:
        raise ConfigError(
            translation_placeholders={"error": f"'size' must be a positive integer, got {size!r}"}
        )

    font = data["font"]
    if font is not None and not isinstance(font, str):
        raise ConfigError(translation_placeholders={"error": "'font' must be a path"})

    if not isinstance(data["antialias"], bool):
        raise ConfigError(translation_placeholders={"error": "'antialias' must be true or false"})

    try:
        x = parse_coordinate(data["x"])
        y = parse_coordinate(data["y"])
        policy = AggregationPolicy(data["policy"])
    except ValueError as err:
        raise ConfigError(translation_placeholders={"error": str(err)}) from err

    return StampConfig(
        text=str(data["text"]),
        color=str(data["color"]),
        size=size,
        font=font,
        x=x,
        y=y,
        policy=policy,
        antialias=data["antialias"],
        encoders=_build_encoders(data["encoders"]),
    )


def load_config(path: str | os.PathLike | None = None) -> StampConfig:
    """Load stamp settings.

    Reads the YAML file at path, or the one named by the LGTM_STAMP_CONFIG
    environment variable, and merges it over the built-in defaults. With
    neither, the defaults are returned.

    Args:
        path: Optional config file path

    Returns:
        StampConfig: Validated settings

    Raises:
        ConfigError: If the file cannot be read, is not valid YAML or holds invalid values
    """
    if path is None:
        path = os.environ.get(CONFIG_ENV) or None
    if path is None:
        return config_from_dict(DEFAULT)

    try:
        with open(path, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f)
    except OSError as err:
        raise ConfigError(
            translation_key="config_read_failed",
            translation_placeholders={"path": path, "error": err.strerror or str(err)},
        ) from err
    except yaml.YAMLError as err:
        raise ConfigError(
            translation_key="config_read_failed",
            translation_placeholders={"path": path, "error": str(err)},
        ) from err

    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ConfigError(
            translation_placeholders={"error": f"{path} must contain a mapping"}
        )

    _LOGGER.debug("Loaded config from %s: %s", path, sorted(raw))
    return config_from_dict(_merge(DEFAULT, raw))
