"""Stamp pipeline exceptions."""
from __future__ import annotations

from typing import Any

# translation_key -> single-line message template
MESSAGES: dict[str, str] = {
    "invalid_color": "invalid color {color}",
    "font_read_failed": "could not read font file {path}: {error}",
    "font_parse_failed": "could not parse font: {error}",
    "font_size_invalid": "font size must be a positive integer, got {size}",
    "image_load_failed": "could not load image {path}: {error}",
    "draw_failed": "could not draw text: {error}",
    "buffer_mode_invalid": "pixel buffer must be RGB, got {mode}",
    "unsupported_format": "unsupported image format for output {path}",
    "encode_failed": "could not write {path}: {error}",
    "config_read_failed": "could not read config file {path}: {error}",
    "config_invalid": "invalid config: {error}",
    "font_missing": "no font given, pass --font or set 'font' in the config file",
}


class StampError(Exception):
    """Base stamp error.

    Carries a translation key and placeholders so the message shown at the
    command line boundary is always one line built from ``MESSAGES``.
    """

    translation_key = "draw_failed"

    def __init__(
            self,
            *,
            translation_key: str | None = None,
            translation_placeholders: dict[str, Any] | None = None,
    ) -> None:
        if translation_key is not None:
            self.translation_key = translation_key
        self.translation_placeholders = translation_placeholders or {}
        super().__init__(self._render())

    def _render(self) -> str:
        template = MESSAGES.get(self.translation_key, self.translation_key)
        try:
            message = template.format(**self.translation_placeholders)
        except (KeyError, IndexError):
            message = template
        return " ".join(message.split())


class InvalidColor(StampError):
    """Color token matched none of the accepted forms."""

    translation_key = "invalid_color"


class FontLoadError(StampError):
    """Font file unreadable or malformed."""

    translation_key = "font_parse_failed"


class ImageLoadError(StampError):
    """Source image unreadable or undecodable."""

    translation_key = "image_load_failed"


class DrawError(StampError):
    """Text rasterization failed."""

    translation_key = "draw_failed"


class UnsupportedFormat(StampError):
    """Output extension does not map to a supported encoder."""

    translation_key = "unsupported_format"


class EncodeError(StampError):
    """Writing the encoded image failed."""

    translation_key = "encode_failed"


class ConfigError(StampError):
    """Config file or option value is invalid."""

    translation_key = "config_invalid"
