from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import TYPE_CHECKING

from PIL import Image

from ..const import OUTPUT_SUFFIX
from ..exceptions import ConfigError, ImageLoadError
from .colors import ColorResolver
from .coordinates import LayoutEngine
from .encoders import detect_format, encode
from .fonts import FontAsset
from .text import composite, measure
from .types import RgbColor

if TYPE_CHECKING:
    from ..config import StampConfig

_LOGGER = logging.getLogger(__name__)


def load_image(path: str | os.PathLike) -> Image.Image:
    """Load and decode a source image as an RGB buffer.

    Args:
        path: Image file path

    Returns:
        Image.Image: Decoded image in RGB mode, alpha dropped

    Raises:
        ImageLoadError: If the file cannot be read or decoded
    """
    try:
        with Image.open(path) as img:
            img.load()
            rgb_image = img.convert("RGB")
    except (OSError, Image.DecompressionBombError) as err:
        raise ImageLoadError(
            translation_placeholders={"path": os.fspath(path), "error": str(err)}
        ) from err

    _LOGGER.debug("Loaded %s (%dx%d)", path, rgb_image.width, rgb_image.height)
    return rgb_image


def default_output_path(image_path: str | os.PathLike) -> Path:
    """Derive the output path by inserting a suffix before the source extension.

    "photos/cat.png" becomes "photos/cat_out.png".
    """
    path = Path(image_path)
    return path.with_name(f"{path.stem}{OUTPUT_SUFFIX}{path.suffix}")


class Stamper:
    """Stamps a line of text onto images.

    This is the core class of the package. It runs the whole pipeline for
    one image: color resolution, glyph measurement, layout, compositing and
    encoding. Every stage either finishes or raises a StampError, in which
    case the later stages do not run and no output is written.
    """

    def __init__(self, config: "StampConfig | None" = None):
        """Initialize the stamper.

        Args:
            config: Stamp settings, built-in defaults if None
        """
        if config is None:
            from ..config import StampConfig
            config = StampConfig()

        self.config = config
        self._colors = ColorResolver()
        self._layout = LayoutEngine(config.policy)

    def load_font(self, font: "str | os.PathLike | FontAsset | None" = None) -> FontAsset:
        """Return a loaded font from an asset, a path, or the configured path.

        Raises:
            ConfigError: If no font is given anywhere
            FontLoadError: If the font cannot be read or parsed
        """
        if isinstance(font, FontAsset):
            return font

        font_path = font if font is not None else self.config.font
        if font_path is None:
            raise ConfigError(translation_key="font_missing")
        return FontAsset.from_path(font_path)

    def render(self, buffer: Image.Image, font: FontAsset, color: RgbColor | None = None) -> Image.Image:
        """Draw the configured text onto a copy of buffer.

        Measurement and drawing both use the given font, at the configured size.

        Args:
            buffer: Source image in RGB mode
            font: Loaded font
            color: Resolved text color, the configured color if None

        Returns:
            Image.Image: The stamped copy

        Raises:
            InvalidColor: If the configured color does not resolve
            FontLoadError: If the font cannot be sized
            DrawError: If rasterization fails
        """
        if color is None:
            color = self._colors.resolve(self.config.color)
        metrics = measure(self.config.text, font, self.config.size)
        origin = self._layout.place(
            metrics,
            buffer.width,
            buffer.height,
            self.config.x,
            self.config.y,
        )
        return composite(
            buffer,
            self.config.text,
            origin,
            font,
            self.config.size,
            color,
            antialias=self.config.antialias,
        )

    def stamp(
            self,
            image_path: str | os.PathLike,
            output_path: str | os.PathLike | None = None,
            font: "str | os.PathLike | FontAsset | None" = None,
    ) -> Path:
        """Stamp the configured text onto an image file.

        Main entry point. Loads the source image and the font, draws the
        text and writes the result in the format named by the output
        extension.

        Args:
            image_path: Source image path
            output_path: Output path, derived from image_path if None
            font: Font path or loaded font, the configured font path if None

        Returns:
            Path: The written output path

        Raises:
            StampError: From the first stage that fails
        """
        # Fail on a bad color before touching any file
        color = self._colors.resolve(self.config.color)

        source = load_image(image_path)
        font_asset = self.load_font(font)

        target = Path(output_path) if output_path is not None else default_output_path(image_path)
        image_format = detect_format(target)
        _LOGGER.debug("Stamping %r onto %s as %s", self.config.text, image_path, image_format)

        stamped = self.render(source, font_asset, color)
        return encode(stamped, target, self.config.encoders)
