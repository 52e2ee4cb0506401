from __future__ import annotations

import logging

from PIL import Image, ImageDraw

from ..exceptions import DrawError
from .fonts import FontAsset
from .types import Glyph, Origin, RgbColor, TextMetrics

_LOGGER = logging.getLogger(__name__)


def measure(text: str, font: FontAsset, pixel_size: int) -> TextMetrics:
    """Measure the layout box of each character of a line of text.

    Characters the font has no glyph for are skipped. Every glyph box is as
    tall as the font's line (ascent plus descent), which is the area the
    rasterizer draws into below the origin.

    Args:
        text: Text to measure
        font: Loaded font, the same one later used to draw the text
        pixel_size: Font size in pixels

    Returns:
        TextMetrics: Glyph boxes in text order
    """
    sized = font.at_size(pixel_size)
    ascent, descent = sized.getmetrics()
    line_height = ascent + descent

    glyphs = []
    for char in font.printable(text):
        advance = sized.getlength(char)
        glyphs.append(Glyph(char=char, width=int(advance), height=line_height, advance=advance))

    metrics = TextMetrics(glyphs=tuple(glyphs))
    _LOGGER.debug(
        "Measured %d glyph(s) at %dpx: total width %d, max height %d",
        len(metrics.glyphs), pixel_size, metrics.total_width, metrics.max_height
    )
    return metrics


def composite(
        buffer: Image.Image,
        text: str,
        origin: Origin,
        font: FontAsset,
        pixel_size: int,
        color: RgbColor,
        antialias: bool = True,
) -> Image.Image:
    """Draw a line of text into a copy of an RGB buffer.

    The source buffer is never modified; the returned copy holds the text.
    Text reaching past the canvas edges is clipped by the rasterizer.

    Args:
        buffer: Source image in RGB mode
        text: Text to draw, characters without a glyph are skipped
        origin: Top-left anchor of the text
        font: Loaded font, the same one used to measure the text
        pixel_size: Font size in pixels
        color: Fill color
        antialias: Draw with FreeType's grayscale coverage, else a hard 1-bit stamp

    Returns:
        Image.Image: New RGB image of the same size

    Raises:
        DrawError: If the buffer is not RGB or rasterization fails
    """
    if buffer.mode != "RGB":
        raise DrawError(
            translation_key="buffer_mode_invalid",
            translation_placeholders={"mode": buffer.mode},
        )

    sized = font.at_size(pixel_size)
    printable = font.printable(text)

    canvas = buffer.copy()
    if not printable:
        _LOGGER.warning("Nothing to draw, no character of %r has a glyph", text)
        return canvas

    try:
        draw = ImageDraw.Draw(canvas)
        if not antialias:
            draw.fontmode = "1"
        draw.text(
            (origin.x, origin.y),
            printable,
            fill=tuple(color),
            font=sized,
            anchor="la",
        )
    except (OSError, ValueError, TypeError) as err:
        raise DrawError(translation_placeholders={"error": str(err)}) from err

    _LOGGER.debug("Drew %r at %s in %s", printable, tuple(origin), color)
    return canvas
