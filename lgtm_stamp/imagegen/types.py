from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple, Tuple

RgbColor = Tuple[int, int, int]


class AggregationPolicy(str, Enum):
    """Enum for glyph aggregation policies used to center text.

    BBOX sums the glyph widths and takes the tallest glyph, which centers the
    whole run of text. SPREAD uses the difference between the widest and the
    narrowest glyph (and likewise for heights), the behaviour of some older
    releases of the tool.
    """

    BBOX = "bbox"
    SPREAD = "spread"

    def __str__(self) -> str:
        """Return the string value of the enum.

        Returns:
            str: The string value of the enum
        """

        return self.value


class ImageFormat(str, Enum):
    """Output container formats with an encoder.

    Values match Pillow's format identifiers.
    """

    PNG = "PNG"
    JPEG = "JPEG"
    GIF = "GIF"
    BMP = "BMP"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Glyph:
    """Layout box of one character at a given font and pixel size.

    Attributes:
        char: The character
        width: Box width in whole pixels (truncated advance)
        height: Box height in pixels (font ascent plus descent)
        advance: Horizontal advance in pixels
    """
    char: str
    width: int
    height: int
    advance: float


@dataclass(frozen=True)
class TextMetrics:
    """Aggregate of the glyphs of one line of text.

    Only feeds the layout engine; both aggregation policies read from it.
    """
    glyphs: Tuple[Glyph, ...] = ()

    @property
    def total_width(self) -> int:
        return sum(glyph.width for glyph in self.glyphs)

    @property
    def max_width(self) -> int:
        return max((glyph.width for glyph in self.glyphs), default=0)

    @property
    def min_width(self) -> int:
        return min((glyph.width for glyph in self.glyphs), default=0)

    @property
    def max_height(self) -> int:
        return max((glyph.height for glyph in self.glyphs), default=0)

    @property
    def min_height(self) -> int:
        return min((glyph.height for glyph in self.glyphs), default=0)

    @property
    def width_spread(self) -> int:
        return self.max_width - self.min_width

    @property
    def height_spread(self) -> int:
        return self.max_height - self.min_height

    def extent(self, policy: AggregationPolicy) -> Tuple[int, int]:
        """Return the (width, height) the layout engine centers for a policy."""
        if policy is AggregationPolicy.SPREAD:
            return self.width_spread, self.height_spread
        return self.total_width, self.max_height


class Origin(NamedTuple):
    """Top-left anchor where drawing starts. May lie outside the canvas."""
    x: int
    y: int
