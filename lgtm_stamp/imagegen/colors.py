from __future__ import annotations

import logging
import re

from ..exceptions import InvalidColor
from .types import RgbColor

_LOGGER = logging.getLogger(__name__)

# Color constants
BLACK = (0, 0, 0)
WHITE = (255, 255, 255)
RED = (255, 0, 0)
GREEN = (0, 255, 0)
BLUE = (0, 0, 255)
YELLOW = (255, 255, 0)
CYAN = (0, 255, 255)
MAGENTA = (255, 0, 255)

NAMED_COLORS: dict[str, RgbColor] = {
    "black": BLACK,
    "white": WHITE,
    "red": RED,
    "green": GREEN,
    "blue": BLUE,
    "yellow": YELLOW,
    "cyan": CYAN,
    "magenta": MAGENTA,
}

_HEX6_PATTERN = re.compile(r"#?([0-9a-f]{6})")
_HEX3_PATTERN = re.compile(r"#?([0-9a-f]{3})")


class ColorResolver:
    """Resolves color tokens to RGB tuples.

    Accepted forms, first match wins: ``rrggbb`` and ``rgb`` hex (optional
    leading ``#``, any case) and the fixed set of names in ``NAMED_COLORS``.
    """

    def resolve(self, color: str) -> RgbColor:
        """Resolve color token to RGB tuple.

        Raises:
            InvalidColor: If the token matches none of the accepted forms
        """
        color_str = str(color).lower()

        match = _HEX6_PATTERN.fullmatch(color_str)
        if match:
            digits = match.group(1)
            return (
                self._parse_channel(digits[0:2]),
                self._parse_channel(digits[2:4]),
                self._parse_channel(digits[4:6]),
            )

        # #RGB expands like CSS shorthand: f -> ff
        match = _HEX3_PATTERN.fullmatch(color_str)
        if match:
            digits = match.group(1)
            return (
                self._parse_channel(digits[0] * 2),
                self._parse_channel(digits[1] * 2),
                self._parse_channel(digits[2] * 2),
            )

        if color_str in NAMED_COLORS:
            return NAMED_COLORS[color_str]

        raise InvalidColor(translation_placeholders={"color": color})

    @staticmethod
    def _parse_channel(hex_val: str) -> int:
        """Parse one two-digit hex channel, 0 if the digits do not parse."""
        try:
            return int(hex_val, 16)
        except ValueError:
            _LOGGER.warning("Could not parse color channel '%s', using 0", hex_val)
            return 0
