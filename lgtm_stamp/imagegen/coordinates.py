from __future__ import annotations

import logging
import re

from ..const import AUTO
from .types import AggregationPolicy, Origin, TextMetrics

_LOGGER = logging.getLogger(__name__)

_OFFSET_PATTERN = re.compile(r"^[+-]?\d+$")


def parse_coordinate(value: str | int | None) -> int | None:
    """Parse an x or y option value.

    Args:
        value: "auto", None, an int, or a signed integer string such as "+10" or "-5"

    Returns:
        int | None: The explicit coordinate, or None to center on that axis

    Raises:
        ValueError: If the value is neither "auto" nor a signed integer
    """
    if value is None:
        return None
    if isinstance(value, bool):
        raise ValueError(f"invalid coordinate {value!r}")
    if isinstance(value, int):
        return value

    value = str(value).strip()
    if value.lower() == AUTO:
        return None
    if _OFFSET_PATTERN.match(value):
        return int(value)
    raise ValueError(f"invalid coordinate {value!r}, expected '{AUTO}' or a signed integer")


class LayoutEngine:
    """Computes where text starts on the canvas.

    Text is centered on each axis unless an explicit coordinate is given
    for that axis. The centered size of the text depends on the
    aggregation policy, see ``TextMetrics.extent``.

    Attributes:
        policy: Glyph aggregation policy used for centering
    """

    def __init__(self, policy: AggregationPolicy = AggregationPolicy.BBOX):
        self.policy = AggregationPolicy(policy)

    def center(self, metrics: TextMetrics, image_width: int, image_height: int) -> Origin:
        """Return the origin that centers the text, using floor division."""
        text_width, text_height = metrics.extent(self.policy)
        return Origin(
            image_width // 2 - text_width // 2,
            image_height // 2 - text_height // 2,
        )

    def place(
            self,
            metrics: TextMetrics,
            image_width: int,
            image_height: int,
            x_override: int | None = None,
            y_override: int | None = None,
    ) -> Origin:
        """Compute the drawing origin.

        Args:
            metrics: Measured text
            image_width: Canvas width in pixels
            image_height: Canvas height in pixels
            x_override: Explicit x, or None to center horizontally
            y_override: Explicit y, or None to center vertically

        Returns:
            Origin: Top-left anchor, possibly negative or past the canvas
        """
        centered = self.center(metrics, image_width, image_height)
        origin = Origin(
            centered.x if x_override is None else int(x_override),
            centered.y if y_override is None else int(y_override),
        )
        _LOGGER.debug(
            "Placed text at %s on %dx%d canvas (%s policy, centered at %s)",
            tuple(origin), image_width, image_height, self.policy, tuple(centered)
        )
        return origin
