from __future__ import annotations

import io
import logging
from typing import Dict, FrozenSet

from fontTools.ttLib import TTFont
from PIL import ImageFont

from ..exceptions import FontLoadError

_LOGGER = logging.getLogger(__name__)


class FontAsset:
    """A loaded font shared by glyph measurement and rasterization.

    Holds the raw font bytes, the set of code points covered by the font's
    character map and a cache of sized Pillow fonts built from those bytes.
    Measuring and drawing must go through the same asset so that both see
    the same font tables.
    """

    def __init__(self, data: bytes, source: str = "<bytes>"):
        """Parse the font.

        Args:
            data: Raw OpenType/TrueType font bytes
            source: Where the bytes came from, used in log and error messages

        Raises:
            FontLoadError: If the bytes are not a readable font
        """
        self._data = bytes(data)
        self.source = source
        self._codepoints = self._read_codepoints(self._data)
        self._font_cache: Dict[int, ImageFont.FreeTypeFont] = {}

    @classmethod
    def from_path(cls, path) -> "FontAsset":
        """Read and parse a font file.

        Raises:
            FontLoadError: If the file cannot be read or parsed
        """
        try:
            with open(path, "rb") as f:
                data = f.read()
        except OSError as err:
            raise FontLoadError(
                translation_key="font_read_failed",
                translation_placeholders={"path": path, "error": err.strerror or str(err)},
            ) from err

        _LOGGER.debug("Read %d bytes of font data from %s", len(data), path)
        return cls(data, source=str(path))

    @classmethod
    def from_bytes(cls, data: bytes) -> "FontAsset":
        return cls(data)

    @property
    def data(self) -> bytes:
        return self._data

    @staticmethod
    def _read_codepoints(data: bytes) -> FrozenSet[int]:
        """Read the code points covered by the font's Unicode character map."""
        if not data:
            raise FontLoadError(translation_placeholders={"error": "empty font data"})

        try:
            tt = TTFont(io.BytesIO(data), lazy=True)
            try:
                cmap = tt.getBestCmap()
            finally:
                tt.close()
        except Exception as err:
            raise FontLoadError(translation_placeholders={"error": str(err)}) from err

        if not cmap:
            _LOGGER.warning("Font has no Unicode character map, no text will be drawn")
            return frozenset()
        return frozenset(cmap)

    def has_glyph(self, char: str) -> bool:
        """Check whether the font maps a character to a glyph."""
        return ord(char) in self._codepoints

    def printable(self, text: str) -> str:
        """Return text with the characters the font cannot render removed.

        Args:
            text: Text to filter

        Returns:
            str: The characters of text that have a glyph, in order
        """
        kept = "".join(char for char in text if self.has_glyph(char))
        if len(kept) != len(text):
            missing = sorted({char for char in text if not self.has_glyph(char)})
            _LOGGER.debug(
                "Skipping %d character(s) without a glyph in %s: %r",
                len(text) - len(kept), self.source, "".join(missing)
            )
        return kept

    def at_size(self, size: int) -> ImageFont.FreeTypeFont:
        """Get the font at a pixel size, loading it if necessary.

        Args:
            size: Font size in pixels

        Returns:
            Loaded font object

        Raises:
            FontLoadError: If the size is not positive or FreeType rejects the font
        """
        if isinstance(size, bool) or not isinstance(size, int) or size <= 0:
            raise FontLoadError(
                translation_key="font_size_invalid",
                translation_placeholders={"size": size},
            )

        if size in self._font_cache:
            return self._font_cache[size]

        try:
            font = ImageFont.truetype(io.BytesIO(self._data), size)
        except (OSError, ValueError) as err:
            raise FontLoadError(translation_placeholders={"error": str(err)}) from err

        self._font_cache[size] = font
        return font
