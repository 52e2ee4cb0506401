"""ImageGen package for text stamping."""
from .core import Stamper, load_image, default_output_path
from .types import AggregationPolicy, ImageFormat, Glyph, TextMetrics, Origin
from .colors import ColorResolver, NAMED_COLORS
from .coordinates import LayoutEngine, parse_coordinate
from .encoders import EncoderOptions, PngOptions, JpegOptions, GifOptions, BmpOptions, encode, encode_bytes, detect_format
from .fonts import FontAsset
from .text import measure, composite

__all__ = [
    "Stamper",
    "load_image",
    "default_output_path",
    "AggregationPolicy",
    "ImageFormat",
    "Glyph",
    "TextMetrics",
    "Origin",
    "ColorResolver",
    "NAMED_COLORS",
    "LayoutEngine",
    "parse_coordinate",
    "EncoderOptions",
    "PngOptions",
    "JpegOptions",
    "GifOptions",
    "BmpOptions",
    "encode",
    "encode_bytes",
    "detect_format",
    "FontAsset",
    "measure",
    "composite",
]
