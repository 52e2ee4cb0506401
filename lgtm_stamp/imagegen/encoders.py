from __future__ import annotations

import io
import logging
import os
import zlib
from dataclasses import dataclass, field
from pathlib import Path
from typing import BinaryIO

from PIL import Image

from ..exceptions import EncodeError, UnsupportedFormat
from .registry import format_encoder, get_all_encoders
from .types import ImageFormat

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class PngOptions:
    """PNG encoder settings.

    Attributes:
        compress_level: zlib level, 0 (none) to 9 (smallest)
        compress_type: zlib strategy used when deflating filtered scanlines
        optimize: Let Pillow search for the smallest output
    """
    compress_level: int = 6
    compress_type: int = zlib.Z_DEFAULT_STRATEGY
    optimize: bool = False


@dataclass(frozen=True)
class JpegOptions:
    """JPEG encoder settings, maximum quality and no chroma subsampling by default."""
    quality: int = 100
    subsampling: int = 0


@dataclass(frozen=True)
class GifOptions:
    optimize: bool = False


@dataclass(frozen=True)
class BmpOptions:
    pass


@dataclass(frozen=True)
class EncoderOptions:
    """One options record per supported format."""
    png: PngOptions = field(default_factory=PngOptions)
    jpeg: JpegOptions = field(default_factory=JpegOptions)
    gif: GifOptions = field(default_factory=GifOptions)
    bmp: BmpOptions = field(default_factory=BmpOptions)

    def for_format(self, image_format: ImageFormat):
        return getattr(self, ImageFormat(image_format).value.lower())


@format_encoder(ImageFormat.PNG, PngOptions)
def encode_png(img: Image.Image, stream: BinaryIO, options: PngOptions) -> None:
    img.save(
        stream,
        format="PNG",
        compress_level=options.compress_level,
        compress_type=options.compress_type,
        optimize=options.optimize,
    )


@format_encoder(ImageFormat.JPEG, JpegOptions)
def encode_jpeg(img: Image.Image, stream: BinaryIO, options: JpegOptions) -> None:
    img.save(stream, format="JPEG", quality=options.quality, subsampling=options.subsampling)


@format_encoder(ImageFormat.GIF, GifOptions)
def encode_gif(img: Image.Image, stream: BinaryIO, options: GifOptions) -> None:
    # Pillow quantizes RGB to an adaptive palette for GIF
    img.save(stream, format="GIF", optimize=options.optimize)


@format_encoder(ImageFormat.BMP, BmpOptions)
def encode_bmp(img: Image.Image, stream: BinaryIO, options: BmpOptions) -> None:
    img.save(stream, format="BMP")


def detect_format(target: str | os.PathLike) -> ImageFormat:
    """Map an output path to the format its extension names.

    Args:
        target: Output path

    Returns:
        ImageFormat: Format with a registered encoder

    Raises:
        UnsupportedFormat: If the extension is unknown to Pillow or names a
            format without an encoder here
    """
    ext = os.path.splitext(os.fspath(target))[1].lower()
    pil_format = Image.registered_extensions().get(ext)

    try:
        image_format = ImageFormat(pil_format)
    except ValueError:
        raise UnsupportedFormat(translation_placeholders={"path": os.fspath(target)}) from None

    if image_format not in get_all_encoders():
        raise UnsupportedFormat(translation_placeholders={"path": os.fspath(target)})
    return image_format


def _write_stream(img: Image.Image, stream: BinaryIO, image_format: ImageFormat, options) -> None:
    handler, _ = get_all_encoders()[image_format]

    # Never write an alpha channel
    if img.mode != "RGB":
        img = img.convert("RGB")
    handler(img, stream, options)


def encode_bytes(img: Image.Image, image_format: ImageFormat, options=None) -> bytes:
    """Encode an image in memory.

    Args:
        img: Image to encode, converted to RGB if needed
        image_format: Target format
        options: Options record for that format, defaults if None

    Returns:
        bytes: The encoded file contents

    Raises:
        UnsupportedFormat: If the format has no encoder
        EncodeError: If the codec fails
    """
    image_format = ImageFormat(image_format)
    if image_format not in get_all_encoders():
        raise UnsupportedFormat(translation_placeholders={"path": f"<{image_format} data>"})

    buf = io.BytesIO()
    try:
        _write_stream(img, buf, image_format, options)
    except (OSError, ValueError, KeyError, TypeError) as err:
        raise EncodeError(
            translation_placeholders={"path": f"<{image_format} data>", "error": str(err)}
        ) from err
    return buf.getvalue()


def encode(img: Image.Image, target: str | os.PathLike, options: EncoderOptions | None = None) -> Path:
    """Encode an image and write it to disk in the format of the target's extension.

    The file is encoded in memory and written to a temporary file next to
    the target, which then replaces the target. A failed write leaves any
    existing target untouched.

    Args:
        img: Image to write
        target: Output path, its extension selects the format
        options: Per-format encoder options, defaults if None

    Returns:
        Path: The written path

    Raises:
        UnsupportedFormat: If the extension has no encoder; nothing is written
        EncodeError: If encoding or writing fails
    """
    target = Path(target)
    image_format = detect_format(target)
    options = options if options is not None else EncoderOptions()

    try:
        data = encode_bytes(img, image_format, options.for_format(image_format))
    except EncodeError as err:
        raise EncodeError(
            translation_placeholders={"path": str(target), "error": str(err.__cause__ or err)}
        ) from err

    tmp_path = target.with_name(f".{target.name}.{os.getpid()}.tmp")
    try:
        with open(tmp_path, "wb") as f:
            f.write(data)
        os.replace(tmp_path, target)
    except OSError as err:
        try:
            os.unlink(tmp_path)
        except FileNotFoundError:
            pass
        except OSError as cleanup_err:
            _LOGGER.warning("Could not remove temporary file %s: %s", tmp_path, cleanup_err)
        raise EncodeError(
            translation_placeholders={"path": str(target), "error": err.strerror or str(err)}
        ) from err

    _LOGGER.debug("Wrote %d bytes of %s to %s", len(data), image_format, target)
    return target
