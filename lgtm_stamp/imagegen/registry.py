from __future__ import annotations

from functools import wraps
from typing import Any, BinaryIO, Callable, TYPE_CHECKING

if TYPE_CHECKING:
    from PIL import Image
    from .types import ImageFormat

# Global registry populated by decorators
_encoders: dict["ImageFormat", tuple[Callable, type]] = {}


def format_encoder(image_format: "ImageFormat", options_type: type):
    """
    Decorator to register an encoder and validate its options.

    Args:
        image_format: The ImageFormat this encoder writes
        options_type: Options record the encoder accepts; an instance built
            with defaults is passed when the caller gives none
    """

    def decorator(func):
        @wraps(func)
        def wrapper(img: "Image.Image", stream: BinaryIO, options: Any = None) -> None:
            if options is None:
                options = options_type()
            elif not isinstance(options, options_type):
                raise TypeError(
                    f"{image_format.value} encoder requires {options_type.__name__}, "
                    f"got {type(options).__name__}"
                )
            return func(img, stream, options)

        _encoders[image_format] = (wrapper, options_type)
        return wrapper

    return decorator


def get_all_encoders() -> dict["ImageFormat", tuple[Callable, type]]:
    """Return all registered encoders."""
    return _encoders
