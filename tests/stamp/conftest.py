"""Shared fixtures for stamp tests."""
import os

import pytest
from PIL import Image, ImageChops, ImageFont

from lgtm_stamp.const import CONFIG_ENV
from lgtm_stamp.imagegen import FontAsset

current_dir = os.path.dirname(os.path.abspath(__file__))

BACKGROUND = (10, 20, 30)
CANVAS_SIZE = (300, 200)

# Not covered by Pillow's bundled font
MISSING_CHAR = "\U0001F600"


@pytest.fixture(autouse=True)
def no_config_env(monkeypatch):
    """Keep a user's config file out of the tests."""
    monkeypatch.delenv(CONFIG_ENV, raising=False)


@pytest.fixture(scope="session")
def font_bytes():
    """Raw bytes of the TrueType font bundled with Pillow."""
    font = ImageFont.load_default(size=20)
    data = getattr(font, "font_bytes", None)
    if not isinstance(font, ImageFont.FreeTypeFont) or not data:
        pytest.skip("Pillow was built without FreeType support")
    return data


@pytest.fixture
def font_asset(font_bytes):
    """Create a FontAsset from the bundled font."""
    return FontAsset.from_bytes(font_bytes)


@pytest.fixture
def font_path(tmp_path, font_bytes):
    """Write the bundled font to a file."""
    path = tmp_path / "font.ttf"
    path.write_bytes(font_bytes)
    return path


@pytest.fixture
def source_image():
    """Create a solid RGB source image."""
    return Image.new("RGB", CANVAS_SIZE, BACKGROUND)


@pytest.fixture
def image_path(tmp_path, source_image):
    """Save the source image as PNG."""
    path = tmp_path / "photo.png"
    source_image.save(path)
    return path


@pytest.fixture
def gradient_image():
    """Create an RGB image with varied pixel data."""
    red = Image.linear_gradient("L")
    green = red.rotate(90)
    blue = red.transpose(Image.Transpose.FLIP_TOP_BOTTOM)
    return Image.merge("RGB", (red, green, blue))


# Helper functions that might be needed across multiple test files
def images_equal(img1, img2):
    """Compare two images and return True if they are identical."""
    return ImageChops.difference(img1, img2).getbbox() is None


def colors_in(img):
    """Return the set of distinct colors in an image."""
    return {color for _, color in img.getcolors(maxcolors=img.width * img.height)}
