"""Tests for config file loading."""
import pytest

from lgtm_stamp.config import DEFAULT, StampConfig, config_from_dict, load_config
from lgtm_stamp.const import CONFIG_ENV
from lgtm_stamp.exceptions import ConfigError
from lgtm_stamp.imagegen import AggregationPolicy, JpegOptions, PngOptions


def write_config(tmp_path, text):
    path = tmp_path / "stamp.yaml"
    path.write_text(text, encoding="utf-8")
    return path


def test_defaults():
    """Test no file means built-in defaults."""
    config = load_config()
    assert config == StampConfig()
    assert config.text == "LGTM"
    assert config.color == "#FFFFFF"
    assert config.size == 200
    assert config.x is None and config.y is None
    assert config.policy is AggregationPolicy.BBOX
    assert config_from_dict(DEFAULT) == StampConfig()


def test_file_values(tmp_path):
    """Test values from a YAML file override defaults."""
    path = write_config(tmp_path, """
text: SHIP IT
color: magenta
size: 64
font: /fonts/bold.ttf
x: -15
y: "+20"
policy: spread
antialias: false
""")
    config = load_config(path)

    assert config.text == "SHIP IT"
    assert config.color == "magenta"
    assert config.size == 64
    assert config.font == "/fonts/bold.ttf"
    assert config.x == -15
    assert config.y == 20
    assert config.policy is AggregationPolicy.SPREAD
    assert config.antialias is False


def test_encoder_options_merge(tmp_path):
    """Test partial encoder settings keep the other defaults."""
    path = write_config(tmp_path, """
encoders:
  png:
    compress_level: 9
  jpeg:
    quality: 90
""")
    config = load_config(path)

    assert config.encoders.png == PngOptions(compress_level=9)
    assert config.encoders.jpeg == JpegOptions(quality=90)
    assert config.encoders.gif == StampConfig().encoders.gif


def test_encoder_option_bounds(tmp_path):
    """Test encoder options at the ends of their ranges are accepted."""
    path = write_config(tmp_path, """
encoders:
  png: {compress_level: 0, compress_type: 4, optimize: true}
  jpeg: {quality: 0, subsampling: 2}
  gif: {optimize: true}
""")
    config = load_config(path)

    assert config.encoders.png == PngOptions(compress_level=0, compress_type=4, optimize=True)
    assert config.encoders.jpeg == JpegOptions(quality=0, subsampling=2)
    assert config.encoders.gif.optimize is True


def test_env_variable(tmp_path, monkeypatch):
    """Test the config file can be named by environment variable."""
    path = write_config(tmp_path, "color: cyan\n")
    monkeypatch.setenv(CONFIG_ENV, str(path))
    assert load_config().color == "cyan"


def test_empty_file(tmp_path):
    """Test an empty file yields defaults."""
    assert load_config(write_config(tmp_path, "")) == StampConfig()


def test_replace():
    """Test overrides produce a modified copy."""
    config = StampConfig(x=10)
    changed = config.replace(x=None, text="OK")
    assert changed.x is None
    assert changed.text == "OK"
    assert config.x == 10


@pytest.mark.parametrize("text", [
    "colour: red\n",
    "size: 0\n",
    "size: big\n",
    "size: true\n",
    "x: 12px\n",
    "policy: middle\n",
    "antialias: maybe\n",
    "font: 12\n",
    "encoders: []\n",
    "encoders:\n  tiff: {}\n",
    "encoders:\n  png: {level: 3}\n",
    "encoders:\n  png: 3\n",
    "encoders:\n  png: {compress_level: nine}\n",
    "encoders:\n  png: {compress_level: 10}\n",
    "encoders:\n  png: {compress_level: true}\n",
    "encoders:\n  png: {compress_type: 7}\n",
    "encoders:\n  png: {optimize: 1}\n",
    "encoders:\n  jpeg: {quality: high}\n",
    "encoders:\n  jpeg: {quality: 95.5}\n",
    "encoders:\n  jpeg: {quality: 101}\n",
    "encoders:\n  jpeg: {subsampling: 3}\n",
    "encoders:\n  gif: {optimize: yes please}\n",
    "encoders:\n  bmp: {quality: 90}\n",
    "- a list\n",
])
def test_invalid_config(tmp_path, text):
    """Test invalid values are reported as ConfigError."""
    with pytest.raises(ConfigError):
        load_config(write_config(tmp_path, text))


def test_invalid_yaml(tmp_path):
    """Test YAML syntax errors are reported on one line."""
    path = write_config(tmp_path, "text: [unclosed\n")
    with pytest.raises(ConfigError) as exc_info:
        load_config(path)
    message = str(exc_info.value)
    assert message.startswith(f"could not read config file {path}")
    assert "\n" not in message


def test_missing_file(tmp_path):
    """Test a missing config file is an error, not silently ignored."""
    with pytest.raises(ConfigError):
        load_config(tmp_path / "missing.yaml")
