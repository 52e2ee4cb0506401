"""Tests for text layout."""
import pytest

from lgtm_stamp.imagegen import AggregationPolicy, Glyph, LayoutEngine, Origin, TextMetrics, parse_coordinate


def make_metrics(*boxes):
    """Build TextMetrics from (width, height) pairs."""
    return TextMetrics(glyphs=tuple(
        Glyph(char="x", width=width, height=height, advance=float(width))
        for width, height in boxes
    ))


@pytest.mark.parametrize("value, expected", [
    ("auto", None),
    ("AUTO", None),
    (None, None),
    ("+12", 12),
    ("-7", -7),
    ("3", 3),
    (" 40 ", 40),
    (-15, -15),
    (0, 0),
])
def test_parse_coordinate(value, expected):
    """Test accepted x/y values."""
    assert parse_coordinate(value) == expected


@pytest.mark.parametrize("value", ["12px", "", "+", "1.5", "center", "--3", True])
def test_parse_coordinate_invalid(value):
    """Test values that are neither auto nor a signed integer."""
    with pytest.raises(ValueError):
        parse_coordinate(value)


def test_text_filling_canvas_starts_at_zero():
    """Test text as large as the image is placed at the origin."""
    metrics = make_metrics((40, 50), (60, 50))
    assert LayoutEngine().place(metrics, 100, 50) == Origin(0, 0)


def test_center_uses_floor_division():
    """Test odd sizes round down on each half."""
    metrics = make_metrics((5, 11), (6, 9))
    # 101 // 2 - 11 // 2, 51 // 2 - 11 // 2
    assert LayoutEngine().place(metrics, 101, 51) == Origin(45, 20)


def test_empty_text_centers_on_canvas():
    """Test no glyphs yields the canvas center."""
    assert LayoutEngine().place(TextMetrics(), 300, 200) == Origin(150, 100)


def test_x_override_keeps_auto_y():
    """Test an explicit x leaves the centered y untouched."""
    engine = LayoutEngine()
    metrics = make_metrics((30, 20), (30, 20))
    auto = engine.place(metrics, 300, 200)
    origin = engine.place(metrics, 300, 200, x_override=17)

    assert origin.x == 17
    assert origin.y == auto.y


def test_y_override_keeps_auto_x():
    """Test an explicit y leaves the centered x untouched."""
    engine = LayoutEngine()
    metrics = make_metrics((30, 20), (30, 20))
    auto = engine.place(metrics, 300, 200)
    origin = engine.place(metrics, 300, 200, y_override=-4)

    assert origin == Origin(auto.x, -4)


def test_overrides_may_leave_canvas():
    """Test coordinates outside the canvas are not an error."""
    metrics = make_metrics((30, 20))
    assert LayoutEngine().place(metrics, 100, 100, -500, 900) == Origin(-500, 900)


def test_text_wider_than_canvas_goes_negative():
    """Test oversize text is centered with a negative origin."""
    metrics = make_metrics((150, 80), (150, 80))
    assert LayoutEngine().place(metrics, 100, 40) == Origin(-100, -20)


def test_spread_policy():
    """Test the spread policy centers on max-minus-min extents."""
    metrics = make_metrics((10, 30), (50, 40), (30, 35))
    assert metrics.width_spread == 40
    assert metrics.height_spread == 10

    engine = LayoutEngine(AggregationPolicy.SPREAD)
    assert engine.place(metrics, 200, 100) == Origin(100 - 20, 50 - 5)


def test_bbox_policy_is_default():
    """Test the default policy sums widths and takes the tallest glyph."""
    metrics = make_metrics((10, 30), (50, 40), (30, 35))
    assert metrics.extent(AggregationPolicy.BBOX) == (90, 40)
    assert LayoutEngine().policy is AggregationPolicy.BBOX
    assert LayoutEngine().place(metrics, 200, 100) == Origin(100 - 45, 50 - 20)


def test_policy_accepts_string_value():
    """Test policies can be given by their string value."""
    assert LayoutEngine("spread").policy is AggregationPolicy.SPREAD
