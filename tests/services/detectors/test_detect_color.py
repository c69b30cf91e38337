"""Tests for color detection and conversion."""

import pytest

from contour_engine.services.detectors.color import (
    color_from_rgb,
    detect_color,
    hex_to_rgb,
    hsl_to_rgb,
    rgb_to_hex,
    rgb_to_hsl,
)


def test_hex_input():
    """Six-digit hex codes convert to rgb and hsl."""
    result = detect_color("#ff5733")
    assert result is not None
    assert result.hex == "#FF5733"
    assert result.rgb == (255, 87, 51)
    assert result.hsl == (11, 100, 60)
    assert result.css_color == "#ff5733"
    assert result.display == "#FF5733 · rgb(255, 87, 51) · hsl(11°, 100%, 60%)"


@pytest.mark.parametrize(
    "text, rgb",
    [
        ("#f00", (255, 0, 0)),
        ("#00ff0080", (0, 255, 0)),
        ("rgb(0, 0, 255)", (0, 0, 255)),
        ("rgba(10,20,30,0.5)", (10, 20, 30)),
        ("hsl(0, 100%, 50%)", (255, 0, 0)),
        ("Red", (255, 0, 0)),
    ],
)
def test_accepted_forms(text, rgb):
    """Short hex, alpha hex, rgb(a), hsl and names are recognized."""
    result = detect_color(text)
    assert result is not None
    assert result.rgb == rgb


@pytest.mark.parametrize("text", ["#ggg", "rgb(300, 0, 0)", "hsl(400, 10%, 10%)", "reddish", "", "#12345"])
def test_rejected_forms(text):
    """Out-of-range channels and unknown names are not colors."""
    assert detect_color(text) is None


def test_conversion_helpers():
    """Channel helpers agree with each other."""
    assert hex_to_rgb("#abc") == (170, 187, 204)
    assert rgb_to_hex(300, -1, 16) == "#ff0010"
    assert rgb_to_hsl(128, 128, 128) == (0, 0, 50)
    assert hsl_to_rgb(120, 100, 25) == (0, 128, 0)


def test_color_from_rgb_uses_hex_as_input():
    """Picker-built colors echo their hex code."""
    result = color_from_rgb(0, 128, 0)
    assert result.input == "#008000"
    assert result.css_color == "#008000"
