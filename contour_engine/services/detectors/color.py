"""Color notation detection: hex, rgb(), hsl() and CSS color names."""

from __future__ import annotations

import math
import re
from typing import Optional

from contour_engine.core.models import ColorResult

NAMED_COLORS: dict[str, str] = {
    "red": "#ff0000",
    "blue": "#0000ff",
    "green": "#008000",
    "yellow": "#ffff00",
    "orange": "#ffa500",
    "purple": "#800080",
    "pink": "#ffc0cb",
    "white": "#ffffff",
    "black": "#000000",
    "gray": "#808080",
    "grey": "#808080",
    "cyan": "#00ffff",
    "magenta": "#ff00ff",
    "lime": "#00ff00",
    "maroon": "#800000",
    "navy": "#000080",
    "olive": "#808000",
    "teal": "#008080",
    "aqua": "#00ffff",
    "coral": "#ff7f50",
    "crimson": "#dc143c",
    "gold": "#ffd700",
    "indigo": "#4b0082",
    "ivory": "#fffff0",
    "khaki": "#f0e68c",
    "lavender": "#e6e6fa",
    "salmon": "#fa8072",
    "silver": "#c0c0c0",
    "skyblue": "#87ceeb",
    "tomato": "#ff6347",
    "turquoise": "#40e0d0",
    "violet": "#ee82ee",
    "wheat": "#f5deb3",
    "chocolate": "#d2691e",
    "firebrick": "#b22222",
    "orchid": "#da70d6",
    "plum": "#dda0dd",
    "sienna": "#a0522d",
    "tan": "#d2b48c",
    "thistle": "#d8bfd8",
}

COLOR_PRESETS: tuple[tuple[str, str], ...] = (
    ("Red", "#FF0000"),
    ("Coral", "#FF7F50"),
    ("Orange", "#FFA500"),
    ("Gold", "#FFD700"),
    ("Green", "#008000"),
    ("Cyan", "#00FFFF"),
    ("Blue", "#0000FF"),
    ("Purple", "#800080"),
    ("Pink", "#FFC0CB"),
    ("Crimson", "#DC143C"),
)

HEX_PATTERN = re.compile(r"^#([0-9a-fA-F]{3}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8})$")
RGB_PATTERN = re.compile(
    r"^rgba?\(\s*(\d{1,3})\s*,\s*(\d{1,3})\s*,\s*(\d{1,3})\s*(?:,\s*[\d.]+\s*)?\)$",
    re.IGNORECASE,
)
HSL_PATTERN = re.compile(
    r"^hsla?\(\s*(\d{1,3})\s*,\s*(\d{1,3})%\s*,\s*(\d{1,3})%\s*(?:,\s*[\d.]+\s*)?\)$",
    re.IGNORECASE,
)

RGB = tuple[int, int, int]


def _round(value: float) -> int:
    return math.floor(value + 0.5)


def hex_to_rgb(hex_value: str) -> Optional[RGB]:
    """Parse ``#rgb``, ``#rrggbb`` or ``#rrggbbaa`` (alpha is dropped)."""
    digits = hex_value.lstrip("#")
    if len(digits) == 3:
        digits = "".join(ch * 2 for ch in digits)
    if len(digits) == 8:
        digits = digits[:6]
    if len(digits) != 6:
        return None
    try:
        return int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16)
    except ValueError:
        return None


def rgb_to_hex(r: int, g: int, b: int) -> str:
    return "#" + "".join(f"{max(0, min(255, v)):02x}" for v in (r, g, b))


def rgb_to_hsl(r: int, g: int, b: int) -> RGB:
    rf, gf, bf = r / 255, g / 255, b / 255
    high = max(rf, gf, bf)
    low = min(rf, gf, bf)
    lightness = (high + low) / 2
    hue = saturation = 0.0
    if high != low:
        delta = high - low
        saturation = delta / (2 - high - low) if lightness > 0.5 else delta / (high + low)
        if high == rf:
            hue = ((gf - bf) / delta + (6 if gf < bf else 0)) / 6
        elif high == gf:
            hue = ((bf - rf) / delta + 2) / 6
        else:
            hue = ((rf - gf) / delta + 4) / 6
    return _round(hue * 360), _round(saturation * 100), _round(lightness * 100)


def _hue_to_rgb(p: float, q: float, t: float) -> float:
    if t < 0:
        t += 1
    if t > 1:
        t -= 1
    if t < 1 / 6:
        return p + (q - p) * 6 * t
    if t < 1 / 2:
        return q
    if t < 2 / 3:
        return p + (q - p) * (2 / 3 - t) * 6
    return p


def hsl_to_rgb(h: int, s: int, lightness: int) -> RGB:
    hf, sf, lf = h / 360, s / 100, lightness / 100
    if sf == 0:
        value = _round(lf * 255)
        return value, value, value
    q = lf * (1 + sf) if lf < 0.5 else lf + sf - lf * sf
    p = 2 * lf - q
    return (
        _round(_hue_to_rgb(p, q, hf + 1 / 3) * 255),
        _round(_hue_to_rgb(p, q, hf) * 255),
        _round(_hue_to_rgb(p, q, hf - 1 / 3) * 255),
    )


def _build(rgb: RGB, source: str) -> ColorResult:
    css = rgb_to_hex(*rgb)
    hex_upper = css.upper()
    hsl = rgb_to_hsl(*rgb)
    r, g, b = rgb
    return ColorResult(
        hex=hex_upper,
        rgb=rgb,
        hsl=hsl,
        display=f"{hex_upper} · rgb({r}, {g}, {b}) · hsl({hsl[0]}°, {hsl[1]}%, {hsl[2]}%)",
        input=source,
        css_color=css,
    )


def color_from_rgb(r: int, g: int, b: int) -> ColorResult:
    """Build a result from raw channels, e.g. for a color picker."""
    result = _build((r, g, b), "")
    return ColorResult(
        hex=result.hex,
        rgb=result.rgb,
        hsl=result.hsl,
        display=result.display,
        input=result.hex,
        css_color=result.hex,
    )


def _parse(text: str) -> Optional[RGB]:
    if HEX_PATTERN.match(text):
        return hex_to_rgb(text)

    match = RGB_PATTERN.match(text)
    if match:
        channels = tuple(int(group) for group in match.groups())
        if all(channel <= 255 for channel in channels):
            return channels  # type: ignore[return-value]

    match = HSL_PATTERN.match(text)
    if match:
        h, s, lightness = (int(group) for group in match.groups())
        if h <= 360 and s <= 100 and lightness <= 100:
            return hsl_to_rgb(h, s, lightness)

    named = NAMED_COLORS.get(text.lower())
    if named:
        return hex_to_rgb(named)
    return None


def detect_color(text: str) -> Optional[ColorResult]:
    trimmed = text.strip()
    if not trimmed:
        return None
    rgb = _parse(trimmed)
    if rgb is None:
        return None
    return _build(rgb, trimmed)


__all__ = [
    "COLOR_PRESETS",
    "NAMED_COLORS",
    "color_from_rgb",
    "detect_color",
    "hex_to_rgb",
    "hsl_to_rgb",
    "rgb_to_hex",
    "rgb_to_hsl",
]
