"""Physical unit conversion: ``5km to miles``, ``100f to c``, ``2 cups in ml``."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, Optional

from contour_engine.core.models import UnitResult
from contour_engine.services.detectors.common import format_measure, parse_number


@dataclass(slots=True, frozen=True)
class LinearUnit:
    """A unit convertible to its category's base unit by a constant factor."""

    names: tuple[str, ...]
    label: str
    category: str
    factor: float

    def to_base(self, value: float) -> float:
        return value * self.factor

    def from_base(self, value: float) -> float:
        return value / self.factor


@dataclass(slots=True, frozen=True)
class TemperatureUnit:
    """A temperature scale expressed through Celsius."""

    names: tuple[str, ...]
    label: str
    to_celsius: Callable[[float], float]
    from_celsius: Callable[[float], float]


def _unit(names: str, label: str, category: str, factor: float) -> LinearUnit:
    return LinearUnit(tuple(names.split("|")), label, category, factor)


UNITS: tuple[LinearUnit, ...] = (
    _unit("km|kilometer|kilometers|kilometre|kilometres", "km", "length", 1000),
    _unit("m|meter|meters|metre|metres", "m", "length", 1),
    _unit("cm|centimeter|centimeters|centimetre|centimetres", "cm", "length", 0.01),
    _unit("mm|millimeter|millimeters|millimetre|millimetres", "mm", "length", 0.001),
    _unit("mi|mile|miles", "miles", "length", 1609.344),
    _unit("yd|yard|yards", "yards", "length", 0.9144),
    _unit("ft|foot|feet", "ft", "length", 0.3048),
    _unit("in|inch|inches", "in", "length", 0.0254),
    _unit("nm|nautical mile|nautical miles|nmi", "nmi", "length", 1852),
    _unit("kg|kilogram|kilograms|kilo|kilos", "kg", "weight", 1000),
    _unit("g|gram|grams", "g", "weight", 1),
    _unit("mg|milligram|milligrams", "mg", "weight", 0.001),
    _unit("lb|lbs|pound|pounds", "lbs", "weight", 453.592),
    _unit("oz|ounce|ounces", "oz", "weight", 28.3495),
    _unit("st|stone|stones", "stone", "weight", 6350.29),
    _unit("t|ton|tons|tonne|tonnes", "tonnes", "weight", 1e6),
    _unit("l|liter|liters|litre|litres", "L", "volume", 1),
    _unit("ml|milliliter|milliliters|millilitre|millilitres", "mL", "volume", 0.001),
    _unit("gal|gallon|gallons", "gal", "volume", 3.78541),
    _unit("qt|quart|quarts", "qt", "volume", 0.946353),
    _unit("pt|pint|pints", "pt", "volume", 0.473176),
    _unit("cup|cups", "cups", "volume", 0.236588),
    _unit("floz|fl oz|fluid ounce|fluid ounces", "fl oz", "volume", 0.0295735),
    _unit("tbsp|tablespoon|tablespoons", "tbsp", "volume", 0.0147868),
    _unit("tsp|teaspoon|teaspoons", "tsp", "volume", 0.00492892),
    _unit("kmh|km/h|kph|kmph", "km/h", "speed", 1 / 3.6),
    _unit("mph", "mph", "speed", 0.44704),
    _unit("m/s|ms", "m/s", "speed", 1),
    _unit("knot|knots|kn|kt", "knots", "speed", 0.514444),
    _unit("sqm|sq m|m2|m²|square meter|square meters|square metre", "m²", "area", 1),
    _unit("sqft|sq ft|ft2|ft²|square foot|square feet", "ft²", "area", 0.092903),
    _unit("sqkm|sq km|km2|km²|square kilometer|square kilometre", "km²", "area", 1e6),
    _unit("sqmi|sq mi|mi2|mi²|square mile|square miles", "mi²", "area", 2.59e6),
    _unit("acre|acres|ac", "acres", "area", 4046.86),
    _unit("hectare|hectares|ha", "ha", "area", 10000),
    _unit("b|byte|bytes", "B", "data", 1),
    _unit("kb|kilobyte|kilobytes", "KB", "data", 1024),
    _unit("mb|megabyte|megabytes", "MB", "data", 1048576),
    _unit("gb|gigabyte|gigabytes", "GB", "data", 1073741824),
    _unit("tb|terabyte|terabytes", "TB", "data", 1099511627776),
)

TEMPERATURE_UNITS: tuple[TemperatureUnit, ...] = (
    TemperatureUnit(("c", "celsius", "°c", "degc"), "°C", lambda v: v, lambda v: v),
    TemperatureUnit(
        ("f", "fahrenheit", "°f", "degf"),
        "°F",
        lambda v: (v - 32) * 5 / 9,
        lambda v: v * 9 / 5 + 32,
    ),
    TemperatureUnit(("k", "kelvin", "°k"), "K", lambda v: v - 273.15, lambda v: v + 273.15),
)

CATEGORY_LABELS: dict[str, str] = {
    "length": "Length",
    "weight": "Weight",
    "volume": "Volume",
    "speed": "Speed",
    "area": "Area",
    "data": "Data",
    "temperature": "Temperature",
}


def find_unit(name: str) -> Optional[LinearUnit]:
    lower = name.lower()
    return next((unit for unit in UNITS if lower in unit.names), None)


def find_temperature_unit(name: str) -> Optional[TemperatureUnit]:
    lower = name.lower()
    return next((unit for unit in TEMPERATURE_UNITS if lower in unit.names), None)


_ALL_NAMES = sorted(
    [name for unit in UNITS for name in unit.names]
    + [name for unit in TEMPERATURE_UNITS for name in unit.names],
    key=len,
    reverse=True,
)
_UNIT = "|".join(re.escape(name) for name in _ALL_NAMES)
_NUMBER = r"(-?[\d.,]+)"

FULL_PATTERN = re.compile(
    rf"^{_NUMBER}\s*({_UNIT})\s+(?:to|in|as|=)\s+({_UNIT})\s*$", re.IGNORECASE
)
PARTIAL_PATTERN = re.compile(rf"^{_NUMBER}\s*({_UNIT})\s+(?:to|in|as|=)\s*$", re.IGNORECASE)
TYPING_PATTERN = re.compile(rf"^{_NUMBER}\s*({_UNIT})\s+(?:to|in)$", re.IGNORECASE)


def _conversion(
    value: float,
    from_name: str,
    from_label: str,
    converted: float,
    to_name: str,
    to_label: str,
) -> UnitResult:
    return UnitResult(
        from_value=value,
        from_unit=from_name,
        from_label=from_label,
        to_value=converted,
        to_unit=to_name,
        to_label=to_label,
        display=f"{format_measure(value)} {from_label} = {format_measure(converted)} {to_label}",
    )


def _convert_names(value: float, from_name: str, to_name: str) -> Optional[UnitResult]:
    from_temp = find_temperature_unit(from_name)
    to_temp = find_temperature_unit(to_name)
    if from_temp and to_temp:
        converted = to_temp.from_celsius(from_temp.to_celsius(value))
        return _conversion(value, from_name, from_temp.label, converted, to_name, to_temp.label)

    from_unit = find_unit(from_name)
    to_unit = find_unit(to_name)
    if from_unit and to_unit and from_unit.category == to_unit.category:
        converted = to_unit.from_base(from_unit.to_base(value))
        return _conversion(value, from_name, from_unit.label, converted, to_name, to_unit.label)
    return None


def detect_units(text: str) -> Optional[UnitResult]:
    """Detect ``<number><unit> to|in|as|= <unit>`` or its typing prefix."""
    trimmed = text.strip()

    match = FULL_PATTERN.match(trimmed)
    if match:
        value = parse_number(match.group(1))
        if value is None:
            return None
        result = _convert_names(value, match.group(2), match.group(3))
        if result is not None:
            return result

    match = PARTIAL_PATTERN.match(trimmed) or TYPING_PATTERN.match(trimmed)
    if match:
        value = parse_number(match.group(1))
        if value is None:
            return None
        from_name = match.group(2)
        known = find_temperature_unit(from_name) or find_unit(from_name)
        label = known.label if known else from_name
        return UnitResult(
            from_value=value,
            from_unit=from_name,
            from_label=label,
            to_value=0,
            to_unit="",
            to_label="...",
            display=f"{format_measure(value)} {label} = ...",
            is_partial=True,
        )
    return None


def get_suggestions(unit_name: str) -> list[str]:
    """Labels of other units in the same category (at most four linear ones)."""
    temp = find_temperature_unit(unit_name)
    if temp:
        return [other.label for other in TEMPERATURE_UNITS if other is not temp]
    unit = find_unit(unit_name)
    if unit:
        return [
            other.label for other in UNITS if other.category == unit.category and other is not unit
        ][:4]
    return []


def get_units_for_category(category: str) -> list[dict[str, object]]:
    if category == "temperature":
        return [{"label": unit.label, "names": list(unit.names)} for unit in TEMPERATURE_UNITS]
    return [
        {"label": unit.label, "names": list(unit.names)}
        for unit in UNITS
        if unit.category == category
    ]


def get_unit_categories() -> list[dict[str, object]]:
    """Categories in declaration order, temperature last."""
    categories: list[str] = []
    for unit in UNITS:
        if unit.category not in categories:
            categories.append(unit.category)
    categories.append("temperature")
    return [
        {
            "id": category,
            "label": CATEGORY_LABELS.get(category, category),
            "units": get_units_for_category(category),
        }
        for category in categories
    ]


def convert_units(value: float, from_label: str, to_label: str) -> Optional[UnitResult]:
    """Convert between two unit labels (``"km"``, ``"°F"``) without parsing text."""
    from_unit = next((u for u in UNITS if u.label == from_label), None)
    to_unit = next((u for u in UNITS if u.label == to_label), None)
    if from_unit and to_unit and from_unit.category == to_unit.category:
        converted = to_unit.from_base(from_unit.to_base(value))
        return _conversion(
            value, from_unit.names[0], from_unit.label, converted, to_unit.names[0], to_unit.label
        )

    from_temp = next((u for u in TEMPERATURE_UNITS if u.label == from_label), None)
    to_temp = next((u for u in TEMPERATURE_UNITS if u.label == to_label), None)
    if from_temp and to_temp:
        converted = to_temp.from_celsius(from_temp.to_celsius(value))
        return _conversion(
            value, from_temp.names[0], from_temp.label, converted, to_temp.names[0], to_temp.label
        )
    return None


__all__ = [
    "CATEGORY_LABELS",
    "TEMPERATURE_UNITS",
    "UNITS",
    "convert_units",
    "detect_units",
    "find_temperature_unit",
    "find_unit",
    "get_suggestions",
    "get_unit_categories",
    "get_units_for_category",
]
