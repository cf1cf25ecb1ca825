"""Unit conversions for compensated readings."""

from __future__ import annotations

FEET_PER_METER = 3.28084


def celsius_to_fahrenheit(celsius: float) -> float:
    return celsius * 1.8 + 32.0


def pascal_to_hectopascal(pascals: float) -> float:
    return pascals / 100.0


def meters_to_feet(meters: float) -> float:
    return meters * FEET_PER_METER
