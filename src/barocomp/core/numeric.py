"""Numeric helpers shared by the scalar and NumPy compensation paths."""

from __future__ import annotations

from typing import TypeVar

T = TypeVar("T")

# Bosch's pow_bmp3 takes the exponent as an unsigned byte.
MAX_POWER = 255


def bounded_pow(base: T, power: int) -> T:
    """
    Raise ``base`` to a small non-negative integer ``power``.

    Multiplies step by step starting from 1.0, the way the manufacturer's
    ``pow_bmp3`` helper does, so results match the Bosch API bit for bit
    (``x ** 3`` may round differently). Works for floats and NumPy arrays.
    """
    if not 0 <= power <= MAX_POWER:
        raise ValueError(f"power must be within 0..{MAX_POWER}, got {power}")
    result = 1.0
    for _ in range(power):
        result = result * base
    return result
