"""Barometric altitude from compensated pressure."""

from __future__ import annotations

import logging
import math

logger = logging.getLogger(__name__)

DEFAULT_SEA_LEVEL_PA = 101325.0

# International barometric formula as used by the BMP3xx reference code.
ALTITUDE_SCALE_M = 44330.0
ALTITUDE_EXPONENT = 0.1903


def altitude(pressure_pa: float, sea_level_pa: float = DEFAULT_SEA_LEVEL_PA) -> float:
    """
    Return altitude in meters for ``pressure_pa``.

    ``44330 * (1 - (p / p0) ** 0.1903)``. A pressure equal to the reference
    gives 0 m. Non-positive (or NaN) pressure has no physical altitude and
    returns ``nan`` instead of a finite value.
    """
    if not sea_level_pa > 0:
        raise ValueError(f"sea_level_pa must be > 0, got {sea_level_pa}")

    pressure = float(pressure_pa)
    if not pressure > 0:
        logger.debug("No altitude for non-positive pressure %r Pa", pressure_pa)
        return math.nan

    return ALTITUDE_SCALE_M * (1.0 - (pressure / sea_level_pa) ** ALTITUDE_EXPONENT)
