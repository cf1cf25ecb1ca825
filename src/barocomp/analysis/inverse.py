"""
Inverse compensation: find a raw ADC value that reproduces a target reading.

The forward formulas have no closed-form inverse, so the raw domain is
searched by bisection with the forward path as oracle. This is meant for
generating and validating test data, not for the measurement path.

Precondition: the forward function must be monotonic over ``[low, high]``.
This is assumed, not verified. The direction is read from the forward values
at the two bounds unless ``increasing`` is given. With the example
calibration, temperature rises with the raw value while pressure falls.

A search that narrows to an interval of width 1 without meeting the
tolerance returns its last midpoint anyway. That is not an exception:
inspect :attr:`InverseResult.converged` / :attr:`InverseResult.error`.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional

from ..calibration.coefficients import CalibrationCoefficients
from ..core.compensation import compensate_pressure, compensate_temperature
from ..core.models import RAW_ADC_MAX, InverseResult, Linearization
from ..tools.debug import time_block

logger = logging.getLogger(__name__)

RAW_SEARCH_MIN = 0
RAW_SEARCH_MAX = 16_777_215  # 24-bit ADC ceiling

DEFAULT_TEMPERATURE_TOLERANCE_C = 0.01
DEFAULT_PRESSURE_TOLERANCE_PA = 10.0

# A 24-bit range bisects in 24 steps; the cap only guards odd bounds.
DEFAULT_MAX_ITERATIONS = 64

Forward = Callable[[int], float]


def _check_bounds(low: int, high: int) -> None:
    if low < 0 or high > RAW_ADC_MAX:
        raise ValueError(f"search bounds must lie within 0..{RAW_ADC_MAX}, got [{low}, {high}]")
    if high < low:
        raise ValueError(f"search bounds are inverted: [{low}, {high}]")


def bisect_raw(
    forward: Forward,
    target: float,
    tolerance: float,
    *,
    low: int = RAW_SEARCH_MIN,
    high: int = RAW_SEARCH_MAX,
    increasing: Optional[bool] = None,
    max_iterations: int = DEFAULT_MAX_ITERATIONS,
) -> InverseResult:
    """
    Bisect ``[low, high]`` for a raw value whose ``forward`` value is within
    ``tolerance`` of ``target``.

    Returns as soon as a midpoint lands strictly inside the tolerance.
    Otherwise the loop runs until the interval width reaches 1 (or
    ``max_iterations`` midpoints were tried) and the last midpoint is
    returned with ``converged == False``.
    """
    if not tolerance > 0:
        raise ValueError(f"tolerance must be > 0, got {tolerance}")
    if max_iterations < 1:
        raise ValueError(f"max_iterations must be >= 1, got {max_iterations}")
    lo, hi = int(low), int(high)
    _check_bounds(lo, hi)

    if increasing is None:
        increasing = forward(hi) >= forward(lo)

    mid = lo
    value: Optional[float] = None
    iterations = 0
    while hi - lo > 1 and iterations < max_iterations:
        mid = (lo + hi) // 2
        value = forward(mid)
        iterations += 1
        if abs(value - target) < tolerance:
            return InverseResult(mid, value, target, tolerance, iterations)
        if (value < target) == increasing:
            lo = mid
        else:
            hi = mid

    if value is None:
        value = forward(mid)
    result = InverseResult(mid, value, target, tolerance, iterations)
    logger.warning(
        "Raw search for target %.6g stopped at raw=%d with error %.6g (tolerance %.6g)",
        target,
        mid,
        result.error,
        tolerance,
    )
    return result


def inverse_temperature(
    target_c: float,
    coefficients: CalibrationCoefficients,
    tolerance: float = DEFAULT_TEMPERATURE_TOLERANCE_C,
    *,
    low: int = RAW_SEARCH_MIN,
    high: int = RAW_SEARCH_MAX,
    increasing: Optional[bool] = None,
    max_iterations: int = DEFAULT_MAX_ITERATIONS,
) -> InverseResult:
    """Find a raw temperature sample that compensates to ``target_c``."""

    def forward(raw: int) -> float:
        celsius, _ = compensate_temperature(raw, coefficients)
        return celsius

    with time_block(f"inverse_temperature({target_c})"):
        return bisect_raw(
            forward,
            target_c,
            tolerance,
            low=low,
            high=high,
            increasing=increasing,
            max_iterations=max_iterations,
        )


def inverse_pressure(
    target_pa: float,
    coefficients: CalibrationCoefficients,
    linearization: Linearization,
    tolerance: float = DEFAULT_PRESSURE_TOLERANCE_PA,
    *,
    low: int = RAW_SEARCH_MIN,
    high: int = RAW_SEARCH_MAX,
    increasing: Optional[bool] = None,
    max_iterations: int = DEFAULT_MAX_ITERATIONS,
) -> InverseResult:
    """
    Find a raw pressure sample that compensates to ``target_pa``.

    ``linearization`` must come from the temperature sample this pressure
    sample is meant to pair with.
    """

    def forward(raw: int) -> float:
        return compensate_pressure(raw, coefficients, linearization)

    with time_block(f"inverse_pressure({target_pa})"):
        return bisect_raw(
            forward,
            target_pa,
            tolerance,
            low=low,
            high=high,
            increasing=increasing,
            max_iterations=max_iterations,
        )


__all__ = [
    "DEFAULT_PRESSURE_TOLERANCE_PA",
    "DEFAULT_TEMPERATURE_TOLERANCE_C",
    "RAW_SEARCH_MAX",
    "RAW_SEARCH_MIN",
    "bisect_raw",
    "inverse_pressure",
    "inverse_temperature",
]
