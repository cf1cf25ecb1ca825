"""Shared dataclasses for raw samples, readings, and search results."""

from __future__ import annotations

import operator
from dataclasses import dataclass
from typing import Optional

from .altitude import DEFAULT_SEA_LEVEL_PA, altitude
from .units import celsius_to_fahrenheit, pascal_to_hectopascal

# ADC samples travel as unsigned 32-bit words.
RAW_ADC_MAX = 0xFFFF_FFFF


def check_raw_adc(name: str, value: int) -> int:
    """Return ``value`` as an int, rejecting values outside the u32 domain."""
    try:
        raw = operator.index(value)
    except TypeError as exc:
        raise ValueError(f"{name} must be an integer, got {value!r}") from exc
    if raw < 0 or raw > RAW_ADC_MAX:
        raise ValueError(f"{name} must be within 0..{RAW_ADC_MAX}, got {raw}")
    return raw


@dataclass(frozen=True)
class Linearization:
    """
    Temperature linearization value (``t_lin``) for one sample pair.

    Only :func:`barocomp.core.compensation.compensate_temperature` creates
    these; pressure compensation takes one explicitly, so the pairing of a
    pressure sample with its temperature sample is visible at the call site.
    """

    t_lin: float


@dataclass(frozen=True)
class RawSample:
    temperature: int
    pressure: int
    timestamp_ns: Optional[int] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "temperature", check_raw_adc("temperature", self.temperature))
        object.__setattr__(self, "pressure", check_raw_adc("pressure", self.pressure))


@dataclass(frozen=True)
class CompensatedReading:
    temperature_c: float
    pressure_pa: float

    @property
    def temperature_f(self) -> float:
        return celsius_to_fahrenheit(self.temperature_c)

    @property
    def pressure_hpa(self) -> float:
        return pascal_to_hectopascal(self.pressure_pa)

    def altitude_m(self, sea_level_pa: float = DEFAULT_SEA_LEVEL_PA) -> float:
        return altitude(self.pressure_pa, sea_level_pa)


@dataclass(frozen=True)
class InverseResult:
    """
    Outcome of a raw-value search.

    ``value`` is the forward-compensated reading at ``raw`` and ``error`` its
    absolute distance from ``target``. A search that ran out of interval
    before reaching ``tolerance`` still returns its last midpoint; check
    :attr:`converged` before trusting ``raw``.
    """

    raw: int
    value: float
    target: float
    tolerance: float
    iterations: int

    @property
    def error(self) -> float:
        return abs(self.value - self.target)

    @property
    def converged(self) -> bool:
        return self.error < self.tolerance
