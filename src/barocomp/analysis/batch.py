"""Vectorized compensation over arrays of raw samples."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Tuple

import numpy as np
from numpy.typing import ArrayLike

from ..calibration.coefficients import CalibrationCoefficients
from ..core.models import RAW_ADC_MAX
from ..core.numeric import bounded_pow
from ..tools.debug import time_block
from ..core.altitude import ALTITUDE_EXPONENT, ALTITUDE_SCALE_M, DEFAULT_SEA_LEVEL_PA


@dataclass
class BatchReadings:
    """Column-oriented compensation results, one entry per raw sample."""

    raw_temperature: np.ndarray
    raw_pressure: np.ndarray
    temperature_c: np.ndarray
    pressure_pa: np.ndarray
    altitude_m: np.ndarray

    def __len__(self) -> int:
        return int(self.temperature_c.shape[0])

    def rows(self) -> Iterator[Tuple[int, int, float, float, float]]:
        for i in range(len(self)):
            yield (
                int(self.raw_temperature[i]),
                int(self.raw_pressure[i]),
                float(self.temperature_c[i]),
                float(self.pressure_pa[i]),
                float(self.altitude_m[i]),
            )


def _to_raw_array(values: ArrayLike, name: str) -> np.ndarray:
    """
    Convert raw ADC input to a 1-D float64 array.

    Accepts the same values as :func:`barocomp.core.models.check_raw_adc`:
    integers, or integral floats, within the u32 domain.
    """
    arr = np.asarray(values)
    if arr.ndim != 1:
        raise ValueError(f"{name} must be 1-D, got shape {arr.shape}")
    if np.issubdtype(arr.dtype, np.floating):
        if not np.all(np.isfinite(arr)):
            raise ValueError(f"{name} contains non-finite values")
        if not np.all(np.mod(arr, 1) == 0):
            raise ValueError(f"{name} contains fractional ADC values")
    elif arr.dtype == np.bool_ or not np.issubdtype(arr.dtype, np.integer):
        raise ValueError(f"{name} must hold integer ADC values, got dtype {arr.dtype}")
    if arr.size and (arr.min() < 0 or arr.max() > RAW_ADC_MAX):
        raise ValueError(f"{name} values must be within 0..{RAW_ADC_MAX}")
    return arr.astype(np.float64)


def temperature_array(raw_temperature: ArrayLike, coefficients: CalibrationCoefficients) -> np.ndarray:
    """
    Compensate an array of raw temperatures.

    The result doubles as the per-sample linearization array fed to
    :func:`pressure_array`.
    """
    raw = _to_raw_array(raw_temperature, "raw_temperature")
    c = coefficients
    partial_data1 = raw - c.par_t1
    partial_data2 = partial_data1 * c.par_t2
    return partial_data2 + (partial_data1 * partial_data1) * c.par_t3


def pressure_array(
    raw_pressure: ArrayLike,
    coefficients: CalibrationCoefficients,
    t_lin: ArrayLike,
) -> np.ndarray:
    """Compensate raw pressures against the matching linearization values."""
    raw = _to_raw_array(raw_pressure, "raw_pressure")
    t = np.asarray(t_lin, dtype=np.float64)
    if t.shape != raw.shape:
        raise ValueError(
            f"t_lin shape {t.shape} does not match raw_pressure shape {raw.shape}"
        )
    c = coefficients

    partial_data1 = c.par_p6 * t
    partial_data2 = c.par_p7 * bounded_pow(t, 2)
    partial_data3 = c.par_p8 * bounded_pow(t, 3)
    offset = c.par_p5 + partial_data1 + partial_data2 + partial_data3

    partial_data1 = c.par_p2 * t
    partial_data2 = c.par_p3 * bounded_pow(t, 2)
    partial_data3 = c.par_p4 * bounded_pow(t, 3)
    sensitivity = raw * (c.par_p1 + partial_data1 + partial_data2 + partial_data3)

    partial_data1 = bounded_pow(raw, 2)
    partial_data2 = c.par_p9 + c.par_p10 * t
    partial_data3 = partial_data1 * partial_data2
    higher_order = partial_data3 + bounded_pow(raw, 3) * c.par_p11

    return offset + sensitivity + higher_order


def altitude_array(pressure_pa: ArrayLike, sea_level_pa: float = DEFAULT_SEA_LEVEL_PA) -> np.ndarray:
    """Altitude per sample; non-positive pressures map to ``nan``."""
    if not sea_level_pa > 0:
        raise ValueError(f"sea_level_pa must be > 0, got {sea_level_pa}")
    p = np.asarray(pressure_pa, dtype=np.float64)
    valid = p > 0
    ratio = np.where(valid, p, sea_level_pa) / sea_level_pa
    alt = ALTITUDE_SCALE_M * (1.0 - np.power(ratio, ALTITUDE_EXPONENT))
    return np.where(valid, alt, np.nan)


def compensate_batch(
    raw_temperature: ArrayLike,
    raw_pressure: ArrayLike,
    coefficients: CalibrationCoefficients,
    *,
    sea_level_pa: float = DEFAULT_SEA_LEVEL_PA,
) -> BatchReadings:
    """
    Compensate paired raw sample arrays.

    Element ``i`` of the result equals what the scalar path returns for
    ``RawSample(raw_temperature[i], raw_pressure[i])``.
    """
    raw_t = np.asarray(raw_temperature)
    raw_p = np.asarray(raw_pressure)
    if raw_t.shape != raw_p.shape:
        raise ValueError(
            f"raw_temperature shape {raw_t.shape} does not match raw_pressure shape {raw_p.shape}"
        )

    with time_block(f"compensate_batch[{raw_t.size}]"):
        temperature_c = temperature_array(raw_t, coefficients)
        pressure_pa = pressure_array(raw_p, coefficients, temperature_c)
        altitude_m = altitude_array(pressure_pa, sea_level_pa)

    return BatchReadings(
        raw_temperature=raw_t.astype(np.int64),
        raw_pressure=raw_p.astype(np.int64),
        temperature_c=temperature_c,
        pressure_pa=pressure_pa,
        altitude_m=altitude_m,
    )


def compensate_samples(
    samples: ArrayLike,
    coefficients: CalibrationCoefficients,
    *,
    sea_level_pa: float = DEFAULT_SEA_LEVEL_PA,
) -> BatchReadings:
    """
    Compensate an ``(n, 2)`` array of ``[temperature_adc, pressure_adc]`` rows,
    such as :func:`barocomp.dataio.log_loader.load_raw_samples` returns.
    """
    arr = np.asarray(samples)
    if arr.ndim != 2 or arr.shape[1] != 2:
        raise ValueError(f"samples must have shape (n, 2), got {arr.shape}")
    return compensate_batch(arr[:, 0], arr[:, 1], coefficients, sea_level_pa=sea_level_pa)
