"""
Forward compensation: raw ADC samples to degrees Celsius and Pascals.

The formulas follow the floating point compensation of the Bosch BMP3 sensor
API. Temperature runs first and yields a :class:`Linearization` which the
paired pressure compensation takes as an argument::

    celsius, lin = compensate_temperature(sample.temperature, coeffs)
    pascals = compensate_pressure(sample.pressure, coeffs, lin)

Operation order is kept identical to the Bosch API so rounding matches it.
No input in the u32 domain is an error; samples outside the sensor's rated
range simply give physically meaningless readings.
"""

from __future__ import annotations

from typing import Tuple

from ..calibration.coefficients import CalibrationCoefficients
from .models import CompensatedReading, Linearization, RawSample, check_raw_adc
from .numeric import bounded_pow


def compensate_temperature(
    raw_temperature: int, coefficients: CalibrationCoefficients
) -> Tuple[float, Linearization]:
    """
    Compensate a raw temperature sample.

    Returns ``(celsius, linearization)``; the two are numerically identical,
    the token is what :func:`compensate_pressure` needs for the paired
    pressure sample.
    """
    raw = check_raw_adc("raw_temperature", raw_temperature)
    c = coefficients

    partial_data1 = float(raw) - c.par_t1
    partial_data2 = partial_data1 * c.par_t2
    t_lin = partial_data2 + (partial_data1 * partial_data1) * c.par_t3

    return t_lin, Linearization(t_lin)


def compensate_pressure(
    raw_pressure: int,
    coefficients: CalibrationCoefficients,
    linearization: Linearization,
) -> float:
    """Compensate a raw pressure sample into Pascals."""
    raw = float(check_raw_adc("raw_pressure", raw_pressure))
    c = coefficients
    t_lin = linearization.t_lin

    # Offset: cubic in t_lin around par_p5.
    partial_data1 = c.par_p6 * t_lin
    partial_data2 = c.par_p7 * bounded_pow(t_lin, 2)
    partial_data3 = c.par_p8 * bounded_pow(t_lin, 3)
    offset = c.par_p5 + partial_data1 + partial_data2 + partial_data3

    # Sensitivity: cubic in t_lin around par_p1, scaled by the raw sample.
    partial_data1 = c.par_p2 * t_lin
    partial_data2 = c.par_p3 * bounded_pow(t_lin, 2)
    partial_data3 = c.par_p4 * bounded_pow(t_lin, 3)
    sensitivity = raw * (c.par_p1 + partial_data1 + partial_data2 + partial_data3)

    # Second and third order terms in the raw sample.
    partial_data1 = bounded_pow(raw, 2)
    partial_data2 = c.par_p9 + c.par_p10 * t_lin
    partial_data3 = partial_data1 * partial_data2
    higher_order = partial_data3 + bounded_pow(raw, 3) * c.par_p11

    return offset + sensitivity + higher_order


def compensate(sample: RawSample, coefficients: CalibrationCoefficients) -> CompensatedReading:
    """Compensate a temperature/pressure pair."""
    temperature_c, lin = compensate_temperature(sample.temperature, coefficients)
    pressure_pa = compensate_pressure(sample.pressure, coefficients, lin)
    return CompensatedReading(temperature_c=temperature_c, pressure_pa=pressure_pa)


__all__ = ["compensate", "compensate_pressure", "compensate_temperature"]
