"""BMP390 calibration decoding, compensation, and raw-value inversion.

Typical use::

    from barocomp import RawSample, compensate, decode_calibration

    coeffs = decode_calibration(nvm_bytes)          # 21 bytes from 0x31..0x45
    reading = compensate(RawSample(t_adc, p_adc), coeffs)
    reading.temperature_c, reading.pressure_pa, reading.altitude_m()
"""

from .calibration import CalibrationCoefficients, CalibrationFormatError, decode_calibration
from .core import (
    CompensatedReading,
    InverseResult,
    Linearization,
    RawSample,
    compensate,
    compensate_pressure,
    compensate_temperature,
)
from .core.altitude import altitude
from .analysis.inverse import inverse_pressure, inverse_temperature
from .session import Compensator
from .config import BaroConfig, load_config

__all__ = [
    "BaroConfig",
    "CalibrationCoefficients",
    "CalibrationFormatError",
    "CompensatedReading",
    "Compensator",
    "InverseResult",
    "Linearization",
    "RawSample",
    "altitude",
    "compensate",
    "compensate_pressure",
    "compensate_temperature",
    "decode_calibration",
    "inverse_pressure",
    "inverse_temperature",
    "load_config",
]
