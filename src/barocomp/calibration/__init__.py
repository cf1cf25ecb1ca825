"""Calibration NVM decoding for BMP390 sensors.

:mod:`registers` extracts the 14 integer constants from the 21-byte block
read at 0x31..0x45, and :mod:`coefficients` quantizes them into the floating
point coefficients used by :mod:`barocomp.core.compensation`.
"""

from .coefficients import CalibrationCoefficients, decode_calibration, quantize
from .registers import (
    CALIBRATION_BLOCK_SIZE,
    CalibrationFormatError,
    RawCalibration,
    decode_registers,
)

__all__ = [
    "CALIBRATION_BLOCK_SIZE",
    "CalibrationCoefficients",
    "CalibrationFormatError",
    "RawCalibration",
    "decode_calibration",
    "decode_registers",
    "quantize",
]
