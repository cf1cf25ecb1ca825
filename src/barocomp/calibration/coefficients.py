"""Quantization of raw calibration constants into working coefficients."""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields
from typing import Dict

from .registers import BlockLike, RawCalibration, decode_registers

logger = logging.getLogger(__name__)

# Divisors and biases are copied from parse_calib_data() in the Bosch BMP3
# sensor API (floating point build). Every divisor is a power of two, so the
# literals are exact doubles.
PAR_T1_DIVISOR = 0.00390625  # 2^-8
PAR_T2_DIVISOR = 1073741824.0  # 2^30
PAR_T3_DIVISOR = 281474976710656.0  # 2^48
PAR_P1_DIVISOR = 1048576.0  # 2^20
PAR_P2_DIVISOR = 536870912.0  # 2^29
PAR_P3_DIVISOR = 4294967296.0  # 2^32
PAR_P4_DIVISOR = 137438953472.0  # 2^37
PAR_P5_DIVISOR = 0.125  # 2^-3
PAR_P6_DIVISOR = 64.0  # 2^6
PAR_P7_DIVISOR = 256.0  # 2^8
PAR_P8_DIVISOR = 32768.0  # 2^15
PAR_P9_DIVISOR = 281474976710656.0  # 2^48
PAR_P10_DIVISOR = 281474976710656.0  # 2^48
PAR_P11_DIVISOR = 36893488147419103232.0  # 2^65

# par_p1 and par_p2 are stored relative to 2^14.
PAR_P1_BIAS = 16384.0
PAR_P2_BIAS = 16384.0


@dataclass(frozen=True)
class Quantization:
    """``coefficient = (raw - bias) / divisor``"""

    divisor: float
    bias: float = 0.0

    def apply(self, raw: int) -> float:
        return (float(raw) - self.bias) / self.divisor


QUANTIZATION: Dict[str, Quantization] = {
    "par_t1": Quantization(PAR_T1_DIVISOR),
    "par_t2": Quantization(PAR_T2_DIVISOR),
    "par_t3": Quantization(PAR_T3_DIVISOR),
    "par_p1": Quantization(PAR_P1_DIVISOR, bias=PAR_P1_BIAS),
    "par_p2": Quantization(PAR_P2_DIVISOR, bias=PAR_P2_BIAS),
    "par_p3": Quantization(PAR_P3_DIVISOR),
    "par_p4": Quantization(PAR_P4_DIVISOR),
    "par_p5": Quantization(PAR_P5_DIVISOR),
    "par_p6": Quantization(PAR_P6_DIVISOR),
    "par_p7": Quantization(PAR_P7_DIVISOR),
    "par_p8": Quantization(PAR_P8_DIVISOR),
    "par_p9": Quantization(PAR_P9_DIVISOR),
    "par_p10": Quantization(PAR_P10_DIVISOR),
    "par_p11": Quantization(PAR_P11_DIVISOR),
}


@dataclass(frozen=True)
class CalibrationCoefficients:
    """
    Floating-point coefficients consumed by the compensation formulas.

    Three temperature terms (``par_t*``) and eleven pressure terms
    (``par_p*``). Instances are immutable and safe to share between threads;
    the per-sample linearization value is carried separately (see
    :class:`barocomp.core.models.Linearization`).
    """

    par_t1: float
    par_t2: float
    par_t3: float
    par_p1: float
    par_p2: float
    par_p3: float
    par_p4: float
    par_p5: float
    par_p6: float
    par_p7: float
    par_p8: float
    par_p9: float
    par_p10: float
    par_p11: float

    def as_dict(self) -> Dict[str, float]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


def quantize(raw: RawCalibration) -> CalibrationCoefficients:
    """Convert integer register values into working coefficients."""
    values = {name: q.apply(getattr(raw, name)) for name, q in QUANTIZATION.items()}
    return CalibrationCoefficients(**values)


def decode_calibration(data: BlockLike) -> CalibrationCoefficients:
    """
    Decode a 21-byte NVM calibration block into :class:`CalibrationCoefficients`.

    The transform is total over well-formed input: any 21 bytes decode, and
    identical bytes always produce identical coefficients. Blocks of the
    wrong length raise :class:`~barocomp.calibration.registers.CalibrationFormatError`.
    """
    coefficients = quantize(decode_registers(data))
    logger.debug("Quantized calibration coefficients: %s", coefficients.as_dict())
    return coefficients


__all__ = [
    "CalibrationCoefficients",
    "QUANTIZATION",
    "Quantization",
    "decode_calibration",
    "quantize",
]
