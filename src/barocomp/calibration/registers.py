"""Register-level decoding of the BMP390 calibration block.

The sensor keeps 21 bytes of trimming constants in NVM at 0x31..0x45. Each
constant is an 8- or 16-bit field, little-endian, with a fixed signedness.
The layout below is data: :func:`decode_registers` walks the table instead
of hand-written shift/cast sequences.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields
from typing import Iterable, Union

logger = logging.getLogger(__name__)

CALIBRATION_START_REGISTER = 0x31
CALIBRATION_BLOCK_SIZE = 21

BlockLike = Union[bytes, bytearray, memoryview, Iterable[int]]


class CalibrationFormatError(ValueError):
    """Calibration input does not have the 21-byte register shape."""


@dataclass(frozen=True)
class RegisterField:
    """One calibration constant inside the NVM block."""

    name: str
    offset: int
    width: int
    signed: bool

    def extract(self, block: bytes) -> int:
        chunk = block[self.offset : self.offset + self.width]
        return int.from_bytes(chunk, "little", signed=self.signed)


# Register map from the BMP390 datasheet (NVM_PAR_T1 at 0x31 ... NVM_PAR_P11 at 0x45).
CALIBRATION_FIELDS: tuple[RegisterField, ...] = (
    RegisterField("par_t1", 0, 2, signed=False),
    RegisterField("par_t2", 2, 2, signed=False),
    RegisterField("par_t3", 4, 1, signed=True),
    RegisterField("par_p1", 5, 2, signed=True),
    RegisterField("par_p2", 7, 2, signed=True),
    RegisterField("par_p3", 9, 1, signed=True),
    RegisterField("par_p4", 10, 1, signed=True),
    RegisterField("par_p5", 11, 2, signed=False),
    RegisterField("par_p6", 13, 2, signed=False),
    RegisterField("par_p7", 15, 1, signed=True),
    RegisterField("par_p8", 16, 1, signed=True),
    RegisterField("par_p9", 17, 2, signed=True),
    RegisterField("par_p10", 19, 1, signed=True),
    RegisterField("par_p11", 20, 1, signed=True),
)


@dataclass(frozen=True)
class RawCalibration:
    """Integer calibration constants exactly as stored on the chip."""

    par_t1: int
    par_t2: int
    par_t3: int
    par_p1: int
    par_p2: int
    par_p3: int
    par_p4: int
    par_p5: int
    par_p6: int
    par_p7: int
    par_p8: int
    par_p9: int
    par_p10: int
    par_p11: int

    def as_dict(self) -> dict[str, int]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


def as_block(data: BlockLike) -> bytes:
    """
    Normalize ``data`` into an immutable 21-byte block.

    Accepts ``bytes``-like objects or any iterable of integers in 0..255.
    Raises :class:`CalibrationFormatError` for anything else.
    """
    if isinstance(data, (bytes, bytearray, memoryview)):
        block = bytes(data)
    else:
        try:
            block = bytes(list(data))
        except (TypeError, ValueError) as exc:
            raise CalibrationFormatError(
                f"calibration data must be byte values 0..255 ({exc})"
            ) from exc

    if len(block) != CALIBRATION_BLOCK_SIZE:
        raise CalibrationFormatError(
            f"calibration block must be {CALIBRATION_BLOCK_SIZE} bytes, got {len(block)}"
        )
    return block


def decode_registers(data: BlockLike) -> RawCalibration:
    """Split a 21-byte calibration block into its 14 integer fields."""
    block = as_block(data)
    values = {field.name: field.extract(block) for field in CALIBRATION_FIELDS}
    logger.debug("Decoded calibration registers: %s", values)
    return RawCalibration(**values)


__all__ = [
    "CALIBRATION_BLOCK_SIZE",
    "CALIBRATION_FIELDS",
    "CALIBRATION_START_REGISTER",
    "CalibrationFormatError",
    "RawCalibration",
    "RegisterField",
    "as_block",
    "decode_registers",
]
