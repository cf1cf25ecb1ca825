"""Loading calibration blocks from disk.

Two formats are understood:

- binary files holding exactly the 21 bytes read from 0x31..0x45;
- text files (or strings) of hex byte tokens, e.g. a register dump such as
  ``0xCB, 0x68, 0x68, 0x66 ...`` or ``CB 68 68 66 ...``. ``#`` starts a
  comment that runs to the end of the line.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import List

from ..calibration.coefficients import CalibrationCoefficients, decode_calibration
from ..calibration.registers import CALIBRATION_BLOCK_SIZE, CalibrationFormatError, as_block

logger = logging.getLogger(__name__)

_TOKEN_SPLIT_RE = re.compile(r"[\s,;{}\[\]]+")


def parse_calibration_text(text: str) -> List[int]:
    """Parse hex byte tokens from ``text`` into a list of 21 ints."""
    values: List[int] = []
    for line in text.splitlines():
        content = line.split("#", 1)[0]
        for token in _TOKEN_SPLIT_RE.split(content):
            if not token:
                continue
            try:
                value = int(token, 16)
            except ValueError as exc:
                raise CalibrationFormatError(f"not a hex byte: {token!r}") from exc
            if not 0 <= value <= 0xFF:
                raise CalibrationFormatError(f"byte value out of range: {token!r}")
            values.append(value)

    if len(values) != CALIBRATION_BLOCK_SIZE:
        raise CalibrationFormatError(
            f"expected {CALIBRATION_BLOCK_SIZE} calibration bytes, found {len(values)}"
        )
    return values


def load_calibration_block(path: Path) -> bytes:
    """
    Read a calibration block from ``path``.

    A file of exactly 21 bytes that does not decode as hex text is treated
    as a raw binary dump; anything else is parsed as hex text.
    """
    path = Path(path)
    data = path.read_bytes()
    try:
        text = data.decode("ascii")
    except UnicodeDecodeError:
        text = None

    if text is not None:
        try:
            return bytes(parse_calibration_text(text))
        except CalibrationFormatError:
            if len(data) != CALIBRATION_BLOCK_SIZE:
                raise

    logger.debug("Reading %s as a binary calibration dump", path)
    return as_block(data)


def load_calibration(path: Path) -> CalibrationCoefficients:
    """Read and decode the calibration block stored at ``path``."""
    return decode_calibration(load_calibration_block(path))


def write_calibration_block(path: Path, block: bytes) -> None:
    """Write ``block`` as a hex text dump, 21 tokens on one line."""
    path = Path(path)
    data = as_block(block)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(" ".join(f"0x{b:02X}" for b in data) + "\n", encoding="utf-8")
