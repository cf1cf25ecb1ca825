"""Utilities for loading recorded raw-sample CSV logs."""

from pathlib import Path
import io
import logging

import numpy as np

logger = logging.getLogger(__name__)


def _looks_numeric_csv_line(line: str) -> bool:
    """Heuristically decide if a CSV line is numeric-only (no header)."""
    stripped = line.strip()
    if not stripped:
        return False
    tokens = [t for t in stripped.split(",") if t]
    if not tokens:
        return False
    try:
        for t in tokens:
            float(t)
        return True
    except ValueError:
        return False


def load_csv(path: Path) -> np.ndarray:
    """
    Load a CSV file containing numeric data as a 2-D array.

    The file may optionally include a single header row, which will be
    skipped automatically.
    """
    path = Path(path)
    with path.open("r", encoding="utf-8") as f:
        first_line = f.readline()
        rest = f.read()

    # Decide if the first line is header or data
    if _looks_numeric_csv_line(first_line):
        buffer = io.StringIO(first_line + rest)
    else:
        buffer = io.StringIO(rest)

    return np.loadtxt(buffer, delimiter=",", ndmin=2)


def load_raw_samples(path: Path) -> np.ndarray:
    """
    Load raw ADC samples as an ``(n, 2)`` int64 array of
    ``[temperature_adc, pressure_adc]`` rows.

    Accepts two-column logs (``temperature_adc,pressure_adc``) and the
    three-column stream format with a leading ``timestamp_ns`` column.
    """
    data = load_csv(path)
    if data.size == 0:
        return np.empty((0, 2), dtype=np.int64)
    if data.shape[1] == 3:
        data = data[:, 1:]
    elif data.shape[1] != 2:
        raise ValueError(
            f"{path}: expected 2 or 3 columns of raw samples, got {data.shape[1]}"
        )
    if not np.all(np.isfinite(data)) or not np.all(np.mod(data, 1) == 0):
        raise ValueError(f"{path}: raw ADC columns must hold integer values")
    logger.debug("Loaded %d raw samples from %s", data.shape[0], path)
    return data.astype(np.int64)
