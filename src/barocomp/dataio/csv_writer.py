"""CSV writing helpers for compensated readings."""

import csv
from pathlib import Path
from typing import Any, Iterable, Sequence

from ..analysis.batch import BatchReadings

READING_HEADERS = (
    "temperature_adc",
    "pressure_adc",
    "temperature_c",
    "pressure_pa",
    "altitude_m",
)


def write_rows(path: Path, headers: Sequence[str], rows: Iterable[Sequence[Any]]) -> None:
    """
    Write a header row and all data rows to a CSV file.

    Directories are created as needed.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", newline="", encoding="utf-8") as csvfile:
        writer = csv.writer(csvfile)
        writer.writerow(headers)
        writer.writerows(rows)


def write_readings(path: Path, readings: BatchReadings) -> None:
    """Write batch compensation results, one row per raw sample."""
    write_rows(path, READING_HEADERS, readings.rows())
