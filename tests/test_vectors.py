from __future__ import annotations

import csv
from pathlib import Path

import pytest

from barocomp.calibration import decode_calibration
from barocomp.config import BaroConfig
from barocomp.core import compensate
from barocomp.tools.vectors import (
    EXAMPLE_CALIBRATION_BLOCK,
    REFERENCE_READINGS,
    VECTOR_HEADERS,
    ReferenceReading,
    generate_test_vectors,
    write_test_vectors,
)


@pytest.fixture(scope="module")
def coeffs():
    return decode_calibration(EXAMPLE_CALIBRATION_BLOCK)


def test_reference_vectors_reproduce_readings(coeffs) -> None:
    vectors = generate_test_vectors(coeffs)

    assert len(vectors) == len(REFERENCE_READINGS) == 8
    for vector in vectors:
        assert vector.converged, vector.reading.source
        reading = compensate(vector.sample, coeffs)
        assert abs(reading.temperature_c - vector.reading.temperature_c) < 0.01
        assert abs(reading.pressure_pa - vector.reading.pressure_pa) < 10.0


def test_config_tolerances_are_used(coeffs) -> None:
    readings = [ReferenceReading("Tight", "local", 25.0, 101325.0)]
    (vector,) = generate_test_vectors(
        coeffs, readings, config=BaroConfig(pressure_tolerance_pa=0.5)
    )
    assert vector.pressure.tolerance == 0.5
    assert vector.pressure.error < 0.5


def test_write_test_vectors(tmp_path: Path, coeffs) -> None:
    vectors = generate_test_vectors(coeffs, REFERENCE_READINGS[:2])
    path = tmp_path / "vectors.csv"

    write_test_vectors(path, vectors)

    with path.open(newline="", encoding="utf-8") as fh:
        rows = list(csv.reader(fh))
    assert tuple(rows[0]) == tuple(VECTOR_HEADERS)
    assert len(rows) == 3
    assert rows[1][0] == "Arduino Learning"
    assert int(rows[1][3]) == vectors[0].temperature.raw
