from __future__ import annotations

import ast
import math
from pathlib import Path

import numpy as np
import pytest

import barocomp.core
from barocomp.analysis.batch import pressure_array, temperature_array
from barocomp.calibration import decode_calibration
from barocomp.core import (
    CompensatedReading,
    Linearization,
    RawSample,
    compensate,
    compensate_pressure,
    compensate_temperature,
)
from barocomp.core.numeric import bounded_pow
from barocomp.tools.vectors import EXAMPLE_CALIBRATION_BLOCK

# Golden values from the Bosch floating point formulas (compiled C) for
# EXAMPLE_CALIBRATION_BLOCK.
MID_SCALE = 8388608
MID_SCALE_TEMPERATURE_C = 37.158169920323417
MID_SCALE_PRESSURE_PA = 68669.598476723768


@pytest.fixture(scope="module")
def coeffs():
    return decode_calibration(EXAMPLE_CALIBRATION_BLOCK)


def test_mid_scale_golden_values(coeffs) -> None:
    reading = compensate(RawSample(MID_SCALE, MID_SCALE), coeffs)
    assert reading.temperature_c == pytest.approx(MID_SCALE_TEMPERATURE_C, rel=1e-12)
    assert reading.pressure_pa == pytest.approx(MID_SCALE_PRESSURE_PA, rel=1e-12)


def test_second_reference_sample(coeffs) -> None:
    reading = compensate(RawSample(temperature=8450000, pressure=8200000), coeffs)
    assert reading.temperature_c == pytest.approx(38.659120016144698, rel=1e-12)
    assert reading.pressure_pa == pytest.approx(75429.003038993425, rel=1e-12)


def test_temperature_and_linearization_are_identical(coeffs) -> None:
    celsius, lin = compensate_temperature(MID_SCALE, coeffs)
    assert isinstance(lin, Linearization)
    assert lin.t_lin == celsius


def test_pressure_depends_only_on_the_given_linearization(coeffs) -> None:
    _, lin_a = compensate_temperature(MID_SCALE, coeffs)
    first = compensate_pressure(MID_SCALE, coeffs, lin_a)

    # A different temperature sample in between must not change the result.
    compensate_temperature(8_600_000, coeffs)
    second = compensate_pressure(MID_SCALE, coeffs, lin_a)

    assert first == second
    assert first == pytest.approx(MID_SCALE_PRESSURE_PA, rel=1e-12)


def test_full_u32_domain_is_accepted(coeffs) -> None:
    reading = compensate(RawSample(0xFFFF_FFFF, 0xFFFF_FFFF), coeffs)
    assert isinstance(reading, CompensatedReading)
    assert not math.isnan(reading.temperature_c)

    # Out-of-range samples give meaningless but finite values, not errors.
    reading = compensate(RawSample(0, 0), coeffs)
    assert math.isfinite(reading.pressure_pa)


@pytest.mark.parametrize("bad", [-1, 0x1_0000_0000])
def test_raw_values_outside_u32_are_rejected(coeffs, bad: int) -> None:
    with pytest.raises(ValueError):
        compensate_temperature(bad, coeffs)
    with pytest.raises(ValueError):
        RawSample(temperature=bad, pressure=0)


def test_non_integer_raw_values_are_rejected(coeffs) -> None:
    with pytest.raises(ValueError):
        compensate_temperature(1.5, coeffs)  # type: ignore[arg-type]


def test_temperature_strictly_increases_with_raw_value(coeffs) -> None:
    raw = np.arange(0, 2**24, 4096)
    temps = temperature_array(raw, coeffs)
    assert np.all(np.diff(temps) > 0)


def test_pressure_is_strictly_monotonic_with_fixed_linearization(coeffs) -> None:
    _, lin = compensate_temperature(MID_SCALE, coeffs)
    raw = np.arange(0, 2**24, 4096)
    pressures = pressure_array(raw, coeffs, np.full(raw.shape, lin.t_lin))
    steps = np.diff(pressures)
    # par_p1 is negative for this calibration, so pressure falls as raw rises.
    assert np.all(steps < 0)


def test_bounded_pow_matches_repeated_multiplication() -> None:
    x = 37.158169920323417
    assert bounded_pow(x, 0) == 1.0
    assert bounded_pow(x, 1) == x
    assert bounded_pow(x, 3) == (x * x) * x
    with pytest.raises(ValueError):
        bounded_pow(x, -1)
    with pytest.raises(ValueError):
        bounded_pow(x, 256)


def test_reading_unit_conversions(coeffs) -> None:
    reading = CompensatedReading(temperature_c=25.0, pressure_pa=101325.0)
    assert reading.temperature_f == pytest.approx(77.0)
    assert reading.pressure_hpa == pytest.approx(1013.25)
    assert reading.altitude_m() == 0.0


def test_core_only_imports_calibration() -> None:
    core_dir = Path(barocomp.core.__file__).parent
    upward = []
    for source in sorted(core_dir.glob("*.py")):
        tree = ast.parse(source.read_text(encoding="utf-8"))
        for node in ast.walk(tree):
            if isinstance(node, ast.ImportFrom) and node.level >= 2:
                if not (node.module or "").startswith("calibration"):
                    upward.append(f"{source.name}: {node.module}")
            if isinstance(node, ast.ImportFrom) and node.level == 0:
                if (node.module or "").startswith("barocomp") and not (
                    node.module.startswith("barocomp.core")
                    or node.module.startswith("barocomp.calibration")
                ):
                    upward.append(f"{source.name}: {node.module}")
    assert upward == []
