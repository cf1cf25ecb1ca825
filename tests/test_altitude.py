from __future__ import annotations

import math

import numpy as np
import pytest

from barocomp.core.altitude import DEFAULT_SEA_LEVEL_PA, altitude
from barocomp.analysis.batch import altitude_array
from barocomp.core.units import celsius_to_fahrenheit, meters_to_feet, pascal_to_hectopascal


def test_altitude_is_zero_at_reference_pressure() -> None:
    assert altitude(DEFAULT_SEA_LEVEL_PA) == 0.0
    assert altitude(95000.0, sea_level_pa=95000.0) == 0.0


def test_altitude_at_mid_scale_reading() -> None:
    # Pressure of the mid-scale sample under the example calibration.
    assert altitude(68669.598476723768) == pytest.approx(3163.2913457793338, rel=1e-9)


def test_lower_pressure_means_higher_altitude() -> None:
    assert altitude(90000.0) > altitude(100000.0) > 0.0
    assert altitude(102500.0) < 0.0


@pytest.mark.parametrize("pressure", [0.0, -1.0, float("nan")])
def test_non_positive_pressure_has_no_altitude(pressure: float) -> None:
    assert math.isnan(altitude(pressure))


def test_reference_pressure_must_be_positive() -> None:
    with pytest.raises(ValueError):
        altitude(100000.0, sea_level_pa=0.0)


def test_altitude_array_matches_scalar() -> None:
    pressures = np.array([101325.0, 90000.0, 0.0, -5.0, 68669.598476723768])
    result = altitude_array(pressures)
    assert result[0] == 0.0
    assert math.isnan(result[2]) and math.isnan(result[3])
    np.testing.assert_allclose(result[[1, 4]], [altitude(90000.0), altitude(68669.598476723768)])


def test_unit_conversions() -> None:
    assert celsius_to_fahrenheit(0.0) == 32.0
    assert celsius_to_fahrenheit(100.0) == pytest.approx(212.0)
    assert pascal_to_hectopascal(101325.0) == pytest.approx(1013.25)
    assert meters_to_feet(1000.0) == pytest.approx(3280.84)
