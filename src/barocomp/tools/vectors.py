"""Reference readings and raw test-vector generation.

Published BMP390 examples only give compensated values, never the raw ADC
words behind them. :func:`generate_test_vectors` runs the inverse search to
produce raw sample pairs that reproduce those readings under a given
calibration, which is handy for exercising a compensation path end to end.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional, Sequence

from ..analysis.inverse import inverse_pressure, inverse_temperature
from ..calibration.coefficients import CalibrationCoefficients
from ..config.runtime import BaroConfig
from ..core.compensation import compensate_temperature
from ..core.models import InverseResult, RawSample
from ..dataio.csv_writer import write_rows

logger = logging.getLogger(__name__)

# Example NVM dump (0x31..0x45) used when no real sensor is at hand.
EXAMPLE_CALIBRATION_BLOCK = bytes(
    (
        0xCB, 0x68,  # par_t1 = 26827
        0x68, 0x66,  # par_t2 = 26216
        0x03,  # par_t3 = 3
        0xE9, 0xBE,  # par_p1 = -16663
        0x71, 0xD5,  # par_p2 = -10895
        0x07,  # par_p3 = 7
        0x05,  # par_p4 = 5
        0xFF, 0x9F,  # par_p5 = 40959
        0xFF, 0x9F,  # par_p6 = 40959
        0x0F,  # par_p7 = 15
        0xFE,  # par_p8 = -2
        0x00, 0xE0,  # par_p9 = -8192
        0xE0,  # par_p10 = -32
        0xEB,  # par_p11 = -21
    )
)


@dataclass(frozen=True)
class ReferenceReading:
    source: str
    url: str
    temperature_c: float
    pressure_pa: float
    notes: str = ""


# Compensated readings from community projects and vendor tutorials.
REFERENCE_READINGS: tuple[ReferenceReading, ...] = (
    ReferenceReading("Arduino Learning", "arduinolearning.com", 23.45, 98273.95,
                     "Indoor reading, touching sensor test"),
    ReferenceReading("Arduino Learning", "arduinolearning.com", 23.35, 98273.63,
                     "Indoor reading, stable"),
    ReferenceReading("Arduino Learning", "arduinolearning.com", 23.26, 98268.98,
                     "Indoor reading, cooling"),
    ReferenceReading("Waveshare Example", "waveshare.com/wiki", 25.0, 101325.0,
                     "Typical sea level reading"),
    ReferenceReading("Adafruit Example", "learn.adafruit.com", 22.0, 100734.0,
                     "Sea level, example from tutorial"),
    ReferenceReading("DFRobot Example", "wiki.dfrobot.com", 24.5, 101200.0,
                     "Normal room conditions"),
    ReferenceReading("High Altitude Test", "Community forum", 15.0, 84000.0,
                     "~1500m elevation"),
    ReferenceReading("Low Altitude Test", "Community forum", 28.0, 102500.0,
                     "Below sea level location"),
)


@dataclass(frozen=True)
class TestVector:
    """Raw sample pair found for one reference reading."""

    __test__ = False  # not a pytest class

    reading: ReferenceReading
    temperature: InverseResult
    pressure: InverseResult

    @property
    def sample(self) -> RawSample:
        return RawSample(temperature=self.temperature.raw, pressure=self.pressure.raw)

    @property
    def converged(self) -> bool:
        return self.temperature.converged and self.pressure.converged


def generate_test_vectors(
    coefficients: CalibrationCoefficients,
    readings: Iterable[ReferenceReading] = REFERENCE_READINGS,
    *,
    config: Optional[BaroConfig] = None,
) -> List[TestVector]:
    """
    Invert each reading into a raw ``(temperature, pressure)`` sample.

    The pressure search for a reading uses the linearization of the raw
    temperature found for that same reading.
    """
    cfg = (config or BaroConfig()).sanitized()
    vectors: List[TestVector] = []
    for reading in readings:
        temperature = inverse_temperature(
            reading.temperature_c,
            coefficients,
            cfg.temperature_tolerance_c,
            low=cfg.search_low,
            high=cfg.search_high,
            max_iterations=cfg.max_iterations,
        )
        _, lin = compensate_temperature(temperature.raw, coefficients)
        pressure = inverse_pressure(
            reading.pressure_pa,
            coefficients,
            lin,
            cfg.pressure_tolerance_pa,
            low=cfg.search_low,
            high=cfg.search_high,
            max_iterations=cfg.max_iterations,
        )
        vector = TestVector(reading, temperature, pressure)
        if not vector.converged:
            logger.warning("No exact raw sample for %s (%s)", reading.source, reading.notes)
        vectors.append(vector)
    return vectors


VECTOR_HEADERS: Sequence[str] = (
    "source",
    "target_temperature_c",
    "target_pressure_pa",
    "temperature_adc",
    "pressure_adc",
    "temperature_c",
    "pressure_pa",
    "temperature_error_c",
    "pressure_error_pa",
)


def write_test_vectors(path: Path, vectors: Iterable[TestVector]) -> None:
    """Write generated vectors, with their verification errors, as CSV."""
    rows = (
        (
            v.reading.source,
            v.reading.temperature_c,
            v.reading.pressure_pa,
            v.temperature.raw,
            v.pressure.raw,
            v.temperature.value,
            v.pressure.value,
            v.temperature.error,
            v.pressure.error,
        )
        for v in vectors
    )
    write_rows(path, VECTOR_HEADERS, rows)
