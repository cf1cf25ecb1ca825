"""Lock-guarded compensation state for one sensor."""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING, Iterable, List, Optional, Tuple

from .core.altitude import DEFAULT_SEA_LEVEL_PA, altitude
from .analysis.inverse import (
    DEFAULT_MAX_ITERATIONS,
    DEFAULT_PRESSURE_TOLERANCE_PA,
    DEFAULT_TEMPERATURE_TOLERANCE_C,
    RAW_SEARCH_MAX,
    RAW_SEARCH_MIN,
    inverse_pressure,
    inverse_temperature,
)
from .calibration.coefficients import CalibrationCoefficients, decode_calibration
from .calibration.registers import BlockLike
from .core import compensation
from .core.models import CompensatedReading, InverseResult, Linearization, RawSample

if TYPE_CHECKING:
    from .config.runtime import BaroConfig

logger = logging.getLogger(__name__)


class Compensator:
    """
    Coefficients plus the most recent linearization of one sensor.

    This mirrors a driver that keeps ``t_lin`` next to its calibration: call
    :meth:`compensate_temperature` and then :meth:`compensate_pressure` for
    the same sample pair. An RLock serializes access, and :meth:`compensate`
    / :meth:`inverse_pair` hold it across the whole temperature+pressure pair
    so concurrent callers never mix pairs. Stateless callers can use
    :mod:`barocomp.core.compensation` directly instead.
    """

    def __init__(
        self,
        coefficients: CalibrationCoefficients,
        *,
        sea_level_pa: float = DEFAULT_SEA_LEVEL_PA,
        temperature_tolerance_c: float = DEFAULT_TEMPERATURE_TOLERANCE_C,
        pressure_tolerance_pa: float = DEFAULT_PRESSURE_TOLERANCE_PA,
        search_low: int = RAW_SEARCH_MIN,
        search_high: int = RAW_SEARCH_MAX,
        max_iterations: int = DEFAULT_MAX_ITERATIONS,
    ) -> None:
        if not sea_level_pa > 0:
            raise ValueError(f"sea_level_pa must be > 0, got {sea_level_pa}")
        self._coefficients = coefficients
        self.sea_level_pa = float(sea_level_pa)
        self.temperature_tolerance_c = float(temperature_tolerance_c)
        self.pressure_tolerance_pa = float(pressure_tolerance_pa)
        self.search_low = int(search_low)
        self.search_high = int(search_high)
        self.max_iterations = int(max_iterations)
        self._linearization: Optional[Linearization] = None
        self._lock = threading.RLock()

    @classmethod
    def from_block(cls, block: BlockLike, **kwargs) -> "Compensator":
        """Build a compensator straight from the 21-byte calibration block."""
        return cls(decode_calibration(block), **kwargs)

    @classmethod
    def from_config(cls, config: "BaroConfig") -> "Compensator":
        """Build a compensator from a :class:`~barocomp.config.runtime.BaroConfig`."""
        cfg = config.sanitized()
        return cls(
            cfg.coefficients(),
            sea_level_pa=cfg.sea_level_pa,
            temperature_tolerance_c=cfg.temperature_tolerance_c,
            pressure_tolerance_pa=cfg.pressure_tolerance_pa,
            search_low=cfg.search_low,
            search_high=cfg.search_high,
            max_iterations=cfg.max_iterations,
        )

    @property
    def coefficients(self) -> CalibrationCoefficients:
        return self._coefficients

    @property
    def linearization(self) -> Optional[Linearization]:
        """Linearization from the latest temperature compensation, if any."""
        with self._lock:
            return self._linearization

    # ------------------------------------------------------------------ forward
    def compensate_temperature(self, raw_temperature: int) -> float:
        with self._lock:
            celsius, self._linearization = compensation.compensate_temperature(
                raw_temperature, self._coefficients
            )
            return celsius

    def compensate_pressure(self, raw_pressure: int) -> float:
        """Compensate pressure against the latest temperature sample."""
        with self._lock:
            if self._linearization is None:
                raise RuntimeError("compensate_temperature() must run before compensate_pressure()")
            return compensation.compensate_pressure(
                raw_pressure, self._coefficients, self._linearization
            )

    def compensate(self, sample: RawSample) -> CompensatedReading:
        with self._lock:
            temperature_c = self.compensate_temperature(sample.temperature)
            pressure_pa = self.compensate_pressure(sample.pressure)
        return CompensatedReading(temperature_c=temperature_c, pressure_pa=pressure_pa)

    def compensate_many(self, samples: Iterable[RawSample]) -> List[CompensatedReading]:
        return [self.compensate(sample) for sample in samples]

    def altitude(self, pressure_pa: float) -> float:
        return altitude(pressure_pa, self.sea_level_pa)

    # ------------------------------------------------------------------ inverse
    def inverse_temperature(self, target_c: float, tolerance: Optional[float] = None) -> InverseResult:
        return inverse_temperature(
            target_c,
            self._coefficients,
            self.temperature_tolerance_c if tolerance is None else tolerance,
            low=self.search_low,
            high=self.search_high,
            max_iterations=self.max_iterations,
        )

    def inverse_pressure(self, target_pa: float, tolerance: Optional[float] = None) -> InverseResult:
        """Search a raw pressure against the latest temperature sample."""
        with self._lock:
            if self._linearization is None:
                raise RuntimeError("compensate_temperature() must run before inverse_pressure()")
            return inverse_pressure(
                target_pa,
                self._coefficients,
                self._linearization,
                self.pressure_tolerance_pa if tolerance is None else tolerance,
                low=self.search_low,
                high=self.search_high,
                max_iterations=self.max_iterations,
            )

    def inverse_pair(self, target_c: float, target_pa: float) -> Tuple[InverseResult, InverseResult]:
        """
        Find a raw sample pair reproducing ``(target_c, target_pa)``.

        The pressure search uses the linearization of the raw temperature the
        first search found, which becomes this compensator's current state.
        """
        with self._lock:
            temperature = self.inverse_temperature(target_c)
            self.compensate_temperature(temperature.raw)
            pressure = self.inverse_pressure(target_pa)
        logger.debug(
            "Inverse pair for (%.4g C, %.6g Pa): raw=(%d, %d)",
            target_c,
            target_pa,
            temperature.raw,
            pressure.raw,
        )
        return temperature, pressure
