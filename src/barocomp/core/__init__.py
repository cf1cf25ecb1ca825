"""Core compensation engine: data models and the forward formulas.

:mod:`models` holds the immutable sample/reading types, :mod:`compensation`
the temperature and pressure formulas, :mod:`altitude` and :mod:`units` the
derived quantities. Nothing here imports from the rest of the package except
:mod:`barocomp.calibration`.
"""

from .models import CompensatedReading, InverseResult, Linearization, RawSample
from .compensation import compensate, compensate_pressure, compensate_temperature

__all__ = [
    "CompensatedReading",
    "InverseResult",
    "Linearization",
    "RawSample",
    "compensate",
    "compensate_pressure",
    "compensate_temperature",
]
