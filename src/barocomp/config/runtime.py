"""Runtime configuration for compensation and raw-value searches."""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Mapping, Optional, Tuple

import yaml

from ..core.altitude import DEFAULT_SEA_LEVEL_PA
from ..analysis.inverse import (
    DEFAULT_MAX_ITERATIONS,
    DEFAULT_PRESSURE_TOLERANCE_PA,
    DEFAULT_TEMPERATURE_TOLERANCE_C,
    RAW_SEARCH_MAX,
    RAW_SEARCH_MIN,
)
from ..calibration.coefficients import CalibrationCoefficients, decode_calibration
from ..core.models import RAW_ADC_MAX
from ..dataio.calibration_file import parse_calibration_text

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class BaroConfig:
    """
    Tuning knobs for compensation and the inverse search.

    ``calibration`` optionally carries the sensor's 21 NVM bytes so a single
    YAML file can describe one device end to end.
    """

    sea_level_pa: float = DEFAULT_SEA_LEVEL_PA
    temperature_tolerance_c: float = DEFAULT_TEMPERATURE_TOLERANCE_C
    pressure_tolerance_pa: float = DEFAULT_PRESSURE_TOLERANCE_PA
    search_low: int = RAW_SEARCH_MIN
    search_high: int = RAW_SEARCH_MAX
    max_iterations: int = DEFAULT_MAX_ITERATIONS
    calibration: Optional[Tuple[int, ...]] = None

    def sanitized(self) -> BaroConfig:
        """
        Return a copy with invalid values replaced and limits applied.

        Unparsable or non-positive numbers fall back to their defaults; the
        search bounds are clamped to the u32 domain with ``low < high``.
        """
        sea_level = _positive_float(self.sea_level_pa, DEFAULT_SEA_LEVEL_PA)
        t_tol = _positive_float(self.temperature_tolerance_c, DEFAULT_TEMPERATURE_TOLERANCE_C)
        p_tol = _positive_float(self.pressure_tolerance_pa, DEFAULT_PRESSURE_TOLERANCE_PA)

        low = _int_or(self.search_low, RAW_SEARCH_MIN)
        high = _int_or(self.search_high, RAW_SEARCH_MAX)
        low = min(max(0, low), RAW_ADC_MAX - 1)
        high = min(max(low + 1, high), RAW_ADC_MAX)

        return BaroConfig(
            sea_level_pa=sea_level,
            temperature_tolerance_c=t_tol,
            pressure_tolerance_pa=p_tol,
            search_low=low,
            search_high=high,
            max_iterations=max(1, _int_or(self.max_iterations, DEFAULT_MAX_ITERATIONS)),
            calibration=_coerce_calibration(self.calibration),
        )

    def coefficients(self) -> CalibrationCoefficients:
        """Decode the configured calibration block."""
        if self.calibration is None:
            raise ValueError("no calibration block configured")
        return decode_calibration(self.calibration)

    def to_mapping(self) -> dict:
        """Serialize back into a mapping suitable for YAML."""
        data = {f.name: getattr(self, f.name) for f in fields(self)}
        if self.calibration is not None:
            data["calibration"] = " ".join(f"0x{b:02X}" for b in self.calibration)
        return {CONFIG_SECTION: data}


def _positive_float(value: Any, fallback: float) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return fallback
    return number if number > 0 else fallback


def _int_or(value: Any, fallback: int) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return fallback


def _coerce_calibration(value: Any) -> Optional[Tuple[int, ...]]:
    """Accept a hex string or a sequence of byte values."""
    if value is None:
        return None
    if isinstance(value, str):
        return tuple(parse_calibration_text(value))
    if isinstance(value, (bytes, bytearray)):
        return tuple(value)
    return tuple(int(v) for v in value)


# A device file may keep its barocomp settings under this key, next to
# sections owned by other tools (display, logging, ...).
CONFIG_SECTION = "barocomp"


def _settings_from(data: Mapping[str, Any]) -> dict[str, Any]:
    """Merge the ``barocomp`` section over any root-level settings."""
    settings = {k: v for k, v in data.items() if k != CONFIG_SECTION}
    section = data.get(CONFIG_SECTION)
    if isinstance(section, Mapping):
        settings.update(section)
    return settings


def config_from_mapping(data: Mapping[str, Any] | None) -> BaroConfig:
    """
    Build a sanitized :class:`BaroConfig` from parsed YAML.

    Settings may sit at the root or under ``barocomp:``; the section wins
    when both name the same field. Keys that are not :class:`BaroConfig`
    fields belong to other tools and are skipped.
    """
    if not data:
        return BaroConfig()
    settings = _settings_from(data)
    known = {f.name for f in fields(BaroConfig)}
    skipped = sorted(settings.keys() - known)
    if skipped:
        logger.debug("Ignoring non-barocomp config keys: %s", ", ".join(map(str, skipped)))
    return BaroConfig(**{k: settings[k] for k in settings.keys() & known}).sanitized()


def load_config(path: str | Path | None) -> BaroConfig:
    """
    Load a device file such as::

        barocomp:
          sea_level_pa: 100850
          pressure_tolerance_pa: 2.5
          calibration: "CB 68 68 66 03 E9 BE 71 D5 07 05 FF 9F FF 9F 0F FE 00 E0 E0 EB"

    A missing file (or ``None``) gives the defaults, with no calibration.
    """
    if path is None:
        return BaroConfig()
    cfg_path = Path(path)
    if not cfg_path.exists():
        logger.debug("No config at %s, using defaults", cfg_path)
        return BaroConfig()
    with cfg_path.open("r", encoding="utf-8") as fh:
        raw = yaml.safe_load(fh) or {}
    if not isinstance(raw, Mapping):
        raise ValueError(f"Expected mapping in {cfg_path}, got {type(raw).__name__}")
    return config_from_mapping(raw)


__all__ = ["BaroConfig", "config_from_mapping", "load_config"]
