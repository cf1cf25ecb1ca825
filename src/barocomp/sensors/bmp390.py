"""
Raw BMP390 sample streams arrive as JSON lines with (at least):

  - temperature_adc : int   raw temperature ADC word (alias ``t_adc``)
  - pressure_adc    : int   raw pressure ADC word (alias ``p_adc``)
  - timestamp_ns    : int   optional acquisition time in nanoseconds

``parse_line()`` accepts those JSON lines and also the comma-separated
formats "timestamp_ns,temperature_adc,pressure_adc" and
"temperature_adc,pressure_adc".
"""

from __future__ import annotations

import json
import logging
import time
from typing import Any, Iterable, Iterator, Optional, Sequence

from ..core.models import RawSample
from ..tools.debug import debug_enabled

logger = logging.getLogger(__name__)

_TEMPERATURE_KEYS = ("temperature_adc", "t_adc")
_PRESSURE_KEYS = ("pressure_adc", "p_adc")


def _as_adc(value: Any) -> int:
    """Convert a JSON/CSV field into an ADC integer, refusing fractions."""
    if isinstance(value, bool):
        raise TypeError("boolean is not an ADC value")
    if isinstance(value, float):
        if not value.is_integer():
            raise ValueError(f"fractional ADC value {value!r}")
        return int(value)
    if isinstance(value, str):
        number = float(value.strip())
        if not number.is_integer():
            raise ValueError(f"fractional ADC value {value!r}")
        return int(number)
    return int(value)


def _first_present(obj: dict, keys: Sequence[str]) -> Any:
    for key in keys:
        if obj.get(key) is not None:
            return obj[key]
    return None


def _parse_json_line(text: str) -> RawSample | None:
    try:
        obj = json.loads(text)
    except json.JSONDecodeError as exc:
        logger.warning("Bad JSON from sensor stream: %r (%s)", text, exc)
        return None
    if not isinstance(obj, dict):
        logger.warning("Expected a JSON object in sensor line: %r", text)
        return None

    t_raw = _first_present(obj, _TEMPERATURE_KEYS)
    p_raw = _first_present(obj, _PRESSURE_KEYS)
    if t_raw is None or p_raw is None:
        logger.warning("Missing temperature/pressure ADC field in sensor line: %r", obj)
        return None

    ts_raw = obj.get("timestamp_ns")
    try:
        timestamp_ns = None if ts_raw is None else int(ts_raw)
        return RawSample(
            temperature=_as_adc(t_raw),
            pressure=_as_adc(p_raw),
            timestamp_ns=timestamp_ns,
        )
    except (TypeError, ValueError) as exc:
        logger.warning("Bad field value in sensor line %r (%s)", obj, exc)
        return None


def _parse_csv_line(text: str) -> RawSample | None:
    parts: Sequence[str] = [p.strip() for p in text.split(",")]
    if len(parts) not in (2, 3):
        logger.warning(
            "Expected 2 or 3 comma-separated values for BMP390 CSV, got %d: %r",
            len(parts),
            text,
        )
        return None
    try:
        if len(parts) == 3:
            return RawSample(
                temperature=_as_adc(parts[1]),
                pressure=_as_adc(parts[2]),
                timestamp_ns=int(parts[0]),
            )
        return RawSample(temperature=_as_adc(parts[0]), pressure=_as_adc(parts[1]))
    except ValueError as exc:
        logger.warning("Bad CSV field in sensor line %r (%s)", text, exc)
        return None


_parse_time_acc = 0.0
_parse_count = 0


def parse_line(line: str) -> Optional[RawSample]:
    """
    Parse a single text line from a BMP390 logger into a :class:`RawSample`.

    Invalid lines are logged and return ``None`` so callers can skip them
    without raising exceptions.
    """
    global _parse_time_acc, _parse_count

    text = line.strip()
    if not text:
        return None

    debug_on = debug_enabled()
    start = time.perf_counter() if debug_on else 0.0

    if text[0] == "{":
        sample = _parse_json_line(text)
    else:
        sample = _parse_csv_line(text)

    if debug_on:
        _parse_time_acc += time.perf_counter() - start
        _parse_count += 1
        if _parse_count % 1000 == 0:
            avg_us = (_parse_time_acc / max(1, _parse_count)) * 1e6
            logger.info(
                "bmp390.parse_line avg %.1f µs over %d samples", avg_us, _parse_count
            )

    return sample


def iter_samples(lines: Iterable[str]) -> Iterator[RawSample]:
    """Yield the valid samples of a line-oriented stream, skipping the rest."""
    for line in lines:
        sample = parse_line(line)
        if sample is not None:
            yield sample
