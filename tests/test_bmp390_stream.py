from __future__ import annotations

import json

from barocomp.core import RawSample
from barocomp.sensors.bmp390 import iter_samples, parse_line


def _build_line(**fields) -> str:
    return json.dumps(fields)


def test_parse_json_line() -> None:
    sample = parse_line(
        _build_line(timestamp_ns=123, temperature_adc=8388608, pressure_adc=8200000)
    )
    assert sample == RawSample(temperature=8388608, pressure=8200000, timestamp_ns=123)


def test_parse_json_aliases_and_integral_floats() -> None:
    sample = parse_line(_build_line(t_adc=8450000.0, p_adc="8200000"))
    assert sample == RawSample(8450000, 8200000)
    assert sample.timestamp_ns is None


def test_parse_csv_lines() -> None:
    assert parse_line("1000,8388608,8200000") == RawSample(8388608, 8200000, 1000)
    assert parse_line(" 8388608 , 8200000 \n") == RawSample(8388608, 8200000)


def test_invalid_lines_are_skipped() -> None:
    bad_lines = [
        "",
        "not-json",
        "{broken",
        _build_line(temperature_adc=1),  # missing pressure
        _build_line(temperature_adc=-1, pressure_adc=5),
        _build_line(temperature_adc=1.5, pressure_adc=5),
        _build_line(temperature_adc=True, pressure_adc=5),
        json.dumps([1, 2]),
        "1,2,3,4",
        "a,b",
    ]
    for line in bad_lines:
        assert parse_line(line) is None, line


def test_iter_samples_keeps_only_valid_records() -> None:
    lines = [
        _build_line(temperature_adc=8388608, pressure_adc=8388608),
        "garbage",
        "8450000,8200000",
    ]
    assert list(iter_samples(lines)) == [
        RawSample(8388608, 8388608),
        RawSample(8450000, 8200000),
    ]
