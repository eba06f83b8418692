from __future__ import annotations

import math

import pytest

from adsbexporter.ingestion.normalize import coerce_float, coerce_label, format_label_number


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (42, 42.0),
        (-1.5, -1.5),
        (0, 0.0),
        ("3.25", 3.25),
        ("1e3", 1000.0),
        ("-2.5E-2", -0.025),
    ],
)
def test_coerce_float_accepts_numbers_and_numeric_strings(value, expected) -> None:
    assert coerce_float(value) == expected


@pytest.mark.parametrize(
    "value",
    [
        None,
        True,
        False,
        "ground",
        "",
        "   ",
        " 42 ",
        "42\n",
        "1_000",
        "1_0.5",
        [],
        [1.0],
        {},
        {"value": 1},
        "nan",
        "inf",
        float("nan"),
        float("-inf"),
        10**400,
    ],
)
def test_coerce_float_reports_absent(value) -> None:
    assert coerce_float(value) is None


def test_coerce_float_is_total_and_finite() -> None:
    samples = [0, 1, -7, 2.5, "12", "1.5e-3", "x", None, True, [], {}, [1, 2], "NaN", 10**400, object()]
    for sample in samples:
        result = coerce_float(sample)
        assert result is None or (isinstance(result, float) and math.isfinite(result))


def test_coerce_float_is_idempotent_on_accepted_values() -> None:
    for sample in (3, "4.5", "-1e2", 0.125):
        once = coerce_float(sample)
        assert coerce_float(once) == once


def test_coerce_float_rejects_padding_and_digit_separators() -> None:
    assert coerce_float("1000") == 1000.0
    assert coerce_float("1_000") is None
    assert coerce_float("\t3.5") is None
    assert coerce_float("3.5 ") is None


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (" UAL123  ", "UAL123"),
        ("", ""),
        (7700, "7700"),
        (1.5, "1.5"),
        (2.0, "2"),
        (True, ""),
        (None, ""),
        ({}, ""),
        (["A1"], ""),
    ],
)
def test_coerce_label(value, expected) -> None:
    assert coerce_label(value) == expected


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (49.6, "49.6"),
        (49.0, "49"),
        (-10.0, "-10"),
        (0.0, "0"),
        (0.1, "0.1"),
    ],
)
def test_format_label_number(value, expected) -> None:
    assert format_label_number(value) == expected
