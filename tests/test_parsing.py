"""Lenient parsing and rounding of forecast quantities."""

import random
from decimal import Decimal

import pytest

from planning.parsing import (
    format_tenth,
    parse_quantity,
    quantity_or_zero,
    random_tenths,
    round_tenth,
    sum_rounded,
    to_float,
)


@pytest.mark.parametrize("raw", [None, "", "-", "abc", ".", "NaN", "e5", "   "])
def test_unparseable_values_are_none(raw):
    assert parse_quantity(raw) is None
    assert quantity_or_zero(raw) == 0


@pytest.mark.parametrize("raw, expected", [
    ("20", Decimal("20")),
    ("1.", Decimal("1")),
    ("12abc", Decimal("12")),
    ("  7.25 ", Decimal("7.25")),
    (".5", Decimal("0.5")),
    ("-3.5", Decimal("-3.5")),
    ("1e2", Decimal("100")),
    ("2e", Decimal("2")),
])
def test_numeric_prefix_is_parsed(raw, expected):
    assert parse_quantity(raw) == expected


def test_infinity_and_overflow_are_non_finite():
    assert parse_quantity("Infinity").is_infinite()
    assert parse_quantity("-Infinity") < 0
    assert parse_quantity("1e999").is_infinite()


@pytest.mark.parametrize("raw, expected", [
    ("1e1000000", Decimal("Infinity")),
    ("1e999999999999999999", Decimal("Infinity")),
    ("1e9999999999999999999", Decimal("Infinity")),
    ("-1e9999999999999999999", Decimal("-Infinity")),
    ("1.8e308x", Decimal("Infinity")),
    ("0e9999999999999999999", Decimal(0)),
    ("1e-9999999999999999999", Decimal(0)),
    ("-1e-400", Decimal(0)),
])
def test_exponents_beyond_double_range(raw, expected):
    assert parse_quantity(raw) == expected


def test_long_mantissa_keeps_its_value():
    assert parse_quantity("0." + "0" * 30 + "1e31") == Decimal("1")
    assert parse_quantity("1" * 300) == Decimal("1" * 300)


def test_round_tenth_is_half_up():
    assert round_tenth(Decimal("0.05")) == Decimal("0.1")
    assert round_tenth(Decimal("2.449")) == Decimal("2.4")
    assert str(round_tenth(Decimal("-0.04"))) == "0.0"


def test_sum_rounds_once_at_the_end():
    parts = [Decimal("0.04"), Decimal("0.04")]
    assert sum_rounded(parts) == Decimal("0.1")
    assert sum(round_tenth(p) for p in parts) == Decimal("0.0")


def test_format_tenth():
    assert format_tenth(Decimal("25")) == "25.0"
    assert format_tenth(Decimal("1E+2")) == "100.0"


def test_to_float_hides_non_finite():
    assert to_float(Decimal("12.3")) == 12.3
    assert to_float(Decimal("Infinity")) is None
    assert to_float(Decimal("NaN")) is None
    assert to_float(None) is None


def test_random_tenths_stay_in_half_open_range():
    rng = random.Random(0)
    for _ in range(2000):
        value = random_tenths(rng, 5.0, 55.0)
        assert Decimal("5.0") <= value < Decimal("55.0")
        assert value.as_tuple().exponent == -1
