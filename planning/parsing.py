"""Lenient quantity parsing and one-decimal rounding.

Cells hold whatever the analyst typed, so parsing never fails: the longest
numeric prefix wins (``"1."`` -> 1, ``"12abc"`` -> 12) and anything without
one counts as unparseable. Aggregations treat unparseable as 0.
"""

from __future__ import annotations

import math
import re
from decimal import Context, Decimal, ROUND_HALF_UP
from typing import Iterable, Optional

ZERO = Decimal(0)
TENTH = Decimal("0.1")

# Wide enough to hold any finite double at one-decimal scale. No traps:
# inf - inf quietly becomes NaN and surfaces as a non-finite total.
QUANTITY_CONTEXT = Context(prec=340, rounding=ROUND_HALF_UP, traps=[])

_NUMBER_PREFIX = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")
_INFINITY_PREFIX = re.compile(r"^\s*([+-]?Infinity)")


def parse_quantity(raw: Optional[str]) -> Optional[Decimal]:
    """Parse a raw cell string; ``None`` when absent or unparseable."""
    if raw is None:
        return None
    text = str(raw)
    match = _NUMBER_PREFIX.match(text) or _INFINITY_PREFIX.match(text)
    if not match:
        return None
    prefix = match.group(1)
    # A double decides the range: past it the value overflows to a signed
    # infinity, below the smallest subnormal it underflows to zero
    number = float(prefix)
    if math.isinf(number):
        return Decimal(number)
    if number == 0:
        return ZERO
    value = QUANTITY_CONTEXT.create_decimal(prefix)
    if not value.is_finite():
        # Exponent text too wide for the context; the double is exact enough
        value = Decimal(repr(number))
    return value


def quantity_or_zero(raw: Optional[str]) -> Decimal:
    value = parse_quantity(raw)
    return ZERO if value is None else value


def round_tenth(value: Decimal) -> Decimal:
    """Round half-up to one decimal place. Non-finite values pass through."""
    if not value.is_finite():
        return value
    rounded = value.quantize(TENTH, context=QUANTITY_CONTEXT)
    if rounded.is_zero():
        return rounded.copy_abs()
    return rounded


def sum_rounded(values: Iterable[Decimal]) -> Decimal:
    """Sum at full precision, then round once."""
    total = ZERO
    for value in values:
        total = QUANTITY_CONTEXT.add(total, value)
    return round_tenth(total)


def format_tenth(value: Decimal) -> str:
    return str(round_tenth(value))


def to_float(value: Optional[Decimal]) -> Optional[float]:
    """JSON-friendly float; ``None`` for missing or non-finite values."""
    if value is None or not value.is_finite():
        return None
    return float(value)


def random_tenths(rng, low: float, high: float) -> Decimal:
    """Uniform draw from [low, high) on a one-decimal grid."""
    tenths = rng.randrange(int(round(low * 10)), int(round(high * 10)))
    return Decimal(tenths).scaleb(-1)
