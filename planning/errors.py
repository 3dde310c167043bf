"""Exceptions raised by the planning core."""

from __future__ import annotations


class PlanningError(Exception):
    """Base class for planning core errors."""


class UnknownKeyError(PlanningError, KeyError):
    """A product, group, period or metric outside the fixed catalogs.

    The catalogs are closed sets, so this is always a caller bug.
    """

    def __init__(self, kind: str, value: object):
        self.kind = kind
        self.value = value
        super().__init__(f"Unknown {kind}: {value!r}")

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the plain message
        return self.args[0]


class HistoricalDataLockedError(PlanningError):
    """Historical sales were already generated for this store."""
