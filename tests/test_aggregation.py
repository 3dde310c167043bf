"""Aggregation engine: sample loader, series projection and derived views."""

import math
import random
import re
from decimal import Decimal

import pytest

from planning.aggregation import (
    load_sample,
    project_series,
    project_trendlines,
    rollup_totals,
    series_frame,
    slice_total,
)
from planning.catalog import FORECAST_PERIODS, METRICS, PRODUCT_GROUPS, PRODUCTS, timeline
from planning.forecast_grid import ForecastGrid
from planning.historical import HistoricalSalesStore
from planning.models import SeriesPoint

ONE_DECIMAL = re.compile(r"^\d+\.\d$")


def test_slice_total_treats_junk_as_zero():
    assert slice_total(["20", None, "abc", "5", "-"]) == Decimal("25.0")


def test_rollup_of_empty_cells_is_all_zero():
    totals = rollup_totals({})
    assert len(totals) == len(PRODUCTS) * len(FORECAST_PERIODS) * len(METRICS)
    assert all(total == 0 for total in totals.values())


def test_load_sample_overwrites_every_cell(grid, rng):
    grid.set_cell("Agriculture", "Mar 2025", "Rebar Tie Wire", "Backlog", "999")
    grid.set_cell("Wire", "Jun 2025", "Mesh Panels", "Absolute", "abc")

    written = load_sample(grid, rng)

    assert written == len(PRODUCTS) * len(FORECAST_PERIODS) * len(PRODUCT_GROUPS) * len(METRICS)
    snap = grid.snapshot()
    for product in PRODUCTS:
        for period in FORECAST_PERIODS:
            for group in PRODUCT_GROUPS:
                for metric in METRICS:
                    raw = snap.cells[product][period][group][metric]
                    assert ONE_DECIMAL.match(raw)
                    assert Decimal("5.0") <= Decimal(raw) < Decimal("55.0")


def test_load_sample_recomputes_every_total(grid, rng):
    grid.set_cell("Mesh", "Apr 2025", "Bar Ties", "Forecast", "1000")
    load_sample(grid, rng)

    for product in PRODUCTS:
        for period in FORECAST_PERIODS:
            for metric in METRICS:
                cells = grid.slice_cells(product, period, metric).values()
                expected = sum(Decimal(raw) for raw in cells)
                assert grid.get_total(product, period, metric) == expected


def test_load_sample_is_reproducible():
    first, second = ForecastGrid(), ForecastGrid()
    for g in (first, second):
        g.initialize()
        load_sample(g, random.Random(8))
    assert first.snapshot() == second.snapshot()


def test_series_is_history_then_forecast(grid, fake_historical):
    historical = fake_historical({"Mesh": [12.3, 18.0, 9.5, 11.0]})
    grid.set_cell("Mesh", "Mar 2025", "Rebar Tie Wire", "Backlog", "20")
    grid.set_cell("Mesh", "Mar 2025", "Bar Ties", "Backlog", "5")

    series = project_series(historical, grid)
    mesh = series["Mesh"]

    assert [p.period for p in mesh] == list(timeline())
    assert [p.value for p in mesh] == [
        Decimal("12.3"), Decimal("18.0"), Decimal("9.5"), Decimal("11.0"),
        Decimal("25.0"), Decimal("0"), Decimal("0"), Decimal("0"),
    ]
    assert [p.is_forecast for p in mesh] == [False] * 4 + [True] * 4
    # Zero is a value, not a gap
    assert mesh[5].value is not None


def test_forecast_point_adds_all_metrics(grid, fake_historical):
    for metric, raw in zip(METRICS, ["10", "2.5", "1", "0.5"]):
        grid.set_cell("Nails", "May 2025", "Galvanized Wire", metric, raw)

    series = project_series(fake_historical({}), grid)
    may = [p for p in series["Nails"] if p.period == "May 2025"][0]
    assert may.value == Decimal("14.0")


def test_non_finite_total_projects_as_no_value(grid, fake_historical):
    grid.set_cell("Wire", "Apr 2025", "Bar Ties", "Backlog", "Infinity")

    series = project_series(fake_historical({"Wire": [1, 2, 3, 4]}), grid)
    values = {p.period: p.value for p in series["Wire"]}

    assert values["Apr 2025"] is None
    assert values["Mar 2025"] == Decimal("0")
    assert values["Feb 2025"] == Decimal("4")


def test_unseeded_stores_project_as_no_value():
    series = project_series(HistoricalSalesStore(), ForecastGrid())
    assert list(series) == list(PRODUCTS)
    assert all(p.value is None for points in series.values() for p in points)


def test_projection_reflects_later_edits(grid, fake_historical):
    historical = fake_historical({})
    before = project_series(historical, grid)["Stucco"][4].value
    grid.set_cell("Stucco", "Mar 2025", "Bar Ties", "Forecast", "3")
    after = project_series(historical, grid)["Stucco"][4].value
    assert (before, after) == (Decimal("0"), Decimal("3.0"))


def _points(values):
    return [SeriesPoint(label, None if v is None else Decimal(str(v))) for label, v in zip(timeline(), values)]


def test_trendline_fits_linear_series():
    trends = project_trendlines({"Mesh": _points([1, 2, 3, 4, 5, 6, 7, 8])})
    trend = trends["Mesh"]
    assert trend.slope == pytest.approx(1.0)
    assert trend.intercept == pytest.approx(1.0)
    assert trend.fitted == pytest.approx([1, 2, 3, 4, 5, 6, 7, 8])


def test_trendline_skips_gaps_and_needs_two_points():
    trends = project_trendlines({
        "Mesh": _points([2, None, 6, None, None, None, None, None]),
        "Wire": _points([5, None, None, None, None, None, None, None]),
    })
    assert trends["Mesh"].slope == pytest.approx(2.0)
    assert len(trends["Mesh"].fitted) == 8
    assert trends["Wire"] is None


def test_series_frame_layout(grid, fake_historical):
    grid.set_cell("Wire", "Apr 2025", "Bar Ties", "Backlog", "Infinity")
    series = project_series(fake_historical({"Wire": [1, 2, 3, 4]}), grid)

    frame = series_frame(series)

    assert frame.index.name == "period"
    assert list(frame.index) == list(timeline())
    assert list(frame.columns) == list(PRODUCTS)
    assert frame.loc["Feb 2025", "Wire"] == 4.0
    assert math.isnan(frame.loc["Apr 2025", "Wire"])
    assert math.isnan(frame.loc["Nov 2024", "Mesh"])
    assert frame.loc["Mar 2025", "Mesh"] == 0.0
