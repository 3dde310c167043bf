"""Single expanded product row."""

import random

import pytest

from planning import UnknownKeyError
from planning.catalog import PRODUCTS
from planning.selection import SelectionState


def test_toggle_expands_then_collapses():
    state = SelectionState()
    assert state.toggle("Mesh") == "Mesh"
    assert state.is_expanded("Mesh")
    assert state.toggle("Mesh") is None
    assert state.expanded is None


def test_expanding_another_product_replaces_selection():
    state = SelectionState()
    state.toggle("Mesh")
    assert state.toggle("Wire") == "Wire"
    assert not state.is_expanded("Mesh")


def test_at_most_one_product_expanded():
    state = SelectionState()
    rng = random.Random(3)
    for _ in range(100):
        state.toggle(rng.choice(PRODUCTS))
        assert sum(state.is_expanded(p) for p in PRODUCTS) <= 1


def test_unknown_product_fails_hard():
    state = SelectionState()
    with pytest.raises(UnknownKeyError):
        state.toggle("Bolts")
    assert state.expanded is None
