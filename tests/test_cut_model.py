"""Tests for the CutPositionModel ordering and gap invariants."""

import itertools
import math

import pytest

from quadsplit.config import DEFAULT_CUTS, MIN_GAP
from quadsplit.core.cuts import Axis, CutPositionModel


def assert_valid(cuts):
    assert len(cuts) == 3
    assert cuts[0] >= MIN_GAP - 1e-12
    assert cuts[0] + MIN_GAP <= cuts[1] + 1e-12
    assert cuts[1] + MIN_GAP <= cuts[2] + 1e-12
    assert cuts[2] <= 1.0 - MIN_GAP + 1e-12


@pytest.fixture
def model():
    return CutPositionModel()


def test_defaults(model):
    assert model.axis is Axis.ACROSS
    assert model.cuts == DEFAULT_CUTS
    assert model.min_gap == MIN_GAP


def test_compute_bounds_for_default_cuts(model):
    assert model.compute_bounds(0) == pytest.approx((0.05, 0.45))
    assert model.compute_bounds(1) == pytest.approx((0.30, 0.70))
    assert model.compute_bounds(2) == pytest.approx((0.55, 0.95))


@pytest.mark.parametrize(
    "cuts",
    [
        (0.05, 0.10, 0.15),
        (0.85, 0.90, 0.95),
        (0.05, 0.50, 0.95),
        (0.2, 0.25, 0.9),
    ],
)
def test_compute_bounds_always_well_formed(model, cuts):
    model.set_cuts(cuts)
    assert model.cuts == pytest.approx(cuts)
    for index in range(3):
        lower, upper = model.compute_bounds(index)
        assert lower <= upper + 1e-12


def test_set_cut_stores_value_within_bounds(model):
    assert model.set_cut(1, 0.6)
    assert model.cuts == pytest.approx((0.25, 0.6, 0.75))


def test_set_cut_clamps_to_previous_neighbour(model):
    # Drag cut 1 towards cut 0 past the minimum gap.
    model.set_cut(1, 0.26)
    assert model.cuts[1] == pytest.approx(model.cuts[0] + MIN_GAP)
    assert model.cuts[1] > model.cuts[0]


def test_set_cut_clamps_negative_value_to_lower_bound(model):
    model.set_cut(0, -0.3)
    assert model.cuts[0] == pytest.approx(MIN_GAP)


def test_set_cut_clamps_beyond_one(model):
    model.set_cut(2, 1.7)
    assert model.cuts[2] == pytest.approx(1.0 - MIN_GAP)


@pytest.mark.parametrize("value", [-10.0, -0.3, 0.0, 0.049, 0.3, 0.5, 0.99, 1.0, 2.5, math.inf, -math.inf])
@pytest.mark.parametrize("index", [0, 1, 2])
def test_set_cut_always_leaves_valid_cut_set(model, index, value):
    model.set_cut(index, value)
    assert_valid(model.cuts)


def test_random_walk_keeps_invariant(model):
    values = [-1.0, 0.0, 0.1, 0.33, 0.5, 0.66, 0.9, 1.0, 2.0]
    for index, value in itertools.product(range(3), values):
        model.set_cut(index, value)
        assert_valid(model.cuts)


def test_set_cut_treats_nan_as_lower_bound(model):
    model.set_cut(2, float("nan"))
    assert model.cuts[2] == pytest.approx(0.55)


def test_set_cut_ignores_invalid_index(model):
    calls = []
    model.changed.connect(lambda: calls.append(True))
    assert not model.set_cut(3, 0.5)
    assert not model.set_cut(-1, 0.5)
    assert model.cuts == DEFAULT_CUTS
    assert calls == []


def test_set_cut_emits_changed_only_when_value_moves(model):
    calls = []
    model.changed.connect(lambda: calls.append(model.cuts))
    model.set_cut(0, 0.25)
    assert calls == []
    model.set_cut(0, 0.2)
    assert len(calls) == 1


def test_set_axis_resets_cuts_and_notifies(model):
    events = []
    model.axisChanged.connect(lambda axis: events.append(("axis", axis)))
    model.changed.connect(lambda: events.append(("changed", None)))
    model.set_cut(0, 0.1)
    events.clear()

    model.set_axis(Axis.DOWN)

    assert model.axis is Axis.DOWN
    assert model.cuts == DEFAULT_CUTS
    assert events == [("axis", Axis.DOWN), ("changed", None)]


def test_set_axis_same_axis_still_resets(model):
    model.set_cut(2, 0.9)
    model.set_axis(Axis.ACROSS)
    assert model.cuts == DEFAULT_CUTS


def test_set_axis_accepts_value_string(model):
    model.set_axis("down")
    assert model.axis is Axis.DOWN


def test_reset_restores_defaults(model):
    model.set_cut(1, 0.4)
    model.reset()
    assert model.cuts == DEFAULT_CUTS


def test_set_cuts_applies_sorted_input_exactly(model):
    assert model.set_cuts([0.6, 0.7, 0.8])
    assert model.cuts == pytest.approx((0.6, 0.7, 0.8))


def test_set_cuts_clamps_unsorted_input(model):
    model.set_cuts([0.9, 0.1, 0.5])
    assert_valid(model.cuts)


def test_segments_cover_unit_interval(model):
    segments = model.segments()
    assert segments[0][0] == 0.0
    assert segments[-1][1] == 1.0
    for (_, end), (start, _) in zip(segments, segments[1:]):
        assert end == start
