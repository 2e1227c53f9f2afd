"""
Cut position model for the four-way split.

The model owns the split axis and the three normalised cut positions and is
the single place where the ordering and minimum-gap constraints are enforced.
It has no Qt dependency; consumers observe it through pure Python signals.
"""

from __future__ import annotations

import enum
import logging
import math
from collections.abc import Sequence

from ..config import CUT_COUNT, DEFAULT_CUTS, MIN_GAP
from ..utils.signal import Signal

_LOGGER = logging.getLogger(__name__)


class Axis(enum.Enum):
    """Direction along which the image is partitioned."""

    ACROSS = "across"
    """Vertical cut lines; pieces are laid out left to right."""

    DOWN = "down"
    """Horizontal cut lines; pieces are stacked top to bottom."""


class CutPositionModel:
    """Holds the split axis and the ordered cut set.

    Invariant: ``MIN_GAP <= cut[0]``, ``cut[i] + MIN_GAP <= cut[i + 1]`` and
    ``cut[2] <= 1 - MIN_GAP``.  All mutations clamp rather than reject.

    Signals
    -------
    changed():
        Emitted after any change to the cuts or the axis.
    axisChanged(axis):
        Emitted when the axis is replaced, before ``changed``.  Anything
        derived from the previous axis is stale at this point.
    """

    def __init__(self, axis: Axis = Axis.ACROSS) -> None:
        self._axis = axis
        self._cuts: list[float] = list(DEFAULT_CUTS)
        self._min_gap = MIN_GAP
        self.changed = Signal()
        self.axisChanged = Signal()

    @property
    def axis(self) -> Axis:
        return self._axis

    @property
    def cuts(self) -> tuple[float, ...]:
        return tuple(self._cuts)

    @property
    def min_gap(self) -> float:
        return self._min_gap

    def set_axis(self, axis: Axis) -> None:
        """Replace the axis and reset the cuts to an even distribution.

        The reset happens even when *axis* equals the current axis so that
        re-selecting the active direction also acts as "reset cuts".
        """
        self._axis = Axis(axis)
        self._cuts = list(DEFAULT_CUTS)
        _LOGGER.debug("Axis set to %s; cuts reset to %s", self._axis.value, DEFAULT_CUTS)
        self.axisChanged.emit(self._axis)
        self.changed.emit()

    def reset(self) -> None:
        """Restore the default cut positions without touching the axis."""
        if self._cuts == list(DEFAULT_CUTS):
            return
        self._cuts = list(DEFAULT_CUTS)
        self.changed.emit()

    def compute_bounds(self, index: int) -> tuple[float, float]:
        """Return the ``(lower, upper)`` range that cut *index* may occupy.

        The bounds come from the neighbours' current values, so a cut can
        never be dragged past an adjacent one.
        """
        gap = self._min_gap
        lower = self._cuts[index - 1] + gap if index > 0 else gap
        upper = self._cuts[index + 1] - gap if index < CUT_COUNT - 1 else 1.0 - gap
        return lower, upper

    def set_cut(self, index: int, value: float) -> bool:
        """Clamp *value* into the bounds for *index* and store it.

        Returns ``True`` when the stored position changed.  Indices outside
        ``[0, CUT_COUNT)`` are ignored.
        """
        if not 0 <= index < CUT_COUNT:
            _LOGGER.debug("Ignoring set_cut for invalid index %r", index)
            return False
        if not self._store_clamped(index, value):
            return False
        self.changed.emit()
        return True

    def set_cuts(self, values: Sequence[float]) -> bool:
        """Apply up to three positions at once, emitting ``changed`` once.

        Values are clamped forwards and then backwards, so any sorted input
        that already honours the gap lands exactly; other input is clamped
        into the nearest valid configuration.
        """
        values = [float(v) for v in list(values)[:CUT_COUNT]]
        if not values:
            return False
        moved = False
        order = list(range(len(values)))
        for index in order + order[::-1]:
            moved = self._store_clamped(index, values[index]) or moved
        if moved:
            self.changed.emit()
        return moved

    def _store_clamped(self, index: int, value: float) -> bool:
        lower, upper = self.compute_bounds(index)
        value = float(value)
        if math.isnan(value):
            value = lower
        clamped = max(lower, min(value, upper))
        if clamped == self._cuts[index]:
            return False
        self._cuts[index] = clamped
        return True

    def segments(self) -> list[tuple[float, float]]:
        """Return the four ``(start, end)`` fractional segments along the axis."""
        bounds = [0.0, *self._cuts, 1.0]
        return list(zip(bounds[:-1], bounds[1:]))
