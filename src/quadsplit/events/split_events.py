"""Events published by :class:`~quadsplit.core.session.SplitSession`."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional

from .bus import Event

if TYPE_CHECKING:
    from ..core.cuts import Axis
    from ..core.rasterizer import SliceResult


@dataclass(kw_only=True)
class SlicesUpdatedEvent(Event):
    """The exposed slice set was replaced (possibly by an empty one)."""
    results: tuple["SliceResult", ...] = field(default_factory=tuple)


@dataclass(kw_only=True)
class AxisChangedEvent(Event):
    axis: "Axis"


@dataclass(kw_only=True)
class SourceChangedEvent(Event):
    """A new image was loaded, or the current one was cleared (``name=None``)."""
    name: Optional[str] = None
    width: int = 0
    height: int = 0
