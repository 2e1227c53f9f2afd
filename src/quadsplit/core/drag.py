"""
Pointer drag handling for cut handles.

The controller turns container-relative pointer coordinates into
:meth:`CutPositionModel.set_cut` calls.  It never stores a cut value itself,
so all clamping stays inside the model.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import Optional

from PySide6.QtCore import QRectF

from ..config import CUT_COUNT
from ..utils.signal import Signal
from .cuts import Axis, CutPositionModel

_LOGGER = logging.getLogger(__name__)


def pointer_fraction(container_rect: QRectF, axis: Axis, x: float, y: float) -> Optional[float]:
    """Return the pointer position as a fraction of the container along *axis*.

    The result is not clamped; values outside ``[0, 1]`` are expected when
    the pointer leaves the container mid-drag.  Returns ``None`` for an empty
    container.
    """
    if axis is Axis.ACROSS:
        extent = float(container_rect.width())
        if extent <= 0.0:
            return None
        return (float(x) - float(container_rect.left())) / extent
    extent = float(container_rect.height())
    if extent <= 0.0:
        return None
    return (float(y) - float(container_rect.top())) / extent


class PointerSource:
    """Platform-neutral pointer stream that widgets emit into.

    Mouse and touch input are both normalised to ``moved(x, y)`` in the same
    coordinate space as the container rectangle.
    """

    def __init__(self) -> None:
        self.moved = Signal()
        self.released = Signal()


class PointerDragController:
    """Moves a single cut while a drag session is active."""

    def __init__(
        self,
        *,
        model: CutPositionModel,
        container_rect_provider: Callable[[], QRectF],
        pointer_source: Optional[PointerSource] = None,
    ) -> None:
        """Initialize the drag controller.

        Parameters
        ----------
        model:
            Cut position model that receives the clamped updates.
        container_rect_provider:
            Callable returning the current on-screen rectangle of the image
            container.  Queried on every move so resizes and zoom changes
            mid-drag are honoured.
        pointer_source:
            Optional pointer stream; the controller listens to it only while
            a drag session is active.
        """
        self._model = model
        self._container_rect_provider = container_rect_provider
        self._pointer_source = pointer_source
        self._active_index: Optional[int] = None
        self._subscribed = False

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    @property
    def active_index(self) -> Optional[int]:
        return self._active_index

    def is_dragging(self) -> bool:
        return self._active_index is not None

    def begin_drag(self, index: int) -> bool:
        """Start dragging cut *index*.  Returns ``False`` for invalid targets."""
        if not isinstance(index, int) or not 0 <= index < CUT_COUNT:
            _LOGGER.debug("Ignoring drag for invalid cut index %r", index)
            return False
        if self._active_index is not None:
            # Only one drag session at a time; a new press replaces the old one.
            self.end_drag()
        self._active_index = index
        self._subscribe()
        _LOGGER.debug("Drag started on cut %d", index)
        return True

    def on_pointer_move(self, container_rect: QRectF, axis: Axis, x: float, y: float) -> None:
        """Apply a pointer move to the active cut."""
        if self._active_index is None:
            return
        fraction = pointer_fraction(container_rect, axis, x, y)
        if fraction is None:
            return
        self._model.set_cut(self._active_index, fraction)

    def end_drag(self) -> None:
        """Finish the current drag session, if any."""
        if self._active_index is None and not self._subscribed:
            return
        _LOGGER.debug("Drag ended on cut %s", self._active_index)
        self._active_index = None
        self._unsubscribe()

    @contextmanager
    def dragging(self, index: int) -> Iterator[bool]:
        """Run a drag session that is always ended on exit."""
        started = self.begin_drag(index)
        try:
            yield started
        finally:
            if started:
                self.end_drag()

    # ------------------------------------------------------------------
    # Pointer source wiring
    # ------------------------------------------------------------------
    def _handle_moved(self, x: float, y: float) -> None:
        self.on_pointer_move(self._container_rect_provider(), self._model.axis, x, y)

    def _handle_released(self, *_args) -> None:
        self.end_drag()

    def _subscribe(self) -> None:
        if self._pointer_source is None or self._subscribed:
            return
        self._pointer_source.moved.connect(self._handle_moved)
        self._pointer_source.released.connect(self._handle_released)
        self._subscribed = True

    def _unsubscribe(self) -> None:
        if self._pointer_source is None or not self._subscribed:
            return
        self._subscribed = False
        for signal, handler in (
            (self._pointer_source.moved, self._handle_moved),
            (self._pointer_source.released, self._handle_released),
        ):
            if signal.is_connected(handler):
                signal.disconnect(handler)
