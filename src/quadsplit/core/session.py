"""
Editing session tying the cut model, the source image and the rasterizer.

The session recomputes the slice set eagerly after every change to the axis,
the cuts or the source image and exposes the latest set as an immutable
tuple.  Consumers (gallery, exporters) observe it through ``resultsChanged``
or :class:`~quadsplit.events.SlicesUpdatedEvent` on the event bus.
"""

from __future__ import annotations

import logging
from typing import Optional

from ..config import PROCESSING_ERROR_MESSAGE
from ..errors import ImageDecodeError, RasterizationUnavailableError
from ..errors.handler import ErrorHandler, ErrorSeverity
from ..events import AxisChangedEvent, EventBus, SlicesUpdatedEvent, SourceChangedEvent
from ..utils.signal import Signal
from .cuts import Axis, CutPositionModel
from .rasterizer import SliceRasterizer, SliceResult
from .source import SourceImage

_LOGGER = logging.getLogger(__name__)


class SplitSession:
    """Owns the state of one image being split into four."""

    def __init__(
        self,
        *,
        event_bus: Optional[EventBus] = None,
        error_handler: Optional[ErrorHandler] = None,
        rasterizer: Optional[SliceRasterizer] = None,
        model: Optional[CutPositionModel] = None,
    ) -> None:
        self._events = event_bus or EventBus()
        self._error_handler = error_handler or ErrorHandler(_LOGGER, self._events)
        self._rasterizer = rasterizer or SliceRasterizer()
        self._model = model or CutPositionModel()
        self._source: Optional[SourceImage] = None
        self._results: tuple[SliceResult, ...] = ()
        self._processing = False

        self.resultsChanged = Signal()
        self.processingChanged = Signal()

        self._model.axisChanged.connect(self._on_axis_changed)
        self._model.changed.connect(self.refresh)

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------
    @property
    def model(self) -> CutPositionModel:
        return self._model

    @property
    def events(self) -> EventBus:
        return self._events

    @property
    def error_handler(self) -> ErrorHandler:
        return self._error_handler

    @property
    def source(self) -> Optional[SourceImage]:
        return self._source

    @property
    def results(self) -> tuple[SliceResult, ...]:
        return self._results

    @property
    def is_processing(self) -> bool:
        return self._processing

    @property
    def axis(self) -> Axis:
        return self._model.axis

    @property
    def cuts(self) -> tuple[float, ...]:
        return self._model.cuts

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------
    def set_source(self, source: SourceImage) -> None:
        """Replace the image being split.  Prior results are discarded."""
        self._detach_source()
        self._source = source
        source.failed.connect(self._on_source_failed)
        self._events.publish(
            SourceChangedEvent(name=source.name, width=source.width, height=source.height)
        )
        self._replace_results(())
        if source.is_failed:
            self._on_source_failed(source, source.error)
            return
        self.refresh()

    def clear_source(self) -> None:
        self._rasterizer.cancel()
        self._detach_source()
        self._source = None
        self._set_processing(False)
        self._events.publish(SourceChangedEvent())
        self._replace_results(())

    def set_axis(self, axis: Axis) -> None:
        self._model.set_axis(axis)

    def set_cut(self, index: int, value: float) -> bool:
        return self._model.set_cut(index, value)

    def set_cuts(self, values) -> bool:
        return self._model.set_cuts(values)

    def reset_cuts(self) -> None:
        self._model.reset()

    def refresh(self) -> None:
        """Run a rasterization pass for the current state.

        If the source is still decoding the pass is suspended and resumes
        once with whatever state is current at that time.
        """
        source = self._source
        if source is None or source.is_failed:
            return
        self._set_processing(True)
        self._rasterizer.request(
            source,
            lambda: (self._model.axis, self._model.cuts),
            self._deliver,
            self._on_rasterization_failed,
        )

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _on_axis_changed(self, axis: Axis) -> None:
        self._rasterizer.cancel()
        self._events.publish(AxisChangedEvent(axis=axis))
        self._replace_results(())

    def _detach_source(self) -> None:
        if self._source is not None and self._source.failed.is_connected(self._on_source_failed):
            self._source.failed.disconnect(self._on_source_failed)

    def _on_source_failed(self, source: SourceImage, message: str) -> None:
        if source is not self._source:
            return
        self._rasterizer.cancel()
        self._set_processing(False)
        self._error_handler.handle(
            ImageDecodeError(f"{source.name}: {message}"),
            ErrorSeverity.ERROR,
            message=PROCESSING_ERROR_MESSAGE,
            context={"source": source.name},
        )

    def _deliver(self, results: list[SliceResult]) -> None:
        self._replace_results(tuple(results))
        self._set_processing(False)

    def _on_rasterization_failed(self, error: RasterizationUnavailableError) -> None:
        self._replace_results(())
        self._set_processing(False)
        self._error_handler.handle(
            error,
            ErrorSeverity.ERROR,
            message=PROCESSING_ERROR_MESSAGE,
            context={"source": self._source.name if self._source else None},
        )

    def _replace_results(self, results: tuple[SliceResult, ...]) -> None:
        if not results and not self._results:
            return
        self._results = results
        self._events.publish(SlicesUpdatedEvent(results=results))
        self.resultsChanged.emit(results)

    def _set_processing(self, processing: bool) -> None:
        if processing == self._processing:
            return
        self._processing = processing
        self.processingChanged.emit(processing)
