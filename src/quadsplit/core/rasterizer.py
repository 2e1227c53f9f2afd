"""
Slice rasterization.

Converts the axis, the cut set and a decoded source image into up to four
PNG-encoded slices.  Rectangle computation is pure; pixel copying and
encoding go through ``QImage``.
"""

from __future__ import annotations

import base64
import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass

from PySide6.QtCore import QBuffer, QByteArray, QIODevice
from PySide6.QtGui import QImage

from ..config import EXPORT_EXTENSION, EXPORT_FORMAT, EXPORT_MIME, EXPORT_NAME_TEMPLATE
from ..errors import RasterizationUnavailableError
from .cuts import Axis
from .source import SourceImage

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class SliceRect:
    """Pixel rectangle of one segment in source image space."""

    index: int
    sx: int
    sy: int
    sw: int
    sh: int

    def as_tuple(self) -> tuple[int, int, int, int]:
        return (self.sx, self.sy, self.sw, self.sh)


@dataclass(frozen=True)
class SliceResult:
    """One encoded output image."""

    rect: SliceRect
    data: bytes
    """PNG payload."""

    @property
    def index(self) -> int:
        return self.rect.index

    @property
    def width(self) -> int:
        return self.rect.sw

    @property
    def height(self) -> int:
        return self.rect.sh

    @property
    def filename(self) -> str:
        return slice_filename(self.index)

    @property
    def data_url(self) -> str:
        encoded = base64.b64encode(self.data).decode("ascii")
        return f"data:{EXPORT_MIME};base64,{encoded}"

    def to_qimage(self) -> QImage:
        image = QImage()
        image.loadFromData(self.data, EXPORT_FORMAT)
        return image


def slice_filename(index: int, ext: str = EXPORT_EXTENSION) -> str:
    """Return the download name for the slice at *index* (``split_image_1.png``...)."""
    return EXPORT_NAME_TEMPLATE.format(number=index + 1, ext=ext)


def segment_boundaries(cuts: Sequence[float]) -> list[float]:
    """Return ``0``, the cuts and ``1`` in ascending order.

    Sorting tolerates a cut set that is temporarily out of order.
    """
    return sorted((0.0, *(float(c) for c in cuts), 1.0))


def compute_slice_rects(
    axis: Axis, cuts: Sequence[float], width: int, height: int
) -> list[SliceRect]:
    """Map every non-empty segment to a pixel rectangle.

    Segment edges are rounded to whole pixels, so adjacent rectangles share
    an edge and their extents add up to the full image width or height.
    Segments with a non-positive fractional size, or that round to zero
    pixels, are skipped.
    """
    if width <= 0 or height <= 0:
        return []
    bounds = segment_boundaries(cuts)
    extent = width if axis is Axis.ACROSS else height
    rects: list[SliceRect] = []
    for i in range(len(bounds) - 1):
        start_frac, end_frac = bounds[i], bounds[i + 1]
        if end_frac - start_frac <= 0.0:
            continue
        start = int(round(extent * start_frac))
        end = int(round(extent * end_frac))
        size = end - start
        if size <= 0:
            continue
        if axis is Axis.ACROSS:
            rects.append(SliceRect(i, start, 0, size, height))
        else:
            rects.append(SliceRect(i, 0, start, width, size))
    return rects


def encode_png(image: QImage) -> bytes:
    """Encode *image* losslessly, raising when the encoder is unavailable."""
    payload = QByteArray()
    buffer = QBuffer(payload)
    if not buffer.open(QIODevice.OpenModeFlag.WriteOnly):
        raise RasterizationUnavailableError("Cannot open in-memory buffer for encoding")
    try:
        ok = image.save(buffer, EXPORT_FORMAT)
    finally:
        buffer.close()
    if not ok:
        raise RasterizationUnavailableError(f"{EXPORT_FORMAT} encoder rejected the slice")
    return bytes(payload.data())


class SliceRasterizer:
    """Produces :class:`SliceResult` sets from the current editing state."""

    def __init__(self) -> None:
        self._generation = 0
        self._pending: tuple[SourceImage, Callable] | None = None

    def rasterize(
        self, source: SourceImage, axis: Axis, cuts: Sequence[float]
    ) -> list[SliceResult]:
        """Copy and encode every segment of *source*.

        Raises
        ------
        RasterizationUnavailableError:
            The source has no usable pixels, or a copy or encode failed.
            Nothing is returned in that case, never a partial set.
        """
        image = source.image
        if image is None or image.isNull():
            raise RasterizationUnavailableError(f"No raster available for {source.name}")

        rects = compute_slice_rects(axis, cuts, image.width(), image.height())
        results: list[SliceResult] = []
        for rect in rects:
            piece = image.copy(rect.sx, rect.sy, rect.sw, rect.sh)
            if piece.isNull():
                raise RasterizationUnavailableError(
                    f"Copy of segment {rect.index} {rect.as_tuple()} failed"
                )
            results.append(SliceResult(rect=rect, data=encode_png(piece)))
        _LOGGER.debug(
            "Rasterized %d slices of %s along %s", len(results), source.name, axis.value
        )
        return results

    def request(
        self,
        source: SourceImage,
        snapshot: Callable[[], tuple[Axis, Sequence[float]]],
        deliver: Callable[[list[SliceResult]], None],
        on_error: Callable[[RasterizationUnavailableError], None],
    ) -> bool:
        """Rasterize now, or once *source* finishes decoding.

        *snapshot* is read when the pass actually runs, so a deferred pass
        uses the latest axis and cuts.  Each call supersedes any pending one.
        A failed pass reports through *on_error* and delivers nothing.
        Returns ``True`` if a pass ran synchronously.
        """
        self.cancel()
        generation = self._generation

        def _run() -> None:
            try:
                results = self.rasterize(source, *snapshot())
            except RasterizationUnavailableError as exc:
                on_error(exc)
                return
            deliver(results)

        if source.is_ready:
            _run()
            return True
        if source.is_failed:
            _LOGGER.debug("Skipping rasterization of failed source %s", source.name)
            return False

        def _on_decoded(_source: SourceImage) -> None:
            self._drop_pending()
            if generation != self._generation:
                return
            _run()

        _LOGGER.debug("Source %s not decoded yet; rasterization suspended", source.name)
        source.decoded.connect(_on_decoded)
        self._pending = (source, _on_decoded)
        return False

    def cancel(self) -> None:
        """Discard any suspended pass."""
        self._generation += 1
        self._drop_pending()

    def has_pending(self) -> bool:
        return self._pending is not None

    def _drop_pending(self) -> None:
        if self._pending is None:
            return
        source, handler = self._pending
        self._pending = None
        if source.decoded.is_connected(handler):
            source.decoded.disconnect(handler)
