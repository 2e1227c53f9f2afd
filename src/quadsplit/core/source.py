"""Decoded (or still decoding) source image handed to the editor."""

from __future__ import annotations

import logging
from typing import Optional

from PySide6.QtGui import QImage

from ..utils.signal import Signal

_LOGGER = logging.getLogger(__name__)


class SourceImage:
    """Read-only raster the slices are cut from.

    A source starts either decoded (:meth:`from_qimage`) or pending
    (:meth:`pending`).  A pending source is resolved exactly once, by
    :meth:`resolve` on success or :meth:`fail` otherwise, after which the
    matching signal fires.  The pixel data is never modified after that.
    """

    def __init__(self, name: str, image: Optional[QImage] = None) -> None:
        self._name = name
        self._image: Optional[QImage] = None
        self._error: Optional[str] = None
        self.decoded = Signal()
        self.failed = Signal()
        if image is not None:
            self._store(image)

    @classmethod
    def from_qimage(cls, image: QImage, name: str = "image") -> "SourceImage":
        return cls(name, image)

    @classmethod
    def pending(cls, name: str) -> "SourceImage":
        return cls(name)

    @property
    def name(self) -> str:
        return self._name

    @property
    def image(self) -> Optional[QImage]:
        return self._image

    @property
    def width(self) -> int:
        return self._image.width() if self._image is not None else 0

    @property
    def height(self) -> int:
        return self._image.height() if self._image is not None else 0

    @property
    def is_ready(self) -> bool:
        return self._image is not None

    @property
    def is_failed(self) -> bool:
        return self._error is not None

    @property
    def error(self) -> Optional[str]:
        return self._error

    def resolve(self, image: QImage) -> None:
        """Attach the decoded pixels and notify waiters."""
        if self.is_ready or self.is_failed:
            _LOGGER.warning("Source %s already settled; ignoring resolve", self._name)
            return
        if image is None or image.isNull():
            self.fail("Decoded image is null")
            return
        self._store(image)
        _LOGGER.debug("Source %s decoded at %dx%d", self._name, self.width, self.height)
        self.decoded.emit(self)

    def fail(self, message: str) -> None:
        if self.is_ready or self.is_failed:
            return
        self._error = message or "Decoding failed"
        _LOGGER.warning("Source %s failed to decode: %s", self._name, self._error)
        self.failed.emit(self, self._error)

    def _store(self, image: QImage) -> None:
        # Implicitly shared: later writes by the caller detach their own copy.
        self._image = QImage(image)
