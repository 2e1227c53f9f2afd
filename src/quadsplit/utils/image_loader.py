"""Helpers for decoding source images into ``QImage`` with Pillow fallbacks."""

from __future__ import annotations

from pathlib import Path
from typing import Optional
import logging

from PIL import Image, ImageOps
from PIL.ImageQt import ImageQt
from PySide6.QtGui import QImage, QImageReader

_LOGGER = logging.getLogger(__name__)


def load_qimage(source: Path) -> Optional[QImage]:
    """Return a :class:`QImage` decoded from *source* at its natural size."""

    reader = QImageReader(str(source))
    # Slices are cut from the full-resolution image, so the reader must never
    # be asked to downscale.  The process-wide cache only helps thumbnails.
    disable_cache = getattr(reader, "setCacheEnabled", None)
    if callable(disable_cache):
        disable_cache(False)
    reader.setAutoTransform(True)
    image = reader.read()
    if not image.isNull():
        return image
    _LOGGER.debug("QImageReader failed for %s: %s", source, reader.errorString())
    return _load_with_pillow(source)


def qimage_from_pil(image: Image.Image) -> Optional[QImage]:
    """Convert a Pillow image into a detached :class:`QImage`."""

    try:
        qt_image = ImageQt(image.convert("RGBA"))
    except Exception:
        _LOGGER.exception("Failed to convert Pillow image to QImage")
        return None
    # ``ImageQt`` keeps a reference to the Pillow buffer; copying detaches it
    # so the pixels stay valid after the Pillow image is closed.
    return QImage(qt_image).copy()


def _load_with_pillow(source: Path) -> Optional[QImage]:
    try:
        with Image.open(source) as img:
            img = ImageOps.exif_transpose(img)
            return qimage_from_pil(img)
    except Exception:
        _LOGGER.exception("Pillow failed to load image from %s", source)
        return None
