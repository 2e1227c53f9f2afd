"""Turn user-selected files into :class:`SourceImage` instances."""

from __future__ import annotations

import logging
from pathlib import Path

from ..config import UNSUPPORTED_FILE_MESSAGE
from ..core.source import SourceImage
from ..errors import ImageDecodeError, UnsupportedFileError
from ..media_classifier import is_image_file
from ..utils import image_loader

_LOGGER = logging.getLogger(__name__)


def validate_image_path(path: Path) -> Path:
    """Return *path* if it names an existing image file.

    Raises
    ------
    UnsupportedFileError:
        The file does not exist or is not an image.
    """
    path = Path(path)
    if not path.is_file():
        raise UnsupportedFileError(f"{path} does not exist")
    if not is_image_file(path):
        raise UnsupportedFileError(f"{UNSUPPORTED_FILE_MESSAGE}: {path.name}")
    return path


def load_source(path: Path) -> SourceImage:
    """Validate and synchronously decode *path*."""
    path = validate_image_path(path)
    image = image_loader.load_qimage(path)
    if image is None or image.isNull():
        raise ImageDecodeError(f"Could not decode {path}")
    _LOGGER.info("Loaded %s (%dx%d)", path.name, image.width(), image.height())
    return SourceImage.from_qimage(image, name=path.name)


def pending_source(path: Path) -> SourceImage:
    """Validate *path* and return a source whose pixels arrive later."""
    path = validate_image_path(path)
    return SourceImage.pending(path.name)
