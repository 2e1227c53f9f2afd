"""Write slice results to disk under their download names."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from ..core.rasterizer import SliceResult
from ..errors import ExportError

_LOGGER = logging.getLogger(__name__)


def write_slice(result: SliceResult, destination: Path) -> Path:
    """Write one encoded slice to *destination*."""
    destination = Path(destination)
    try:
        destination.parent.mkdir(parents=True, exist_ok=True)
        destination.write_bytes(result.data)
    except OSError as exc:
        raise ExportError(f"Cannot write {destination}: {exc}") from exc
    _LOGGER.debug("Wrote slice %d to %s", result.index, destination)
    return destination


def export_slices(results: Iterable[SliceResult], directory: Path) -> list[Path]:
    """Write every slice into *directory* as ``split_image_<n>.png``."""
    directory = Path(directory)
    written = [write_slice(result, directory / result.filename) for result in results]
    _LOGGER.info("Exported %d slices to %s", len(written), directory)
    return written
