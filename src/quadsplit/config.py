"""Default configuration values for quadsplit."""

from __future__ import annotations

from typing import Final

# Three cuts always produce four pieces; the cut count is not configurable.
CUT_COUNT: Final[int] = 3

# Minimum fractional distance between two neighbouring boundaries (including
# the implicit 0 and 1 edges).  Keeps every segment at least 5% of the axis.
MIN_GAP: Final[float] = 0.05

DEFAULT_CUTS: Final[tuple[float, float, float]] = (0.25, 0.50, 0.75)

# ---------------------------------------------------------------------------
# Export
# ---------------------------------------------------------------------------

EXPORT_FORMAT: Final[str] = "PNG"
EXPORT_EXTENSION: Final[str] = "png"
EXPORT_MIME: Final[str] = "image/png"
EXPORT_NAME_TEMPLATE: Final[str] = "split_image_{number}.{ext}"

PROCESSING_ERROR_MESSAGE: Final[str] = "Unable to process image"
UNSUPPORTED_FILE_MESSAGE: Final[str] = "Please choose an image file"

# ---------------------------------------------------------------------------
# UI interaction constants
# ---------------------------------------------------------------------------

# Distance in widget pixels within which a press grabs a cut handle.
HANDLE_HIT_PADDING: Final[float] = 8.0
HANDLE_LINE_WIDTH: Final[int] = 4
SEGMENT_LABEL_RADIUS: Final[int] = 16

GALLERY_COLUMNS: Final[int] = 4
GALLERY_THUMB_SIZE: Final[int] = 180

WINDOW_DEFAULT_SIZE: Final[tuple[int, int]] = (960, 820)
