"""
Partition engine: cut model, pointer drag handling and slice rasterization.

Nothing in this package touches widgets; Qt is used only for its geometry
and raster types.
"""

from .cuts import Axis, CutPositionModel
from .drag import PointerDragController, PointerSource, pointer_fraction
from .rasterizer import (
    SliceRasterizer,
    SliceRect,
    SliceResult,
    compute_slice_rects,
    segment_boundaries,
    slice_filename,
)
from .session import SplitSession
from .source import SourceImage

__all__ = [
    "Axis",
    "CutPositionModel",
    "PointerDragController",
    "PointerSource",
    "SliceRasterizer",
    "SliceRect",
    "SliceResult",
    "SourceImage",
    "SplitSession",
    "compute_slice_rects",
    "pointer_fraction",
    "segment_boundaries",
    "slice_filename",
]
