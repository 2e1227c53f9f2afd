"""Custom exception hierarchy for quadsplit."""

from __future__ import annotations


class QuadSplitError(Exception):
    """Base class for all custom errors raised by quadsplit."""


# --- Layered hierarchy ---
# The domain layer never raises: cut positions are clamped and degenerate
# segments are skipped.

class InfrastructureError(QuadSplitError):
    """Base class for infrastructure-level errors."""


class ApplicationError(QuadSplitError):
    """Base class for application-level errors."""


# --- Infrastructure errors ---

class RasterizationUnavailableError(InfrastructureError):
    """Raised when the raster primitive cannot copy or encode a slice."""


class ImageDecodeError(InfrastructureError):
    """Raised when an image file cannot be decoded."""


class ExportError(InfrastructureError):
    """Raised when a slice cannot be written to disk."""


# --- Application errors ---

class UnsupportedFileError(ApplicationError):
    """Raised when a selected or dropped file is not an image."""


__all__ = [
    "ApplicationError",
    "ExportError",
    "ImageDecodeError",
    "InfrastructureError",
    "QuadSplitError",
    "RasterizationUnavailableError",
    "UnsupportedFileError",
]
