from .export import export_slices, write_slice
from .ingest import load_source, pending_source, validate_image_path

__all__ = [
    "export_slices",
    "load_source",
    "pending_source",
    "validate_image_path",
    "write_slice",
]
