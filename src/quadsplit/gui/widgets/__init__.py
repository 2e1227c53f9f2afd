from .drop_zone import DropZone
from .result_gallery import ResultGallery
from .split_editor import SplitEditor

__all__ = ["DropZone", "ResultGallery", "SplitEditor"]
