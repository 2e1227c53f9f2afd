"""Split one image into four pieces along adjustable cut lines."""

__version__ = "0.1.0"
