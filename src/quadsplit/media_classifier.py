"""Classification of candidate input files before they reach the editor."""

from __future__ import annotations

import mimetypes
from pathlib import Path

IMAGE_EXTENSIONS: frozenset[str] = frozenset({
    ".jpg",
    ".jpeg",
    ".png",
    ".webp",
    ".bmp",
    ".gif",
    ".tif",
    ".tiff",
})


def _normalise_mime(value: object) -> str:
    """Return a lower-case MIME type string or an empty string."""

    if isinstance(value, str):
        return value.strip().lower()
    return ""


def guess_mime(path: Path) -> str:
    mime, _ = mimetypes.guess_type(path.name)
    return _normalise_mime(mime)


def is_image_file(path: Path | str) -> bool:
    """Return ``True`` when *path* looks like an image we can decode.

    The MIME type wins when the platform registry knows the suffix; the
    extension whitelist covers registries that report nothing (``.webp`` on
    older Windows installs, for example).
    """

    path = Path(path)
    mime = guess_mime(path)
    if mime:
        return mime.startswith("image/") and path.suffix.lower() in IMAGE_EXTENSIONS
    return path.suffix.lower() in IMAGE_EXTENSIONS
