import os
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"

# Ensure the project sources are importable without an editable install.
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

# Widgets are created in tests; never require a display server.
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PySide6.QtGui import QColor, QImage  # noqa: E402


def make_striped_image(width: int, height: int, stripes: int = 4, vertical: bool = True) -> QImage:
    """Return an ARGB image filled with *stripes* distinct solid bands."""
    palette = [QColor("red"), QColor("green"), QColor("blue"), QColor("yellow")]
    image = QImage(width, height, QImage.Format.Format_ARGB32)
    extent = width if vertical else height
    for i in range(stripes):
        start = extent * i // stripes
        end = extent * (i + 1) // stripes
        color = palette[i % len(palette)].rgba()
        for along in range(start, end):
            for across in range(height if vertical else width):
                x, y = (along, across) if vertical else (across, along)
                image.setPixel(x, y, color)
    return image


@pytest.fixture
def striped_image():
    return make_striped_image


@pytest.fixture
def image_file(tmp_path):
    """Write a 400x200 PNG to disk and return its path."""
    path = tmp_path / "sample.png"
    image = make_striped_image(400, 200)
    assert image.save(str(path), "PNG")
    return path
