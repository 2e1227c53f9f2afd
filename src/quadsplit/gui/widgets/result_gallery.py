"""Grid of slice previews with per-slice save buttons."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Optional, Sequence

from PySide6.QtCore import Qt, Signal
from PySide6.QtGui import QPixmap
from PySide6.QtWidgets import (
    QFileDialog,
    QFrame,
    QGridLayout,
    QLabel,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from ...config import GALLERY_COLUMNS, GALLERY_THUMB_SIZE
from ...core.rasterizer import SliceResult
from ...errors import ExportError
from ...io.export import export_slices, write_slice

_LOGGER = logging.getLogger(__name__)

SaveTargetProvider = Callable[[str], Optional[Path]]
DirectoryProvider = Callable[[], Optional[Path]]


class _SliceCard(QFrame):
    """Preview of one slice with its number and a save button."""

    saveRequested = Signal(int)

    def __init__(self, result: SliceResult, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.setObjectName("sliceCard")
        self.setFrameShape(QFrame.Shape.StyledPanel)
        self._index = result.index

        layout = QVBoxLayout(self)
        layout.setContentsMargins(8, 8, 8, 8)
        layout.setSpacing(6)

        self.number_label = QLabel(str(result.index + 1), self)
        self.number_label.setAlignment(Qt.AlignmentFlag.AlignLeft)
        self.number_label.setStyleSheet("font-weight: bold;")

        self.preview = QLabel(self)
        self.preview.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.preview.setFixedSize(GALLERY_THUMB_SIZE, GALLERY_THUMB_SIZE)
        pixmap = QPixmap()
        if pixmap.loadFromData(result.data):
            self.preview.setPixmap(
                pixmap.scaled(
                    GALLERY_THUMB_SIZE,
                    GALLERY_THUMB_SIZE,
                    Qt.AspectRatioMode.KeepAspectRatio,
                    Qt.TransformationMode.SmoothTransformation,
                )
            )
        self.preview.setToolTip(f"{result.filename} ({result.width}x{result.height})")

        self.save_button = QPushButton("Save", self)
        self.save_button.clicked.connect(lambda: self.saveRequested.emit(self._index))

        layout.addWidget(self.number_label)
        layout.addWidget(self.preview)
        layout.addWidget(self.save_button)


class ResultGallery(QWidget):
    """Shows the current slice set and saves individual slices on request."""

    sliceSaved = Signal(int, Path)
    saveFailed = Signal(str)

    def __init__(
        self,
        parent: Optional[QWidget] = None,
        *,
        save_target_provider: Optional[SaveTargetProvider] = None,
        directory_provider: Optional[DirectoryProvider] = None,
    ) -> None:
        super().__init__(parent)
        self._results: tuple[SliceResult, ...] = ()
        self._cards: list[_SliceCard] = []
        self._save_target_provider = save_target_provider or self._ask_save_target
        self._directory_provider = directory_provider or self._ask_directory

        outer = QVBoxLayout(self)
        outer.setContentsMargins(0, 0, 0, 0)
        self._grid = QGridLayout()
        self._grid.setSpacing(16)
        outer.addLayout(self._grid)

        self.save_all_button = QPushButton("Save all", self)
        self.save_all_button.clicked.connect(self.save_all)
        outer.addWidget(self.save_all_button, alignment=Qt.AlignmentFlag.AlignRight)

        self.set_results(())

    @property
    def results(self) -> tuple[SliceResult, ...]:
        return self._results

    def card_count(self) -> int:
        return len(self._cards)

    def card(self, position: int) -> _SliceCard:
        return self._cards[position]

    def set_results(self, results: Sequence[SliceResult]) -> None:
        """Replace every card with previews of *results*."""
        for card in self._cards:
            self._grid.removeWidget(card)
            card.deleteLater()
        self._cards = []
        self._results = tuple(results)

        for position, result in enumerate(self._results):
            card = _SliceCard(result, self)
            card.saveRequested.connect(self.save_slice)
            self._grid.addWidget(card, position // GALLERY_COLUMNS, position % GALLERY_COLUMNS)
            self._cards.append(card)

        self.save_all_button.setEnabled(bool(self._results))
        self.setVisible(bool(self._results))

    def save_slice(self, index: int) -> Optional[Path]:
        result = next((r for r in self._results if r.index == index), None)
        if result is None:
            return None
        target = self._save_target_provider(result.filename)
        if target is None:
            return None
        try:
            path = write_slice(result, target)
        except ExportError as exc:
            _LOGGER.error("Saving slice %d failed: %s", index, exc)
            self.saveFailed.emit(str(exc))
            return None
        self.sliceSaved.emit(index, path)
        return path

    def save_all(self) -> list[Path]:
        if not self._results:
            return []
        directory = self._directory_provider()
        if directory is None:
            return []
        try:
            paths = export_slices(self._results, directory)
        except ExportError as exc:
            _LOGGER.error("Saving slices failed: %s", exc)
            self.saveFailed.emit(str(exc))
            return []
        for result, path in zip(self._results, paths):
            self.sliceSaved.emit(result.index, path)
        return paths

    def _ask_save_target(self, filename: str) -> Optional[Path]:
        path, _ = QFileDialog.getSaveFileName(
            self, "Save slice", filename, "PNG image (*.png)"
        )
        return Path(path) if path else None

    def _ask_directory(self) -> Optional[Path]:
        path = QFileDialog.getExistingDirectory(self, "Save all slices")
        return Path(path) if path else None


__all__ = ["ResultGallery"]
