"""Click-or-drop area used to pick the image to split."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from PySide6.QtCore import Qt, Signal
from PySide6.QtGui import QDragEnterEvent, QDragLeaveEvent, QDropEvent, QMouseEvent
from PySide6.QtWidgets import QFileDialog, QFrame, QLabel, QVBoxLayout, QWidget

from ...config import UNSUPPORTED_FILE_MESSAGE
from ...media_classifier import IMAGE_EXTENSIONS, is_image_file

_IDLE_STYLE = "QFrame#dropZone { border: 2px dashed #D1D5DB; border-radius: 24px; }"
_ACTIVE_STYLE = (
    "QFrame#dropZone { border: 2px dashed #3B82F6; border-radius: 24px;"
    " background-color: #EFF6FF; }"
)


class DropZone(QFrame):
    """Emits ``imageSelected`` for image files and ``fileRejected`` otherwise."""

    imageSelected = Signal(Path)
    fileRejected = Signal(str)

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.setObjectName("dropZone")
        self.setAcceptDrops(True)
        self.setMinimumHeight(280)
        self.setCursor(Qt.CursorShape.PointingHandCursor)
        self._dragging = False

        layout = QVBoxLayout(self)
        layout.setAlignment(Qt.AlignmentFlag.AlignCenter)
        title = QLabel("Drop an image here", self)
        title.setAlignment(Qt.AlignmentFlag.AlignCenter)
        title.setStyleSheet("font-size: 18px; font-weight: 600;")
        hint = QLabel("or click to choose a file", self)
        hint.setAlignment(Qt.AlignmentFlag.AlignCenter)
        formats = QLabel("JPG, PNG, WEBP supported", self)
        formats.setAlignment(Qt.AlignmentFlag.AlignCenter)
        formats.setStyleSheet("color: #9CA3AF; font-size: 11px;")
        layout.addWidget(title)
        layout.addWidget(hint)
        layout.addWidget(formats)
        self._apply_style()

    def is_drag_active(self) -> bool:
        return self._dragging

    def submit(self, path: Path) -> bool:
        """Forward *path* if it is an image; report a rejection otherwise."""
        path = Path(path)
        if is_image_file(path):
            self.imageSelected.emit(path)
            return True
        self.fileRejected.emit(UNSUPPORTED_FILE_MESSAGE)
        return False

    def mouseReleaseEvent(self, event: QMouseEvent) -> None:  # type: ignore[override]
        if event.button() == Qt.MouseButton.LeftButton and self.rect().contains(
            event.position().toPoint()
        ):
            self._choose_file()
            return
        super().mouseReleaseEvent(event)

    def dragEnterEvent(self, event: QDragEnterEvent) -> None:  # type: ignore[override]
        if event.mimeData().hasUrls():
            self._set_dragging(True)
            event.acceptProposedAction()
            return
        event.ignore()

    def dragLeaveEvent(self, event: QDragLeaveEvent) -> None:  # type: ignore[override]
        self._set_dragging(False)
        super().dragLeaveEvent(event)

    def dropEvent(self, event: QDropEvent) -> None:  # type: ignore[override]
        self._set_dragging(False)
        urls = [url for url in event.mimeData().urls() if url.isLocalFile()]
        if not urls:
            event.ignore()
            return
        event.acceptProposedAction()
        # Only the first file is used, matching the single-image workflow.
        self.submit(Path(urls[0].toLocalFile()))

    def _choose_file(self) -> None:
        patterns = " ".join(f"*{ext}" for ext in sorted(IMAGE_EXTENSIONS))
        path, _ = QFileDialog.getOpenFileName(
            self, "Choose an image", "", f"Images ({patterns})"
        )
        if path:
            self.submit(Path(path))

    def _set_dragging(self, dragging: bool) -> None:
        if dragging == self._dragging:
            return
        self._dragging = dragging
        self._apply_style()

    def _apply_style(self) -> None:
        self.setStyleSheet(_ACTIVE_STYLE if self._dragging else _IDLE_STYLE)


__all__ = ["DropZone"]
