"""Main window: choose an image, adjust the cuts, save the pieces."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Optional

from PySide6.QtCore import QThreadPool, Qt
from PySide6.QtGui import QImage
from PySide6.QtWidgets import (
    QButtonGroup,
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QMessageBox,
    QPushButton,
    QScrollArea,
    QStackedWidget,
    QVBoxLayout,
    QWidget,
)

from ..config import WINDOW_DEFAULT_SIZE
from ..core.cuts import Axis
from ..core.session import SplitSession
from ..core.source import SourceImage
from ..errors import UnsupportedFileError
from ..errors.handler import ErrorSeverity
from ..io.ingest import pending_source
from .tasks.image_load_worker import ImageLoadWorker
from .widgets import DropZone, ResultGallery, SplitEditor

_LOGGER = logging.getLogger(__name__)

MessagePresenter = Callable[[str], None]


class MainWindow(QMainWindow):
    """Primary window hosting the three steps of the split workflow."""

    def __init__(
        self,
        session: Optional[SplitSession] = None,
        *,
        thread_pool: Optional[QThreadPool] = None,
        message_presenter: Optional[MessagePresenter] = None,
    ) -> None:
        super().__init__()
        self.setWindowTitle("Split image into four")
        self.resize(*WINDOW_DEFAULT_SIZE)

        self.session = session or SplitSession()
        self._thread_pool = thread_pool or QThreadPool.globalInstance()
        self._present_message = message_presenter or self._show_warning
        self._load_token = 0
        self._pending_load: Optional[tuple[int, SourceImage]] = None
        self._active_worker: Optional[ImageLoadWorker] = None

        self.session.error_handler.register_ui_callback(self._on_error)
        self.session.resultsChanged.connect(self._on_results_changed)
        self.session.processingChanged.connect(self._on_processing_changed)

        self._build_ui()

    # ------------------------------------------------------------------
    # Layout
    # ------------------------------------------------------------------
    def _build_ui(self) -> None:
        central = QWidget(self)
        root = QVBoxLayout(central)
        root.setContentsMargins(24, 24, 24, 24)
        root.setSpacing(16)

        title = QLabel("Split image into four", central)
        title.setAlignment(Qt.AlignmentFlag.AlignCenter)
        title.setStyleSheet("font-size: 24px; font-weight: bold;")
        subtitle = QLabel("Cut one image into four pieces and save each of them.", central)
        subtitle.setAlignment(Qt.AlignmentFlag.AlignCenter)
        root.addWidget(title)
        root.addWidget(subtitle)

        self.pages = QStackedWidget(central)
        self.drop_zone = DropZone(self.pages)
        self.drop_zone.imageSelected.connect(self.open_image)
        self.drop_zone.fileRejected.connect(self._present_message)
        self.pages.addWidget(self.drop_zone)
        self.pages.addWidget(self._build_editor_page())
        root.addWidget(self.pages, stretch=1)

        self.results_header = QLabel("Results", central)
        self.results_header.setStyleSheet("font-size: 18px; font-weight: bold;")
        self.gallery = ResultGallery(central)
        gallery_scroll = QScrollArea(central)
        gallery_scroll.setWidgetResizable(True)
        gallery_scroll.setWidget(self.gallery)
        gallery_scroll.setFrameShape(QScrollArea.Shape.NoFrame)
        self.gallery.saveFailed.connect(self._present_message)
        root.addWidget(self.results_header)
        root.addWidget(gallery_scroll)
        self.results_header.setVisible(False)

        self.setCentralWidget(central)

    def _build_editor_page(self) -> QWidget:
        page = QWidget(self.pages)
        layout = QVBoxLayout(page)
        layout.setContentsMargins(0, 0, 0, 0)

        toolbar = QHBoxLayout()
        self.across_button = QPushButton("Vertical split (4 side by side)", page)
        self.down_button = QPushButton("Horizontal split (4 stacked)", page)
        self._axis_group = QButtonGroup(page)
        self._axis_group.setExclusive(True)
        for button, axis in ((self.across_button, Axis.ACROSS), (self.down_button, Axis.DOWN)):
            button.setCheckable(True)
            button.clicked.connect(lambda _checked=False, a=axis: self.set_axis(a))
            self._axis_group.addButton(button)
            toolbar.addWidget(button)
        self.across_button.setChecked(self.session.axis is Axis.ACROSS)
        self.down_button.setChecked(self.session.axis is Axis.DOWN)
        toolbar.addStretch(1)
        self.status_label = QLabel("", page)
        toolbar.addWidget(self.status_label)
        self.reset_button = QPushButton("Reset image", page)
        self.reset_button.clicked.connect(self.reset_image)
        toolbar.addWidget(self.reset_button)
        layout.addLayout(toolbar)

        hint = QLabel("Drag the dashed lines to adjust where the image is cut.", page)
        hint.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(hint)

        self.editor = SplitEditor(self.session, page)
        layout.addWidget(self.editor, stretch=1)
        return page

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------
    def open_image(self, path: Path) -> None:
        """Validate *path*, show the editor and decode the image in the background."""
        try:
            source = pending_source(Path(path))
        except UnsupportedFileError as exc:
            _LOGGER.info("Rejected %s: %s", path, exc)
            self._present_message(str(exc))
            return

        self.session.set_source(source)
        self.pages.setCurrentIndex(1)

        self._load_token += 1
        self._pending_load = (self._load_token, source)
        worker = ImageLoadWorker(Path(path), self._load_token)
        worker.signals.decoded.connect(self._on_image_loaded)
        worker.signals.failed.connect(self._on_image_failed)
        self._active_worker = worker
        self._thread_pool.start(worker)

    def open_qimage(self, image: QImage, name: str = "image") -> None:
        """Load an already decoded image (used for pasted or generated images)."""
        self._pending_load = None
        self.session.set_source(SourceImage.from_qimage(image, name=name))
        self.pages.setCurrentIndex(1)
        self.editor.update()

    def set_axis(self, axis: Axis) -> None:
        self.session.set_axis(axis)
        self.across_button.setChecked(axis is Axis.ACROSS)
        self.down_button.setChecked(axis is Axis.DOWN)

    def reset_image(self) -> None:
        self._pending_load = None
        self.session.clear_source()
        self.pages.setCurrentIndex(0)

    # ------------------------------------------------------------------
    # Callbacks
    # ------------------------------------------------------------------
    def _take_pending(self, token: int) -> Optional[SourceImage]:
        # The user reset or picked another image while this one decoded.
        if self._pending_load is None or self._pending_load[0] != token:
            _LOGGER.debug("Dropping stale decode result %d", token)
            return None
        source = self._pending_load[1]
        self._pending_load = None
        return source if source is self.session.source else None

    def _on_image_loaded(self, token: int, image: QImage) -> None:
        source = self._take_pending(token)
        if source is None:
            return
        source.resolve(image)
        self.editor.update()

    def _on_image_failed(self, token: int, message: str) -> None:
        source = self._take_pending(token)
        if source is not None:
            source.fail(message)

    def _on_results_changed(self, results) -> None:
        self.gallery.set_results(results)
        self.results_header.setVisible(bool(results))

    def _on_processing_changed(self, processing: bool) -> None:
        self.status_label.setText("Processing..." if processing else "")

    def _on_error(self, message: str, severity: ErrorSeverity) -> None:
        self._present_message(message)

    def _show_warning(self, message: str) -> None:
        QMessageBox.warning(self, self.windowTitle(), message)


__all__ = ["MainWindow"]
