"""Background decoding of the image chosen in the drop zone."""

from __future__ import annotations

from pathlib import Path

from PySide6.QtCore import QObject, QRunnable, Signal
from PySide6.QtGui import QImage

from ...utils import image_loader


class ImageLoadWorkerSignals(QObject):
    """Signals exposed by :class:`ImageLoadWorker`.

    Both signals carry the request token the worker was created with so the
    receiver can drop answers for an image the user has already replaced.
    The container lives on the GUI thread; emissions from the pool thread
    are queued back to it.
    """

    decoded = Signal(int, QImage)
    failed = Signal(int, str)


class ImageLoadWorker(QRunnable):
    """Decode *path* at full resolution on a thread pool."""

    def __init__(self, path: Path, token: int) -> None:
        super().__init__()
        self._path = Path(path)
        self._token = token
        self.signals = ImageLoadWorkerSignals()

    @property
    def path(self) -> Path:
        return self._path

    @property
    def token(self) -> int:
        return self._token

    def run(self) -> None:  # type: ignore[override]
        try:
            image = image_loader.load_qimage(self._path)
        except Exception as exc:  # pragma: no cover - reported to the GUI thread
            self.signals.failed.emit(self._token, str(exc))
            return

        if image is None or image.isNull():
            self.signals.failed.emit(self._token, f"{self._path.name} could not be decoded")
            return
        self.signals.decoded.emit(self._token, image)


__all__ = ["ImageLoadWorker", "ImageLoadWorkerSignals"]
