"""GUI entry point for the quadsplit desktop application."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

from PySide6.QtWidgets import QApplication

from ..utils.console_logger import ensure_console_logger
from .main_window import MainWindow


def main(argv: list[str] | None = None) -> int:
    """Launch the Qt application and return the exit code."""

    arguments = list(sys.argv if argv is None else argv)
    ensure_console_logger(logging.getLogger("quadsplit"), "quadsplit-console")

    app = QApplication.instance() or QApplication(arguments)
    app.setApplicationName("quadsplit")

    window = MainWindow()
    window.show()
    # Allow opening an image directly via argv[1].
    if len(arguments) > 1:
        window.open_image(Path(arguments[1]))
    return app.exec()


if __name__ == "__main__":  # pragma: no cover - manual launch
    raise SystemExit(main())
