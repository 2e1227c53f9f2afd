"""Pure Python signal system with no Qt dependency.

The core model, drag controller and source image notify their consumers
through :class:`Signal` so they can be exercised without a Qt event loop.
"""

from __future__ import annotations

import logging
from typing import Any, Callable

_logger = logging.getLogger(__name__)


class Signal:
    """Observer list that does not depend on Qt.

    Exceptions raised by individual handlers are caught and logged so that one
    failing handler does not prevent subsequent handlers from executing (same
    semantics as ``EventBus``).
    """

    def __init__(self) -> None:
        self._handlers: list[Callable] = []

    def connect(self, handler: Callable) -> None:
        if handler not in self._handlers:
            self._handlers.append(handler)

    def disconnect(self, handler: Callable) -> None:
        self._handlers.remove(handler)

    def is_connected(self, handler: Callable) -> bool:
        return handler in self._handlers

    def emit(self, *args: Any, **kwargs: Any) -> None:
        for handler in list(self._handlers):
            try:
                handler(*args, **kwargs)
            except Exception as exc:
                _logger.error("Signal handler %r failed: %s", handler, exc)

    @property
    def handler_count(self) -> int:
        return len(self._handlers)
