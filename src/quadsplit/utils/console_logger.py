from __future__ import annotations

import logging
from typing import IO, Optional

_INSTALLED_HANDLERS: set[str] = set()


def ensure_console_logger(
    logger: logging.Logger,
    handler_name: str,
    *,
    level: int = logging.INFO,
    fmt: str = "%(levelname)s %(name)s: %(message)s",
    stream: Optional[IO[str]] = None,
) -> None:
    """Attach a single named console handler to *logger*.

    Output goes to *stream*, or ``stderr`` when omitted, so that the CLI's
    own report on ``stdout`` stays machine readable.  Calling this
    repeatedly never installs a second handler under the same name.
    """
    if handler_name in _INSTALLED_HANDLERS:
        return
    for handler in logger.handlers:
        if getattr(handler, "name", None) == handler_name:
            _INSTALLED_HANDLERS.add(handler_name)
            return
    handler = logging.StreamHandler(stream)
    handler.setLevel(level)
    handler.name = handler_name
    handler.setFormatter(logging.Formatter(fmt))
    logger.addHandler(handler)
    logger.setLevel(level)
    _INSTALLED_HANDLERS.add(handler_name)
