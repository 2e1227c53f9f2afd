import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Optional

from ..events.bus import Event, EventBus


class ErrorSeverity(Enum):
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


@dataclass(kw_only=True)
class ErrorOccurredEvent(Event):
    error: Exception
    severity: ErrorSeverity
    message: str = ""
    context: dict = field(default_factory=dict)


class ErrorHandler:
    def __init__(self, logger: logging.Logger, event_bus: EventBus):
        self._logger = logger
        self._events = event_bus
        self._ui_callback: Optional[Callable[[str, ErrorSeverity], None]] = None

    def register_ui_callback(self, callback: Callable[[str, ErrorSeverity], None]):
        self._ui_callback = callback

    def handle(
        self,
        error: Exception,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        *,
        message: Optional[str] = None,
        context: dict = None,
    ):
        """Log *error*, publish it and show *message* (or the error text) to the user."""
        log_method = getattr(self._logger, severity.value, self._logger.error)
        log_method(f"{error.__class__.__name__}: {error}", extra=context or {})

        user_message = message or str(error)
        self._events.publish(ErrorOccurredEvent(
            error=error,
            severity=severity,
            message=user_message,
            context=context or {},
        ))

        if self._ui_callback and severity in (ErrorSeverity.ERROR, ErrorSeverity.CRITICAL):
            self._ui_callback(user_message, severity)
