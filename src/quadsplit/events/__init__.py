from .bus import Event, EventBus, Subscription
from .split_events import AxisChangedEvent, SlicesUpdatedEvent, SourceChangedEvent

__all__ = [
    "AxisChangedEvent",
    "Event",
    "EventBus",
    "SlicesUpdatedEvent",
    "SourceChangedEvent",
    "Subscription",
]
