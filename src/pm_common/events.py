"""Engine events — synchronous notification after a committed mutation.

Each successful pool or market operation publishes one EngineEvent. Listeners
run in subscription order on the caller's thread, after the state change is
complete, and the event is appended to the bus history before any listener
runs. A listener exception propagates to the caller; the mutation stands.
"""
import logging
import uuid
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from src.pm_common.datetime_utils import utc_now
from src.pm_common.enums import EventType

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EngineEvent:
    event_type: EventType
    payload: dict[str, Any]
    event_id: str = field(default_factory=lambda: f"evt_{uuid.uuid4().hex[:12]}")
    created_at: datetime = field(default_factory=utc_now)


Listener = Callable[[EngineEvent], None]


class EventBus:
    def __init__(self) -> None:
        self._listeners: list[Listener] = []
        self._history: list[EngineEvent] = []

    def subscribe(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def unsubscribe(self, listener: Listener) -> None:
        self._listeners.remove(listener)

    def publish(self, event_type: EventType, payload: dict[str, Any]) -> EngineEvent:
        event = EngineEvent(event_type=event_type, payload=payload)
        self._history.append(event)
        logger.debug("Event %s %s", event.event_type.value, event.event_id)
        for listener in list(self._listeners):
            listener(event)
        return event

    @property
    def history(self) -> list[EngineEvent]:
        return list(self._history)
