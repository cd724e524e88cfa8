"""Events — structured record of what happened during play.

The engine never prints.  Every state change worth narrating (damage,
deaths, movement, boosts, spawns) is emitted as a ``GameEvent`` through
an ``EventLog`` that the caller injects.  Renderers and shells subscribe
to it and decide how to present the events; the log also mirrors each
one to the standard ``logging`` module at DEBUG level.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Callable

logger = logging.getLogger(__name__)


class EventKind(Enum):
    """Categories of domain events emitted by the engine."""

    ANT_DEPLOYED = auto()
    ANT_REMOVED = auto()
    BOOST_APPLIED = auto()
    BOOST_FOUND = auto()
    FOOD_FOUND = auto()
    UNIT_DAMAGED = auto()
    UNIT_DIED = auto()
    UNIT_MOVED = auto()
    UNIT_DROWNED = auto()
    BEE_STATUS = auto()
    BEE_EATEN = auto()
    BEE_RELEASED = auto()
    BUG_SPRAY = auto()
    WAVE_SPAWNED = auto()
    TURN_ENDED = auto()


@dataclass(frozen=True)
class GameEvent:
    """A single emitted event.

    Attributes:
        kind: What happened.
        turn: Turn counter at the time of emission.
        data: Event-specific payload (unit names, places, amounts).
    """

    kind: EventKind
    turn: int
    data: dict[str, Any] = field(default_factory=dict)


Handler = Callable[[GameEvent], None]


@dataclass
class EventLog:
    """Buffered event sink with synchronous subscribers.

    Attributes:
        turn: Turn stamped on newly emitted events.
        events: Events emitted since the last ``drain``/``clear``.
    """

    turn: int = 0
    events: list[GameEvent] = field(default_factory=list)
    _handlers: list[Handler] = field(default_factory=list, repr=False)

    def subscribe(self, handler: Handler) -> None:
        """Register a callback invoked for every subsequent event."""
        self._handlers.append(handler)

    def unsubscribe(self, handler: Handler) -> None:
        """Remove a previously registered callback (no-op if unknown)."""
        if handler in self._handlers:
            self._handlers.remove(handler)

    def emit(self, kind: EventKind, **data: Any) -> GameEvent:
        """Record an event and forward it to subscribers.

        Args:
            kind: Event category.
            **data: Payload fields.

        Returns:
            The recorded event.
        """
        event = GameEvent(kind=kind, turn=self.turn, data=data)
        self.events.append(event)
        logger.debug("turn %d %s %s", self.turn, kind.name, data)
        for handler in list(self._handlers):
            handler(event)
        return event

    def of_kind(self, kind: EventKind) -> list[GameEvent]:
        """Return buffered events of one kind, oldest first."""
        return [e for e in self.events if e.kind is kind]

    def drain(self) -> list[GameEvent]:
        """Return all buffered events and empty the buffer."""
        drained = self.events
        self.events = []
        return drained

    def clear(self) -> None:
        """Discard buffered events."""
        self.events.clear()
