"""Append-only log of registry notifications.

Every successful issuance or transfer appends exactly one event.  The
log is the side channel external observers read from; it is never
truncated or rewritten.  Position in the log (1-based) is the event's
sequence number, so a consumer can poll with ``since(last_seen)``.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable

from badge_registry.models.badge import BadgeEvent

logger = logging.getLogger(__name__)

EventListener = Callable[[BadgeEvent], None]


class EventLog:
    def __init__(self) -> None:
        self._events: list[BadgeEvent] = []
        self._listeners: list[EventListener] = []
        # Reentrant: listeners run inside the lock and may read the log.
        self._lock = threading.RLock()

    def subscribe(self, listener: EventListener) -> None:
        """Register a callback invoked after each append, in append order."""
        with self._lock:
            self._listeners.append(listener)

    def append(self, event: BadgeEvent) -> int:
        with self._lock:
            self._events.append(event)
            seq = len(self._events)

            for listener in self._listeners:
                try:
                    listener(event)
                except Exception:
                    # A broken observer must not undo a committed registry change.
                    logger.exception("Event listener failed for event seq=%d", seq)
        return seq

    def since(self, after: int = 0) -> list[tuple[int, BadgeEvent]]:
        """Return (sequence, event) pairs with sequence > after."""
        with self._lock:
            start = max(after, 0)
            return [
                (seq, ev)
                for seq, ev in enumerate(self._events[start:], start=start + 1)
            ]

    def __len__(self) -> int:
        with self._lock:
            return len(self._events)
