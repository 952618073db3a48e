"""
Event bus for CRM domain events.

Synchronous in-process pub/sub. Handlers execute immediately in the same
thread as the publisher. Handler errors are logged but never propagate:
the write that produced the event has already committed.
"""

import logging
from typing import Callable, Dict, List, Type

from core.events import CRMEvent

logger = logging.getLogger(__name__)


class EventBus:
    """
    In-process event bus for CRM domain events.

    Subscribe by event class, publish by event instance. A handler subscribed
    to a base class (e.g. FinanceEvent) receives every subclass event.
    Handlers for one event are called in subscription order, most specific
    class first.
    """

    def __init__(self):
        self._subscribers: Dict[Type[CRMEvent], List[Callable]] = {}

    def subscribe(self, event_type: Type[CRMEvent], callback: Callable) -> None:
        """
        Subscribe to events of a specific type.

        Args:
            event_type: Event class to subscribe to (e.g. PaymentReceived)
            callback: Function to call with the event
        """
        self._subscribers.setdefault(event_type, []).append(callback)

    def handlers_for(self, event: CRMEvent) -> List[Callable]:
        """Callbacks that would receive this event."""
        handlers = []
        for cls in type(event).__mro__:
            handlers.extend(self._subscribers.get(cls, []))
        return handlers

    def publish(self, event: CRMEvent) -> None:
        """
        Publish an event to all subscribers of its class and base classes.

        Args:
            event: CRMEvent instance to publish
        """
        for callback in self.handlers_for(event):
            try:
                callback(event)
            except Exception:
                logger.exception(
                    "Handler %s failed for %s (event_id=%s)",
                    getattr(callback, "__name__", repr(callback)),
                    type(event).__name__,
                    event.event_id,
                )
