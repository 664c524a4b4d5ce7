"""
Event Bus implementation.

Lets UI layers and integrations follow alarm transitions without the
schedule store knowing who is listening.
"""

import asyncio
from collections import defaultdict, deque
from typing import Any, Callable, Deque, Dict, List, NamedTuple, Optional

from aurorawake_core.events.types import Event, EventType
from aurorawake_core.utils.logging import get_logger

logger = get_logger(__name__)

Handler = Callable[[Event], Any]


class Subscription(NamedTuple):
    """A registered handler and its dispatch priority."""

    priority: int
    handler: Handler

    @property
    def name(self) -> str:
        return getattr(self.handler, "__name__", repr(self.handler))


def _insert(subscriptions: List[Subscription], subscription: Subscription) -> None:
    subscriptions.append(subscription)
    subscriptions.sort(key=lambda s: s.priority, reverse=True)


def _remove(subscriptions: List[Subscription], handler: Handler) -> bool:
    kept = [s for s in subscriptions if s.handler != handler]
    removed = len(kept) < len(subscriptions)
    subscriptions[:] = kept
    return removed


class EventBus:
    """
    Publish/subscribe hub for alarm events.

    Handlers may be plain callables or coroutine functions. They are
    selected three ways:

    - by event type (``subscribe``)
    - by alarm id, for screens that follow a single alarm (``subscribe_alarm``)
    - for every event (``subscribe_all``)

    Within each group higher priorities run first. A failing handler is
    logged and counted; it never prevents other handlers from running and
    never propagates to the publisher.

    Example:
        >>> bus = EventBus()
        >>>
        >>> async def on_snooze(event):
        ...     print(f"Snoozed until {event.next_ring_time}")
        >>>
        >>> bus.subscribe(EventType.ALARM_SNOOZED, on_snooze)
        >>> store = AlarmScheduleStore(persistence, notifier, event_bus=bus)
    """

    def __init__(self, enable_history: bool = False, max_history: int = 100):
        """
        Initialize event bus.

        Args:
            enable_history: Keep published events for later inspection
            max_history: Maximum events to keep in history
        """
        self.enable_history = enable_history
        self.max_history = max_history

        self._by_type: Dict[EventType, List[Subscription]] = defaultdict(list)
        self._by_alarm: Dict[str, List[Subscription]] = defaultdict(list)
        self._wildcard: List[Subscription] = []
        self._history: Deque[Event] = deque(maxlen=max_history)

        self._stats = {"published": 0, "handled": 0, "errors": 0}

        logger.debug("event_bus_initialized", history_enabled=enable_history)

    def subscribe(self, event_type: EventType, handler: Handler, priority: int = 0) -> None:
        """
        Subscribe to an event type.

        Args:
            event_type: Event type to subscribe to
            handler: Handler function (can be sync or async)
            priority: Handler priority (higher = earlier execution)
        """
        subscription = Subscription(priority, handler)
        _insert(self._by_type[event_type], subscription)

        logger.debug(
            "handler_subscribed",
            event_type=event_type.value,
            handler=subscription.name,
            priority=priority,
        )

    def subscribe_alarm(self, alarm_id: str, handler: Handler, priority: int = 0) -> None:
        """
        Subscribe to every event concerning one alarm.

        Args:
            alarm_id: Alarm to follow
            handler: Handler function (can be sync or async)
            priority: Handler priority (higher = earlier execution)
        """
        _insert(self._by_alarm[alarm_id], Subscription(priority, handler))
        logger.debug("alarm_handler_subscribed", alarm_id=alarm_id)

    def subscribe_all(self, handler: Handler) -> None:
        """Subscribe to all events (wildcard)."""
        self._wildcard.append(Subscription(0, handler))

    def unsubscribe(self, event_type: EventType, handler: Handler) -> bool:
        """
        Unsubscribe from an event type.

        Returns:
            True if handler was found and removed
        """
        if event_type not in self._by_type:
            return False
        return _remove(self._by_type[event_type], handler)

    def unsubscribe_alarm(self, alarm_id: str, handler: Handler) -> bool:
        """Stop following an alarm. Returns True if the handler was removed."""
        if alarm_id not in self._by_alarm:
            return False
        removed = _remove(self._by_alarm[alarm_id], handler)
        if not self._by_alarm[alarm_id]:
            del self._by_alarm[alarm_id]
        return removed

    def unsubscribe_all(self, handler: Handler) -> bool:
        """Unsubscribe a wildcard handler."""
        return _remove(self._wildcard, handler)

    def _handlers_for(self, event: Event) -> List[Subscription]:
        selected = list(self._by_type.get(event.event_type, []))
        alarm_id = getattr(event, "alarm_id", None)
        if alarm_id is not None:
            selected += self._by_alarm.get(alarm_id, [])
        return selected + self._wildcard

    async def publish(self, event: Event) -> None:
        """
        Publish an event to all subscribed handlers.

        Args:
            event: Event to publish
        """
        self._stats["published"] += 1

        if self.enable_history:
            self._history.append(event)

        logger.debug("event_published", event_type=event.event_type, event_id=event.event_id)

        for subscription in self._handlers_for(event):
            try:
                result = subscription.handler(event)
                if asyncio.iscoroutine(result):
                    await result
                self._stats["handled"] += 1
            except Exception as e:
                self._stats["errors"] += 1
                logger.error(
                    "handler_error",
                    event_type=event.event_type,
                    handler=subscription.name,
                    error=str(e),
                )

    def get_history(
        self,
        event_type: Optional[EventType] = None,
        limit: Optional[int] = None,
        alarm_id: Optional[str] = None,
    ) -> List[Event]:
        """
        Get event history.

        Args:
            event_type: Optional filter by event type
            limit: Optional limit number of events
            alarm_id: Optional filter by alarm

        Returns:
            List of events (most recent first)
        """
        if not self.enable_history:
            return []

        history = list(reversed(self._history))

        if event_type:
            history = [e for e in history if e.event_type == event_type]
        if alarm_id:
            history = [e for e in history if getattr(e, "alarm_id", None) == alarm_id]
        if limit:
            history = history[:limit]

        return history

    def clear_history(self) -> None:
        """Clear event history."""
        self._history.clear()

    def get_subscriber_count(self, event_type: Optional[EventType] = None) -> int:
        """
        Get number of subscribers.

        Args:
            event_type: Optional specific event type

        Returns:
            Number of subscribers
        """
        if event_type:
            return len(self._by_type.get(event_type, []))
        return (
            sum(len(s) for s in self._by_type.values())
            + sum(len(s) for s in self._by_alarm.values())
            + len(self._wildcard)
        )

    def get_statistics(self) -> Dict[str, Any]:
        """Get event bus statistics."""
        return {
            **self._stats,
            "subscribers": self.get_subscriber_count(),
            "event_types": len(self._by_type),
            "followed_alarms": len(self._by_alarm),
            "wildcard_handlers": len(self._wildcard),
            "history_size": len(self._history),
        }
