"""
Publish-subscribe event system for illustration scenes.

Scenes, views and the animation manager announce lifecycle changes here
(mounted, triggered, settled, unmounted) so hosts can react without holding
references to individual views.
"""
import threading
from collections import defaultdict
from typing import Any, Callable, Dict, List, Optional

from core.events.event_types import Event, Subscription
from core.logging.logger import get_logger

logger = get_logger('EventSystem')


class EventSystem:
    """
    Event hub with priority-ordered delivery and a bounded history.

    Handler exceptions are logged and never propagate to the publisher.
    """

    def __init__(self, max_history: int = 500):
        self._subscriptions: Dict[str, List[Subscription]] = defaultdict(list)
        self._by_id: Dict[str, Subscription] = {}
        self._history: List[Event] = []
        self._max_history = max_history
        self._lock = threading.RLock()

        logger.debug("EventSystem initialized")

    def subscribe(
        self,
        event_type: str,
        callback: Callable[[Event], None],
        priority: int = 50,
        scene_id: Optional[str] = None,
    ) -> str:
        """
        Subscribe to events of a specific type.

        Args:
            event_type: Type of event to subscribe to
            callback: Called with each matching Event
            priority: Higher priorities are called first
            scene_id: Restrict delivery to one scene

        Returns:
            str: Subscription ID for unsubscribing

        Raises:
            ValueError: If callback is not callable or event_type is empty
        """
        if not callable(callback):
            raise ValueError("Callback must be callable")
        if not isinstance(event_type, str) or not event_type.strip():
            raise ValueError("event_type must be a non-empty string")

        subscription = Subscription(callback, event_type, priority, scene_id)
        with self._lock:
            self._subscriptions[event_type].append(subscription)
            self._subscriptions[event_type].sort()
            self._by_id[subscription.id] = subscription

        logger.debug(f"New subscription: {subscription.id} for {event_type} (priority={priority})")
        return subscription.id

    def unsubscribe(self, subscription_id: str) -> None:
        with self._lock:
            subscription = self._by_id.pop(subscription_id, None)
            if subscription is None:
                logger.warning(f"Unsubscribe called with unknown id: {subscription_id}")
                return
            subscription.active = False
            remaining = [
                s for s in self._subscriptions.get(subscription.event_type, [])
                if s.id != subscription_id
            ]
            if remaining:
                self._subscriptions[subscription.event_type] = remaining
            else:
                self._subscriptions.pop(subscription.event_type, None)

        logger.debug(f"Unsubscribed: {subscription_id}")

    def publish(self, event_type: str, data: Any = None, source: Any = None) -> Event:
        """
        Publish an event to all subscribers in priority order.

        Returns:
            Event: The published event object
        """
        if not isinstance(event_type, str) or not event_type.strip():
            raise ValueError("event_type must be a non-empty string")

        event = Event(event_type, data, source)
        with self._lock:
            subscribers = list(self._subscriptions.get(event_type, []))

        for subscription in subscribers:
            if event.is_handled:
                break
            try:
                subscription(event)
            except Exception as e:
                logger.error(f"Error in event handler for {event_type}: {e}", exc_info=True)

        with self._lock:
            self._history.append(event)
            if len(self._history) > self._max_history:
                self._history = self._history[-self._max_history:]
        return event

    def get_event_history(self, limit: int = 100, event_type: Optional[str] = None) -> List[Event]:
        with self._lock:
            history = self._history
            if event_type is not None:
                history = [e for e in history if e.event_type == event_type]
            return history[-limit:]

    def clear(self) -> None:
        """Clear all subscriptions and history."""
        with self._lock:
            self._subscriptions.clear()
            self._by_id.clear()
            self._history.clear()

    def get_subscription_count(self) -> int:
        with self._lock:
            return len(self._by_id)
