"""
Event type definitions for the illustration engine.
"""
import time
import uuid
from dataclasses import dataclass, field
from typing import Any, Callable, Optional


def _event_id() -> str:
    return uuid.uuid4().hex[:8]


@dataclass
class Event:
    """A published scene or settings event."""
    event_type: str
    data: Any = None
    source: Any = None
    id: str = field(default_factory=_event_id)
    timestamp_ms: float = field(default_factory=lambda: time.monotonic() * 1000.0)
    is_handled: bool = False

    @property
    def scene_id(self) -> Optional[str]:
        """Scene id carried by scene.* events, if any."""
        if isinstance(self.data, dict):
            return self.data.get("scene_id")
        return None

    def mark_handled(self) -> None:
        """Stop delivery to lower-priority subscribers."""
        self.is_handled = True


@dataclass(order=False)
class Subscription:
    """A callback registered for one event type."""
    callback: Callable[[Event], None]
    event_type: str
    priority: int = 0
    scene_id: Optional[str] = None     # Only deliver events for this scene
    id: str = field(default_factory=_event_id)
    active: bool = True

    def accepts(self, event: Event) -> bool:
        return self.active and (self.scene_id is None or event.scene_id == self.scene_id)

    def __call__(self, event: Event) -> None:
        if self.accepts(event):
            self.callback(event)

    def __lt__(self, other: 'Subscription') -> bool:
        # Higher priority sorts first
        return self.priority > other.priority


class EventType:
    """Event type constants."""
    # Scene lifecycle
    SCENE_MOUNTED = "scene.mounted"
    SCENE_TRIGGERED = "scene.triggered"
    SCENE_SETTLED = "scene.settled"
    SCENE_UNMOUNTED = "scene.unmounted"

    # Settings
    SETTINGS_CHANGED = "settings.changed"
