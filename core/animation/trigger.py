"""
Visibility trigger: a fire-once latch.

Two states, ARMED (initial) and FIRED (terminal). The first visible
observation fires the trigger and records the timestamp; every later
observation, including leaving and re-entering the viewport, is ignored.
A trigger that never fires is a valid steady state, not an error.
"""
from typing import Callable, Dict, Optional

from core.animation.types import TriggerState
from core.logging.logger import get_logger

logger = get_logger(__name__)

TriggerCallback = Callable[[float], None]


class VisibilityTrigger:
    """One-shot visibility trigger for a single scene instance."""

    def __init__(self, name: str = "scene"):
        self.name = name
        self._state = TriggerState.ARMED
        self._fired_at: Optional[float] = None
        self._listeners: Dict[int, TriggerCallback] = {}
        self._ignored = 0

    @property
    def state(self) -> TriggerState:
        return self._state

    @property
    def has_fired(self) -> bool:
        return self._state is TriggerState.FIRED

    @property
    def fired_at(self) -> Optional[float]:
        return self._fired_at

    @property
    def ignored_count(self) -> int:
        """Visible observations received after firing."""
        return self._ignored

    def add_listener(self, callback: TriggerCallback) -> int:
        """Register a callback receiving t0 when the trigger fires."""
        if not callable(callback):
            raise ValueError("Trigger listener must be callable")
        listener_id = id(callback)
        self._listeners[listener_id] = callback
        return listener_id

    def remove_listener(self, listener_id: int) -> None:
        self._listeners.pop(listener_id, None)

    def observe(self, visible: bool, timestamp: float) -> bool:
        """
        Feed one visibility observation.

        Returns:
            True only for the observation that fired the trigger
        """
        if not visible:
            return False
        if self._state is TriggerState.FIRED:
            self._ignored += 1
            return False

        self._state = TriggerState.FIRED
        self._fired_at = float(timestamp)
        logger.debug("[TRIGGER] %s fired at t0=%.1fms", self.name, self._fired_at)

        for callback in list(self._listeners.values()):
            try:
                callback(self._fired_at)
            except Exception:
                logger.exception("[TRIGGER] %s listener failed", self.name)
        return True

    def fire(self, timestamp: float) -> bool:
        """Force the trigger (equivalent to a visible observation)."""
        return self.observe(True, timestamp)

    def clear_listeners(self) -> None:
        self._listeners.clear()
