"""
Scene choreography.

A Scene is one mounted illustration instance: it owns its trigger, its
spec tree and (after firing) its resolved schedule. Scenes share no
mutable state, so any number of them can tick on one clock.

Lifecycle:
    ARMED -> RUNNING   trigger fired, schedule resolved once
    RUNNING -> SETTLED a frame landed at or past the last absolute_end
    * -> TORN_DOWN     unmounted; ticks and observations are ignored
"""
from typing import Iterable, Optional

from core.animation.evaluator import EvaluationFrame, evaluate, initial_frame
from core.animation.schedule import ResolvedSchedule, resolve_schedule
from core.animation.spec import SpecNode
from core.animation.trigger import VisibilityTrigger
from core.animation.types import SceneState
from core.logging.logger import get_logger

logger = get_logger(__name__)


class Scene:
    """Trigger -> schedule -> evaluator pipeline for one illustration instance."""

    def __init__(self, scene_id: str, root: SpecNode,
                 known_elements: Optional[Iterable[str]] = None):
        """
        Args:
            scene_id: Identifier used in logs and manager bookkeeping
            root: Spec tree authored for the illustration
            known_elements: Element ids with a render target; animations for
                other ids are dropped when the schedule resolves
        """
        if not isinstance(root, SpecNode):
            raise ValueError("Scene requires a SpecNode root")
        self.scene_id = scene_id
        self.root = root
        self._known = frozenset(known_elements) if known_elements is not None else None

        self.trigger = VisibilityTrigger(scene_id)
        self.trigger.add_listener(self._on_trigger_fired)

        self._state = SceneState.ARMED
        self._schedule: Optional[ResolvedSchedule] = None
        self._resolution_count = 0
        self._initial = initial_frame(root, self._known)
        self._last_frame: EvaluationFrame = self._initial

    @property
    def state(self) -> SceneState:
        return self._state

    @property
    def schedule(self) -> Optional[ResolvedSchedule]:
        return self._schedule

    @property
    def resolution_count(self) -> int:
        return self._resolution_count

    @property
    def last_frame(self) -> EvaluationFrame:
        return self._last_frame

    def observe(self, visible: bool, timestamp: float) -> bool:
        """Forward a visibility observation; True when it fired the trigger."""
        if self._state is SceneState.TORN_DOWN:
            return False
        return self.trigger.observe(visible, timestamp)

    def _on_trigger_fired(self, t0: float) -> None:
        if self._schedule is not None:
            return
        self._schedule = resolve_schedule(self.root, t0, self._known)
        self._resolution_count += 1
        self._state = SceneState.RUNNING
        logger.debug(
            "[ANIM] Scene %s running: %d entries, t0=%.1fms, end=%.1fms",
            self.scene_id, len(self._schedule), t0, self._schedule.end_time,
        )

    def frame(self, now: float) -> EvaluationFrame:
        """
        Produce the frame for ``now``.

        Before the trigger fires every property holds its initial value.
        """
        if self._state is SceneState.TORN_DOWN:
            return self._last_frame
        if self._schedule is None:
            self._last_frame = EvaluationFrame(now=now, values=dict(self._initial.values))
            return self._last_frame

        frame = evaluate(self._schedule, now)
        self._last_frame = frame
        if frame.settled and self._state is SceneState.RUNNING:
            self._state = SceneState.SETTLED
            logger.debug("[ANIM] Scene %s settled at %.1fms", self.scene_id, now)
        elif not frame.settled and self._state is SceneState.SETTLED:
            # Clock went backwards (tab resumed); the frame is still exact for `now`
            self._state = SceneState.RUNNING
        return frame

    def needs_tick(self) -> bool:
        """True while the schedule still has animations in flight."""
        return self._state is SceneState.RUNNING

    def teardown(self) -> None:
        """Stop observing and ticking; safe to call more than once."""
        if self._state is SceneState.TORN_DOWN:
            return
        self._state = SceneState.TORN_DOWN
        self.trigger.clear_listeners()
        logger.debug("[ANIM] Scene %s torn down", self.scene_id)
