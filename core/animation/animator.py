"""
Centralized animation clock.

Provides the AnimationManager that drives every mounted illustration scene
from a single QTimer. Scenes are evaluated against an explicit timestamp
each tick; the timer only runs while at least one fired scene still has
animations in flight, so settled or never-triggered diagrams cost nothing.
"""
import time
from dataclasses import dataclass
from typing import Callable, Dict, Optional

from PySide6.QtCore import QObject, QTimer, Qt, Signal

from core.animation.evaluator import EvaluationFrame
from core.animation.scene import Scene
from core.animation.types import SceneState
from core.constants.timing import ANIMATION_DEFAULT_FPS, ANIMATION_MAX_FPS, ANIMATION_MIN_FPS
from core.events import EventSystem, EventType
from core.logging.logger import get_logger, is_perf_metrics_enabled

logger = get_logger(__name__)

RenderCallback = Callable[[EvaluationFrame], None]


def monotonic_ms() -> float:
    """Host clock in milliseconds."""
    return time.monotonic() * 1000.0


@dataclass
class _SceneBinding:
    scene: Scene
    render: RenderCallback
    listener_id: int


class AnimationManager(QObject):
    """
    Centralized scene ticker.

    ALL illustration scenes tick through this manager; views never own
    their own timers.
    """

    # Signals for global scene events
    scene_triggered = Signal(str)  # scene_id
    scene_settled = Signal(str)    # scene_id

    def __init__(self, fps: int = ANIMATION_DEFAULT_FPS,
                 event_system: Optional[EventSystem] = None,
                 clock: Optional[Callable[[], float]] = None):
        """
        Initialize animation manager.

        Args:
            fps: Target frames per second for ticks
            event_system: Optional EventSystem receiving scene.* events
            clock: Millisecond clock, defaults to time.monotonic()
        """
        super().__init__()

        self.fps = self._clamp_fps(fps)
        self.frame_time = 1.0 / self.fps
        self._clock = clock or monotonic_ms
        self._events = event_system

        self._bindings: Dict[str, _SceneBinding] = {}

        # Lightweight profiling state for `[PERF] [ANIM]` metrics, reset each
        # time the timer starts and logged once when it stops.
        self._profile_start_ts: Optional[float] = None
        self._profile_last_ts: Optional[float] = None
        self._profile_frame_count: int = 0
        self._profile_min_dt: float = 0.0
        self._profile_max_dt: float = 0.0

        self._timer = QTimer()
        self._timer.setTimerType(Qt.TimerType.PreciseTimer)
        self._timer.setInterval(int(self.frame_time * 1000))
        self._timer.timeout.connect(self._update_all)

        logger.info(f"AnimationManager initialized (fps={self.fps})")

    @staticmethod
    def _clamp_fps(fps: int) -> int:
        try:
            return max(ANIMATION_MIN_FPS, min(ANIMATION_MAX_FPS, int(fps)))
        except (TypeError, ValueError):
            return ANIMATION_DEFAULT_FPS

    def now(self) -> float:
        """Current clock reading in milliseconds."""
        return self._clock()

    def set_target_fps(self, fps: int) -> None:
        """Update target FPS and reconfigure the timer interval safely."""
        new_fps = self._clamp_fps(fps)
        if new_fps == self.fps:
            return
        self.fps = new_fps
        self.frame_time = 1.0 / self.fps
        was_active = self._timer.isActive()
        if was_active:
            self._timer.stop()
        self._timer.setInterval(int(self.frame_time * 1000))
        if was_active:
            self._timer.start()
        logger.info(f"AnimationManager target FPS set to {self.fps}")

    def is_active(self) -> bool:
        """True while the tick timer is running."""
        return self._timer.isActive()

    def start(self) -> None:
        """Start the tick loop."""
        if not self._timer.isActive():
            self._profile_start_ts = self._clock()
            self._profile_last_ts = None
            self._profile_frame_count = 0
            self._profile_min_dt = 0.0
            self._profile_max_dt = 0.0
            self._timer.start()
            logger.debug("AnimationManager started")

    def stop(self) -> None:
        """Stop the tick loop."""
        if self._timer.isActive():
            self._timer.stop()
            self._log_profile_summary()
            logger.debug("AnimationManager stopped")

    def cleanup(self) -> None:
        """Unregister every scene and release the timer."""
        logger.debug("Cleaning up AnimationManager")
        self.stop()
        for scene_id in list(self._bindings.keys()):
            self.unregister(scene_id)
        try:
            self._timer.deleteLater()
        except RuntimeError:
            pass
        logger.info("AnimationManager cleanup complete")

    def register(self, scene: Scene, render: RenderCallback) -> str:
        """
        Register a scene and paint its initial frame immediately.

        Registration alone never starts the timer; the scene's trigger does.

        Returns:
            The scene id
        """
        if scene.scene_id in self._bindings:
            raise ValueError(f"Scene already registered: {scene.scene_id}")
        if not callable(render):
            raise ValueError("Render callback must be callable")

        listener_id = scene.trigger.add_listener(
            lambda t0, sid=scene.scene_id: self._on_scene_triggered(sid, t0)
        )
        self._bindings[scene.scene_id] = _SceneBinding(scene, render, listener_id)
        if not self._render(scene.scene_id, self._clock()):
            return scene.scene_id

        # Trigger may have fired before registration
        if scene.needs_tick():
            self.start()

        logger.debug("[ANIM] Registered scene %s (state=%s)", scene.scene_id, scene.state.value)
        return scene.scene_id

    def unregister(self, scene_id: str) -> bool:
        """
        Remove a scene; no callbacks reach it afterwards.

        Returns:
            True if the scene was registered
        """
        binding = self._bindings.pop(scene_id, None)
        if binding is None:
            return False
        binding.scene.trigger.remove_listener(binding.listener_id)
        if not self._has_work():
            self.stop()
        logger.debug("[ANIM] Unregistered scene %s", scene_id)
        return True

    def observe(self, scene_id: str, visible: bool) -> bool:
        """Feed a visibility observation stamped with the manager's clock."""
        binding = self._bindings.get(scene_id)
        if binding is None:
            return False
        return binding.scene.observe(visible, self._clock())

    def get_scene(self, scene_id: str) -> Optional[Scene]:
        binding = self._bindings.get(scene_id)
        return binding.scene if binding else None

    def get_registered_count(self) -> int:
        return len(self._bindings)

    def get_active_count(self) -> int:
        """Number of scenes with animations in flight."""
        return sum(1 for b in self._bindings.values() if b.scene.needs_tick())

    def _has_work(self) -> bool:
        return any(b.scene.needs_tick() for b in self._bindings.values())

    def _on_scene_triggered(self, scene_id: str, t0: float) -> None:
        self.scene_triggered.emit(scene_id)
        if self._events is not None:
            self._events.publish(EventType.SCENE_TRIGGERED, data={"scene_id": scene_id, "t0": t0},
                                 source=self)
        if scene_id in self._bindings:
            self.start()

    def _render(self, scene_id: str, now: float) -> bool:
        """
        Evaluate and paint one scene at ``now``.

        Any failure (easing, evaluation or render callback) tears down only
        this scene and drops it from the manager.
        """
        binding = self._bindings.get(scene_id)
        if binding is None:
            return False
        try:
            binding.render(binding.scene.frame(now))
            return True
        except Exception:
            logger.exception("[ANIM] Tick failed for scene %s; tearing it down", scene_id)
            self._drop_failed(scene_id)
            return False

    def _drop_failed(self, scene_id: str) -> None:
        binding = self._bindings.pop(scene_id, None)
        if binding is None:
            return
        binding.scene.trigger.remove_listener(binding.listener_id)
        binding.scene.teardown()

    def _update_all(self) -> None:
        """Tick every in-flight scene (called by timer)."""
        current_time = self._clock()

        if self._profile_last_ts is not None:
            delta = current_time - self._profile_last_ts
            if delta > 0.0:
                if self._profile_min_dt == 0.0 or delta < self._profile_min_dt:
                    self._profile_min_dt = delta
                if delta > self._profile_max_dt:
                    self._profile_max_dt = delta
        self._profile_last_ts = current_time
        self._profile_frame_count += 1

        for scene_id, binding in list(self._bindings.items()):
            scene = binding.scene
            if not scene.needs_tick():
                continue
            _tick_start = time.perf_counter()
            rendered = self._render(scene_id, current_time)
            _tick_elapsed = (time.perf_counter() - _tick_start) * 1000.0
            if _tick_elapsed > 50.0 and is_perf_metrics_enabled():
                logger.warning("[PERF] [ANIM] Slow scene tick (%s): %.2fms", scene_id, _tick_elapsed)
            if not rendered:
                continue

            if scene.state is SceneState.SETTLED:
                self.scene_settled.emit(scene_id)
                if self._events is not None:
                    self._events.publish(EventType.SCENE_SETTLED,
                                         data={"scene_id": scene_id, "now": current_time},
                                         source=self)

        if not self._has_work():
            self.stop()

    def _log_profile_summary(self) -> None:
        """Emit a concise `[PERF] [ANIM]` summary for the last active run."""
        if not is_perf_metrics_enabled():
            return
        try:
            if (
                self._profile_start_ts is not None
                and self._profile_last_ts is not None
                and self._profile_frame_count > 0
            ):
                elapsed = max(0.0, self._profile_last_ts - self._profile_start_ts)
                if elapsed > 0.0:
                    logger.info(
                        "[PERF] [ANIM] AnimationManager metrics: duration=%.1fms, "
                        "frames=%d, avg_fps=%.1f, dt_min=%.2fms, dt_max=%.2fms, "
                        "scenes=%d, fps_target=%d",
                        elapsed,
                        self._profile_frame_count,
                        self._profile_frame_count / (elapsed / 1000.0),
                        self._profile_min_dt,
                        self._profile_max_dt,
                        len(self._bindings),
                        self.fps,
                    )
        except Exception as e:
            logger.debug("[ANIM] Metrics logging failed: %s", e, exc_info=True)
        finally:
            self._profile_start_ts = None
            self._profile_last_ts = None
            self._profile_frame_count = 0
            self._profile_min_dt = 0.0
            self._profile_max_dt = 0.0
