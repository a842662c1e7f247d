"""
Schedule resolver.

Flattens an animation spec tree into absolute start/end times relative to
the trigger timestamp t0. Resolution is a pure function of (tree, t0,
known elements): the same inputs always produce an equal schedule.

Malformed entries are repaired rather than raised so one broken
sub-element cannot stop the rest of a diagram from revealing:
- negative durations, delays and stagger increments clamp to 0
- entries whose element has no render target are dropped
- entries mixing scalar and offset values are dropped
"""
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple

from core.animation.spec import PropertyAnimation, SpecNode
from core.animation.stagger import stagger_offsets
from core.animation.types import AnimatedProperty, EasingFunction, Value, same_kind
from core.logging.logger import get_logger

logger = get_logger(__name__)

EntryKey = Tuple[str, AnimatedProperty]


@dataclass(frozen=True)
class ScheduledEntry:
    """One property animation placed on the absolute timeline."""
    element_id: str
    property_name: AnimatedProperty
    absolute_start: float
    absolute_end: float
    start_value: Value
    end_value: Value
    easing: EasingFunction
    keyframes: Tuple[Value, ...] = ()
    order: int = 0                      # Depth-first authoring order

    @property
    def key(self) -> EntryKey:
        return (self.element_id, self.property_name)

    @property
    def duration(self) -> float:
        return self.absolute_end - self.absolute_start


@dataclass(frozen=True)
class ResolvedSchedule:
    """Immutable, flat animation plan for one scene."""
    t0: float
    entries: Tuple[ScheduledEntry, ...] = ()

    @property
    def end_time(self) -> float:
        """Latest absolute_end across the schedule (t0 when empty)."""
        if not self.entries:
            return self.t0
        return max(entry.absolute_end for entry in self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def by_key(self) -> Dict[EntryKey, List[ScheduledEntry]]:
        """Group entries per (element, property), ordered by start then authoring order."""
        grouped: Dict[EntryKey, List[ScheduledEntry]] = {}
        for entry in self.entries:
            grouped.setdefault(entry.key, []).append(entry)
        for entries in grouped.values():
            entries.sort(key=lambda e: (e.absolute_start, e.order))
        return grouped

    def for_element(self, element_id: str) -> List[ScheduledEntry]:
        return [entry for entry in self.entries if entry.element_id == element_id]


def _schedule_entry(anim: PropertyAnimation, node_start: float, order: int,
                    label: str) -> Optional[ScheduledEntry]:
    values = (anim.start_value, anim.end_value) + anim.keyframes
    if not all(same_kind(anim.start_value, v) for v in values):
        logger.warning(
            "[SCHEDULE] Dropping %s.%s (%s): mixes scalar and offset values",
            anim.element_id, anim.property_name.value, label,
        )
        return None

    delay = anim.relative_delay
    if delay < 0:
        logger.warning(
            "[SCHEDULE] %s.%s negative delay %.3fms clamped to 0",
            anim.element_id, anim.property_name.value, delay,
        )
        delay = 0.0
    duration = anim.duration
    if duration < 0:
        logger.warning(
            "[SCHEDULE] %s.%s negative duration %.3fms clamped to 0 (instant snap)",
            anim.element_id, anim.property_name.value, duration,
        )
        duration = 0.0

    absolute_start = node_start + delay
    return ScheduledEntry(
        element_id=anim.element_id,
        property_name=anim.property_name,
        absolute_start=absolute_start,
        absolute_end=absolute_start + duration,
        start_value=anim.start_value,
        end_value=anim.end_value,
        easing=anim.easing,
        keyframes=anim.keyframes,
        order=order,
    )


def resolve_schedule(root: SpecNode, t0: float,
                     known_elements: Optional[Iterable[str]] = None) -> ResolvedSchedule:
    """
    Resolve a spec tree against trigger time t0.

    Args:
        root: Root SpecNode; its resolved start is t0
        t0: Trigger timestamp in milliseconds
        known_elements: Element ids that have a render target. When given,
            entries for any other element are dropped.

    Returns:
        ResolvedSchedule with entries in depth-first authoring order
    """
    known = set(known_elements) if known_elements is not None else None
    entries: List[ScheduledEntry] = []
    dropped = 0

    # Iterative depth-first walk: (node, resolved_start, path label)
    stack: List[Tuple[SpecNode, float, str]] = [(root, float(t0), "root")]
    while stack:
        current, start, label = stack.pop()

        for anim in current.animations:
            if known is not None and anim.element_id not in known:
                logger.warning(
                    "[SCHEDULE] Dropping %s.%s (%s): no render target",
                    anim.element_id, anim.property_name.value, label,
                )
                dropped += 1
                continue
            entry = _schedule_entry(anim, start, len(entries) + dropped, label)
            if entry is None:
                dropped += 1
                continue
            entries.append(entry)

        offsets = stagger_offsets(len(current.children), current.stagger_increment, start)
        children = [
            (child, offset, f"{label}/{index}")
            for index, (child, offset) in enumerate(zip(current.children, offsets))
        ]
        stack.extend(reversed(children))

    schedule = ResolvedSchedule(t0=float(t0), entries=tuple(entries))
    logger.debug(
        "[SCHEDULE] Resolved %d entries (dropped=%d) t0=%.1fms end=%.1fms",
        len(entries), dropped, schedule.t0, schedule.end_time,
    )
    return schedule
