"""
Clock-driven evaluator.

Computes the instantaneous value of every scheduled property for an
explicit ``now``. Evaluation is a pure function of (schedule, now): a tick
that reports an earlier time than the previous one simply yields the
earlier state, nothing is accumulated between ticks.

Per entry:
    now <  start         -> start_value
    start <= now < end   -> lerp(start_value, end_value, easing(progress))
    now >= end           -> end_value, exactly
"""
from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, Optional, Sequence

from core.animation.schedule import EntryKey, ResolvedSchedule, ScheduledEntry, resolve_schedule
from core.animation.spec import SpecNode
from core.animation.types import AnimatedProperty, Offset, Value


def lerp(start: Value, end: Value, t: float) -> Value:
    """Linear interpolation for scalars and offsets."""
    if isinstance(start, Offset):
        return Offset(
            start.dx + (end.dx - start.dx) * t,
            start.dy + (end.dy - start.dy) * t,
        )
    return start + (end - start) * t


def _interpolate_stops(stops: Sequence[Value], eased: float) -> Value:
    segments = len(stops) - 1
    scaled = eased * segments
    index = min(max(int(scaled), 0), segments - 1)
    return lerp(stops[index], stops[index + 1], scaled - index)


def progress_at(entry: ScheduledEntry, now: float) -> float:
    """Raw (un-eased) progress of an entry in [0, 1]."""
    if now < entry.absolute_start:
        return 0.0
    if now >= entry.absolute_end:
        return 1.0
    return (now - entry.absolute_start) / entry.duration


def value_at(entry: ScheduledEntry, now: float) -> Value:
    """Value of a single scheduled entry at ``now``."""
    if now < entry.absolute_start:
        return entry.start_value
    # Zero-length windows land here at absolute_start: instant snap
    if now >= entry.absolute_end:
        return entry.end_value

    eased = entry.easing((now - entry.absolute_start) / entry.duration)
    if entry.keyframes:
        stops = (entry.start_value,) + entry.keyframes + (entry.end_value,)
        return _interpolate_stops(stops, eased)
    return lerp(entry.start_value, entry.end_value, eased)


@dataclass(frozen=True)
class EvaluationFrame:
    """Per-tick mapping of (element_id, property) to its current value."""
    now: float
    values: Dict[EntryKey, Value] = field(default_factory=dict)
    settled: bool = False

    def __getitem__(self, key: EntryKey) -> Value:
        return self.values[key]

    def __iter__(self) -> Iterator[EntryKey]:
        return iter(self.values)

    def __len__(self) -> int:
        return len(self.values)

    def __contains__(self, key: object) -> bool:
        return key in self.values

    def value(self, element_id: str, prop: AnimatedProperty,
              default: Optional[Value] = None) -> Optional[Value]:
        return self.values.get((element_id, AnimatedProperty.coerce(prop)), default)

    def by_element(self) -> Dict[str, Dict[AnimatedProperty, Value]]:
        """Regroup values per element for render bindings."""
        grouped: Dict[str, Dict[AnimatedProperty, Value]] = {}
        for (element_id, prop), value in self.values.items():
            grouped.setdefault(element_id, {})[prop] = value
        return grouped


def evaluate(schedule: ResolvedSchedule, now: float) -> EvaluationFrame:
    """
    Evaluate a whole schedule at ``now``.

    When several entries target the same (element, property) the most
    recently started one wins; before any has started the earliest one
    supplies its start value.
    """
    values: Dict[EntryKey, Value] = {}
    for key, entries in schedule.by_key().items():
        active = entries[0]
        for entry in entries:
            if entry.absolute_start <= now:
                active = entry
            else:
                break
        values[key] = value_at(active, now)
    return EvaluationFrame(now=now, values=values, settled=now >= schedule.end_time)


def initial_frame(root: SpecNode, known_elements: Optional[Iterable[str]] = None,
                  now: float = 0.0) -> EvaluationFrame:
    """
    Frame shown before the trigger fires.

    Every property holds the start value of its earliest-starting animation
    (authoring order breaks ties), which is exactly what the evaluator
    yields for any ``now`` before t0.
    """
    schedule = resolve_schedule(root, 0.0, known_elements)
    values: Dict[EntryKey, Value] = {
        key: entries[0].start_value for key, entries in schedule.by_key().items()
    }
    return EvaluationFrame(now=now, values=values, settled=False)
