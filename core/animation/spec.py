"""
Declarative animation spec tree.

Illustrations describe *what* animates as a tree of SpecNodes; *when* it
runs is derived later by the schedule resolver. Nodes are immutable after
construction so one tree can be shared by every instance of a diagram.

Example:
    root = node(
        children=[
            node(*animate(f"row-{i}", duration=500, opacity=(0, 1), x=(-20, 0)))
            for i in range(4)
        ],
        stagger=100,
    )
"""
import math
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

from core.animation.easing import EasingSpec, linear, resolve_easing
from core.animation.types import (
    AnimatedProperty,
    EasingFunction,
    Value,
    coerce_value,
)


def _finite_number(name: str, value: object) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"{name} must be a number, got {value!r}")
    result = float(value)
    if not math.isfinite(result):
        raise ValueError(f"{name} must be finite, got {value!r}")
    return result


@dataclass(frozen=True)
class PropertyAnimation:
    """
    One property of one element moving from start_value to end_value.

    relative_delay is measured from the owning node's resolved start.
    Negative delay/duration are accepted here and clamped to zero when the
    schedule is resolved, so one bad entry cannot break a whole diagram.
    """
    element_id: str
    property_name: AnimatedProperty
    start_value: Value
    end_value: Value
    relative_delay: float = 0.0
    duration: float = 0.0
    easing: EasingFunction = linear
    keyframes: Tuple[Value, ...] = ()   # Intermediate stops between start and end

    def __post_init__(self) -> None:
        if not isinstance(self.element_id, str) or not self.element_id.strip():
            raise ValueError("PropertyAnimation requires a non-empty element_id")
        object.__setattr__(self, "property_name", AnimatedProperty.coerce(self.property_name))
        object.__setattr__(self, "start_value", coerce_value(self.start_value))
        object.__setattr__(self, "end_value", coerce_value(self.end_value))
        object.__setattr__(self, "relative_delay", _finite_number("relative_delay", self.relative_delay))
        object.__setattr__(self, "duration", _finite_number("duration", self.duration))
        object.__setattr__(self, "easing", resolve_easing(self.easing))
        object.__setattr__(
            self, "keyframes", tuple(coerce_value(v) for v in self.keyframes)
        )

    @property
    def key(self) -> Tuple[str, AnimatedProperty]:
        return (self.element_id, self.property_name)


@dataclass(frozen=True)
class SpecNode:
    """
    A node of the animation spec tree.

    Each child i starts at ``parent_start + i * stagger_increment``; the
    node's own animations are offset from that resolved start.
    """
    children: Tuple["SpecNode", ...] = ()
    stagger_increment: float = 0.0
    animations: Tuple[PropertyAnimation, ...] = ()
    element_id: Optional[str] = None   # Informational label for logs

    def __post_init__(self) -> None:
        children = tuple(self.children)
        for child in children:
            if not isinstance(child, SpecNode):
                raise ValueError(f"SpecNode children must be SpecNodes, got {type(child).__name__}")
        animations = tuple(self.animations)
        for anim in animations:
            if not isinstance(anim, PropertyAnimation):
                raise ValueError(
                    f"SpecNode animations must be PropertyAnimations, got {type(anim).__name__}"
                )
        object.__setattr__(self, "children", children)
        object.__setattr__(self, "animations", animations)
        object.__setattr__(
            self, "stagger_increment", _finite_number("stagger_increment", self.stagger_increment)
        )


def animate(element_id: str, *, duration: float, delay: float = 0.0,
            easing: EasingSpec = linear,
            keyframes: Optional[Dict[str, Sequence[object]]] = None,
            **properties: Tuple[object, object]) -> List[PropertyAnimation]:
    """
    Build one PropertyAnimation per keyword, all sharing the same timing.

    Each keyword is a property name mapped to a ``(start, end)`` pair:
        animate("node-1", duration=300, opacity=(0, 1), scale=(0.8, 1))
    """
    if not properties:
        raise ValueError(f"animate() for {element_id!r} needs at least one property")
    keyframes = keyframes or {}
    curve = resolve_easing(easing)
    result = []
    for name, pair in properties.items():
        try:
            start_value, end_value = pair
        except (TypeError, ValueError):
            raise ValueError(f"Property {name!r} needs a (start, end) pair, got {pair!r}") from None
        result.append(PropertyAnimation(
            element_id=element_id,
            property_name=AnimatedProperty.coerce(name),
            start_value=start_value,
            end_value=end_value,
            relative_delay=delay,
            duration=duration,
            easing=curve,
            keyframes=tuple(keyframes.get(name, ())),
        ))
    return result


def node(*animations: PropertyAnimation, children: Sequence[SpecNode] = (),
         stagger: float = 0.0, element_id: Optional[str] = None) -> SpecNode:
    """Shorthand SpecNode constructor used by illustration definitions."""
    return SpecNode(
        children=tuple(children),
        stagger_increment=stagger,
        animations=tuple(animations),
        element_id=element_id,
    )


def iter_animations(root: SpecNode) -> Iterator[PropertyAnimation]:
    """Yield every PropertyAnimation in depth-first order."""
    stack: List[SpecNode] = [root]
    while stack:
        current = stack.pop()
        yield from current.animations
        stack.extend(reversed(current.children))


def element_ids(root: SpecNode) -> List[str]:
    """Element ids referenced by the tree, in first-seen order."""
    seen: Dict[str, None] = {}
    for anim in iter_animations(root):
        seen.setdefault(anim.element_id, None)
    return list(seen)


def validate_tree(root: SpecNode, known_elements: Optional[Sequence[str]] = None) -> List[str]:
    """
    Report problems the resolver would repair or drop.

    Returns a list of human-readable issues; an empty list means the tree
    resolves without any clamping or dropping.
    """
    issues: List[str] = []
    known = set(known_elements) if known_elements is not None else None

    def _walk(current: SpecNode, path: str) -> None:
        if current.stagger_increment < 0:
            issues.append(f"{path}: negative stagger_increment {current.stagger_increment}")
        for anim in current.animations:
            label = f"{path}:{anim.element_id}.{anim.property_name.value}"
            if anim.duration < 0:
                issues.append(f"{label}: negative duration {anim.duration}")
            if anim.relative_delay < 0:
                issues.append(f"{label}: negative relative_delay {anim.relative_delay}")
            if known is not None and anim.element_id not in known:
                issues.append(f"{label}: no render target for element")
            values = (anim.start_value, anim.end_value) + anim.keyframes
            if len({isinstance(v, tuple) for v in values}) > 1:
                issues.append(f"{label}: mixes scalar and offset values")
        for index, child in enumerate(current.children):
            _walk(child, f"{path}/{index}")

    _walk(root, "root")
    return issues
