"""Illustration choreography engine."""

from .types import (
    AnimatedProperty,
    EasingCurve,
    Offset,
    SceneState,
    TriggerState,
)
from .easing import CubicBezier, PRODUCTIVE_EASE, ease, get_easing_function, resolve_easing, EASING_FUNCTIONS
from .stagger import stagger_offsets, grid_offsets
from .spec import PropertyAnimation, SpecNode, animate, node, validate_tree
from .schedule import ResolvedSchedule, ScheduledEntry, resolve_schedule
from .evaluator import EvaluationFrame, evaluate, initial_frame, value_at
from .trigger import VisibilityTrigger
from .scene import Scene
from .animator import AnimationManager

__all__ = [
    # Types
    'AnimatedProperty',
    'EasingCurve',
    'Offset',
    'SceneState',
    'TriggerState',

    # Easing
    'CubicBezier',
    'PRODUCTIVE_EASE',
    'ease',
    'get_easing_function',
    'resolve_easing',
    'EASING_FUNCTIONS',

    # Spec tree
    'stagger_offsets',
    'grid_offsets',
    'PropertyAnimation',
    'SpecNode',
    'animate',
    'node',
    'validate_tree',

    # Scheduling and evaluation
    'ResolvedSchedule',
    'ScheduledEntry',
    'resolve_schedule',
    'EvaluationFrame',
    'evaluate',
    'initial_frame',
    'value_at',

    # Runtime
    'VisibilityTrigger',
    'Scene',
    'AnimationManager',
]
