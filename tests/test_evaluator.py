"""Tests for the clock-driven evaluator."""
import pytest

from core.animation.evaluator import evaluate, initial_frame, lerp, progress_at, value_at
from core.animation.schedule import resolve_schedule
from core.animation.spec import PropertyAnimation, animate, node
from core.animation.types import AnimatedProperty, EasingCurve, Offset

OPACITY = AnimatedProperty.OPACITY


def _single(duration=200, delay=0, easing=EasingCurve.LINEAR, t0=1000, **props):
    props = props or {"opacity": (0, 1)}
    root = node(*animate("el", duration=duration, delay=delay, easing=easing, **props))
    return resolve_schedule(root, t0=t0)


def test_before_start_holds_start_value():
    schedule = _single()
    assert evaluate(schedule, 0).value("el", OPACITY) == 0.0
    assert evaluate(schedule, 999.9).value("el", OPACITY) == 0.0


def test_mid_flight_interpolates():
    schedule = _single()
    assert evaluate(schedule, 1050).value("el", OPACITY) == pytest.approx(0.25)
    assert evaluate(schedule, 1100).value("el", OPACITY) == pytest.approx(0.5)


def test_terminal_value_is_exact():
    schedule = _single(easing=EasingCurve.PRODUCTIVE, opacity=(0, 0.15))
    frame = evaluate(schedule, 1200)
    assert frame.value("el", OPACITY) == 0.15
    assert frame.settled
    # Long after the window: still exactly the target
    assert evaluate(schedule, 10 ** 9).value("el", OPACITY) == 0.15


def test_zero_duration_snaps():
    schedule = _single(duration=0, delay=100)
    assert evaluate(schedule, 1099.999).value("el", OPACITY) == 0.0
    assert evaluate(schedule, 1100).value("el", OPACITY) == 1.0


def test_offsets_interpolate_component_wise():
    schedule = _single(offset=((20, -10), (0, 0)))
    value = evaluate(schedule, 1100).value("el", AnimatedProperty.OFFSET)
    assert value == Offset(10.0, -5.0)


def test_keyframes_split_progress_into_segments():
    root = node(PropertyAnimation("dot", "scale", 0, 1, duration=200, keyframes=(1.2,)))
    schedule = resolve_schedule(root, t0=0)
    assert evaluate(schedule, 50).value("dot", "scale") == pytest.approx(0.6)
    assert evaluate(schedule, 100).value("dot", "scale") == pytest.approx(1.2)
    assert evaluate(schedule, 150).value("dot", "scale") == pytest.approx(1.1)
    assert evaluate(schedule, 200).value("dot", "scale") == 1.0


def test_evaluation_is_pure_and_handles_rewinds():
    """An earlier `now` after a later one yields the earlier state."""
    schedule = _single()
    late = evaluate(schedule, 1150)
    early = evaluate(schedule, 1050)
    assert late.value("el", OPACITY) == pytest.approx(0.75)
    assert early.value("el", OPACITY) == pytest.approx(0.25)
    assert not early.settled


def test_monotone_easing_gives_monotone_values():
    schedule = _single(easing=EasingCurve.PRODUCTIVE)
    values = [evaluate(schedule, 1000 + t).value("el", OPACITY) for t in range(0, 201, 10)]
    assert values == sorted(values)


def test_latest_started_duplicate_wins():
    root = node(
        *animate("dot", duration=100, opacity=(0, 1)),
        *animate("dot", duration=100, delay=300, opacity=(1, 0.2)),
    )
    schedule = resolve_schedule(root, t0=0)
    assert evaluate(schedule, 200).value("dot", OPACITY) == 1.0
    assert evaluate(schedule, 350).value("dot", OPACITY) == pytest.approx(0.6)
    assert evaluate(schedule, 400).value("dot", OPACITY) == 0.2


def test_frame_groups_by_element():
    root = node(*animate("el", duration=100, opacity=(0, 1), scale=(0.8, 1)))
    frame = evaluate(resolve_schedule(root, t0=0), 100)
    assert frame.by_element() == {"el": {OPACITY: 1.0, AnimatedProperty.SCALE: 1.0}}
    assert ("el", OPACITY) in frame
    assert len(frame) == 2


def test_initial_frame_matches_pre_start_evaluation():
    root = node(children=[node(*animate(f"row-{i}", duration=500, opacity=(0, 1), x=(-20, 0)))
                          for i in range(3)], stagger=100)
    frame = initial_frame(root)
    schedule = resolve_schedule(root, t0=5000)
    assert frame.values == evaluate(schedule, 0).values


def test_initial_frame_uses_earliest_start_for_duplicates():
    """A later-authored but earlier-starting animation owns the pre-trigger value."""
    root = node(*animate("a", duration=100, delay=300, opacity=(0.5, 1)),
                *animate("a", duration=100, opacity=(0, 0.5)))
    schedule = resolve_schedule(root, t0=1000)
    assert initial_frame(root).value("a", OPACITY) == 0.0
    assert evaluate(schedule, 999).value("a", OPACITY) == 0.0

    nested = node(*animate("b", duration=100, delay=200, opacity=(0.7, 1)),
                  children=[node(), node(*animate("b", duration=100, opacity=(0.2, 0.7)))],
                  stagger=100)
    assert initial_frame(nested).value("b", OPACITY) == 0.2
    assert initial_frame(nested).values == evaluate(resolve_schedule(nested, t0=500), 0).values


def test_initial_frame_respects_known_elements():
    root = node(*animate("a", duration=100, opacity=(0, 1)),
                *animate("b", duration=100, opacity=(0, 1)))
    assert list(initial_frame(root, known_elements=["b"])) == [("b", OPACITY)]


def test_helpers():
    assert lerp(0.0, 10.0, 0.3) == pytest.approx(3.0)
    entry = _single().entries[0]
    assert progress_at(entry, 900) == 0.0
    assert progress_at(entry, 1100) == pytest.approx(0.5)
    assert progress_at(entry, 5000) == 1.0
    assert value_at(entry, 1200) == 1.0
