"""Tests for schedule resolution."""
import pytest

from core.animation.schedule import resolve_schedule
from core.animation.spec import PropertyAnimation, animate, node
from core.animation.types import AnimatedProperty


def _rows(count, stagger, duration=200):
    return node(
        children=[node(*animate(f"row-{i}", duration=duration, opacity=(0, 1)))
                  for i in range(count)],
        stagger=stagger,
    )


def test_stagger_places_children_on_the_timeline():
    schedule = resolve_schedule(_rows(4, 100, duration=500), t0=1000)
    starts = [e.absolute_start for e in schedule.entries]
    assert starts == [1000, 1100, 1200, 1300]
    assert schedule.end_time == 1800


def test_nested_offsets_accumulate():
    """A child's start is its parent's start plus index * parent stagger."""
    root = node(children=[
        node(*animate("first", duration=100, opacity=(0, 1))),
        node(children=[
            node(*animate("inner-0", duration=100, delay=5, opacity=(0, 1))),
            node(*animate("inner-1", duration=100, delay=5, opacity=(0, 1))),
        ], stagger=30),
    ], stagger=200)
    schedule = resolve_schedule(root, t0=0)
    by_id = {e.element_id: e for e in schedule.entries}
    assert by_id["first"].absolute_start == 0
    assert by_id["inner-0"].absolute_start == 205
    assert by_id["inner-1"].absolute_start == 235


def test_entries_keep_authoring_order():
    schedule = resolve_schedule(_rows(3, 0), t0=0)
    assert [e.element_id for e in schedule.entries] == ["row-0", "row-1", "row-2"]
    assert [e.order for e in schedule.entries] == [0, 1, 2]


def test_negative_values_are_clamped(caplog):
    root = node(
        children=[
            node(PropertyAnimation("a", "opacity", 0, 1, relative_delay=-50, duration=-10)),
            node(PropertyAnimation("b", "opacity", 0, 1, duration=100)),
        ],
        stagger=-100,
    )
    schedule = resolve_schedule(root, t0=500)
    a, b = schedule.entries
    assert a.absolute_start == 500 and a.absolute_end == 500
    assert b.absolute_start == 500
    assert caplog.text.count("clamped") >= 3


def test_unknown_elements_are_dropped(caplog):
    root = _rows(3, 50)
    schedule = resolve_schedule(root, t0=0, known_elements={"row-0", "row-2"})
    assert [e.element_id for e in schedule.entries] == ["row-0", "row-2"]
    # Dropping does not shift the stagger slot of later siblings
    assert schedule.entries[1].absolute_start == 100
    assert "no render target" in caplog.text


def test_mixed_value_kinds_are_dropped(caplog):
    root = node(
        PropertyAnimation("box", "offset", (0, 0), 5, duration=100),
        PropertyAnimation("box", "opacity", 0, 1, duration=100),
    )
    schedule = resolve_schedule(root, t0=0)
    assert [e.property_name for e in schedule.entries] == [AnimatedProperty.OPACITY]
    assert "mixes scalar and offset" in caplog.text


def test_resolution_is_deterministic():
    root = _rows(5, 40)
    first = resolve_schedule(root, t0=123.5)
    second = resolve_schedule(root, t0=123.5)
    assert first == second


def test_empty_tree():
    schedule = resolve_schedule(node(), t0=42)
    assert len(schedule) == 0
    assert schedule.end_time == 42


def test_by_key_orders_duplicates_by_start():
    root = node(children=[
        node(*animate("dot", duration=100, delay=300, opacity=(1, 0))),
        node(*animate("dot", duration=100, opacity=(0, 1))),
    ])
    schedule = resolve_schedule(root, t0=0)
    entries = schedule.by_key()[("dot", AnimatedProperty.OPACITY)]
    assert [e.absolute_start for e in entries] == [0, 300]
    assert len(schedule.for_element("dot")) == 2


@pytest.mark.parametrize("t0", [0.0, 16.7, 1e6])
def test_t0_only_shifts_the_schedule(t0):
    base = resolve_schedule(_rows(3, 100), t0=0)
    shifted = resolve_schedule(_rows(3, 100), t0=t0)
    for a, b in zip(base.entries, shifted.entries):
        assert b.absolute_start - a.absolute_start == pytest.approx(t0)
        assert b.duration == pytest.approx(a.duration)
