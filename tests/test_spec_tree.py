"""Tests for spec tree construction and validation."""
import math

import pytest

from core.animation.easing import PRODUCTIVE_EASE
from core.animation.spec import (
    PropertyAnimation,
    SpecNode,
    animate,
    element_ids,
    iter_animations,
    node,
    validate_tree,
)
from core.animation.types import AnimatedProperty, Offset


def test_animate_builds_one_entry_per_property():
    anims = animate("row-0", duration=500, delay=20, easing="productive",
                    opacity=(0, 1), x=(-20, 0))
    assert [a.property_name for a in anims] == [AnimatedProperty.OPACITY, AnimatedProperty.X]
    assert all(a.duration == 500 and a.relative_delay == 20 for a in anims)
    assert all(a.easing is PRODUCTIVE_EASE for a in anims)


def test_animate_coerces_offsets_and_keyframes():
    (move,) = animate("box", duration=100, offset=((20, 0), (0, 0)))
    assert move.start_value == Offset(20.0, 0.0)
    (pop,) = animate("dot", duration=100, keyframes={"scale": [1.2]}, scale=(0, 1))
    assert pop.keyframes == (1.2,)


def test_animate_requires_properties():
    with pytest.raises(ValueError):
        animate("row-0", duration=100)


def test_property_animation_rejects_bad_values():
    with pytest.raises(ValueError):
        PropertyAnimation("a", "opacity", 0, math.inf, duration=100)
    with pytest.raises(ValueError):
        PropertyAnimation("a", "opacity", True, 1, duration=100)
    with pytest.raises(ValueError):
        PropertyAnimation("", "opacity", 0, 1, duration=100)
    with pytest.raises(ValueError):
        PropertyAnimation("a", "rotation", 0, 1, duration=100)
    with pytest.raises(ValueError):
        PropertyAnimation("a", "opacity", 0, 1, duration=100, easing="wobble")


def test_negative_timing_is_accepted_at_construction():
    """Negative delay/duration are repaired later by the resolver."""
    anim = PropertyAnimation("a", "opacity", 0, 1, relative_delay=-5, duration=-10)
    assert anim.duration == -10


def test_spec_node_rejects_foreign_children():
    with pytest.raises(ValueError):
        SpecNode(children=("not a node",))


def test_iter_animations_is_depth_first():
    root = node(
        *animate("title", duration=100, opacity=(0, 1)),
        children=[
            node(*animate("a", duration=100, opacity=(0, 1)),
                 children=[node(*animate("a-child", duration=100, opacity=(0, 1)))]),
            node(*animate("b", duration=100, opacity=(0, 1))),
        ],
    )
    assert [a.element_id for a in iter_animations(root)] == ["title", "a", "a-child", "b"]
    assert element_ids(root) == ["title", "a", "a-child", "b"]


def test_validate_tree_reports_repairs():
    root = node(
        PropertyAnimation("ghost", "opacity", 0, 1, duration=100),
        PropertyAnimation("box", "opacity", 0, 1, duration=-1),
        PropertyAnimation("box", "offset", (0, 0), 1, duration=100),
        stagger=-10,
    )
    issues = validate_tree(root, known_elements=["box"])
    assert len(issues) == 4
    assert any("negative stagger" in issue for issue in issues)
    assert any("no render target" in issue for issue in issues)
    assert any("negative duration" in issue for issue in issues)
    assert any("mixes scalar and offset" in issue for issue in issues)


def test_validate_tree_clean():
    root = node(children=[node(*animate("a", duration=100, opacity=(0, 1)))], stagger=50)
    assert validate_tree(root, known_elements=["a"]) == []
