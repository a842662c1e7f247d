"""Tests for IllustrationView and the illustration catalog."""
import pytest

from core.animation.spec import element_ids, validate_tree
from core.animation.types import AnimatedProperty, SceneState
from core.events import EventType
from illustrations import ILLUSTRATIONS, get_illustration, list_illustrations
from illustrations.kfold_validation import KFoldValidationView
from illustrations.mnist_network import MNISTNetworkView, connections


def _mount(view_cls, animation_manager, qtbot, **kwargs):
    view = view_cls(animation_manager, **kwargs)
    qtbot.addWidget(view)
    return view


def test_catalog_lists_every_view():
    assert list_illustrations() == ["kfold-validation", "mnist-network", "training-loop"]
    assert get_illustration("kfold-validation") is KFoldValidationView


def test_unknown_illustration():
    with pytest.raises(KeyError):
        get_illustration("attention")


@pytest.mark.parametrize("name", sorted(ILLUSTRATIONS))
def test_every_animated_element_has_an_item(name, animation_manager, qtbot):
    view = _mount(get_illustration(name), animation_manager, qtbot)
    tree = view.spec_tree()
    assert validate_tree(tree, view.binding.element_ids()) == []
    assert set(element_ids(tree)) == set(view.binding.element_ids())
    view.teardown()


@pytest.mark.parametrize("name", sorted(ILLUSTRATIONS))
def test_initial_frame_hides_entrances(name, animation_manager, qtbot):
    """Nothing is shown in its final state before the trigger fires."""
    view = _mount(get_illustration(name), animation_manager, qtbot)
    for element_id in view.binding.element_ids():
        assert view.binding.item(element_id).opacity() == 0.0
    assert view.choreography.state is SceneState.ARMED
    view.teardown()


def test_kfold_rows_follow_the_stagger(animation_manager, fake_clock, qtbot):
    view = _mount(KFoldValidationView, animation_manager, qtbot)
    animation_manager.observe(view.scene_id, True)
    starts = {e.element_id: e.absolute_start - fake_clock.now
              for e in view.choreography.schedule.entries
              if e.property_name is AnimatedProperty.OPACITY}
    assert [starts[f"fold-{i}"] for i in range(4)] == [0, 100, 200, 300]
    assert starts["final-score"] == 500
    view.teardown()


def test_kfold_settles_at_authored_positions(animation_manager, fake_clock, qtbot):
    view = _mount(KFoldValidationView, animation_manager, qtbot)
    row = view.binding.item("fold-0")
    assert row.x() == -20

    animation_manager.observe(view.scene_id, True)
    fake_clock.advance(5000)
    animation_manager._update_all()

    assert view.choreography.state is SceneState.SETTLED
    assert row.opacity() == 1.0
    assert row.x() == 0
    assert not animation_manager.is_active()
    view.teardown()


def test_mnist_connections_settle_faint(animation_manager, fake_clock, qtbot):
    view = _mount(MNISTNetworkView, animation_manager, qtbot)
    assert len([i for i in view.binding.element_ids() if i.startswith("conn-")]) == len(connections())

    animation_manager.observe(view.scene_id, True)
    fake_clock.advance(5000)
    animation_manager._update_all()
    assert view.binding.item("conn-0").opacity() == pytest.approx(0.15)
    view.teardown()


def test_margin_comes_from_settings(animation_manager, settings_manager, qtbot):
    settings_manager.set('visibility.margin_px', -40)
    view = _mount(KFoldValidationView, animation_manager, qtbot, settings=settings_manager)
    assert view.probe.margin_px == -40
    explicit = _mount(KFoldValidationView, animation_manager, qtbot,
                      settings=settings_manager, margin_px=0)
    assert explicit.probe.margin_px == 0
    assert view.scene_id != explicit.scene_id
    view.teardown()
    explicit.teardown()


def test_teardown_unregisters_and_publishes(animation_manager, event_system, qtbot):
    view = _mount(KFoldValidationView, animation_manager, qtbot, event_system=event_system)
    scene_id = view.scene_id
    assert animation_manager.get_scene(scene_id) is not None

    view.close()
    view.teardown()

    assert animation_manager.get_scene(scene_id) is None
    assert view.choreography.state is SceneState.TORN_DOWN
    assert not view.probe.attached
    types = [e.event_type for e in event_system.get_event_history()]
    assert types == [EventType.SCENE_MOUNTED, EventType.SCENE_UNMOUNTED]
