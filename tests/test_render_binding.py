"""Tests for QtRenderBinding."""
import pytest
from PySide6.QtCore import QLineF, QPointF, Qt
from PySide6.QtGui import QPen
from PySide6.QtWidgets import QGraphicsLineItem, QGraphicsRectItem, QGraphicsScene

from core.animation.evaluator import EvaluationFrame
from core.animation.types import AnimatedProperty, Offset
from rendering.render_binding import QtRenderBinding, draw_dash_pattern, stroke_length


def _frame(**values):
    """Frame for element 'el' keyed by property name."""
    return EvaluationFrame(
        now=0.0,
        values={("el", AnimatedProperty.coerce(k)): v for k, v in values.items()},
    )


@pytest.fixture
def scene(qt_app):
    scene = QGraphicsScene()
    yield scene
    scene.clear()


@pytest.fixture
def rect_item(scene):
    item = QGraphicsRectItem(0, 0, 40, 20)
    item.setPos(100, 50)
    scene.addItem(item)
    return item


def test_opacity_and_scale(rect_item):
    binding = QtRenderBinding({"el": rect_item})
    binding.apply(_frame(opacity=0.4, scale=0.8))
    assert rect_item.opacity() == pytest.approx(0.4)
    assert rect_item.scale() == pytest.approx(0.8)
    assert rect_item.transformOriginPoint() == QPointF(20, 10)


def test_positions_are_relative_to_authored_base(rect_item):
    binding = QtRenderBinding({"el": rect_item})
    binding.apply(_frame(x=-20.0))
    assert rect_item.pos() == QPointF(80, 50)
    binding.apply(_frame(x=0.0, offset=Offset(5.0, -5.0)))
    assert rect_item.pos() == QPointF(105, 45)
    binding.apply(_frame(y=0.0))
    assert rect_item.pos() == QPointF(100, 50)


def test_axis_scale_uses_transform(rect_item):
    binding = QtRenderBinding({"el": rect_item})
    binding.apply(_frame(scale_x=2.0))
    transform = rect_item.transform()
    assert transform.m11() == pytest.approx(2.0)
    assert transform.m22() == pytest.approx(1.0)
    # Scaled about the centre: centre stays put
    assert transform.map(QPointF(20, 10)) == QPointF(20, 10)


def test_draw_progress_dashes_the_pen(scene):
    line = QGraphicsLineItem(QLineF(0, 0, 100, 0))
    line.setPen(QPen(Qt.GlobalColor.black, 2))
    scene.addItem(line)
    binding = QtRenderBinding({"el": line})

    binding.apply(_frame(draw=0.0))
    assert line.pen().style() == Qt.PenStyle.NoPen

    binding.apply(_frame(draw=0.5))
    assert line.pen().style() == Qt.PenStyle.CustomDashLine
    assert line.pen().dashPattern()[0] == pytest.approx(25.0)

    binding.apply(_frame(draw=1.0))
    assert line.pen().style() == Qt.PenStyle.SolidLine


def test_unbound_elements_are_skipped(rect_item):
    binding = QtRenderBinding({"el": rect_item})
    frame = EvaluationFrame(now=0.0, values={("ghost", AnimatedProperty.OPACITY): 0.5})
    assert binding(frame) == 0
    assert rect_item.opacity() == 1.0


def test_binding_bookkeeping(rect_item):
    binding = QtRenderBinding()
    binding.bind("el", rect_item)
    assert binding.element_ids() == ["el"]
    assert binding.item("el") is rect_item
    binding.unbind("el")
    assert binding.element_ids() == []
    with pytest.raises(ValueError):
        binding.bind("el", None)


def test_helpers(rect_item):
    assert stroke_length(rect_item) == pytest.approx(120.0)
    assert draw_dash_pattern(100.0, 0.25, 2.0) == [pytest.approx(12.5), pytest.approx(51.0)]
