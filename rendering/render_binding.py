"""Render binding: writes evaluation frames onto QGraphicsItems.

Each element id maps to one item. The binding captures the item's authored
state (position, pen, transform) when it is bound so offsets and stroke
drawing are applied relative to what the illustration drew, and so the
terminal frame restores the authored look exactly.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional

from PySide6.QtCore import QPointF, Qt
from PySide6.QtGui import QPainterPath, QPen, QTransform
from PySide6.QtWidgets import (
    QAbstractGraphicsShapeItem,
    QGraphicsEllipseItem,
    QGraphicsItem,
    QGraphicsLineItem,
    QGraphicsPathItem,
    QGraphicsRectItem,
)

from core.animation.evaluator import EvaluationFrame
from core.animation.types import AnimatedProperty, Offset, Value
from core.logging.logger import get_logger, is_verbose_logging
from core.logging.tags import TAG_RENDER

logger = get_logger(__name__)


def stroke_length(item: QGraphicsItem) -> float:
    """Total stroked path length of a line/path/rect/ellipse item (0 if unknown)."""
    if isinstance(item, QGraphicsLineItem):
        return item.line().length()
    if isinstance(item, QGraphicsPathItem):
        return item.path().length()
    if isinstance(item, QGraphicsRectItem):
        path = QPainterPath()
        path.addRect(item.rect())
        return path.length()
    if isinstance(item, QGraphicsEllipseItem):
        path = QPainterPath()
        path.addEllipse(item.rect())
        return path.length()
    return 0.0


def draw_dash_pattern(length: float, fraction: float, pen_width: float) -> List[float]:
    """
    Dash pattern (in pen-width units) that strokes only ``fraction`` of a path.

    One dash covering the drawn part followed by a gap longer than the
    remaining path.
    """
    width = pen_width if pen_width > 0 else 1.0
    fraction = max(0.0, min(1.0, fraction))
    dash = max(length * fraction / width, 1e-3)
    gap = max(length / width + 1.0, 1e-3)
    return [dash, gap]


@dataclass
class _BoundElement:
    item: QGraphicsItem
    base_pos: QPointF
    base_pen: Optional[QPen]
    base_transform: QTransform
    length: float


def _item_pen(item: QGraphicsItem) -> Optional[QPen]:
    if isinstance(item, (QAbstractGraphicsShapeItem, QGraphicsLineItem)):
        return QPen(item.pen())
    return None


class QtRenderBinding:
    """Maps element ids to graphics items and applies frames to them."""

    def __init__(self, items: Optional[Mapping[str, QGraphicsItem]] = None):
        self._elements: Dict[str, _BoundElement] = {}
        for element_id, item in (items or {}).items():
            self.bind(element_id, item)

    def bind(self, element_id: str, item: QGraphicsItem) -> None:
        """Bind an element id to an item, capturing its authored state."""
        if item is None:
            raise ValueError(f"Cannot bind {element_id!r} to None")
        item.setTransformOriginPoint(item.boundingRect().center())
        self._elements[element_id] = _BoundElement(
            item=item,
            base_pos=QPointF(item.pos()),
            base_pen=_item_pen(item),
            base_transform=QTransform(item.transform()),
            length=stroke_length(item),
        )

    def unbind(self, element_id: str) -> None:
        self._elements.pop(element_id, None)

    def element_ids(self) -> List[str]:
        return list(self._elements.keys())

    def item(self, element_id: str) -> Optional[QGraphicsItem]:
        bound = self._elements.get(element_id)
        return bound.item if bound else None

    def __call__(self, frame: EvaluationFrame) -> int:
        return self.apply(frame)

    def apply(self, frame: EvaluationFrame) -> int:
        """
        Write every value of ``frame`` onto its item.

        Returns:
            Number of elements updated
        """
        updated = 0
        for element_id, props in frame.by_element().items():
            bound = self._elements.get(element_id)
            if bound is None:
                if is_verbose_logging():
                    logger.debug("%s No item bound for %s", TAG_RENDER, element_id)
                continue
            self._apply_element(bound, props)
            updated += 1
        return updated

    def _apply_element(self, bound: _BoundElement, props: Dict[AnimatedProperty, Value]) -> None:
        item = bound.item

        if AnimatedProperty.OPACITY in props:
            item.setOpacity(max(0.0, min(1.0, float(props[AnimatedProperty.OPACITY]))))

        dx = float(props.get(AnimatedProperty.X, 0.0))
        dy = float(props.get(AnimatedProperty.Y, 0.0))
        offset = props.get(AnimatedProperty.OFFSET)
        if isinstance(offset, Offset):
            dx += offset.dx
            dy += offset.dy
        if (AnimatedProperty.X in props or AnimatedProperty.Y in props
                or AnimatedProperty.OFFSET in props):
            item.setPos(bound.base_pos + QPointF(dx, dy))

        if AnimatedProperty.SCALE in props:
            item.setScale(float(props[AnimatedProperty.SCALE]))

        if AnimatedProperty.SCALE_X in props or AnimatedProperty.SCALE_Y in props:
            sx = float(props.get(AnimatedProperty.SCALE_X, 1.0))
            sy = float(props.get(AnimatedProperty.SCALE_Y, 1.0))
            center = item.boundingRect().center()
            transform = QTransform(bound.base_transform)
            transform.translate(center.x(), center.y())
            transform.scale(sx, sy)
            transform.translate(-center.x(), -center.y())
            item.setTransform(transform)

        if AnimatedProperty.DRAW in props:
            self._apply_draw(bound, float(props[AnimatedProperty.DRAW]))

    def _apply_draw(self, bound: _BoundElement, fraction: float) -> None:
        if bound.base_pen is None:
            return
        item = bound.item
        if fraction >= 1.0 or bound.length <= 0.0:
            item.setPen(QPen(bound.base_pen))
            return
        pen = QPen(bound.base_pen)
        if fraction <= 0.0:
            pen.setStyle(Qt.PenStyle.NoPen)
        else:
            pen.setDashPattern(draw_dash_pattern(bound.length, fraction, pen.widthF()))
            pen.setDashOffset(0.0)
        item.setPen(pen)
