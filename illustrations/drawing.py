"""Palette and item helpers shared by the illustrations."""
from typing import Iterable, List, Sequence, Tuple

from PySide6.QtCore import QPointF, QRectF, Qt
from PySide6.QtGui import QBrush, QColor, QFont, QPainterPath, QPen, QPolygonF
from PySide6.QtWidgets import (
    QGraphicsEllipseItem,
    QGraphicsItem,
    QGraphicsItemGroup,
    QGraphicsPathItem,
    QGraphicsPolygonItem,
    QGraphicsScene,
    QGraphicsSimpleTextItem,
)

# Light lesson palette
BG_PRIMARY = QColor("#f4f4f4")
BG_TERTIARY = QColor("#e0e0e0")
BG_ELEVATED = QColor("#ffffff")
BORDER = QColor("#c6c6c6")
ACCENT = QColor("#0f62fe")
TEXT_PRIMARY = QColor("#161616")
TEXT_SECONDARY = QColor("#525252")
TEXT_TERTIARY = QColor("#8d8d8d")


def pen(color: QColor, width: float = 1.0) -> QPen:
    p = QPen(color)
    p.setWidthF(width)
    p.setCapStyle(Qt.PenCapStyle.RoundCap)
    p.setJoinStyle(Qt.PenJoinStyle.RoundJoin)
    return p


def add_text(scene: QGraphicsScene, text: str, x: float, y: float, size: int = 11,
             color: QColor = TEXT_PRIMARY, bold: bool = False,
             anchor: str = "middle") -> QGraphicsSimpleTextItem:
    """
    Add a text item whose anchor point sits at (x, y).

    ``anchor`` is "start" or "middle" horizontally; text is always
    centred vertically on ``y``.
    """
    item = QGraphicsSimpleTextItem(text)
    font = QFont()
    font.setPixelSize(size)
    if bold:
        font.setWeight(QFont.Weight.DemiBold)
    item.setFont(font)
    item.setBrush(QBrush(color))
    rect = item.boundingRect()
    left = x - rect.width() / 2 if anchor == "middle" else x
    item.setPos(left, y - rect.height() / 2)
    scene.addItem(item)
    return item


def add_rounded_box(scene: QGraphicsScene, rect: QRectF, radius: float,
                    fill: QColor, stroke: QColor, width: float = 1.5) -> QGraphicsPathItem:
    path = QPainterPath()
    path.addRoundedRect(rect, radius, radius)
    item = QGraphicsPathItem(path)
    item.setBrush(QBrush(fill))
    item.setPen(pen(stroke, width))
    scene.addItem(item)
    return item


def add_circle(scene: QGraphicsScene, cx: float, cy: float, r: float,
               fill: QColor, stroke: QColor, width: float = 1.0) -> QGraphicsEllipseItem:
    item = QGraphicsEllipseItem(cx - r, cy - r, 2 * r, 2 * r)
    item.setBrush(QBrush(fill))
    item.setPen(pen(stroke, width))
    scene.addItem(item)
    return item


def polyline_path(points: Sequence[Tuple[float, float]],
                  corners: Iterable[Tuple[int, Tuple[float, float]]] = ()) -> QPainterPath:
    """
    Path through ``points``; ``corners`` maps a segment index to a quadratic
    control point used instead of a straight line for that segment.
    """
    controls = dict(corners)
    path = QPainterPath(QPointF(*points[0]))
    for index, point in enumerate(points[1:]):
        if index in controls:
            path.quadTo(QPointF(*controls[index]), QPointF(*point))
        else:
            path.lineTo(QPointF(*point))
    return path


def add_stroke(scene: QGraphicsScene, path: QPainterPath, color: QColor,
               width: float = 2.0) -> QGraphicsPathItem:
    item = QGraphicsPathItem(path)
    item.setBrush(QBrush(Qt.BrushStyle.NoBrush))
    item.setPen(pen(color, width))
    scene.addItem(item)
    return item


def add_arrowhead(scene: QGraphicsScene, tip: Tuple[float, float],
                  direction: Tuple[float, float], color: QColor,
                  size: float = 7.0) -> QGraphicsPolygonItem:
    """Filled triangle pointing along ``direction`` (a unit axis vector)."""
    dx, dy = direction
    tx, ty = tip
    back = QPointF(tx - dx * size, ty - dy * size)
    side = QPointF(-dy * size / 2, dx * size / 2)
    polygon = QPolygonF([QPointF(tx, ty), back + side, back - side])
    item = QGraphicsPolygonItem(polygon)
    item.setBrush(QBrush(color))
    item.setPen(QPen(Qt.PenStyle.NoPen))
    scene.addItem(item)
    return item


def group(scene: QGraphicsScene, items: List[QGraphicsItem]) -> QGraphicsItemGroup:
    """Group items already in ``scene`` so they animate as one element."""
    return scene.createItemGroup(items)
