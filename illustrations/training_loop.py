"""Training loop: weights in the centre, four stage boxes, arrows drawn in order."""
from typing import Dict

from PySide6.QtCore import QRectF
from PySide6.QtWidgets import QGraphicsItem, QGraphicsScene

from core.animation.spec import SpecNode, animate, node
from core.constants.timing import (
    REVEAL_DURATION_MS,
    SLIDE_IN_DISTANCE,
    STROKE_DRAW_DURATION_MS,
)
from illustrations import drawing
from widgets.illustration_view import IllustrationView

# (element id, rect, title, formula, slide-in offset)
BOXES = (
    ("forward", QRectF(140, 30, 120, 50), "Forward Pass", "ŷ = f(x, θ)", (0, -SLIDE_IN_DISTANCE)),
    ("loss", QRectF(280, 145, 105, 50), "Compute Loss", "L(ŷ, y)", (SLIDE_IN_DISTANCE, 0)),
    ("backward", QRectF(140, 260, 120, 50), "Backward Pass", "∇θL", (0, SLIDE_IN_DISTANCE)),
    ("update", QRectF(15, 145, 105, 50), "Update Weights", "θ := θ - α∇θL", (-SLIDE_IN_DISTANCE, 0)),
)

# (points, rounded corner, arrowhead direction, step label position)
ARROWS = (
    (((260, 55), (280, 55), (290, 65), (290, 145)), (1, (290, 55)), (0, 1), (295, 100)),
    (((332.5, 195), (332.5, 275), (322.5, 285), (260, 285)), (1, (332.5, 285)), (-1, 0), (340, 220)),
    (((140, 285), (120, 285), (110, 275), (110, 195)), (1, (110, 285)), (0, -1), (95, 250)),
    (((67.5, 145), (67.5, 65), (77.5, 55), (140, 55)), (1, (67.5, 55)), (1, 0), (50, 95)),
)

BOX_STAGGER_MS = 200
ARROW_START_MS = 1000
STEP_LABEL_DURATION_MS = 400


class TrainingLoopView(IllustrationView):
    NAME = "training-loop"
    TITLE = "Training loop"
    SCENE_RECT = QRectF(0, 0, 400, 340)

    def build_scene(self, scene: QGraphicsScene) -> Dict[str, QGraphicsItem]:
        items: Dict[str, QGraphicsItem] = {}

        halo = drawing.add_circle(scene, 200, 170, 35, drawing.BG_ELEVATED, drawing.ACCENT, 2)
        halo.setOpacity(0.3)
        items["weights"] = drawing.group(scene, [
            halo,
            drawing.add_text(scene, "Weights", 200, 170, size=13, color=drawing.ACCENT, bold=True),
            drawing.add_text(scene, "θ (parameters)", 200, 185, size=9, color=drawing.TEXT_TERTIARY),
        ])

        for element_id, rect, title, formula, _offset in BOXES:
            cx = rect.center().x()
            items[element_id] = drawing.group(scene, [
                drawing.add_rounded_box(scene, rect, 8, drawing.BG_ELEVATED, drawing.BORDER),
                drawing.add_text(scene, title, cx, rect.top() + 20, size=11, bold=True),
                drawing.add_text(scene, formula, cx, rect.top() + 33, size=9,
                                 color=drawing.TEXT_SECONDARY),
            ])

        for index, (points, corner, direction, label_pos) in enumerate(ARROWS):
            path = drawing.polyline_path(points, [corner])
            items[f"arrow-{index}"] = drawing.add_stroke(scene, path, drawing.ACCENT, 2)
            items[f"arrow-{index}-head"] = drawing.add_arrowhead(
                scene, points[-1], direction, drawing.ACCENT)
            items[f"step-{index}"] = drawing.add_text(
                scene, str(index + 1), label_pos[0], label_pos[1], size=9,
                color=drawing.TEXT_TERTIARY, anchor="start")

        items["io-label"] = drawing.add_text(scene, "Input: x, Labels: y", 200, 20, size=9,
                                             color=drawing.TEXT_TERTIARY)
        return items

    def spec_tree(self) -> SpecNode:
        ease = self.easing
        weights = node(*animate("weights", duration=600, easing=ease,
                                opacity=(0, 1), scale=(0.8, 1)))

        boxes = []
        for element_id, _rect, _title, _formula, (dx, dy) in BOXES:
            boxes.append(node(*animate(element_id, duration=REVEAL_DURATION_MS, delay=200,
                                       easing=ease, opacity=(0, 1), offset=((dx, dy), (0, 0)))))

        arrows = []
        for index in range(len(ARROWS)):
            arrows.append(node(
                *animate(f"arrow-{index}", duration=STROKE_DRAW_DURATION_MS, delay=ARROW_START_MS,
                         easing=ease, draw=(0, 1), opacity=(0, 1)),
                *animate(f"arrow-{index}-head", duration=150,
                         delay=ARROW_START_MS + STROKE_DRAW_DURATION_MS - 150,
                         easing=ease, opacity=(0, 1)),
                *animate(f"step-{index}", duration=STEP_LABEL_DURATION_MS,
                         delay=ARROW_START_MS + 100, easing=ease, opacity=(0, 1)),
            ))

        io_label = node(*animate("io-label", duration=REVEAL_DURATION_MS, delay=300,
                                 easing=ease, opacity=(0, 1)))

        return node(children=[
            weights,
            node(children=boxes, stagger=BOX_STAGGER_MS),
            node(children=arrows, stagger=BOX_STAGGER_MS),
            io_label,
        ])
