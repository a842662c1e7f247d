"""K-fold cross-validation: four fold rows slide in, then the averaged score."""
from typing import Dict

from PySide6.QtCore import QRectF
from PySide6.QtGui import QBrush
from PySide6.QtWidgets import QGraphicsItem, QGraphicsRectItem, QGraphicsScene

from core.animation.spec import SpecNode, animate, node
from core.constants.timing import REVEAL_DURATION_MS, SLIDE_IN_DISTANCE, STAGGER_DEFAULT_MS
from illustrations import drawing
from widgets.illustration_view import IllustrationView

FOLDS = (
    ("Fold 1", 0, "92%"),
    ("Fold 2", 1, "88%"),
    ("Fold 3", 2, "91%"),
    ("Fold 4", 3, "89%"),
)

SEGMENT_WIDTH = 60
SEGMENT_HEIGHT = 32
START_X = 90
START_Y = 20
ROW_SPACING = 45


class KFoldValidationView(IllustrationView):
    NAME = "kfold-validation"
    TITLE = "K-fold cross-validation"
    SCENE_RECT = QRectF(0, 0, 440, 220)

    def build_scene(self, scene: QGraphicsScene) -> Dict[str, QGraphicsItem]:
        items: Dict[str, QGraphicsItem] = {}
        for fold_index, (label, validation_index, score) in enumerate(FOLDS):
            y = START_Y + fold_index * ROW_SPACING
            mid = y + SEGMENT_HEIGHT / 2
            members = [drawing.add_text(scene, label, 10, mid, size=13,
                                        color=drawing.TEXT_SECONDARY, anchor="start")]
            for segment in range(len(FOLDS)):
                x = START_X + segment * SEGMENT_WIDTH
                is_validation = segment == validation_index
                rect = QGraphicsRectItem(x, y, SEGMENT_WIDTH, SEGMENT_HEIGHT)
                rect.setBrush(QBrush(drawing.ACCENT if is_validation else drawing.BG_TERTIARY))
                rect.setPen(drawing.pen(drawing.BORDER))
                scene.addItem(rect)
                members.append(rect)
                members.append(drawing.add_text(
                    scene, "Val" if is_validation else "Train",
                    x + SEGMENT_WIDTH / 2, mid, size=11,
                    color=drawing.BG_PRIMARY if is_validation else drawing.TEXT_TERTIARY,
                    bold=is_validation,
                ))
            members.append(drawing.add_text(
                scene, score, START_X + len(FOLDS) * SEGMENT_WIDTH + 20, mid,
                size=13, bold=True, anchor="start",
            ))
            items[f"fold-{fold_index}"] = drawing.group(scene, members)

        final = drawing.add_text(scene, "Final Score = average (90%)", 220, 200,
                                 size=14, color=drawing.TEXT_SECONDARY)
        items["final-score"] = drawing.group(scene, [final])
        return items

    def spec_tree(self) -> SpecNode:
        rows = [
            node(*animate(f"fold-{i}", duration=REVEAL_DURATION_MS, easing=self.easing,
                          opacity=(0, 1), x=(-SLIDE_IN_DISTANCE, 0)))
            for i in range(len(FOLDS))
        ]
        summary = node(*animate("final-score", duration=REVEAL_DURATION_MS, delay=500,
                                easing=self.easing, opacity=(0, 1), y=(10, 0)))
        return node(children=[node(children=rows, stagger=STAGGER_DEFAULT_MS), summary])
