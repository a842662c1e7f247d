"""MNIST network: a pixel "7", drawn connections, then neurons layer by layer."""
from typing import Dict, List, Tuple

from PySide6.QtCore import QLineF, QRectF
from PySide6.QtWidgets import QGraphicsItem, QGraphicsLineItem, QGraphicsScene

from core.animation.spec import SpecNode, animate, node
from core.animation.stagger import grid_offsets
from core.constants.timing import REVEAL_SHORT_DURATION_MS, STAGGER_TIGHT_MS, STROKE_DRAW_DURATION_MS
from illustrations import drawing
from widgets.illustration_view import IllustrationView

DIGIT_PATTERN = (
    (1, 1, 1, 1, 1),
    (0, 0, 0, 0, 1),
    (0, 0, 0, 1, 0),
    (0, 0, 1, 0, 0),
    (0, 0, 1, 0, 0),
)
GRID_ORIGIN = (20, 50)
CELL_PITCH = 12
CELL_SIZE = 10

# (name, x, node count, first reveal ms)
LAYERS = (
    ("input", 100, 6, 800),
    ("hidden", 240, 4, 1100),
    ("output", 380, 3, 1400),
)
NODE_START_Y = 60
NODE_SPACING = 25
NODE_RADIUS = 6

CELL_ROW_STAGGER_MS = 50
CELL_COL_STAGGER_MS = 30
CONNECTION_START_MS = 400
CONNECTION_STAGGER_MS = 5
CONNECTION_OPACITY = 0.15
NEURON_STAGGER_MS = STAGGER_TIGHT_MS


def node_positions(x: float, count: int) -> List[Tuple[float, float]]:
    return [(x, NODE_START_Y + i * NODE_SPACING) for i in range(count)]


def connections() -> List[Tuple[Tuple[float, float], Tuple[float, float]]]:
    """Fully connected edges input->hidden then hidden->output."""
    layers = [node_positions(x, count) for _name, x, count, _delay in LAYERS]
    edges = []
    for left, right in zip(layers, layers[1:]):
        for a in left:
            for b in right:
                edges.append((a, b))
    return edges


class MNISTNetworkView(IllustrationView):
    NAME = "mnist-network"
    TITLE = "MNIST digit recognition network"
    SCENE_RECT = QRectF(0, 0, 480, 220)

    def build_scene(self, scene: QGraphicsScene) -> Dict[str, QGraphicsItem]:
        items: Dict[str, QGraphicsItem] = {}
        ox, oy = GRID_ORIGIN

        for r, row in enumerate(DIGIT_PATTERN):
            for c, filled in enumerate(row):
                cell = drawing.add_rounded_box(
                    scene, QRectF(ox + c * CELL_PITCH, oy + r * CELL_PITCH, CELL_SIZE, CELL_SIZE),
                    1, drawing.ACCENT if filled else drawing.BG_ELEVATED, drawing.BORDER, 0.5)
                items[f"cell-{r}-{c}"] = cell
        drawing.add_text(scene, "28×28", ox + 30, oy + 75, size=9, color=drawing.TEXT_TERTIARY)
        drawing.add_text(scene, "pixels", ox + 30, oy + 85, size=9, color=drawing.TEXT_TERTIARY)

        for index, (a, b) in enumerate(connections()):
            line = QGraphicsLineItem(QLineF(a[0], a[1], b[0], b[1]))
            line.setPen(drawing.pen(drawing.TEXT_PRIMARY, 0.5))
            scene.addItem(line)
            items[f"conn-{index}"] = line

        for name, x, count, _delay in LAYERS:
            for index, (cx, cy) in enumerate(node_positions(x, count)):
                items[f"{name}-{index}"] = drawing.add_circle(
                    scene, cx, cy, NODE_RADIUS, drawing.BG_ELEVATED, drawing.BORDER)
            drawing.add_text(scene, "⋮", x, 35, size=10, color=drawing.TEXT_TERTIARY)
            drawing.add_text(scene, "⋮", x, NODE_START_Y + count * NODE_SPACING + 10,
                             size=10, color=drawing.TEXT_TERTIARY)
        drawing.add_text(scene, "Input (784)", 100, 205, size=9, color=drawing.TEXT_SECONDARY)
        drawing.add_text(scene, "Hidden (512)", 240, 205, size=9, color=drawing.TEXT_SECONDARY)
        drawing.add_text(scene, "Output (10)", 380, 205, size=9, color=drawing.TEXT_SECONDARY)
        drawing.add_text(scene, "classes 0–9", 380, 215, size=8, color=drawing.TEXT_TERTIARY)

        items["prediction"] = drawing.add_text(scene, "7", 445, 100, size=42,
                                               color=drawing.ACCENT, bold=True)
        items["prediction-label"] = drawing.add_text(scene, "prediction", 445, 120, size=8,
                                                     color=drawing.TEXT_TERTIARY)

        for element_id, (x1, x2) in (("flow-in", (70, 85)), ("flow-out", (405, 420))):
            flow = drawing.add_stroke(scene, drawing.polyline_path([(x1, 110), (x2, 110)]),
                                      drawing.TEXT_TERTIARY, 1)
            head = drawing.add_arrowhead(scene, (x2 + 5, 110), (1, 0), drawing.TEXT_TERTIARY, 5)
            items[element_id] = drawing.group(scene, [flow, head])
        return items

    def spec_tree(self) -> SpecNode:
        ease = self.easing
        cell_delays = grid_offsets(len(DIGIT_PATTERN), len(DIGIT_PATTERN[0]),
                                   CELL_ROW_STAGGER_MS, CELL_COL_STAGGER_MS)
        cells = node(*[
            anim
            for r, row in enumerate(cell_delays)
            for c, delay in enumerate(row)
            for anim in animate(f"cell-{r}-{c}", duration=REVEAL_SHORT_DURATION_MS, delay=delay,
                                easing=ease, opacity=(0, 1), scale=(0.8, 1))
        ])

        links = node(children=[
            node(*animate(f"conn-{i}", duration=STROKE_DRAW_DURATION_MS, delay=CONNECTION_START_MS,
                          easing=ease, draw=(0, 1), opacity=(0, CONNECTION_OPACITY)))
            for i in range(len(connections()))
        ], stagger=CONNECTION_STAGGER_MS)

        layers = []
        for name, _x, count, delay in LAYERS:
            layers.append(node(children=[
                node(*animate(f"{name}-{i}", duration=REVEAL_SHORT_DURATION_MS, delay=delay,
                              easing=ease, opacity=(0, 1), scale=(0, 1)))
                for i in range(count)
            ], stagger=NEURON_STAGGER_MS))

        output = node(
            *animate("prediction", duration=400, delay=1800, easing=ease,
                     opacity=(0, 1), scale=(0.5, 1)),
            *animate("prediction-label", duration=REVEAL_SHORT_DURATION_MS, delay=2000,
                     easing=ease, opacity=(0, 1)),
            *animate("flow-in", duration=REVEAL_SHORT_DURATION_MS, delay=1000,
                     easing=ease, opacity=(0, 0.4)),
            *animate("flow-out", duration=REVEAL_SHORT_DURATION_MS, delay=1600,
                     easing=ease, opacity=(0, 0.4)),
        )
        return node(children=[cells, links] + layers + [output])
