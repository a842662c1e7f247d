"""
Base class for animated illustration views.

An IllustrationView owns one QGraphicsScene of authored items plus the
choreography that reveals them:

- build_scene() draws the items and returns them keyed by element id
- spec_tree() returns the animation spec for those ids
- the base wires items -> QtRenderBinding, spec -> Scene, a
  QtVisibilityProbe -> the scene's trigger, and registers the pair with the
  shared AnimationManager

The initial frame is painted during construction so no item is ever shown
in its final state before the view scrolls into sight.
"""
from __future__ import annotations

import itertools
from typing import Dict, Optional

from PySide6.QtCore import QRectF, QSize, Qt
from PySide6.QtGui import QPainter
from PySide6.QtWidgets import QFrame, QGraphicsItem, QGraphicsScene, QGraphicsView, QWidget

from core.animation.animator import AnimationManager
from core.animation.easing import EasingSpec, resolve_easing
from core.animation.scene import Scene
from core.animation.spec import SpecNode
from core.constants.timing import VISIBILITY_DEFAULT_MARGIN_PX, VISIBILITY_DEFAULT_THRESHOLD
from core.events import EventSystem, EventType
from core.logging.logger import get_logger
from core.logging.tags import TAG_ANIM
from core.settings import SettingsManager
from rendering.render_binding import QtRenderBinding
from rendering.visibility_probe import QtVisibilityProbe

logger = get_logger(__name__)

_instance_ids = itertools.count(1)


class IllustrationView(QGraphicsView):
    """
    Base class for every illustration.

    Subclasses set NAME/TITLE/SCENE_RECT and implement build_scene() and
    spec_tree(). MARGIN_PX overrides the configured visibility margin for
    one illustration when not None.
    """

    NAME = ""
    TITLE = ""
    SCENE_RECT = QRectF(0, 0, 400, 300)
    MARGIN_PX: Optional[float] = None

    def __init__(self, manager: AnimationManager,
                 settings: Optional[SettingsManager] = None,
                 event_system: Optional[EventSystem] = None,
                 margin_px: Optional[float] = None,
                 threshold: Optional[float] = None,
                 parent: Optional[QWidget] = None):
        super().__init__(parent)
        self._manager = manager
        self._settings = settings
        self._events = event_system
        self._torn_down = False

        self.setRenderHint(QPainter.RenderHint.Antialiasing, True)
        self.setFrameShape(QFrame.Shape.NoFrame)
        self.setHorizontalScrollBarPolicy(Qt.ScrollBarPolicy.ScrollBarAlwaysOff)
        self.setVerticalScrollBarPolicy(Qt.ScrollBarPolicy.ScrollBarAlwaysOff)

        self.easing: EasingSpec = self._configured_easing()

        self._graphics = QGraphicsScene(self)
        self._graphics.setSceneRect(self.SCENE_RECT)
        self.setScene(self._graphics)

        items = self.build_scene(self._graphics)
        self.binding = QtRenderBinding(items)

        scene_id = f"{self.NAME or type(self).__name__}-{next(_instance_ids)}"
        self.choreography = Scene(scene_id, self.spec_tree(), self.binding.element_ids())
        self._manager.register(self.choreography, self.binding)

        margin, thresh = self._visibility_config(margin_px, threshold)
        self.probe = QtVisibilityProbe(
            self,
            lambda visible: self._manager.observe(scene_id, visible),
            margin_px=margin,
            threshold=thresh,
            parent=self,
        )

        if self._events is not None:
            self._events.publish(EventType.SCENE_MOUNTED, data={"scene_id": scene_id}, source=self)
        logger.debug("%s Mounted %s (%d items, margin=%.0fpx)", TAG_ANIM, scene_id, len(items), margin)

    @property
    def scene_id(self) -> str:
        return self.choreography.scene_id

    def build_scene(self, scene: QGraphicsScene) -> Dict[str, QGraphicsItem]:
        """Add items to ``scene`` and return them keyed by element id."""
        raise NotImplementedError

    def spec_tree(self) -> SpecNode:
        """Return the root spec node animating the built items."""
        raise NotImplementedError

    def _configured_easing(self) -> EasingSpec:
        name = 'productive'
        if self._settings is not None:
            name = str(self._settings.get('animation.default_easing', name))
        try:
            resolve_easing(name)
        except ValueError:
            logger.warning("Unknown default easing %r; using productive", name)
            name = 'productive'
        return name

    def _visibility_config(self, margin_px, threshold):
        if margin_px is None:
            margin_px = self.MARGIN_PX
        if margin_px is None:
            margin_px = VISIBILITY_DEFAULT_MARGIN_PX
            if self._settings is not None:
                margin_px = self._settings.get_float('visibility.margin_px', margin_px)
        if threshold is None:
            threshold = VISIBILITY_DEFAULT_THRESHOLD
            if self._settings is not None:
                threshold = self._settings.get_float('visibility.threshold', threshold)
        return float(margin_px), float(threshold)

    def sizeHint(self) -> QSize:  # noqa: N802 - Qt API
        return self.SCENE_RECT.size().toSize()

    def resizeEvent(self, event):  # noqa: N802 - Qt API
        super().resizeEvent(event)
        self.fitInView(self.SCENE_RECT, Qt.AspectRatioMode.KeepAspectRatio)

    def teardown(self) -> None:
        """Detach the probe and unregister from the manager (idempotent)."""
        if self._torn_down:
            return
        self._torn_down = True
        self.probe.detach()
        self._manager.unregister(self.scene_id)
        self.choreography.teardown()
        if self._events is not None:
            self._events.publish(EventType.SCENE_UNMOUNTED, data={"scene_id": self.scene_id}, source=self)
        logger.debug("%s Unmounted %s", TAG_ANIM, self.scene_id)

    def closeEvent(self, event):  # noqa: N802 - Qt API
        self.teardown()
        super().closeEvent(event)
