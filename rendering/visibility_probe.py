"""
Visibility probe for illustration widgets.

Reports whether a widget intersects its enclosing viewport, after the
viewport has been grown (positive margin) or shrunk (negative margin) on
every side. The probe only reports; the fire-once decision belongs to the
scene's VisibilityTrigger.
"""
from typing import Callable, List, Optional

from PySide6.QtCore import QEvent, QObject, QPoint, QRect, QRectF, QTimer
from PySide6.QtWidgets import QAbstractScrollArea, QScrollBar, QWidget

from core.constants.timing import VISIBILITY_DEFAULT_MARGIN_PX, VISIBILITY_DEFAULT_THRESHOLD
from core.logging.logger import get_logger, is_verbose_logging
from core.logging.tags import TAG_TRIGGER

logger = get_logger(__name__)

_WATCHED_EVENTS = (
    QEvent.Type.Show,
    QEvent.Type.Hide,
    QEvent.Type.Move,
    QEvent.Type.Resize,
)


def intersection_ratio(target: QRectF, viewport: QRectF, margin: float = 0.0) -> float:
    """
    Fraction of ``target`` inside ``viewport`` adjusted by ``margin``.

    A zero-area target counts as fully visible when it touches the
    adjusted viewport.
    """
    root = QRectF(viewport).adjusted(-margin, -margin, margin, margin)
    if root.width() <= 0 or root.height() <= 0:
        return 0.0
    area = target.width() * target.height()
    if area <= 0:
        c = target.center()
        inside = root.left() <= c.x() <= root.right() and root.top() <= c.y() <= root.bottom()
        return 1.0 if inside else 0.0
    overlap = target.intersected(root)
    if overlap.isEmpty():
        return 0.0
    return min(1.0, (overlap.width() * overlap.height()) / area)


def passes_threshold(ratio: float, threshold: float) -> bool:
    """Any overlap counts at threshold 0; otherwise ratio must reach it."""
    if threshold <= 0.0:
        return ratio > 0.0
    return ratio >= threshold


class QtVisibilityProbe(QObject):
    """
    Watches a widget's geometry and reports visibility changes.

    The callback receives True/False whenever the computed visibility differs
    from the last report (the first check always reports).
    """

    def __init__(self, widget: QWidget, on_change: Callable[[bool], None],
                 margin_px: float = VISIBILITY_DEFAULT_MARGIN_PX,
                 threshold: float = VISIBILITY_DEFAULT_THRESHOLD,
                 parent: Optional[QObject] = None):
        super().__init__(parent)
        self._widget = widget
        self._on_change: Optional[Callable[[bool], None]] = on_change
        self.margin_px = float(margin_px)
        self.threshold = max(0.0, min(1.0, float(threshold)))
        self._last: Optional[bool] = None
        self._check_pending = False
        self._watched: List[QWidget] = []
        self._scrollbars: List[QScrollBar] = []
        self._attach()

    @property
    def attached(self) -> bool:
        return self._on_change is not None

    @property
    def last_reported(self) -> Optional[bool]:
        return self._last

    def _attach(self) -> None:
        w: Optional[QWidget] = self._widget
        while w is not None:
            w.installEventFilter(self)
            self._watched.append(w)
            if isinstance(w, QAbstractScrollArea):
                for bar in (w.verticalScrollBar(), w.horizontalScrollBar()):
                    bar.valueChanged.connect(self._schedule_check)
                    self._scrollbars.append(bar)
            w = w.parentWidget()

    def detach(self) -> None:
        """Stop watching; no callback is made afterwards."""
        if self._on_change is None:
            return
        self._on_change = None
        for w in self._watched:
            try:
                w.removeEventFilter(self)
            except RuntimeError:
                pass
        for bar in self._scrollbars:
            try:
                bar.valueChanged.disconnect(self._schedule_check)
            except (RuntimeError, TypeError):
                pass
        self._watched.clear()
        self._scrollbars.clear()

    def eventFilter(self, obj, event):  # noqa: N802 - Qt API
        if event.type() in _WATCHED_EVENTS:
            self._schedule_check()
        return False

    def _schedule_check(self, *_args) -> None:
        # Coalesce bursts of move/resize/scroll events into one check
        if self._check_pending or self._on_change is None:
            return
        self._check_pending = True
        QTimer.singleShot(0, self._run_scheduled_check)

    def _run_scheduled_check(self) -> None:
        self._check_pending = False
        try:
            self.check()
        except Exception:
            logger.exception("%s Visibility check failed", TAG_TRIGGER)

    def _viewport(self) -> QWidget:
        w = self._widget.parentWidget()
        while w is not None:
            if isinstance(w, QAbstractScrollArea):
                return w.viewport()
            w = w.parentWidget()
        return self._widget.window()

    def current_ratio(self) -> float:
        """Intersection ratio of the widget against its viewport right now."""
        if not self._widget.isVisible():
            return 0.0
        viewport = self._viewport()
        if viewport is self._widget:
            target = QRect(QPoint(0, 0), self._widget.size())
        else:
            top_left = self._widget.mapTo(viewport, QPoint(0, 0))
            target = QRect(top_left, self._widget.size())
        return intersection_ratio(QRectF(target), QRectF(viewport.rect()), self.margin_px)

    def check(self) -> Optional[bool]:
        """Compute visibility now and report it if it changed."""
        if self._on_change is None:
            return None
        try:
            ratio = self.current_ratio()
        except RuntimeError:
            # Underlying C++ widget already deleted
            logger.debug("%s Probe widget gone; detaching", TAG_TRIGGER)
            self.detach()
            return None
        visible = passes_threshold(ratio, self.threshold)
        if is_verbose_logging():
            logger.debug("%s Probe ratio=%.3f visible=%s", TAG_TRIGGER, ratio, visible)
        if visible != self._last:
            self._last = visible
            self._on_change(visible)
        return visible
