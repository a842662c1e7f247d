"""Qt rendering and visibility modules."""

from .render_binding import QtRenderBinding, draw_dash_pattern, stroke_length
from .visibility_probe import QtVisibilityProbe, intersection_ratio, passes_threshold

__all__ = [
    'QtRenderBinding',
    'QtVisibilityProbe',
    'draw_dash_pattern',
    'intersection_ratio',
    'passes_threshold',
    'stroke_length',
]
