"""Timing constants for illustration choreography.

All timing values are in milliseconds unless otherwise noted.
These constants replace the magic numbers lesson diagrams used to inline
next to their geometry.
"""

# =============================================================================
# Animation Clock
# =============================================================================

ANIMATION_DEFAULT_FPS = 60
"""Default tick rate of the AnimationManager timer."""

ANIMATION_MIN_FPS = 10
"""Lowest accepted tick rate."""

ANIMATION_MAX_FPS = 240
"""Highest accepted tick rate."""

# =============================================================================
# Reveal Choreography
# =============================================================================

REVEAL_DURATION_MS = 500
"""Standard entrance duration for a row, card or box."""

REVEAL_SHORT_DURATION_MS = 300
"""Entrance duration for small repeated marks (cells, neurons)."""

STROKE_DRAW_DURATION_MS = 600
"""Duration of a connector's stroke-draw animation."""

STAGGER_DEFAULT_MS = 100
"""Default delay between sibling reveals."""

STAGGER_TIGHT_MS = 50
"""Stagger used for dense repeated elements."""

SLIDE_IN_DISTANCE = 20.0
"""Distance (scene units) elements travel during a slide-in."""

# =============================================================================
# Visibility
# =============================================================================

VISIBILITY_DEFAULT_MARGIN_PX = -100.0
"""Root margin applied to the viewport; negative waits until the diagram is well inside the view."""

VISIBILITY_DEFAULT_THRESHOLD = 0.0
"""Fraction of the diagram that must intersect the viewport (0 = any overlap)."""
