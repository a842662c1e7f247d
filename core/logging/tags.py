"""Standard logging tags for consistent log filtering.

Usage:
    from core.logging.tags import TAG_ANIM
    logger.debug("%s Scene %s settled", TAG_ANIM, scene_id)
"""

TAG_PERF = "[PERF]"
"""Performance metrics (tick cost, effective FPS)."""

TAG_ANIM = "[ANIM]"
"""Scene lifecycle and animation clock."""

TAG_TRIGGER = "[TRIGGER]"
"""Visibility trigger firing and probe checks."""

TAG_SCHEDULE = "[SCHEDULE]"
"""Schedule resolution, clamping and dropped entries."""

TAG_RENDER = "[RENDER]"
"""Render binding writes onto graphics items."""
