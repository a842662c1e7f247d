"""Stagger helper for cascading reveals of repeated elements."""
from typing import List

from core.logging.logger import get_logger

logger = get_logger(__name__)


def stagger_offsets(count: int, increment: float, base: float = 0.0) -> List[float]:
    """
    Return ``count`` delay offsets ``base, base + d, base + 2d, ...`` in list order.

    A negative increment is clamped to zero so siblings never start
    before their predecessors.
    """
    if count <= 0:
        return []
    if increment < 0:
        logger.warning("[SCHEDULE] Negative stagger increment %.3fms clamped to 0", increment)
        increment = 0.0
    return [base + index * increment for index in range(count)]


def grid_offsets(rows: int, cols: int, row_increment: float,
                 col_increment: float, base: float = 0.0) -> List[List[float]]:
    """
    Two-axis stagger for cell grids (pixel patterns, matrices).

    Cell (r, c) starts at ``base + r * row_increment + c * col_increment``.
    """
    row_starts = stagger_offsets(rows, row_increment, base)
    return [stagger_offsets(cols, col_increment, start) for start in row_starts]
