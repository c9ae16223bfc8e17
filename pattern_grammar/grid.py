"""Adaptive grid scaling so every declared offset of a parent fits on screen."""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Mapping, Optional

import numpy as np

from .config import LayoutConfig, get_layout_config
from .location import resolved_cells
from .logging_utils import apply_debug_logging
from .model import SIDES, LocationSpec, OffsetRange, Pattern, Size

logger = logging.getLogger(__name__)


def side_extents(locations: Iterable[Mapping[str, OffsetRange]], *, headroom: int) -> Dict[str, int]:
    """Largest resolved offset, in cells, used on each side across ``locations``."""

    rows = [
        [resolved_cells(loc[side], headroom) if side in loc else 0 for side in SIDES]
        for loc in locations
    ]
    if not rows:
        return {side: 0 for side in SIDES}
    extents = np.asarray(rows, dtype=np.int64).max(axis=0)
    return {side: int(value) for side, value in zip(SIDES, extents)}


def cell_size(
    locations: Iterable[Mapping[str, OffsetRange]],
    available: Size,
    config: Optional[LayoutConfig] = None,
) -> float:
    """Pixels per grid cell for one parent.

    Each axis gets ``(available - icon) / capacity`` where capacity is the
    larger of its two side extents; the smaller axis value is used for both so
    cells stay square, clamped to ``[min_cell, grid_size]``.
    """

    config = config or get_layout_config()
    extents = side_extents(locations, headroom=config.open_range_headroom)
    capacity = np.array(
        [
            max(extents['left'], extents['right']),
            max(extents['top'], extents['bottom']),
        ],
        dtype=float,
    )
    room = np.array([available.width, available.height], dtype=float) - config.pattern_icon_size
    room = np.maximum(room, 0.0)

    used = capacity > 0
    if not used.any():
        return float(config.max_cell)
    per_axis = room[used] / capacity[used]
    cell = float(np.clip(per_axis.min(), config.min_cell, config.max_cell))
    logger.debug("grid extents=%s capacity=%s cell=%.3f", extents, capacity.tolist(), cell)
    return cell


def pattern_locations(pattern: Pattern) -> List[LocationSpec]:
    return [ref.location for ref in pattern.inner.values()] + [ref.location for ref in pattern.outer.values()]


def pattern_cell_size(pattern: Pattern, available: Size, config: Optional[LayoutConfig] = None) -> float:
    return cell_size(pattern_locations(pattern), available, config)


apply_debug_logging(globals(), logger=logger)


__all__ = [
    'side_extents',
    'cell_size',
    'pattern_locations',
    'pattern_cell_size',
]
