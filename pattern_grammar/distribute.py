"""Even spacing for siblings anchored to the same parent edge."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

import numpy as np

from .config import LayoutConfig, get_layout_config
from .layout import primary_side
from .location import fixed_sides, single_fixed_side
from .logging_utils import apply_debug_logging
from .model import HORIZONTAL_SIDES, INNER, OffsetRange, Rect

logger = logging.getLogger(__name__)

GroupKey = Tuple[str, str]
ChildKey = Tuple[str, str]


def anchor_side(location: Optional[Mapping[str, OffsetRange]], mode: str) -> Optional[str]:
    """Edge a child is grouped by, or ``None`` when it has no free axis to spread along."""
    if mode == INNER:
        return single_fixed_side(fixed_sides(location))
    return primary_side(location)


def group_children(children: Sequence[Any]) -> Dict[GroupKey, List[Any]]:
    """Group children by ``(mode, anchor side)``, keeping their order.

    Children are objects with ``name``, ``mode``, ``location`` and ``bounds``
    attributes.
    """

    groups: Dict[GroupKey, List[Any]] = {}
    for child in children:
        side = anchor_side(child.location, child.mode)
        if side is None:
            continue
        groups.setdefault((child.mode, side), []).append(child)
    return groups


def spread(sizes: Sequence[float], start: float, span: float, min_spacing: float) -> Tuple[float, List[float]]:
    """Spacing and start coordinates for boxes of ``sizes`` laid out along ``span``."""

    lengths = np.asarray(sizes, dtype=float)
    count = len(lengths)
    if count == 0:
        return 0.0, []
    spacing = max(min_spacing, (span - float(lengths.sum())) / (count + 1))
    before = np.concatenate(([0.0], np.cumsum(lengths)[:-1]))
    offsets = start + spacing * np.arange(1, count + 1) + before
    return spacing, [float(value) for value in offsets]


def distribute(
    children: Sequence[Any],
    parent: Rect,
    config: Optional[LayoutConfig] = None,
) -> Dict[ChildKey, Rect]:
    """New bounds for every child keyed by ``(mode, name)``; ungrouped children keep their bounds."""

    config = config or get_layout_config()
    result: Dict[ChildKey, Rect] = {(child.mode, child.name): child.bounds for child in children}

    for (mode, side), members in group_children(children).items():
        along_y = side in HORIZONTAL_SIDES
        if along_y:
            sizes = [child.bounds.height for child in members]
            start, span = parent.y, parent.height
        else:
            sizes = [child.bounds.width for child in members]
            start, span = parent.x, parent.width
        spacing, positions = spread(sizes, start, span, config.min_spacing)
        logger.debug('distribute %s/%s: %d child(ren), spacing=%.3f', mode, side, len(members), spacing)
        for child, position in zip(members, positions):
            bounds = child.bounds
            result[(child.mode, child.name)] = bounds.moved_to(bounds.x, position) if along_y else bounds.moved_to(position, bounds.y)
    return result


apply_debug_logging(globals(), logger=logger)


__all__ = [
    'anchor_side',
    'group_children',
    'spread',
    'distribute',
]
