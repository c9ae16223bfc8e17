"""Resolve a child's pixel box from its location and the parent's bounds.

Inner children are laid out inside the parent.  On each axis:

* both sides pinned (offset ``0``): the child stretches across the parent,
* one side pinned: the child sits flush against that side, size unchanged,
* both sides present and non-zero: the child is centered between the two
  offsets, falling back to the left/top offset when it does not fit,
* one non-zero side: the child sits that many cells from the side,
* no side: the child is centered.

Outer children sit beside the parent on their primary side (the first of
``left``, ``right``, ``top``, ``bottom`` present in the location) and follow
the inner rules on the perpendicular axis, measured against the parent's span.
"""

from __future__ import annotations

import logging
from typing import Mapping, Optional, Tuple

from .config import LayoutConfig, get_layout_config
from .geometry import clamp_into, constrain_to_surface
from .logging_utils import apply_debug_logging
from .model import INNER, OUTER, OffsetRange, Rect, Size

logger = logging.getLogger(__name__)

PRIMARY_SIDE_ORDER = ('left', 'right', 'top', 'bottom')


def primary_side(location: Optional[Mapping[str, OffsetRange]]) -> Optional[str]:
    """Side of the parent an outer child is attached to."""
    if not location:
        return None
    for side in PRIMARY_SIDE_ORDER:
        if side in location:
            return side
    return None


def _pixels(offset: OffsetRange, cell: float) -> float:
    return offset.min * cell


def resolve_axis(
    near: Optional[OffsetRange],
    far: Optional[OffsetRange],
    start: float,
    span: float,
    length: float,
    cell: float,
) -> Tuple[float, float]:
    """Position and length of a child along one axis of the parent.

    ``near`` is the left/top constraint, ``far`` the right/bottom one.
    """

    near_pinned = near is not None and near.min == 0
    far_pinned = far is not None and far.min == 0

    if near_pinned and far_pinned:
        stretched = span - _pixels(near, cell) - _pixels(far, cell)
        return start + _pixels(near, cell), max(0.0, stretched)
    if near_pinned:
        return start, length
    if far_pinned:
        return start + span - length, length

    if near is not None and far is not None:
        low = start + _pixels(near, cell)
        high = start + span - _pixels(far, cell)
        if high - low >= length:
            return low + (high - low - length) / 2, length
        return low, length
    if near is not None:
        return start + _pixels(near, cell), length
    if far is not None:
        return start + span - _pixels(far, cell) - length, length
    return start + (span - length) / 2, length


def centered(parent: Rect, child: Size) -> Rect:
    return Rect(
        parent.x + (parent.width - child.width) / 2,
        parent.y + (parent.height - child.height) / 2,
        child.width,
        child.height,
    )


def _resolve_inner(location: Mapping[str, OffsetRange], parent: Rect, child: Size, cell: float) -> Rect:
    x, width = resolve_axis(location.get('left'), location.get('right'), parent.x, parent.width, child.width, cell)
    y, height = resolve_axis(location.get('top'), location.get('bottom'), parent.y, parent.height, child.height, cell)
    return clamp_into(Rect(x, y, width, height), parent)


def _resolve_outer(
    location: Mapping[str, OffsetRange],
    parent: Rect,
    child: Size,
    cell: float,
    side: str,
) -> Rect:
    gap = _pixels(location[side], cell)
    if side in ('left', 'right'):
        y, height = resolve_axis(location.get('top'), location.get('bottom'), parent.y, parent.height, child.height, cell)
        width = child.width
        x = parent.x - width - gap if side == 'left' else parent.right + gap
    else:
        x, width = resolve_axis(location.get('left'), location.get('right'), parent.x, parent.width, child.width, cell)
        height = child.height
        y = parent.y - height - gap if side == 'top' else parent.bottom + gap
    return Rect(x, y, width, height)


def resolve(
    location: Optional[Mapping[str, OffsetRange]],
    parent: Rect,
    child: Size,
    mode: str = INNER,
    *,
    cell: Optional[float] = None,
    surface: Optional[Size] = None,
    config: Optional[LayoutConfig] = None,
) -> Rect:
    """Pixel box of a child placed ``mode`` (inner/outer) relative to ``parent``.

    ``cell`` is the pixel size of one grid cell (defaults to the configured
    grid size).  Outer boxes are kept on ``surface`` when one is given.
    """

    if mode not in (INNER, OUTER):
        raise ValueError(f'unknown placement mode {mode!r}')
    if cell is None:
        cell = (config or get_layout_config()).grid_size

    side = primary_side(location)
    if not location or side is None:
        return centered(parent, child)

    if mode == INNER:
        return _resolve_inner(location, parent, child, cell)

    box = _resolve_outer(location, parent, child, cell, side)
    if surface is not None:
        box = constrain_to_surface(box, surface)
    return box


apply_debug_logging(globals(), logger=logger)


__all__ = [
    'PRIMARY_SIDE_ORDER',
    'primary_side',
    'resolve_axis',
    'centered',
    'resolve',
]
