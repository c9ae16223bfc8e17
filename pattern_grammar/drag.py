"""Interactive repositioning of a child box against its siblings.

Each pointer gesture owns one :class:`DragGesture`; nothing is shared
between gestures apart from the bounds they commit.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence

from .geometry import check_collision, clamp_into, push_out_of
from .location import FixedSides
from .logging_utils import apply_debug_logging
from .model import INNER, OUTER, Rect, Size

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DragConstraints:
    mode: str
    parent: Rect
    surface: Size
    fixed: FixedSides
    initial: Rect
    attachment: Optional[str] = None


def _collides(box: Rect, others: Sequence[Rect]) -> bool:
    return any(check_collision(box, other) for other in others)


def _is_legal(box: Rect, constraints: DragConstraints, siblings: Sequence[Rect]) -> bool:
    if constraints.mode == OUTER and check_collision(box, constraints.parent):
        return False
    return not _collides(box, siblings)


def clamp_proposal(x: float, y: float, current: Rect, constraints: DragConstraints) -> Rect:
    """Apply the pinned-axis freeze and the legal-region clamp to a proposed position."""

    fixed = constraints.fixed
    if fixed.x_locked:
        x = constraints.initial.x
    if fixed.y_locked:
        y = constraints.initial.y
    box = current.moved_to(x, y)

    if constraints.mode == INNER:
        return clamp_into(box, constraints.parent)
    if constraints.mode == OUTER:
        return push_out_of(box, constraints.parent, constraints.surface, prefer_side=constraints.attachment)
    raise ValueError(f'unknown placement mode {constraints.mode!r}')


def resolve_drag(
    x: float,
    y: float,
    current: Rect,
    constraints: DragConstraints,
    siblings: Sequence[Rect],
) -> Rect:
    """Nearest legal position for one pointer-move.

    A move that collides with a sibling falls back to the x-only move, then
    the y-only move; if both collide the box stays at ``current``.  Every
    candidate passes through :func:`clamp_proposal`, so outer children never
    end up over the parent.
    """

    proposal = clamp_proposal(x, y, current, constraints)
    candidates = (
        proposal,
        clamp_proposal(proposal.x, current.y, current, constraints),
        clamp_proposal(current.x, proposal.y, current, constraints),
    )
    for candidate in candidates:
        if _is_legal(candidate, constraints, siblings):
            return candidate
    return current


class DragGesture:
    """State of one begin -> move* -> end pointer gesture."""

    IDLE = 'idle'
    DRAGGING = 'dragging'

    def __init__(self, bounds: Rect, constraints: DragConstraints, siblings: Sequence[Rect] = ()) -> None:
        self._bounds = bounds
        self._constraints = constraints
        self._siblings: List[Rect] = list(siblings)
        self._state = self.IDLE

    @property
    def state(self) -> str:
        return self._state

    @property
    def bounds(self) -> Rect:
        return self._bounds

    @property
    def constraints(self) -> DragConstraints:
        return self._constraints

    def begin(self) -> None:
        if self._state == self.DRAGGING:
            logger.warning('Drag gesture already in progress, ignoring begin')
            return
        self._state = self.DRAGGING

    def move(self, x: float, y: float) -> Rect:
        if self._state != self.DRAGGING:
            logger.warning('Pointer move outside a drag gesture, position unchanged')
            return self._bounds
        self._bounds = resolve_drag(x, y, self._bounds, self._constraints, self._siblings)
        return self._bounds

    def end(self) -> Rect:
        self._state = self.IDLE
        return self._bounds


apply_debug_logging(globals(), logger=logger)


__all__ = [
    'DragConstraints',
    'clamp_proposal',
    'resolve_drag',
    'DragGesture',
]
