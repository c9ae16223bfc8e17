"""Placed child boxes of one pattern, ready for a host to draw and drag."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Dict, List, Mapping, Optional, Tuple

from .config import LayoutConfig, get_layout_config
from .distribute import distribute
from .drag import DragConstraints, DragGesture
from .errors import UnknownComponent, UnknownPattern
from .geometry import inner_area_bounds
from .grid import pattern_cell_size
from .layout import primary_side, resolve
from .location import FixedSides, fixed_sides, is_draggable
from .model import INNER, OUTER, LocationSpec, Pattern, PatternId, Rect, Size

logger = logging.getLogger(__name__)

ChildKey = Tuple[str, str]


@dataclass(frozen=True)
class PlacedChild:
    name: str
    mode: str
    pattern_id: PatternId
    location: LocationSpec
    bounds: Rect
    initial: Rect
    fixed: FixedSides
    draggable: bool
    attachment: Optional[str] = None

    @property
    def key(self) -> ChildKey:
        return (self.mode, self.name)


@dataclass(frozen=True)
class Scene:
    pattern_id: PatternId
    surface: Size
    parent: Rect
    cell: float
    children: List[PlacedChild] = field(default_factory=list)

    def child(self, mode: str, name: str) -> PlacedChild:
        for child in self.children:
            if child.mode == mode and child.name == name:
                return child
        raise UnknownComponent(self.pattern_id, mode, name)

    def siblings(self, mode: str, name: str) -> List[PlacedChild]:
        return [child for child in self.children if child.key != (mode, name)]


def _place(
    pattern: Pattern,
    patterns: Mapping[PatternId, Pattern],
    parent: Rect,
    surface: Size,
    cell: float,
    config: LayoutConfig,
) -> List[PlacedChild]:
    placed: List[PlacedChild] = []
    for mode, container, size in (
        (INNER, pattern.inner, config.inner_child_size),
        (OUTER, pattern.outer, config.outer_child_size),
    ):
        for name, ref in container.items():
            if ref.pattern not in patterns:
                logger.warning('Skipping %s component %r: pattern %r not found', mode, name, ref.pattern)
                continue
            box = resolve(
                ref.location,
                parent,
                size,
                mode,
                cell=cell,
                surface=surface if mode == OUTER else None,
                config=config,
            )
            fixed = fixed_sides(ref.location)
            placed.append(
                PlacedChild(
                    name=name,
                    mode=mode,
                    pattern_id=ref.pattern,
                    location=dict(ref.location),
                    bounds=box,
                    initial=box,
                    fixed=fixed,
                    draggable=is_draggable(fixed),
                    attachment=primary_side(ref.location) if mode == OUTER else None,
                )
            )
    return placed


def build_scene(
    patterns: Mapping[PatternId, Pattern],
    pattern_id: PatternId,
    surface: Size,
    *,
    positions: Optional[Mapping[ChildKey, Tuple[float, float]]] = None,
    auto_distribute: bool = False,
    config: Optional[LayoutConfig] = None,
) -> Scene:
    """Resolve every inner and outer child of ``pattern_id`` on ``surface``.

    The parent occupies the centered inner area of the surface.  Children
    whose pattern is missing are skipped.  ``positions`` restores boxes the
    user has already dragged, keyed by ``(mode, name)``.
    """

    config = config or get_layout_config()
    if pattern_id not in patterns:
        raise UnknownPattern(pattern_id)
    pattern = patterns[pattern_id]

    parent = inner_area_bounds(surface, config.inner_area_ratio)
    cell = pattern_cell_size(pattern, parent.size, config)
    children = _place(pattern, patterns, parent, surface, cell, config)

    if auto_distribute:
        spread_boxes = distribute(children, parent, config)
        children = [replace(child, bounds=spread_boxes[child.key], initial=spread_boxes[child.key]) for child in children]

    if positions:
        children = [
            replace(child, bounds=child.bounds.moved_to(*positions[child.key])) if child.key in positions else child
            for child in children
        ]

    logger.debug('Scene for %r: %d child(ren), cell=%.3f', pattern_id, len(children), cell)
    return Scene(pattern_id=pattern_id, surface=surface, parent=parent, cell=cell, children=children)


def start_drag(scene: Scene, mode: str, name: str) -> DragGesture:
    """A fresh gesture for one child, colliding against all its siblings."""

    child = scene.child(mode, name)
    constraints = DragConstraints(
        mode=child.mode,
        parent=scene.parent,
        surface=scene.surface,
        fixed=child.fixed,
        initial=child.initial,
        attachment=child.attachment,
    )
    siblings = [other.bounds for other in scene.siblings(mode, name)]
    return DragGesture(child.bounds, constraints, siblings)


def commit(scene: Scene, mode: str, name: str, bounds: Rect) -> Scene:
    """A new scene with the child's box replaced by ``bounds``."""
    scene.child(mode, name)
    children = [replace(child, bounds=bounds) if child.key == (mode, name) else child for child in scene.children]
    return replace(scene, children=children)


def scene_positions(scene: Scene) -> Dict[ChildKey, Tuple[float, float]]:
    return {child.key: (child.bounds.x, child.bounds.y) for child in scene.children}


__all__ = [
    'ChildKey',
    'PlacedChild',
    'Scene',
    'build_scene',
    'start_drag',
    'commit',
    'scene_positions',
]
