"""Core data structures for pattern grammars."""

from __future__ import annotations

import math
from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Mapping, Optional, Union

PatternId = str

SIDES = ('top', 'right', 'bottom', 'left')
HORIZONTAL_SIDES = ('left', 'right')

KINDS = ('external', 'internal', 'area', 'cell', 'array')

INNER = 'inner'
OUTER = 'outer'
PLACEMENTS = (INNER, OUTER)

UNBOUNDED = math.inf


@dataclass(frozen=True)
class OffsetRange:
    """Distance from a parent edge in grid cells; ``max`` may be unbounded."""

    min: int = 0
    max: Union[int, float] = 0

    @property
    def is_open(self) -> bool:
        return self.max == UNBOUNDED

    @property
    def is_exact(self) -> bool:
        return self.min == self.max

    def __str__(self) -> str:
        if self.is_open:
            return f'{self.min}+'
        if self.is_exact:
            return str(self.min)
        return f'{self.min}..{int(self.max)}'


LocationSpec = Dict[str, OffsetRange]


@dataclass
class ComponentRef:
    pattern: PatternId
    location: LocationSpec = field(default_factory=dict)


@dataclass
class Pattern:
    kind: Optional[str] = None
    size: Optional[str] = None
    properties: Dict[str, Any] = field(default_factory=dict)
    inner: Dict[str, ComponentRef] = field(default_factory=dict)
    outer: Dict[str, ComponentRef] = field(default_factory=dict)
    extends: List[PatternId] = field(default_factory=list)
    item_pattern: Optional[PatternId] = None

    def components(self, placement: str) -> Dict[str, ComponentRef]:
        if placement == INNER:
            return self.inner
        if placement == OUTER:
            return self.outer
        raise ValueError(f'unknown placement {placement!r}')

    def references(self) -> List[PatternId]:
        """Every pattern id this pattern points at, in declaration order."""
        refs = [ref.pattern for ref in self.inner.values()]
        refs.extend(ref.pattern for ref in self.outer.values())
        refs.extend(self.extends)
        if self.item_pattern is not None:
            refs.append(self.item_pattern)
        return refs


PatternDict = Dict[PatternId, Pattern]


@dataclass(frozen=True)
class Size:
    width: float
    height: float


@dataclass(frozen=True)
class Rect:
    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def size(self) -> Size:
        return Size(self.width, self.height)

    def moved_to(self, x: float, y: float) -> 'Rect':
        return replace(self, x=x, y=y)

    def as_dict(self) -> Dict[str, float]:
        return {'x': self.x, 'y': self.y, 'width': self.width, 'height': self.height}


def copy_pattern(pattern: Pattern) -> Pattern:
    """Return a copy that shares no mutable containers with ``pattern``."""
    return Pattern(
        kind=pattern.kind,
        size=pattern.size,
        properties=dict(pattern.properties),
        inner={name: ComponentRef(ref.pattern, dict(ref.location)) for name, ref in pattern.inner.items()},
        outer={name: ComponentRef(ref.pattern, dict(ref.location)) for name, ref in pattern.outer.items()},
        extends=list(pattern.extends),
        item_pattern=pattern.item_pattern,
    )


def copy_patterns(patterns: Mapping[PatternId, Pattern]) -> PatternDict:
    return {pid: copy_pattern(pattern) for pid, pattern in patterns.items()}


__all__ = [
    'PatternId',
    'SIDES',
    'HORIZONTAL_SIDES',
    'KINDS',
    'INNER',
    'OUTER',
    'PLACEMENTS',
    'UNBOUNDED',
    'OffsetRange',
    'LocationSpec',
    'ComponentRef',
    'Pattern',
    'PatternDict',
    'Size',
    'Rect',
    'copy_pattern',
    'copy_patterns',
]
