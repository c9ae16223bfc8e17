"""Edits to a pattern dictionary.

Every operation leaves its input untouched and returns a new dictionary, so
a rejected edit (an exception) never leaves a half-applied change behind.
Callers keep the returned dictionary as the current state.
"""

from __future__ import annotations

import logging
import re
from typing import Any, List, Mapping, Optional, Tuple

from .errors import (
    ComponentNameCollision,
    DuplicatePatternName,
    GrammarError,
    InvalidPatternName,
    UnknownComponent,
    UnknownPattern,
)
from .inheritance import check_extends_edge
from .location import with_side
from .model import PLACEMENTS, ComponentRef, LocationSpec, Pattern, PatternDict, PatternId, copy_patterns

logger = logging.getLogger(__name__)

_GENERATED_ID_RE = re.compile(r'^pattern_(\d+)$')


def generate_pattern_id(patterns: Mapping[PatternId, Any]) -> PatternId:
    """``pattern_<N>`` with ``N`` one past the highest generated id in use."""
    numbers = [int(m.group(1)) for m in map(_GENERATED_ID_RE.match, patterns) if m]
    return f'pattern_{max(numbers, default=0) + 1}'


def _check_name(name: Any) -> PatternId:
    if not isinstance(name, str) or not name.strip():
        raise InvalidPatternName(str(name), 'name must not be empty')
    return name.strip()


def _require(patterns: Mapping[PatternId, Pattern], pattern_id: PatternId) -> Pattern:
    try:
        return patterns[pattern_id]
    except KeyError:
        raise UnknownPattern(pattern_id) from None


def _check_placement(placement: str) -> None:
    if placement not in PLACEMENTS:
        raise ValueError(f'unknown placement {placement!r}')


def _rejected(exc: GrammarError) -> GrammarError:
    logger.info('Edit rejected: %s', exc)
    return exc


def create_pattern(
    patterns: Mapping[PatternId, Pattern],
    pattern_id: Optional[PatternId] = None,
    *,
    kind: Optional[str] = None,
) -> Tuple[PatternDict, PatternId]:
    """Add an empty pattern; the id is generated when not given."""

    new_id = generate_pattern_id(patterns) if pattern_id is None else _check_name(pattern_id)
    if new_id in patterns:
        raise _rejected(DuplicatePatternName(new_id))
    updated = copy_patterns(patterns)
    updated[new_id] = Pattern(kind=kind)
    return updated, new_id


def rename_pattern(patterns: Mapping[PatternId, Pattern], old_id: PatternId, new_id: PatternId) -> PatternDict:
    """Rename a pattern and every reference to it.

    Component refs, extends entries and array item references that named
    ``old_id`` are rewritten in the same step.
    """

    _require(patterns, old_id)
    try:
        new_id = _check_name(new_id)
    except InvalidPatternName as exc:
        _rejected(exc)
        raise
    if new_id == old_id:
        return copy_patterns(patterns)
    if new_id in patterns:
        raise _rejected(DuplicatePatternName(new_id))

    updated: PatternDict = {}
    for pid, pattern in copy_patterns(patterns).items():
        for container in (pattern.inner, pattern.outer):
            for ref in container.values():
                if ref.pattern == old_id:
                    ref.pattern = new_id
        pattern.extends = [new_id if target == old_id else target for target in pattern.extends]
        if pattern.item_pattern == old_id:
            pattern.item_pattern = new_id
        updated[new_id if pid == old_id else pid] = pattern
    logger.info('Renamed pattern %r to %r', old_id, new_id)
    return updated


def remove_pattern(patterns: Mapping[PatternId, Pattern], pattern_id: PatternId) -> PatternDict:
    """Remove one pattern; references to it are left dangling."""
    _require(patterns, pattern_id)
    updated = copy_patterns(patterns)
    del updated[pattern_id]
    return updated


def update_pattern(patterns: Mapping[PatternId, Pattern], pattern_id: PatternId, **fields: Any) -> PatternDict:
    """Set ``kind``, ``size`` or free-form properties of one pattern.

    A property set to ``None`` is removed.
    """

    _require(patterns, pattern_id)
    updated = copy_patterns(patterns)
    pattern = updated[pattern_id]
    for key, value in fields.items():
        if key == 'kind':
            pattern.kind = value
        elif key == 'size':
            pattern.size = value
        elif key in ('inner', 'outer', 'extends', 'item_pattern'):
            raise ValueError(f'{key!r} has its own edit operation')
        elif value is None:
            pattern.properties.pop(key, None)
        else:
            pattern.properties[key] = value
    return updated


def set_item_pattern(patterns: Mapping[PatternId, Pattern], pattern_id: PatternId, item_pattern: Optional[PatternId]) -> PatternDict:
    _require(patterns, pattern_id)
    updated = copy_patterns(patterns)
    updated[pattern_id].item_pattern = item_pattern
    return updated


def add_component(
    patterns: Mapping[PatternId, Pattern],
    owner_id: PatternId,
    placement: str,
    name: str,
    pattern_id: Optional[PatternId] = None,
    location: Optional[LocationSpec] = None,
) -> PatternDict:
    """Place a pattern inside (``inner``) or beside (``outer``) ``owner_id``.

    The referenced pattern defaults to ``name`` and does not have to exist yet.
    """

    _check_placement(placement)
    owner = _require(patterns, owner_id)
    if not name or not name.strip():
        raise ValueError('component name must not be empty')
    if name in owner.components(placement):
        raise _rejected(ComponentNameCollision(owner_id, placement, name))
    updated = copy_patterns(patterns)
    updated[owner_id].components(placement)[name] = ComponentRef(pattern_id or name, dict(location or {}))
    return updated


def remove_component(patterns: Mapping[PatternId, Pattern], owner_id: PatternId, placement: str, name: str) -> PatternDict:
    """Drop a component; the pattern it referenced stays in the dictionary."""

    _check_placement(placement)
    owner = _require(patterns, owner_id)
    if name not in owner.components(placement):
        raise UnknownComponent(owner_id, placement, name)
    updated = copy_patterns(patterns)
    del updated[owner_id].components(placement)[name]
    return updated


def set_location_side(
    patterns: Mapping[PatternId, Pattern],
    owner_id: PatternId,
    placement: str,
    name: str,
    side: str,
    token: Optional[str],
) -> PatternDict:
    """Set one side of a component's location from a token; an empty token clears it."""

    _check_placement(placement)
    owner = _require(patterns, owner_id)
    ref = owner.components(placement).get(name)
    if ref is None:
        raise UnknownComponent(owner_id, placement, name)
    location = with_side(ref.location, side, token)
    updated = copy_patterns(patterns)
    updated[owner_id].components(placement)[name].location = location
    return updated


def add_extends(patterns: Mapping[PatternId, Pattern], pattern_id: PatternId, target: PatternId) -> PatternDict:
    _require(patterns, pattern_id)
    try:
        check_extends_edge(patterns, pattern_id, target)
    except GrammarError as exc:
        _rejected(exc)
        raise
    updated = copy_patterns(patterns)
    updated[pattern_id].extends.append(target)
    return updated


def remove_extends(patterns: Mapping[PatternId, Pattern], pattern_id: PatternId, target: PatternId) -> PatternDict:
    pattern = _require(patterns, pattern_id)
    if target not in pattern.extends:
        return copy_patterns(patterns)
    updated = copy_patterns(patterns)
    updated[pattern_id].extends.remove(target)
    return updated


def resolve_component(patterns: Mapping[PatternId, Pattern], ref: ComponentRef) -> Optional[Pattern]:
    """The pattern a component points at, ``None`` when it is dangling."""
    pattern = patterns.get(ref.pattern)
    if pattern is None:
        logger.debug('Component refers to missing pattern %r', ref.pattern)
    return pattern


def referrers(patterns: Mapping[PatternId, Pattern], pattern_id: PatternId) -> List[PatternId]:
    """Ids of patterns that reference ``pattern_id`` in any way."""
    return [pid for pid, pattern in patterns.items() if pattern_id in pattern.references()]


__all__ = [
    'generate_pattern_id',
    'create_pattern',
    'rename_pattern',
    'remove_pattern',
    'update_pattern',
    'set_item_pattern',
    'add_component',
    'remove_component',
    'set_location_side',
    'add_extends',
    'remove_extends',
    'resolve_component',
    'referrers',
]
