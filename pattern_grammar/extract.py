"""Flatten a nested pattern tree into a dictionary of uniquely named patterns.

The input is already-parsed data (maps, sequences and scalars) whose top
level is either a ``patterns`` map or that map itself.  Inline
``pattern_definition`` blocks found on ``inner``/``outer`` children become
top-level patterns named ``<component>_inline``.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional, Set

from .errors import DuplicatePatternName, RecursiveDefinition
from .inheritance import validate_patterns
from .location import location_from_raw
from .model import INNER, KINDS, OUTER, ComponentRef, Pattern, PatternDict

logger = logging.getLogger(__name__)

INLINE_SUFFIX = '_inline'

RESERVED_KEYS = frozenset(
    {'pattern_definition', 'item_pattern', 'location', 'pattern', INNER, OUTER, 'extends'}
)


def inline_pattern_id(component_name: str) -> str:
    return f'{component_name}{INLINE_SUFFIX}'


def _index_key(key: Any):
    try:
        return (0, int(key), '')
    except (TypeError, ValueError):
        return (1, 0, str(key))


def normalize_extends(raw: Any) -> List[str]:
    """Ordered list of parent ids from a string, a sequence or an index-keyed map."""

    if raw is None:
        return []
    if isinstance(raw, str):
        return [raw]
    if isinstance(raw, (list, tuple)):
        return [str(item) for item in raw]
    if isinstance(raw, Mapping):
        return [str(raw[key]) for key in sorted(raw, key=_index_key)]
    logger.warning('Ignoring extends value of type %s', type(raw).__name__)
    return []


def _set_field(pattern: Pattern, key: str, value: Any) -> None:
    if key == 'kind':
        if value is not None and value not in KINDS:
            logger.warning('Unknown pattern kind %r', value)
        pattern.kind = value
    elif key == 'size':
        pattern.size = None if value is None else str(value)
    else:
        pattern.properties[key] = value


class _Extractor:
    def __init__(self) -> None:
        self.patterns: PatternDict = {}
        self._active: Set[int] = set()
        self._path: List[str] = []

    def entry(self, name: str, data: Any) -> None:
        if not isinstance(data, Mapping):
            logger.debug('Skipping non-map entry %r', name)
            return
        if id(data) in self._active:
            raise RecursiveDefinition(self._path + [name])
        if name in self.patterns:
            raise DuplicatePatternName(name)

        self._active.add(id(data))
        self._path.append(name)
        try:
            self._fill(name, data)
        finally:
            self._path.pop()
            self._active.discard(id(data))

    def _fill(self, name: str, data: Mapping[str, Any]) -> None:
        pattern = Pattern()
        self.patterns[name] = pattern

        definition = data.get('pattern_definition')
        if isinstance(definition, Mapping):
            kind = definition.get('kind')
            for key, value in definition.items():
                if key == 'item_pattern':
                    if kind == 'array':
                        pattern.item_pattern = None if value is None else str(value)
                    continue
                _set_field(pattern, key, value)

        for key, value in data.items():
            if key in (INNER, OUTER):
                self._components(name, pattern, key, value)
            elif key not in RESERVED_KEYS:
                _set_field(pattern, key, value)

        # flat data written back by the printer carries item_pattern at top level
        if pattern.kind == 'array' and pattern.item_pattern is None and data.get('item_pattern') is not None:
            pattern.item_pattern = str(data['item_pattern'])

        pattern.extends = normalize_extends(data.get('extends'))

    def _components(self, owner: str, pattern: Pattern, placement: str, children: Any) -> None:
        if children is None:
            return
        if not isinstance(children, Mapping):
            logger.warning('Pattern %r: ignoring %s components of type %s', owner, placement, type(children).__name__)
            return
        container = pattern.components(placement)
        for child_name, child in children.items():
            child_name = str(child_name)
            if child is None:
                child = {}
            if not isinstance(child, Mapping):
                logger.warning('Pattern %r: ignoring %s component %r', owner, placement, child_name)
                continue

            location = location_from_raw(child.get('location'))
            if 'pattern_definition' in child:
                target = inline_pattern_id(child_name)
                self.entry(target, child)
            elif child.get('pattern') is not None:
                target = str(child['pattern'])
            else:
                target = child_name
            container[child_name] = ComponentRef(target, location)


def unwrap_tree(tree: Mapping[str, Any]) -> Mapping[str, Any]:
    if not isinstance(tree, Mapping):
        raise TypeError(f'pattern tree must be a mapping, got {type(tree).__name__}')
    inner = tree.get('patterns')
    if isinstance(inner, Mapping):
        return inner
    return tree


def extract_patterns(tree: Mapping[str, Any]) -> PatternDict:
    """Flatten ``tree`` into ``{pattern_id: Pattern}``.

    Raises :class:`DuplicatePatternName` when two entries, inline definitions
    included, resolve to the same id; nothing is returned in that case.
    """

    extractor = _Extractor()
    for name, data in unwrap_tree(tree).items():
        extractor.entry(str(name), data)
    logger.info('Extracted %d pattern(s)', len(extractor.patterns))
    return extractor.patterns


def load_grammar(tree: Mapping[str, Any], *, clean: bool = False) -> PatternDict:
    """Extract and validate the extends graph in one step."""
    if clean:
        tree = clean_empty_components(tree) or {}
    patterns = extract_patterns(tree)
    validate_patterns(patterns)
    return patterns


def _is_empty(value: Any) -> bool:
    return value is None or value == ''


def clean_empty_components(data: Any) -> Optional[Any]:
    """Drop ``None``/empty-string values and containers left empty, recursively.

    Returns ``None`` when nothing remains.
    """

    if isinstance(data, Mapping):
        cleaned: Dict[Any, Any] = {}
        for key, value in data.items():
            if _is_empty(value):
                continue
            if isinstance(value, (Mapping, list, tuple)):
                value = clean_empty_components(value)
                if value is None:
                    continue
            cleaned[key] = value
        return cleaned or None
    if isinstance(data, (list, tuple)):
        items = []
        for value in data:
            if _is_empty(value):
                continue
            if isinstance(value, (Mapping, list, tuple)):
                value = clean_empty_components(value)
                if value is None:
                    continue
            items.append(value)
        return items or None
    return None


__all__ = [
    'INLINE_SUFFIX',
    'RESERVED_KEYS',
    'inline_pattern_id',
    'normalize_extends',
    'unwrap_tree',
    'extract_patterns',
    'load_grammar',
    'clean_empty_components',
]
