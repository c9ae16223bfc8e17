"""Render a pattern dictionary or a scene back into plain data and text."""

from typing import Any, Dict, List, Mapping

from .location import display_location, location_tokens
from .model import INNER, OUTER, ComponentRef, Pattern, PatternId
from .scene import Scene


def component_data(ref: ComponentRef) -> Dict[str, Any]:
    data: Dict[str, Any] = {'pattern': ref.pattern}
    if ref.location:
        data['location'] = location_tokens(ref.location)
    return data


def pattern_data(pattern: Pattern) -> Dict[str, Any]:
    """Flat plain-data form of one pattern; re-extracting it yields the same pattern."""

    data: Dict[str, Any] = {}
    if pattern.kind is not None:
        data['kind'] = pattern.kind
    if pattern.size is not None:
        data['size'] = pattern.size
    data.update(pattern.properties)
    if pattern.item_pattern is not None:
        data['item_pattern'] = pattern.item_pattern
    for placement, container in ((INNER, pattern.inner), (OUTER, pattern.outer)):
        if container:
            data[placement] = {name: component_data(ref) for name, ref in container.items()}
    if pattern.extends:
        data['extends'] = list(pattern.extends)
    return data


def patterns_to_data(patterns: Mapping[PatternId, Pattern]) -> Dict[str, Dict[str, Any]]:
    return {'patterns': {pid: pattern_data(pattern) for pid, pattern in patterns.items()}}


def _format_location(ref: ComponentRef) -> str:
    tokens = location_tokens(ref.location)
    if not tokens:
        return ''
    return ' [' + ' '.join(f'{side}={token}' for side, token in tokens.items()) + ']'


def format_pattern(pattern_id: PatternId, pattern: Pattern) -> str:
    header = pattern_id
    if pattern.kind is not None:
        header += f' ({pattern.kind})'
    if pattern.extends:
        header += ' extends ' + ', '.join(pattern.extends)
    lines: List[str] = [header]
    if pattern.size is not None:
        lines.append(f'  size: {pattern.size}')
    if pattern.item_pattern is not None:
        lines.append(f'  item: {pattern.item_pattern}')
    for placement, container in ((INNER, pattern.inner), (OUTER, pattern.outer)):
        for name, ref in container.items():
            target = '' if ref.pattern == name else f' -> {ref.pattern}'
            lines.append(f'  {placement} {name}{target}{_format_location(ref)}')
    return '\n'.join(lines)


def print_patterns(patterns: Mapping[PatternId, Pattern]) -> str:
    out = [format_pattern(pid, pattern) for pid, pattern in patterns.items()]
    return '\n'.join(out) + ('\n' if out else '')


def scene_to_data(scene: Scene) -> Dict[str, Any]:
    """Placed boxes of a scene as plain rectangles for a host or JSON output."""
    return {
        'pattern': scene.pattern_id,
        'cell': scene.cell,
        'parent': scene.parent.as_dict(),
        'children': [
            {
                'name': child.name,
                'mode': child.mode,
                'pattern': child.pattern_id,
                'bounds': child.bounds.as_dict(),
                'location': display_location(child.location),
                'fixed': child.fixed.as_dict(),
                'draggable': child.draggable,
            }
            for child in scene.children
        ],
    }


__all__ = [
    'component_data',
    'pattern_data',
    'patterns_to_data',
    'format_pattern',
    'print_patterns',
    'scene_to_data',
]
