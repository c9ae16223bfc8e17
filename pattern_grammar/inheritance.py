"""The ``extends`` relation between patterns, kept acyclic."""

from __future__ import annotations

import logging
from typing import Dict, List, Mapping, Optional, Sequence, Set

from .errors import CyclicExtends, RedundantExtends, UnknownExtendsTarget
from .model import Pattern, PatternId

logger = logging.getLogger(__name__)

ExtendsGraph = Dict[PatternId, List[PatternId]]


def extends_graph(patterns: Mapping[PatternId, Pattern]) -> ExtendsGraph:
    return {pid: list(pattern.extends) for pid, pattern in patterns.items()}


def find_path(graph: Mapping[PatternId, Sequence[PatternId]], start: PatternId, goal: PatternId) -> Optional[List[PatternId]]:
    """Path ``start -> ... -> goal`` along extends edges, or ``None`` if unreachable.

    Iterative depth-first search with a visited set.
    """

    if start == goal:
        return [start]
    parents: Dict[PatternId, PatternId] = {}
    visited: Set[PatternId] = {start}
    stack = [start]
    while stack:
        node = stack.pop()
        for nxt in graph.get(node, ()):
            if nxt in visited:
                continue
            parents[nxt] = node
            if nxt == goal:
                path = [goal]
                while path[-1] != start:
                    path.append(parents[path[-1]])
                path.reverse()
                return path
            visited.add(nxt)
            stack.append(nxt)
    return None


def check_extends_edge(patterns: Mapping[PatternId, Pattern], source: PatternId, target: PatternId) -> None:
    """Raise if ``source`` may not extend ``target``.

    Self edges and edges closing a cycle raise :class:`CyclicExtends`, an
    existing edge raises :class:`RedundantExtends` and a missing target raises
    :class:`UnknownExtendsTarget`.
    """

    if source == target:
        raise CyclicExtends(source, target, [source, source])
    if target not in patterns:
        raise UnknownExtendsTarget(source, target)
    current = patterns[source].extends if source in patterns else []
    if target in current:
        raise RedundantExtends(source, target)

    graph = extends_graph(patterns)
    graph.setdefault(source, []).append(target)
    back = find_path(graph, target, source)
    if back is not None:
        raise CyclicExtends(source, target, [source] + back)


def can_extend(patterns: Mapping[PatternId, Pattern], source: PatternId, target: PatternId) -> bool:
    try:
        check_extends_edge(patterns, source, target)
    except (CyclicExtends, RedundantExtends, UnknownExtendsTarget) as exc:
        logger.info('Rejected extends edge: %s', exc)
        return False
    return True


def find_cycle(graph: Mapping[PatternId, Sequence[PatternId]]) -> Optional[List[PatternId]]:
    """Some cycle of the graph as ``[a, b, ..., a]``, or ``None`` when acyclic."""

    done: Set[PatternId] = set()
    for root in graph:
        if root in done:
            continue
        on_path: List[PatternId] = []
        on_path_set: Set[PatternId] = set()
        stack = [(root, iter(graph.get(root, ())))]
        on_path.append(root)
        on_path_set.add(root)
        while stack:
            node, children = stack[-1]
            advanced = False
            for child in children:
                if child in on_path_set:
                    return on_path[on_path.index(child):] + [child]
                if child in done:
                    continue
                stack.append((child, iter(graph.get(child, ()))))
                on_path.append(child)
                on_path_set.add(child)
                advanced = True
                break
            if not advanced:
                stack.pop()
                on_path.pop()
                on_path_set.discard(node)
                done.add(node)
    return None


def validate_patterns(patterns: Mapping[PatternId, Pattern]) -> None:
    """Check the extends edges of a whole dictionary.

    Rejects self references, repeated targets, targets missing from the
    dictionary and cycles.
    """

    for pid, pattern in patterns.items():
        seen: Set[PatternId] = set()
        for target in pattern.extends:
            if target == pid:
                raise CyclicExtends(pid, target, [pid, pid])
            if target in seen:
                raise RedundantExtends(pid, target)
            if target not in patterns:
                raise UnknownExtendsTarget(pid, target)
            seen.add(target)

    cycle = find_cycle(extends_graph(patterns))
    if cycle is not None:
        raise CyclicExtends(cycle[0], cycle[1], cycle)


def ancestors(patterns: Mapping[PatternId, Pattern], pattern_id: PatternId) -> List[PatternId]:
    """Every pattern reachable through extends, nearest first, without repeats."""

    result: List[PatternId] = []
    seen: Set[PatternId] = {pattern_id}
    queue = list(patterns[pattern_id].extends) if pattern_id in patterns else []
    while queue:
        pid = queue.pop(0)
        if pid in seen:
            continue
        seen.add(pid)
        result.append(pid)
        if pid in patterns:
            queue.extend(patterns[pid].extends)
    return result


__all__ = [
    'ExtendsGraph',
    'extends_graph',
    'find_path',
    'check_extends_edge',
    'can_extend',
    'find_cycle',
    'validate_patterns',
    'ancestors',
]
