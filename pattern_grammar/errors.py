"""Errors raised by extraction, validation and dictionary edits."""

from typing import Sequence


class GrammarError(Exception):
    pass


class DuplicatePatternName(GrammarError):
    def __init__(self, pattern_id: str) -> None:
        self.pattern_id = pattern_id
        super().__init__(f'pattern "{pattern_id}" already exists')


class UnknownPattern(GrammarError):
    def __init__(self, pattern_id: str) -> None:
        self.pattern_id = pattern_id
        super().__init__(f'pattern "{pattern_id}" not found')


class InvalidPatternName(GrammarError):
    def __init__(self, name: str, reason: str) -> None:
        self.name = name
        self.reason = reason
        super().__init__(f'invalid pattern name {name!r}: {reason}')


class UnknownExtendsTarget(GrammarError):
    def __init__(self, pattern_id: str, target: str) -> None:
        self.pattern_id = pattern_id
        self.target = target
        super().__init__(f'pattern "{pattern_id}" extends unknown pattern "{target}"')


class CyclicExtends(GrammarError):
    """Adding ``pattern_id -> target`` would close a cycle in the extends graph."""

    def __init__(self, pattern_id: str, target: str, cycle: Sequence[str] = ()) -> None:
        self.pattern_id = pattern_id
        self.target = target
        self.cycle = list(cycle)
        message = f'pattern "{pattern_id}" cannot extend "{target}": cycle'
        if self.cycle:
            message += ' ' + ' -> '.join(self.cycle)
        super().__init__(message)


class RedundantExtends(GrammarError):
    def __init__(self, pattern_id: str, target: str) -> None:
        self.pattern_id = pattern_id
        self.target = target
        super().__init__(f'pattern "{pattern_id}" already extends "{target}"')


class ComponentNameCollision(GrammarError):
    def __init__(self, pattern_id: str, placement: str, name: str) -> None:
        self.pattern_id = pattern_id
        self.placement = placement
        self.name = name
        super().__init__(f'pattern "{pattern_id}" already has an {placement} component "{name}"')


class UnknownComponent(GrammarError):
    def __init__(self, pattern_id: str, placement: str, name: str) -> None:
        self.pattern_id = pattern_id
        self.placement = placement
        self.name = name
        super().__init__(f'pattern "{pattern_id}" has no {placement} component "{name}"')


class MalformedLocationToken(GrammarError):
    """Only raised by strict parsing; lenient parsing recovers to ``0``."""

    def __init__(self, token: object) -> None:
        self.token = token
        super().__init__(f'malformed location token {token!r}')


class RecursiveDefinition(GrammarError):
    def __init__(self, path: Sequence[str]) -> None:
        self.path = list(path)
        super().__init__('inline pattern definition embeds itself: ' + ' -> '.join(self.path))


__all__ = [
    'GrammarError',
    'DuplicatePatternName',
    'UnknownPattern',
    'InvalidPatternName',
    'UnknownExtendsTarget',
    'CyclicExtends',
    'RedundantExtends',
    'ComponentNameCollision',
    'UnknownComponent',
    'MalformedLocationToken',
    'RecursiveDefinition',
]
