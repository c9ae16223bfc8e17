"""Location constraints: offset tokens, side-key spellings and pinned sides.

A location pins a child box to edges of its parent.  Each side carries an
offset token measured in grid cells:

* ``"N"``     exactly ``N`` cells,
* ``"N+"``    at least ``N`` cells,
* ``"N..M"``  between ``N`` and ``M`` cells, ``M`` may be ``*`` (unbounded).

A side may be spelled ``left``, ``margin-left`` or ``padding-left``; when
several spellings of one side are given, ``padding`` wins over ``margin``
which wins over the bare name.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple

from .errors import MalformedLocationToken
from .model import SIDES, UNBOUNDED, LocationSpec, OffsetRange

logger = logging.getLogger(__name__)

ZERO = OffsetRange(0, 0)

_EXACT_RE = re.compile(r'^(\d+)$')
_OPEN_RE = re.compile(r'^(\d+)\s*\+$')
_RANGE_RE = re.compile(r'^(\d+)\s*\.\.\s*(\d+|\*)$')
_SIDE_KEY_RE = re.compile(r'^(?:(margin|padding)-)?(top|right|bottom|left)$')

# Later spellings overwrite earlier ones.
_SPELLING_ORDER = (None, 'margin', 'padding')


def _malformed(raw: object, strict: bool) -> OffsetRange:
    if strict:
        raise MalformedLocationToken(raw)
    logger.warning('Malformed location token %r, using 0', raw)
    return ZERO


def _parse_bound(value: Any) -> Optional[float]:
    if value is None or value == '*' or value == UNBOUNDED:
        return UNBOUNDED
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and _EXACT_RE.match(value.strip()):
        return int(value.strip())
    return None


def parse_offset(raw: Any, *, strict: bool = False) -> OffsetRange:
    """Parse one side's offset into an :class:`OffsetRange`.

    Missing input (``None`` or an empty string) is ``0``.  Malformed input is
    ``0`` as well unless ``strict`` is set, in which case
    :class:`MalformedLocationToken` is raised.
    """

    if raw is None:
        return ZERO
    if isinstance(raw, OffsetRange):
        return raw
    if isinstance(raw, bool):
        return _malformed(raw, strict)
    if isinstance(raw, int):
        return OffsetRange(raw, raw) if raw >= 0 else _malformed(raw, strict)
    if isinstance(raw, float):
        if raw.is_integer() and raw >= 0:
            return OffsetRange(int(raw), int(raw))
        return _malformed(raw, strict)
    if isinstance(raw, Mapping):
        low = _parse_bound(raw.get('min', 0))
        high = _parse_bound(raw.get('max', low))
        if low is None or low == UNBOUNDED or high is None or high < low:
            return _malformed(raw, strict)
        return OffsetRange(int(low), high)
    if not isinstance(raw, str):
        return _malformed(raw, strict)

    token = raw.strip()
    if not token:
        return ZERO
    match = _EXACT_RE.match(token)
    if match:
        value = int(match.group(1))
        return OffsetRange(value, value)
    match = _OPEN_RE.match(token)
    if match:
        return OffsetRange(int(match.group(1)), UNBOUNDED)
    match = _RANGE_RE.match(token)
    if match:
        low = int(match.group(1))
        if match.group(2) == '*':
            return OffsetRange(low, UNBOUNDED)
        high = int(match.group(2))
        if high < low:
            return _malformed(raw, strict)
        return OffsetRange(low, high)
    return _malformed(raw, strict)


def format_offset(offset: OffsetRange) -> str:
    return str(offset)


def split_side_key(key: str) -> Optional[Tuple[Optional[str], str]]:
    """Return ``(spelling, side)`` for a side key, ``None`` when not a side key."""
    match = _SIDE_KEY_RE.match(key.strip().lower())
    if not match:
        return None
    return match.group(1), match.group(2)


def normalize_location(raw: Mapping[str, Any], *, strict: bool = False) -> LocationSpec:
    """Collapse ``side``/``margin-side``/``padding-side`` keys into one value per side."""

    by_side: Dict[str, Dict[Optional[str], Any]] = {}
    for key, value in raw.items():
        parsed = split_side_key(str(key))
        if parsed is None:
            logger.warning('Ignoring unknown location key %r', key)
            continue
        spelling, side = parsed
        by_side.setdefault(side, {})[spelling] = value

    location: LocationSpec = {}
    for side in SIDES:
        spellings = by_side.get(side)
        if not spellings:
            continue
        chosen = None
        for spelling in _SPELLING_ORDER:
            if spelling in spellings:
                chosen = spellings[spelling]
        location[side] = parse_offset(chosen, strict=strict)
    return location


def _entries_from_string(text: str) -> Iterable[Tuple[str, Any]]:
    for part in text.split(','):
        part = part.strip()
        if not part:
            continue
        side, _, value = part.partition(':')
        yield side.strip(), value.strip() or '0'


def coerce_location(raw: Any) -> Dict[str, Any]:
    """Flatten the accepted shorthand forms of a location into ``key -> token``.

    Accepted forms: a mapping, a sequence of bare side names (offset ``0``)
    and/or single-key mappings, or a string ``"side:value, side:value"``.
    """

    result: Dict[str, Any] = {}
    if raw is None:
        return result
    if isinstance(raw, Mapping):
        result.update((str(key), value) for key, value in raw.items())
    elif isinstance(raw, str):
        result.update(_entries_from_string(raw))
    elif isinstance(raw, (list, tuple)):
        for item in raw:
            if isinstance(item, str):
                result[item.strip().lower()] = '0'
            elif isinstance(item, Mapping):
                result.update((str(key), value) for key, value in item.items())
            else:
                logger.warning('Ignoring location entry %r', item)
    else:
        logger.warning('Ignoring location of unsupported type %s', type(raw).__name__)
    return result


def location_from_raw(raw: Any, *, strict: bool = False) -> LocationSpec:
    return normalize_location(coerce_location(raw), strict=strict)


def location_tokens(location: Mapping[str, OffsetRange]) -> Dict[str, str]:
    return {side: format_offset(location[side]) for side in SIDES if side in location}


def display_location(location: Optional[Mapping[str, OffsetRange]]) -> Dict[str, str]:
    """Token for every side; sides without a constraint read as ``0+``."""
    location = location or {}
    return {side: format_offset(location[side]) if side in location else '0+' for side in SIDES}


def with_side(location: Mapping[str, OffsetRange], side: str, token: Optional[str], *, strict: bool = True) -> LocationSpec:
    """Return a copy of ``location`` with ``side`` set from ``token``.

    An empty or ``None`` token removes the side.
    """

    parsed = split_side_key(side)
    if parsed is None:
        raise ValueError(f'unknown side {side!r}')
    canonical = parsed[1]
    updated = dict(location)
    if token is None or not str(token).strip():
        updated.pop(canonical, None)
    else:
        updated[canonical] = parse_offset(str(token), strict=strict)
    return updated


def resolved_cells(offset: OffsetRange, headroom: int) -> int:
    """Cells an offset needs on screen; open ranges use ``min + headroom``."""
    if offset.is_open:
        return offset.min + headroom
    return int(offset.max)


@dataclass(frozen=True)
class FixedSides:
    """Sides whose offset is exactly zero, i.e. pinned flush to the parent edge."""

    top: bool = False
    right: bool = False
    bottom: bool = False
    left: bool = False

    def __getitem__(self, side: str) -> bool:
        if side not in SIDES:
            raise KeyError(side)
        return getattr(self, side)

    @property
    def x_locked(self) -> bool:
        return self.left or self.right

    @property
    def y_locked(self) -> bool:
        return self.top or self.bottom

    @property
    def count(self) -> int:
        return sum(1 for side in SIDES if self[side])

    def as_dict(self) -> Dict[str, bool]:
        return {side: self[side] for side in SIDES}


def is_fixed(location: Mapping[str, OffsetRange], side: str) -> bool:
    offset = location.get(side)
    return offset is not None and offset.min == 0


def fixed_sides(location: Optional[Mapping[str, OffsetRange]]) -> FixedSides:
    location = location or {}
    return FixedSides(**{side: is_fixed(location, side) for side in SIDES})


def is_draggable(fixed: FixedSides) -> bool:
    return fixed.count < len(SIDES)


def single_fixed_side(fixed: FixedSides) -> Optional[str]:
    """The only pinned side, or ``None`` for unpinned, stretched or corner-pinned boxes."""
    pinned = [side for side in SIDES if fixed[side]]
    if len(pinned) != 1:
        return None
    return pinned[0]


__all__ = [
    'ZERO',
    'parse_offset',
    'format_offset',
    'split_side_key',
    'normalize_location',
    'coerce_location',
    'location_from_raw',
    'location_tokens',
    'display_location',
    'with_side',
    'resolved_cells',
    'FixedSides',
    'is_fixed',
    'fixed_sides',
    'is_draggable',
    'single_fixed_side',
]
