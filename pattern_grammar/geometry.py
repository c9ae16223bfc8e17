"""Axis-aligned rectangle helpers shared by layout and drag resolution."""

from __future__ import annotations

from typing import Optional

from .model import Rect, Size


def check_collision(a: Rect, b: Rect) -> bool:
    """Strict overlap test; rectangles that only touch do not collide."""
    return a.x < b.right and b.x < a.right and a.y < b.bottom and b.y < a.bottom


def clamp(value: float, low: float, high: float) -> float:
    """Clamp into ``[low, high]``; when the range is empty ``low`` wins."""
    return max(low, min(value, high))


def clamp_into(rect: Rect, area: Rect) -> Rect:
    """Move ``rect`` so it lies inside ``area``; oversized boxes pin to the area origin."""
    x = clamp(rect.x, area.x, area.right - rect.width)
    y = clamp(rect.y, area.y, area.bottom - rect.height)
    return rect.moved_to(x, y)


def surface_rect(surface: Size) -> Rect:
    return Rect(0.0, 0.0, float(surface.width), float(surface.height))


def constrain_to_surface(rect: Rect, surface: Size) -> Rect:
    return clamp_into(rect, surface_rect(surface))


def inner_area_bounds(surface: Size, ratio: float = 1.5) -> Rect:
    """The parent area drawn centered on the surface at ``1 / ratio`` of its size."""
    width = surface.width / ratio
    height = surface.height / ratio
    return Rect((surface.width - width) / 2, (surface.height - height) / 2, width, height)


def push_out_of(rect: Rect, area: Rect, surface: Size, prefer_side: Optional[str] = None) -> Rect:
    """Move ``rect`` off ``area`` if they overlap, then keep it on the surface.

    With ``prefer_side`` the box is pushed out through that side of the area,
    otherwise through the side needing the shortest move.
    """

    rect = constrain_to_surface(rect, surface)
    if not check_collision(rect, area):
        return rect

    moves = {
        'left': rect.right - area.x,
        'right': area.right - rect.x,
        'top': rect.bottom - area.y,
        'bottom': area.bottom - rect.y,
    }
    side = prefer_side if prefer_side in moves else min(moves, key=moves.__getitem__)

    x, y = rect.x, rect.y
    if side == 'left':
        x = area.x - rect.width
    elif side == 'right':
        x = area.right
    elif side == 'top':
        y = area.y - rect.height
    else:
        y = area.bottom
    return constrain_to_surface(rect.moved_to(x, y), surface)


__all__ = [
    'check_collision',
    'clamp',
    'clamp_into',
    'surface_rect',
    'constrain_to_surface',
    'inner_area_bounds',
    'push_out_of',
]
