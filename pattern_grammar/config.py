"""Layout configuration shared by the grid scaler, resolver and distributor."""

from __future__ import annotations

import copy
from dataclasses import dataclass, field

from .model import Size


@dataclass
class LayoutConfig:
    grid_size: float = 50.0
    """Largest pixel size of one grid cell."""

    min_cell: float = 5.0
    """Smallest pixel size of one grid cell."""

    pattern_icon_size: float = 100.0
    """Room reserved for the child box itself when fitting offsets."""

    open_range_headroom: int = 10
    """Cells added to the minimum of an open range (``N+``) when sizing the grid."""

    min_spacing: float = 10.0
    """Smallest gap the auto-distributor leaves between siblings."""

    inner_area_ratio: float = 1.5
    """The parent area is the surface divided by this ratio on each axis."""

    inner_child_size: Size = field(default_factory=lambda: Size(100.0, 70.0))
    outer_child_size: Size = field(default_factory=lambda: Size(100.0, 70.0))

    @property
    def max_cell(self) -> float:
        return self.grid_size


_LAYOUT_CONFIG = LayoutConfig()


def get_layout_config() -> LayoutConfig:
    return copy.deepcopy(_LAYOUT_CONFIG)


def set_layout_config(config: LayoutConfig) -> None:
    global _LAYOUT_CONFIG
    _LAYOUT_CONFIG = copy.deepcopy(config)
