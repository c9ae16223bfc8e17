from .model import (
    ComponentRef,
    OffsetRange,
    Pattern,
    PatternDict,
    Rect,
    Size,
    INNER,
    OUTER,
    SIDES,
    KINDS,
)
from .errors import (
    GrammarError,
    DuplicatePatternName,
    UnknownPattern,
    InvalidPatternName,
    UnknownExtendsTarget,
    CyclicExtends,
    RedundantExtends,
    ComponentNameCollision,
    UnknownComponent,
    MalformedLocationToken,
    RecursiveDefinition,
)
from .config import LayoutConfig, get_layout_config, set_layout_config
from .location import (
    parse_offset,
    format_offset,
    normalize_location,
    location_from_raw,
    display_location,
    fixed_sides,
    is_draggable,
    FixedSides,
)
from .grid import cell_size, pattern_cell_size
from .geometry import check_collision, constrain_to_surface, inner_area_bounds, push_out_of
from .layout import resolve, primary_side
from .drag import DragConstraints, DragGesture, resolve_drag
from .distribute import distribute
from .extract import extract_patterns, load_grammar, clean_empty_components
from .inheritance import check_extends_edge, can_extend, validate_patterns
from .editing import (
    generate_pattern_id,
    create_pattern,
    rename_pattern,
    remove_pattern,
    update_pattern,
    add_component,
    remove_component,
    set_location_side,
    add_extends,
    remove_extends,
)
from .scene import PlacedChild, Scene, build_scene, start_drag, commit
from .printer import patterns_to_data, format_pattern, print_patterns, scene_to_data

__all__ = [
    'ComponentRef',
    'OffsetRange',
    'Pattern',
    'PatternDict',
    'Rect',
    'Size',
    'INNER',
    'OUTER',
    'SIDES',
    'KINDS',
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
    'LayoutConfig',
    'get_layout_config',
    'set_layout_config',
    'parse_offset',
    'format_offset',
    'normalize_location',
    'location_from_raw',
    'display_location',
    'fixed_sides',
    'is_draggable',
    'FixedSides',
    'cell_size',
    'pattern_cell_size',
    'check_collision',
    'constrain_to_surface',
    'inner_area_bounds',
    'push_out_of',
    'resolve',
    'primary_side',
    'DragConstraints',
    'DragGesture',
    'resolve_drag',
    'distribute',
    'extract_patterns',
    'load_grammar',
    'clean_empty_components',
    'check_extends_edge',
    'can_extend',
    'validate_patterns',
    'generate_pattern_id',
    'create_pattern',
    'rename_pattern',
    'remove_pattern',
    'update_pattern',
    'add_component',
    'remove_component',
    'set_location_side',
    'add_extends',
    'remove_extends',
    'PlacedChild',
    'Scene',
    'build_scene',
    'start_drag',
    'commit',
    'patterns_to_data',
    'format_pattern',
    'print_patterns',
    'scene_to_data',
]
