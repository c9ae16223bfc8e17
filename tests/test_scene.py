import pytest

from pattern_grammar.errors import UnknownComponent, UnknownPattern
from pattern_grammar.extract import load_grammar
from pattern_grammar.model import INNER, OUTER, Rect, Size
from pattern_grammar.scene import build_scene, commit, scene_positions, start_drag


SURFACE = Size(900, 600)


@pytest.fixture
def patterns():
    return load_grammar(
        {
            'page': {
                'inner': {
                    'header': {'location': ['top', 'left', 'right']},
                    'logo': {'location': {'left': '1'}},
                    'ghost': {'pattern': 'nothing'},
                },
                'outer': {'sidebar': {'location': ['left']}},
            },
            'header': {},
            'logo': {},
            'sidebar': {},
        }
    )


def test_scene_places_every_resolvable_child(patterns, caplog):
    scene = build_scene(patterns, 'page', SURFACE)

    assert scene.parent == Rect(150, 100, 600, 400)
    assert scene.cell == 50
    assert [child.key for child in scene.children] == [
        (INNER, 'header'),
        (INNER, 'logo'),
        (OUTER, 'sidebar'),
    ]
    assert "pattern 'nothing' not found" in caplog.text

    header = scene.child(INNER, 'header')
    assert header.bounds == Rect(150, 100, 600, 70)
    assert header.draggable

    logo = scene.child(INNER, 'logo')
    assert logo.bounds == Rect(200, 265, 100, 70)
    assert logo.initial == logo.bounds
    assert logo.fixed.count == 0

    sidebar = scene.child(OUTER, 'sidebar')
    assert sidebar.bounds == Rect(50, 265, 100, 70)
    assert sidebar.attachment == 'left'


def test_unknown_parent_is_rejected(patterns):
    with pytest.raises(UnknownPattern):
        build_scene(patterns, 'missing', SURFACE)


def test_drag_and_commit(patterns):
    scene = build_scene(patterns, 'page', SURFACE)
    gesture = start_drag(scene, INNER, 'logo')
    gesture.begin()
    moved = gesture.move(400, 300)
    assert moved == Rect(400, 300, 100, 70)
    released = gesture.end()

    updated = commit(scene, INNER, 'logo', released)
    assert updated.child(INNER, 'logo').bounds == released
    assert updated.child(INNER, 'logo').initial == Rect(200, 265, 100, 70)
    assert scene.child(INNER, 'logo').bounds == Rect(200, 265, 100, 70)
    assert scene_positions(updated)[(INNER, 'logo')] == (400, 300)


def test_drag_stops_at_sibling(patterns):
    scene = build_scene(patterns, 'page', SURFACE)
    gesture = start_drag(scene, INNER, 'logo')
    gesture.begin()
    # the header covers y 100..170; the y part of the move is dropped
    assert gesture.move(300, 120) == Rect(300, 265, 100, 70)


def test_start_drag_unknown_child(patterns):
    scene = build_scene(patterns, 'page', SURFACE)
    with pytest.raises(UnknownComponent):
        start_drag(scene, OUTER, 'logo')


def test_saved_positions_are_restored(patterns):
    scene = build_scene(patterns, 'page', SURFACE, positions={(INNER, 'logo'): (300, 300)})
    logo = scene.child(INNER, 'logo')
    assert logo.bounds == Rect(300, 300, 100, 70)
    assert logo.initial == Rect(200, 265, 100, 70)


def test_auto_distribute_separates_siblings():
    patterns = load_grammar(
        {
            'panel': {'inner': {'a': {'location': 'left:0'}, 'b': {'location': 'left:0'}}},
            'a': {},
            'b': {},
        }
    )
    stacked = build_scene(patterns, 'panel', Size(450, 450))
    assert stacked.child(INNER, 'a').bounds == stacked.child(INNER, 'b').bounds

    spread = build_scene(patterns, 'panel', Size(450, 450), auto_distribute=True)
    spacing = (300 - 140) / 3
    assert spread.child(INNER, 'a').bounds.y == pytest.approx(75 + spacing)
    assert spread.child(INNER, 'b').bounds.y == pytest.approx(75 + 2 * spacing + 70)
    assert spread.child(INNER, 'b').initial == spread.child(INNER, 'b').bounds


def test_fully_pinned_child_fills_parent_and_is_not_draggable():
    patterns = load_grammar({'page': {'inner': {'frame': {'location': ['top', 'right', 'bottom', 'left']}}}, 'frame': {}})
    scene = build_scene(patterns, 'page', SURFACE)
    frame = scene.child(INNER, 'frame')
    assert frame.bounds == scene.parent
    assert not frame.draggable
