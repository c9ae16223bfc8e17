import pytest

from pattern_grammar.drag import DragConstraints, DragGesture, clamp_proposal, resolve_drag
from pattern_grammar.geometry import check_collision
from pattern_grammar.location import FixedSides
from pattern_grammar.model import INNER, OUTER, Rect, Size


PARENT = Rect(0, 0, 300, 300)
SURFACE = Size(400, 400)


def inner_constraints(initial, **fixed):
    return DragConstraints(INNER, PARENT, SURFACE, FixedSides(**fixed), initial)


@pytest.mark.parametrize(
    'a, b, expected',
    [
        (Rect(0, 0, 50, 50), Rect(25, 25, 50, 50), True),
        (Rect(0, 0, 50, 50), Rect(50, 0, 50, 50), False),
        (Rect(0, 0, 50, 50), Rect(0, 50, 50, 50), False),
        (Rect(0, 0, 100, 100), Rect(10, 10, 5, 5), True),
        (Rect(0, 0, 50, 50), Rect(200, 200, 10, 10), False),
    ],
)
def test_collision_is_symmetric_and_ignores_touching(a, b, expected):
    assert check_collision(a, b) is expected
    assert check_collision(b, a) is expected


def test_inner_proposal_is_clamped_into_parent():
    box = Rect(10, 10, 50, 50)
    assert clamp_proposal(-20, 400, box, inner_constraints(box)) == Rect(0, 250, 50, 50)


def test_fixed_side_freezes_its_axis():
    initial = Rect(0, 100, 50, 50)
    constraints = inner_constraints(initial, left=True)
    assert clamp_proposal(120, 40, initial, constraints) == Rect(0, 40, 50, 50)

    constraints = inner_constraints(initial, top=True, bottom=True)
    assert clamp_proposal(120, 40, initial, constraints) == Rect(120, 100, 50, 50)


def test_outer_proposal_is_pushed_off_the_parent():
    parent = Rect(100, 100, 100, 100)
    current = Rect(210, 120, 50, 50)
    attached = DragConstraints(OUTER, parent, SURFACE, FixedSides(), current, attachment='right')
    assert clamp_proposal(150, 120, current, attached) == Rect(200, 120, 50, 50)

    free = DragConstraints(OUTER, parent, SURFACE, FixedSides(), current)
    assert clamp_proposal(110, 60, current, free) == Rect(110, 50, 50, 50)
    assert clamp_proposal(390, -10, current, free) == Rect(350, 0, 50, 50)


def test_free_move_is_committed():
    current = Rect(0, 0, 50, 50)
    moved = resolve_drag(80, 60, current, inner_constraints(current), [Rect(200, 200, 50, 50)])
    assert moved == Rect(80, 60, 50, 50)


def test_collision_falls_back_to_x_only():
    current = Rect(0, 0, 50, 50)
    siblings = [Rect(60, 60, 50, 50)]
    assert resolve_drag(80, 60, current, inner_constraints(current), siblings) == Rect(80, 0, 50, 50)


def test_collision_falls_back_to_y_only():
    current = Rect(0, 0, 50, 50)
    siblings = [Rect(60, 30, 50, 50)]
    assert resolve_drag(80, 60, current, inner_constraints(current), siblings) == Rect(0, 60, 50, 50)


def test_collision_on_both_axes_freezes_position():
    current = Rect(0, 0, 50, 50)
    siblings = [Rect(60, 30, 50, 50), Rect(0, 55, 50, 50)]
    assert resolve_drag(80, 60, current, inner_constraints(current), siblings) == current


def test_outer_fallback_is_kept_off_the_parent():
    parent = Rect(300, 200, 300, 200)
    current = Rect(150, 250, 100, 70)
    constraints = DragConstraints(OUTER, parent, Size(900, 600), FixedSides(), current, attachment='left')
    siblings = [Rect(340, 440, 100, 70)]

    moved = resolve_drag(350, 450, current, constraints, siblings)

    assert moved == Rect(200, 250, 100, 70)
    assert not check_collision(moved, parent)
    assert not check_collision(moved, siblings[0])


def test_gesture_state_machine():
    start = Rect(0, 0, 50, 50)
    gesture = DragGesture(start, inner_constraints(start), [Rect(200, 200, 50, 50)])
    assert gesture.state == DragGesture.IDLE

    assert gesture.move(100, 100) == start

    gesture.begin()
    assert gesture.state == DragGesture.DRAGGING
    assert gesture.move(100, 100) == Rect(100, 100, 50, 50)
    assert gesture.move(400, 20) == Rect(250, 20, 50, 50)

    assert gesture.end() == Rect(250, 20, 50, 50)
    assert gesture.state == DragGesture.IDLE
    assert gesture.move(0, 0) == Rect(250, 20, 50, 50)


def test_gestures_do_not_share_state():
    start = Rect(0, 0, 50, 50)
    first = DragGesture(start, inner_constraints(start))
    second = DragGesture(start, inner_constraints(start))
    first.begin()
    first.move(100, 0)
    assert second.bounds == start
    assert second.state == DragGesture.IDLE
