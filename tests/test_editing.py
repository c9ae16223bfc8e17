import math

import pytest

from pattern_grammar.editing import (
    add_component,
    add_extends,
    create_pattern,
    generate_pattern_id,
    referrers,
    remove_component,
    remove_extends,
    remove_pattern,
    rename_pattern,
    resolve_component,
    set_item_pattern,
    set_location_side,
    update_pattern,
)
from pattern_grammar.errors import (
    ComponentNameCollision,
    CyclicExtends,
    DuplicatePatternName,
    InvalidPatternName,
    MalformedLocationToken,
    RedundantExtends,
    UnknownComponent,
    UnknownPattern,
)
from pattern_grammar.model import INNER, OUTER, ComponentRef, OffsetRange, Pattern


@pytest.fixture
def patterns():
    return {
        'a': Pattern(kind='cell'),
        'b': Pattern(inner={'x': ComponentRef('a', {'left': OffsetRange(1, 1)})}, extends=['a']),
        'c': Pattern(kind='array', item_pattern='a', outer={'y': ComponentRef('b')}),
    }


def test_generate_pattern_id():
    assert generate_pattern_id({}) == 'pattern_1'
    assert generate_pattern_id({'pattern_2': None, 'pattern_x': None, 'foo': None}) == 'pattern_3'


def test_create_pattern_leaves_input_untouched(patterns):
    updated, new_id = create_pattern(patterns)
    assert new_id == 'pattern_1'
    assert updated[new_id] == Pattern()
    assert 'pattern_1' not in patterns

    updated, new_id = create_pattern(updated, 'footer', kind='area')
    assert updated['footer'] == Pattern(kind='area')


def test_create_pattern_rejects_taken_or_empty_id(patterns):
    with pytest.raises(DuplicatePatternName):
        create_pattern(patterns, 'a')
    with pytest.raises(InvalidPatternName):
        create_pattern(patterns, '  ')


def test_rename_cascades_to_every_reference(patterns):
    updated = rename_pattern(patterns, 'a', 'z')
    assert list(updated) == ['z', 'b', 'c']
    assert updated['b'].inner['x'] == ComponentRef('z', {'left': OffsetRange(1, 1)})
    assert updated['b'].extends == ['z']
    assert updated['c'].item_pattern == 'z'
    assert updated['c'].outer['y'].pattern == 'b'

    assert patterns['b'].extends == ['a']
    assert patterns['b'].inner['x'].pattern == 'a'


@pytest.mark.parametrize('new_name', ['', '   ', None])
def test_rename_rejects_empty_name(patterns, new_name):
    with pytest.raises(InvalidPatternName):
        rename_pattern(patterns, 'a', new_name)


def test_rename_rejects_taken_name(patterns):
    with pytest.raises(DuplicatePatternName):
        rename_pattern(patterns, 'a', 'b')


def test_rename_unknown_pattern(patterns):
    with pytest.raises(UnknownPattern):
        rename_pattern(patterns, 'missing', 'z')


def test_rename_to_same_name_is_a_copy(patterns):
    updated = rename_pattern(patterns, 'a', 'a')
    assert updated == patterns
    assert updated is not patterns


def test_remove_pattern_leaves_dangling_references(patterns):
    updated = remove_pattern(patterns, 'a')
    assert 'a' not in updated
    assert updated['b'].inner['x'].pattern == 'a'
    assert resolve_component(updated, updated['b'].inner['x']) is None
    assert resolve_component(patterns, patterns['b'].inner['x']) is patterns['a']


def test_update_pattern_fields(patterns):
    updated = update_pattern(patterns, 'a', kind='area', size='2x2', color='red')
    assert updated['a'].kind == 'area'
    assert updated['a'].size == '2x2'
    assert updated['a'].properties == {'color': 'red'}

    updated = update_pattern(updated, 'a', color=None)
    assert updated['a'].properties == {}

    with pytest.raises(ValueError):
        update_pattern(patterns, 'a', inner={})


def test_set_item_pattern(patterns):
    assert set_item_pattern(patterns, 'c', 'b')['c'].item_pattern == 'b'
    assert set_item_pattern(patterns, 'c', None)['c'].item_pattern is None


def test_add_component(patterns):
    updated = add_component(patterns, 'a', INNER, 'logo', location={'top': OffsetRange(0, 0)})
    assert updated['a'].inner['logo'] == ComponentRef('logo', {'top': OffsetRange(0, 0)})
    assert patterns['a'].inner == {}

    updated = add_component(updated, 'a', OUTER, 'logo', 'b')
    assert updated['a'].outer['logo'] == ComponentRef('b', {})


def test_add_component_name_collision(patterns):
    with pytest.raises(ComponentNameCollision) as excinfo:
        add_component(patterns, 'b', INNER, 'x', 'c')
    assert excinfo.value.placement == INNER
    assert add_component(patterns, 'b', OUTER, 'x', 'c')['b'].outer['x'].pattern == 'c'


def test_add_component_rejects_bad_input(patterns):
    with pytest.raises(UnknownPattern):
        add_component(patterns, 'missing', INNER, 'x')
    with pytest.raises(ValueError):
        add_component(patterns, 'a', 'beside', 'x')
    with pytest.raises(ValueError):
        add_component(patterns, 'a', INNER, ' ')


def test_remove_component_keeps_referenced_pattern(patterns):
    updated = remove_component(patterns, 'b', INNER, 'x')
    assert updated['b'].inner == {}
    assert 'a' in updated
    with pytest.raises(UnknownComponent):
        remove_component(patterns, 'b', OUTER, 'x')


def test_set_location_side(patterns):
    updated = set_location_side(patterns, 'b', INNER, 'x', 'top', '2+')
    assert updated['b'].inner['x'].location == {'left': OffsetRange(1, 1), 'top': OffsetRange(2, math.inf)}

    updated = set_location_side(updated, 'b', INNER, 'x', 'left', '')
    assert updated['b'].inner['x'].location == {'top': OffsetRange(2, math.inf)}
    assert patterns['b'].inner['x'].location == {'left': OffsetRange(1, 1)}


def test_set_location_side_rejects_bad_token(patterns):
    with pytest.raises(MalformedLocationToken):
        set_location_side(patterns, 'b', INNER, 'x', 'top', 'lots')
    with pytest.raises(ValueError):
        set_location_side(patterns, 'b', INNER, 'x', 'middle', '1')
    with pytest.raises(UnknownComponent):
        set_location_side(patterns, 'b', INNER, 'nope', 'top', '1')


def test_add_and_remove_extends(patterns):
    updated = add_extends(patterns, 'c', 'b')
    assert updated['c'].extends == ['b']
    assert patterns['c'].extends == []

    with pytest.raises(CyclicExtends):
        add_extends(updated, 'a', 'c')
    with pytest.raises(RedundantExtends):
        add_extends(updated, 'c', 'b')

    assert remove_extends(updated, 'c', 'b')['c'].extends == []
    assert remove_extends(updated, 'c', 'a')['c'].extends == ['b']


def test_rejected_edit_is_logged(patterns, caplog):
    caplog.set_level('INFO', logger='pattern_grammar.editing')
    with pytest.raises(CyclicExtends):
        add_extends(patterns, 'a', 'b')
    assert 'Edit rejected' in caplog.text


def test_referrers(patterns):
    assert referrers(patterns, 'a') == ['b', 'c']
    assert referrers(patterns, 'b') == ['c']
    assert referrers(patterns, 'c') == []
