from typing import Any

import pytest

from dtobox import Missing, NoPathAssignedError, Setter, apply_path


def test_forced_write_creates_nested_structure():
    result = apply_path({}, 'a.b.c', 'value', force=True)

    assert result == {'a': {'b': {'c': 'value'}}}
    assert result['a']['b']['c'] == 'value'


def test_unforced_write_skips_absent_paths():
    data: dict[str, Any] = {'z': 1}

    assert apply_path(data, 'x.y', 'value') == {'z': 1}
    assert apply_path(data, 'x', 'value') == {'z': 1}
    assert apply_path(data, 'x.y', 'value', force=True) == {'z': 1, 'x': {'y': 'value'}}


def test_existing_keys_are_overwritten_without_force():
    data: dict[str, Any] = {'a': {'b': 1}}

    assert apply_path(data, 'a.b', lambda old: old + 1) == {'a': {'b': 2}}


def test_wildcard_fans_out_with_producer():
    data: dict[str, Any] = {'items': [{'v': 1}, {'v': 2}, {'v': 3}]}

    result = apply_path(data, 'items.*.v', lambda old: old * 10)

    assert result == {'items': [{'v': 10}, {'v': 20}, {'v': 30}]}


def test_wildcard_over_mapping_values_as_last_segment():
    data: dict[str, Any] = {'prices': {'a': 1, 'b': 2}}

    assert apply_path(data, 'prices.*', 0) == {'prices': {'a': 0, 'b': 0}}


def test_wildcard_respects_force_below_it():
    data: dict[str, Any] = {'items': [{'v': 1}, {}]}

    assert apply_path(data, 'items.*.v', 5) == {'items': [{'v': 5}, {}]}
    assert apply_path(data, 'items.*.v', 7, force=True) == {'items': [{'v': 7}, {'v': 7}]}


def test_wildcard_on_scalar_coerces_to_empty_container():
    data: dict[str, Any] = {'items': 'not a list'}

    assert apply_path(data, 'items.*.v', 1) == {'items': {}}


def test_scalar_blocking_path_is_replaced():
    data: dict[str, Any] = {'a': 'scalar'}

    seen: list[Any] = []

    def producer(old: Any) -> str:
        seen.append(old)
        return 'new'

    assert apply_path(data, 'a.b.c', producer) == {'a': {'b': {'c': 'new'}}}
    assert seen == [None]


def test_forced_producer_receives_missing_for_absent_key():
    seen: list[Any] = []

    def producer(old: Any) -> str:
        seen.append(old)
        return 'created'

    assert apply_path({}, 'name', producer, force=True) == {'name': 'created'}
    assert len(seen) == 1
    assert isinstance(seen[0], Missing)
    assert seen[0].key == 'name'


def test_forced_list_index_is_padded():
    data: dict[str, Any] = {'items': ['a']}

    assert apply_path(data, 'items.2', 'c', force=True) == {'items': ['a', None, 'c']}


def test_setter_requires_key():
    with pytest.raises(NoPathAssignedError):
        Setter('value').set({})


def test_setter_fluent_interface():
    setter = Setter(lambda old: old.upper()).key('user.name')

    assert setter.get_key() == 'user.name'
    assert not setter.forced
    assert setter.set({'user': {'name': 'ann'}}) == {'user': {'name': 'ANN'}}

    forced = Setter('x', 'a.b').force()
    assert forced.forced
    assert forced.set({}) == {'a': {'b': 'x'}}


def test_zero_argument_producers_ignore_old_value():
    assert Setter(lambda: 'x', 'a').force().set({}) == {'a': 'x'}
    assert apply_path({'a': 1}, 'a', lambda: 2) == {'a': 2}
    assert apply_path({'items': [1, 2]}, 'items.*', lambda: 0) == {'items': [0, 0]}


def test_forced_key_on_list_turns_it_into_mapping():
    result = apply_path({'items': [[1]]}, 'items.*.v', 5, force=True)

    assert result == {'items': [{'0': 1, 'v': 5}]}


def test_unforced_key_on_list_is_skipped():
    assert apply_path({'items': [[1]]}, 'items.*.v', 5) == {'items': [[1]]}
    assert apply_path({'items': [1]}, 'items.x.y', 5) == {'items': [1]}
