import pytest

from dtobox.validation.registry import (
    RuleDefinition,
    all_registered,
    get_rule,
    register,
)


def test_builtin_rules_are_registered():
    names = {entry.name for entry in all_registered()}

    assert {'required', 'sometimes', 'nullable', 'string', 'in', 'min', 'max'} <= names
    assert get_rule('required').implicit
    assert not get_rule('string').implicit
    assert not get_rule('regex').split_params


def test_register_and_override():
    entry = RuleDefinition(name='uppercase', check=lambda value: value.isupper(), message='Upper.')

    register(entry)
    assert get_rule('uppercase') is entry

    with pytest.raises(RuntimeError):
        register(RuleDefinition(name='uppercase', check=lambda value: True, message='Other.'))

    other = RuleDefinition(name='uppercase', check=lambda value: True, message='Other.')
    register(other, allow_override=True)
    assert get_rule('uppercase') is other


def test_unknown_rule_raises_key_error():
    with pytest.raises(KeyError):
        get_rule('does_not_exist')
