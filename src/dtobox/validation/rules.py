"""Built-in validation rules.

Importing this module registers the rules; :mod:`dtobox.validation` does so.
"""

import re
from collections.abc import Mapping, Sized
from typing import Any

from dtobox.missing import Missing
from dtobox.validation.decorator import validation_rule


def is_empty(value: Any) -> bool:
    if isinstance(value, Missing) or value is None:
        return True
    if isinstance(value, str):
        return value.strip() == ''
    if isinstance(value, (list, tuple, Mapping)):
        return len(value) == 0
    return False


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _size(value: Any) -> float | None:
    if _is_number(value):
        return value
    if isinstance(value, Sized):
        return len(value)
    return None


@validation_rule('required', message='The :attribute field is required.', implicit=True)
def required(value: Any) -> bool:
    return not is_empty(value)


@validation_rule('present', message='The :attribute field must be present.', implicit=True)
def present(value: Any) -> bool:
    return not isinstance(value, Missing)


@validation_rule('filled', message='The :attribute field must have a value.')
def filled(value: Any) -> bool:
    return not is_empty(value)


# Markers interpreted by the validator itself.
@validation_rule('sometimes')
def sometimes(value: Any) -> bool:
    return True


@validation_rule('nullable')
def nullable(value: Any) -> bool:
    return True


@validation_rule('string', message='The :attribute field must be a string.')
def string(value: Any) -> bool:
    return isinstance(value, str)


@validation_rule('integer', message='The :attribute field must be an integer.')
def integer(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    return isinstance(value, str) and re.fullmatch(r'[+-]?\d+', value.strip()) is not None


@validation_rule('numeric', message='The :attribute field must be a number.')
def numeric(value: Any) -> bool:
    if _is_number(value):
        return True
    if not isinstance(value, str):
        return False
    try:
        float(value)
    except ValueError:
        return False
    return True


@validation_rule('boolean', message='The :attribute field must be true or false.')
def boolean(value: Any) -> bool:
    return value in (True, False, 0, 1, '0', '1') and not isinstance(value, float)


@validation_rule('array', message='The :attribute field must be an array.')
def array(value: Any) -> bool:
    return isinstance(value, (list, Mapping))


@validation_rule('list', message='The :attribute field must be a list.')
def list_(value: Any) -> bool:
    return isinstance(value, list)


@validation_rule('in', message='The selected :attribute is invalid.', param_names=('values',))
def in_(value: Any, *values: str) -> bool:
    if isinstance(value, (list, Mapping)):
        return False
    return str(value) in values


@validation_rule('not_in', message='The selected :attribute is invalid.', param_names=('values',))
def not_in(value: Any, *values: str) -> bool:
    if isinstance(value, (list, Mapping)):
        return False
    return str(value) not in values


@validation_rule('min', message='The :attribute field must be at least :min.', param_names=('min',))
def min_(value: Any, minimum: str) -> bool:
    size = _size(value)
    return size is not None and size >= float(minimum)


@validation_rule('max', message='The :attribute field must not be greater than :max.', param_names=('max',))
def max_(value: Any, maximum: str) -> bool:
    size = _size(value)
    return size is not None and size <= float(maximum)


@validation_rule(
    'between',
    message='The :attribute field must be between :min and :max.',
    param_names=('min', 'max'),
)
def between(value: Any, minimum: str, maximum: str) -> bool:
    size = _size(value)
    return size is not None and float(minimum) <= size <= float(maximum)


@validation_rule('regex', message='The :attribute field format is invalid.', split_params=False)
def regex(value: Any, pattern: str) -> bool:
    if not isinstance(value, (str, int, float)) or isinstance(value, bool):
        return False
    if len(pattern) >= 2 and pattern[0] == pattern[-1] == '/':
        pattern = pattern[1:-1]
    return re.search(pattern, str(value)) is not None
