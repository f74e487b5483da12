"""Dotted-path helpers over nested mappings and lists.

Paths use ``.`` as separator, e.g. ``'address.lines.0'``. Segments that
address a ``list`` must be ASCII decimal indices. A key which exists verbatim
at the top level (dots included) always wins over the nested interpretation.
"""

import inspect
from collections.abc import Mapping, MutableMapping, Sequence
from functools import partial
from types import BuiltinFunctionType, FunctionType, MethodType
from typing import Any, Callable

SEPARATOR = '.'
WILDCARD = '*'

_PRODUCER_TYPES = (FunctionType, MethodType, BuiltinFunctionType, partial)


def accessible(node: Any) -> bool:
    """Whether ``node`` is a container the path engine can write into."""
    return isinstance(node, (MutableMapping, list))


def _readable(node: Any) -> bool:
    return isinstance(node, Mapping) or (
        isinstance(node, Sequence) and not isinstance(node, (str, bytes, bytearray))
    )


def _is_index(segment: str) -> bool:
    return segment.isascii() and segment.isdigit()


def _index(node: Sequence[Any], segment: str) -> int | None:
    if not _is_index(segment):
        return None
    index = int(segment)
    return index if index < len(node) else None


def exists(node: Any, segment: str) -> bool:
    """Whether ``segment`` is a direct key (or index) of ``node``."""
    if isinstance(node, Mapping):
        return segment in node
    if _readable(node):
        return _index(node, segment) is not None
    return False


def child(node: Any, segment: str) -> Any:
    if isinstance(node, Mapping):
        return node[segment]
    index = _index(node, segment)
    if index is None:
        raise KeyError(segment)
    return node[index]


def assign(node: Any, segment: str, value: Any) -> Any:
    """Write ``value`` under ``segment`` and return the container written to.

    Lists are padded with ``None`` up to an index past their end. A list
    addressed by a non-index key becomes a mapping keyed by the former
    indices, so always continue with the returned container.
    """
    if isinstance(node, list) and not _is_index(segment):
        node = {str(index): item for index, item in enumerate(node)}

    if isinstance(node, MutableMapping):
        node[segment] = value
        return node

    index = int(segment)
    if index >= len(node):
        node.extend([None] * (index + 1 - len(node)))
    node[index] = value
    return node


def has(target: Any, key: str | None) -> bool:
    if not key or not _readable(target):
        return False

    if exists(target, key):
        return True

    node = target
    for segment in key.split(SEPARATOR):
        if not exists(node, segment):
            return False
        node = child(node, segment)

    return True


def get(target: Any, key: str | None, default: Any = None) -> Any:
    if key is None:
        return target

    if exists(target, key):
        return child(target, key)

    node = target
    for segment in key.split(SEPARATOR):
        if not exists(node, segment):
            return default
        node = child(node, segment)

    return node


def set_path(target: Any, key: str, value: Any) -> Any:
    """Set ``value`` at ``key``, creating (or overwriting) intermediate containers.

    Wildcards have no special meaning here; see :func:`dtobox.setter.apply_path`.

    Returns
    -------
    Any
        ``target``, or the container that replaced it when ``target`` was
        not a mapping, or a list addressed by a non-index key.
    """
    return _set(target, key.split(SEPARATOR), value)


def _set(node: Any, segments: list[str], value: Any) -> Any:
    if not accessible(node):
        node = {}

    segment, rest = segments[0], segments[1:]
    if not rest:
        return assign(node, segment, value)

    current = child(node, segment) if exists(node, segment) else None
    return assign(node, segment, _set(current, rest, value))


def forget(target: Any, key: str) -> None:
    """Remove ``key`` from ``target`` in place. Absent paths are ignored."""
    if not accessible(target):
        return

    if exists(target, key):
        _delete(target, key)
        return

    segments = key.split(SEPARATOR)
    node = target
    for segment in segments[:-1]:
        if not exists(node, segment):
            return
        node = child(node, segment)
        if not accessible(node):
            return

    if exists(node, segments[-1]):
        _delete(node, segments[-1])


def _delete(node: Any, segment: str) -> None:
    if isinstance(node, MutableMapping):
        del node[segment]
    else:
        del node[int(segment)]


def is_producer(candidate: Any) -> bool:
    """Whether ``candidate`` is called by :func:`value` rather than used as is.

    Functions, lambdas, bound methods, builtin functions and ``partial``
    objects are producers. Other callables, such as classes or instances
    defining ``__call__``, are plain values.
    """
    return isinstance(candidate, _PRODUCER_TYPES) or inspect.ismethoddescriptor(candidate)


def _takes_argument(producer: Callable[..., Any]) -> bool:
    try:
        parameters = inspect.signature(producer).parameters.values()
    except (TypeError, ValueError):
        # No introspectable signature, as for some builtins.
        return True

    return any(
        parameter.kind
        in (
            inspect.Parameter.POSITIONAL_ONLY,
            inspect.Parameter.POSITIONAL_OR_KEYWORD,
            inspect.Parameter.VAR_POSITIONAL,
        )
        for parameter in parameters
    )


def value(value_or_producer: Any | Callable[..., Any], *args: Any) -> Any:
    """Return the value itself, or the result of calling it when it is a producer.

    Producers taking no positional arguments are called without ``args``.
    """
    if not is_producer(value_or_producer):
        return value_or_producer

    if args and not _takes_argument(value_or_producer):
        return value_or_producer()

    return value_or_producer(*args)
