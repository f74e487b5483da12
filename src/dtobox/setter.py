from typing import Any, Callable, Self

from dtobox.missing import Missing
from dtobox.paths import SEPARATOR, WILDCARD, accessible, assign, child, exists, value


class NoPathAssignedError(RuntimeError):
    """Raised when a :class:`Setter` is applied before it was given a key."""


class Setter:
    """A deferred write of ``value`` at a dotted path.

    ``value`` is either a literal or a producer. Producers (functions, lambdas,
    methods and partials) are called with the current value at the target
    path and return the new one; a producer without positional parameters is
    called with no argument. Classes and callable instances are literals.
    Inside :meth:`dtobox.Data.replace` the key of the change is used as path
    when no key was set explicitly.

    Without :meth:`force`, only paths that already exist are written to. With
    it, missing intermediate mappings and the final key are created.

    Examples
    --------
    >>> Setter(lambda old: old * 10, 'items.*.v').set({'items': [{'v': 1}, {'v': 2}]})
    {'items': [{'v': 10}, {'v': 20}]}
    """

    def __init__(self, value: Any | Callable[[Any], Any], key: str | None = None) -> None:
        self._value = value
        self._key = key
        self._force = False

    @property
    def value(self) -> Any | Callable[[Any], Any]:
        return self._value

    @property
    def forced(self) -> bool:
        return self._force

    def get_key(self) -> str | None:
        return self._key

    def key(self, key: str) -> Self:
        self._key = key
        return self

    def force(self) -> Self:
        self._force = True
        return self

    def set(self, target: Any) -> Any:
        """Apply the write to ``target``.

        ``target`` is mutated in place where possible, but containers along
        the path may be replaced, so always continue with the returned value.

        Raises
        ------
        NoPathAssignedError
            When no key was assigned.
        """
        if not self._key:
            raise NoPathAssignedError('No key set')

        return apply_path(target, self._key, self._value, self._force)

    def __repr__(self) -> str:
        return f'Setter(key={self._key!r}, force={self._force})'


def apply_path(root: Any, path: str, value: Any | Callable[[Any], Any], force: bool = False) -> Any:
    """Write ``value`` at ``path`` inside ``root`` and return the new root.

    A ``*`` segment fans out over every element of the current container.
    Anything that is not a mapping or list and stands in the way of the path
    is replaced by an empty mapping.
    """
    return _apply(root, path.split(SEPARATOR), value, force)


def _apply(node: Any, segments: list[str], producer: Any, force: bool) -> Any:
    segment, rest = segments[0], segments[1:]

    if segment == WILDCARD:
        if not accessible(node):
            node = {}

        keys = range(len(node)) if isinstance(node, list) else list(node)
        for inner in keys:
            if rest:
                node[inner] = _apply(node[inner], rest, producer, force)
            else:
                node[inner] = value(producer, node[inner])

        return node

    if not accessible(node):
        # Scalars blocking the path are dropped and the path is created
        # regardless of force.
        node = {}
        if rest:
            node = assign(node, segment, _apply(None, rest, producer, force))
        else:
            node = assign(node, segment, value(producer, None))

        return node

    if rest:
        if not exists(node, segment):
            if not force:
                return node
            node = assign(node, segment, {})

        node = assign(node, segment, _apply(child(node, segment), rest, producer, force))
    elif exists(node, segment):
        node = assign(node, segment, value(producer, child(node, segment)))
    elif force:
        node = assign(node, segment, value(producer, Missing(segment)))

    return node
