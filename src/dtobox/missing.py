from typing import Any


class Missing:
    """Marker for a value that was not supplied, as opposed to ``None``.

    A ``Missing`` is returned when a declared key is absent from the validated
    data, and it is accepted by :meth:`dtobox.Data.replace` as an instruction
    to remove a key. The key it was created for is kept for debugging only:
    all ``Missing`` instances compare equal to each other.

    Parameters
    ----------
    key : str | None
        The key the value was requested for, by default None
    """

    __slots__ = ('key',)

    def __init__(self, key: str | None = None) -> None:
        self.key = key

    def __bool__(self) -> bool:
        return False

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Missing)

    def __hash__(self) -> int:
        return hash(Missing)

    def __repr__(self) -> str:
        return f'Missing({self.key!r})'


def is_missing(value: Any) -> bool:
    return isinstance(value, Missing)
