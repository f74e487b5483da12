from copy import deepcopy
from logging import Logger, getLogger
from os import PathLike
from pathlib import Path
from typing import Any, Callable, ClassVar, Mapping, Self

from dtobox import paths
from dtobox.missing import Missing
from dtobox.payload import PayloadFormat, load_payload, parse_payload
from dtobox.setter import Setter
from dtobox.validation import RuleValidator, ValidationError, Validator


class NotInitializedError(RuntimeError):
    """Raised when a ``Data`` instance is used before :meth:`Data.create`."""


class UnknownPropertyError(AttributeError):
    """Raised when reading a key that is neither in the data nor in the rules."""


class Data:
    """Container for validated input data.

    Subclasses declare their validation rules by overriding :meth:`rules`, and
    optionally :meth:`messages`, :meth:`labels` and :meth:`after_validation`.
    An instance is filled exactly once by :meth:`create`; afterwards the
    validated values can be read by key or as attributes, and rewritten with
    :meth:`replace`. The values as they were validated remain available via
    :meth:`get_original`.

    Declared keys that were not part of the input read as
    :class:`~dtobox.missing.Missing`, which is distinct from ``None``.

    Parameters
    ----------
    validator : Validator | None
        The validator to run on :meth:`create`, by default a
        :class:`~dtobox.validation.RuleValidator`.
    logger : Logger | None
        Logger to report to, by default the module logger.

    Examples
    --------
    >>> class UserData(Data):
    ...     def rules(self):
    ...         return {'name': ['required', 'string'], 'age': ['sometimes', 'integer']}
    >>> user = UserData().create({'name': 'test'})
    >>> user.name
    'test'
    >>> user.missing('age')
    True
    """

    default_messages: ClassVar[dict[str, str]] = {}
    """Messages shared by subclasses; merged along the class hierarchy under :meth:`messages`."""

    default_labels: ClassVar[dict[str, str]] = {}
    """Labels shared by subclasses; merged along the class hierarchy under :meth:`labels`."""

    _validator: Validator
    _logger: Logger
    _original: dict[str, Any]
    _attributes: dict[str, Any]
    _created: bool

    def __init__(self, validator: Validator | None = None, logger: Logger | None = None) -> None:
        self._validator = validator or RuleValidator()
        self._logger = logger or getLogger(__name__)
        self._original = {}
        self._attributes = {}
        self._created = False

    def create(self, data: Mapping[str, Any]) -> Self:
        """Validate ``data`` and fill the container with the result.

        Raises
        ------
        ValidationError
            Propagated from the validator; the instance stays uncreated.
        RuntimeError
            When the instance was created before.
        """
        if self._created:
            raise RuntimeError(f'{type(self).__name__} has already been created.')

        try:
            validated = self._validator.validate(
                data, self.rules(), self._resolved_messages(), self._resolved_labels()
            )
        except ValidationError as ex:
            self._logger.debug('Validation of %s failed: %s', type(self).__name__, ex.errors)
            raise

        self._original = deepcopy(dict(validated))
        self._attributes = deepcopy(dict(validated))
        self._created = True

        self._logger.info('Created %s with %d attributes', type(self).__name__, len(self._attributes))

        self.after_validation()

        return self

    def create_from_payload(self, raw: str | bytes, payload_format: PayloadFormat = 'json') -> Self:
        """Decode a raw JSON, YAML or TOML document and :meth:`create` from it.

        Raises
        ------
        PayloadError
            When ``raw`` does not decode into a mapping with string keys.
        """
        return self.create(parse_payload(raw, payload_format))

    def create_from_file(self, path: str | PathLike[str] | Path) -> Self:
        return self.create(load_payload(path))

    def rules(self) -> dict[str, Any]:
        return {}

    def messages(self) -> dict[str, str]:
        return {}

    def labels(self) -> dict[str, str]:
        """Human readable names of fields, used in validation messages."""
        return {}

    def after_validation(self) -> None:
        """Hook called at the end of a successful :meth:`create`."""

    def get_original(self, key: str | None) -> Any:
        """Return the value of ``key`` as it was validated."""
        self._check_created()
        return self._lookup(self._original, key)

    def get_attribute(self, key: str | None) -> Any:
        """Return the current value of ``key``.

        ``key`` may be a dotted path. An empty key returns ``None``.

        Raises
        ------
        UnknownPropertyError
            When ``key`` is neither in the data nor declared in :meth:`rules`.
        """
        self._check_created()
        return self._lookup(self._attributes, key)

    def has(self, key: str | None) -> bool:
        self._check_created()

        if not key:
            return False

        return not isinstance(self.get_attribute(key), Missing)

    def missing(self, key: str | None) -> bool:
        self._check_created()

        if not key:
            return True

        return isinstance(self.get_attribute(key), Missing)

    def to_dict(self) -> dict[str, Any]:
        self._check_created()
        return self._attributes

    def resolve(self, changes: Mapping[str, Any]) -> dict[str, Any]:
        """Return the attributes with ``changes`` merged on top (top-level keys only)."""
        self._check_created()
        return {**self._attributes, **changes}

    def when(self, key: str, producer: Callable[[], Any]) -> Any:
        """Call ``producer`` only if ``key`` is present, else return ``Missing(key)``."""
        self._check_created()

        if key not in self._attributes:
            return Missing(key)

        return producer()

    def replace(self, mutator: Callable[[dict[str, Any]], Mapping[str, Any]]) -> None:
        """Rewrite the attributes with the changes returned by ``mutator``.

        ``mutator`` receives a copy of the current attributes and returns a
        mapping of dotted keys to changes, applied in order:

        - a :class:`~dtobox.setter.Setter` is applied at its own key, or at the
          change key when it has none;
        - a :class:`~dtobox.missing.Missing` removes the key;
        - anything else is written at the key. Producers (functions, lambdas,
          methods and ``partial`` objects) are called first, with the current
          value at the key when they accept an argument.

        Classes and callable instances are written as they are, not called.
        The original values are not affected.
        """
        self._check_created()

        result = deepcopy(self._attributes)
        changes = mutator(deepcopy(self._attributes))

        for key, change in changes.items():
            if isinstance(change, Setter):
                if not change.get_key():
                    change.key(key)

                result = change.set(result)
                self._logger.debug('Applied setter at "%s"', change.get_key())
                continue

            if isinstance(change, Missing):
                paths.forget(result, key)
                self._logger.debug('Removed "%s"', key)
                continue

            result = paths.set_path(result, key, paths.value(change, paths.get(self._attributes, key)))
            self._logger.debug('Set "%s"', key)

        self._attributes = result

    def set(self, value: Any | Callable[[Any], Any]) -> Setter:
        """Start a :class:`~dtobox.setter.Setter` for use inside :meth:`replace`."""
        return Setter(value)

    def _lookup(self, source: dict[str, Any], key: str | None) -> Any:
        if not key:
            return None

        if not paths.has(source, key):
            if key not in self.rules():
                raise UnknownPropertyError(f'Property "{key}" does not exist.')

            return Missing(key)

        return paths.get(source, key)

    def _resolved_messages(self) -> dict[str, str]:
        return {**self._inherited('default_messages'), **self.messages()}

    def _resolved_labels(self) -> dict[str, str]:
        return {**self._inherited('default_labels'), **self.labels()}

    @classmethod
    def _inherited(cls, name: str) -> dict[str, str]:
        # Base class defaults first, so subclasses override them per key.
        merged: dict[str, str] = {}
        for klass in reversed(cls.__mro__):
            merged.update(vars(klass).get(name, {}))
        return merged

    def _check_created(self) -> None:
        if not self._created:
            raise NotInitializedError('Must finish creating the data via create().')

    def __getattr__(self, name: str) -> Any:
        # Only reached for names that are not regular attributes.
        if name.startswith('_'):
            raise AttributeError(name)

        return self.get_attribute(name)

    def __repr__(self) -> str:
        if not self._created:
            return f'{type(self).__name__}(<uncreated>)'
        return f'{type(self).__name__}({self._attributes!r})'
