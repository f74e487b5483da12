from dataclasses import dataclass
from typing import Any, Callable, List


@dataclass(frozen=True)
class RuleDefinition:
    """Metadata for a named validation rule.

    Attributes
    ----------
    name:
        The name used in rule strings, e.g. ``'min'`` in ``'min:3'``.
    check:
        Called with the field value followed by the rule parameters (as
        strings). Returns whether the value passes.
    message:
        Default message template. ``:attribute`` is replaced by the field
        label and ``:{param}`` by the parameter named in ``param_names``.
    param_names:
        Names of the placeholders for the rule parameters. A placeholder
        named ``values`` receives all parameters joined by ``', '``.
    implicit:
        Implicit rules also run when the field is absent; the check then
        receives a :class:`~dtobox.missing.Missing`.
    split_params:
        When false the parameter string is passed as one parameter (commas
        included), as needed for regular expressions.
    """

    name: str
    check: Callable[..., bool]
    message: str
    param_names: tuple[str, ...] = ()
    implicit: bool = False
    split_params: bool = True


_REGISTRY: dict[str, RuleDefinition] = {}


def register(entry: RuleDefinition, *, allow_override: bool = False) -> None:
    """Register ``entry`` under its name.

    Raises
    ------
    RuntimeError
        When a rule with the same name exists and ``allow_override`` is false.
    """
    if not allow_override and entry.name in _REGISTRY:
        raise RuntimeError(f'Validation rule "{entry.name}" already registered.')

    _REGISTRY[entry.name] = entry


def get_rule(name: str) -> RuleDefinition:
    """Return the rule registered as ``name``; raises ``KeyError`` when unknown."""
    return _REGISTRY[name]


def all_registered() -> List[RuleDefinition]:
    return list(_REGISTRY.values())


def snapshot() -> dict[str, RuleDefinition]:
    return dict(_REGISTRY)


def restore(entries: dict[str, Any]) -> None:
    _REGISTRY.clear()
    _REGISTRY.update(entries)
