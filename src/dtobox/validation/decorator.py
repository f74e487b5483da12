from typing import Callable, overload

from dtobox.validation.registry import RuleDefinition, register

DEFAULT_MESSAGE = 'The :attribute field is invalid.'


@overload
def validation_rule(
    name: str | None = None,
    *,
    message: str = DEFAULT_MESSAGE,
    param_names: tuple[str, ...] = (),
    implicit: bool = False,
    split_params: bool = True,
    allow_override: bool = False,
) -> Callable[[Callable[..., bool]], Callable[..., bool]]: ...
@overload
def validation_rule(name: Callable[..., bool]) -> Callable[..., bool]: ...


def validation_rule(
    name: str | Callable[..., bool] | None = None,
    *,
    message: str = DEFAULT_MESSAGE,
    param_names: tuple[str, ...] = (),
    implicit: bool = False,
    split_params: bool = True,
    allow_override: bool = False,
) -> Callable[[Callable[..., bool]], Callable[..., bool]] | Callable[..., bool]:
    '''Decorator registering a function as a named validation rule.

    The decorated function receives the field value followed by the rule
    parameters and returns whether the value passes. It is returned
    unchanged, so it can still be called directly.

    Parameters
    ----------
    name : str | None
        Rule name used in rule strings. When omitted the function name is
        used, by default None
    message : str
        Default message template.
    param_names : tuple[str, ...]
        Placeholder names for the rule parameters.
    implicit : bool
        Whether the rule runs for absent fields.
    split_params : bool
        Whether the parameter string is split on commas.
    allow_override : bool
        Whether an existing rule of the same name may be replaced.

    Returns
    -------
    Callable[[Callable[..., bool]], Callable[..., bool]]
        A decorator which registers the given function.

    Raises
    ------
    RuntimeError
        When the name is taken and ``allow_override`` is false.
    '''

    explicit_name = None if callable(name) else name

    def decorator(func: Callable[..., bool]) -> Callable[..., bool]:
        # Registration occurs at decoration time
        register(
            RuleDefinition(
                name=explicit_name or func.__name__,
                check=func,
                message=message,
                param_names=param_names,
                implicit=implicit,
                split_params=split_params,
            ),
            allow_override=allow_override,
        )
        return func

    if callable(name):
        return decorator(name)

    return decorator
