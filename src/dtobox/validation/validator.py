from logging import getLogger
from typing import Any, Callable, Iterable, Mapping, Protocol

from dtobox import paths
from dtobox.missing import Missing
from dtobox.validation.decorator import DEFAULT_MESSAGE
from dtobox.validation.registry import RuleDefinition, get_rule
from dtobox.validation.rules import is_empty

logger = getLogger(__name__)

type RuleSpec = str | Callable[[Any], bool] | Iterable[str | Callable[[Any], bool]]


class ValidationError(Exception):
    """Raised when input data fails validation.

    Attributes
    ----------
    errors:
        Failure messages per field, in rules order.
    """

    errors: dict[str, list[str]]

    def __init__(self, errors: Mapping[str, list[str]]) -> None:
        self.errors = {field: list(messages) for field, messages in errors.items()}
        lines = [message for messages in self.errors.values() for message in messages]
        super().__init__('The given data was invalid:\n' + '\n'.join(lines))

    def first(self, field: str) -> str | None:
        messages = self.errors.get(field)
        return messages[0] if messages else None


class Validator(Protocol):
    def validate(
        self,
        data: Mapping[str, Any],
        rules: Mapping[str, Any],
        messages: Mapping[str, str],
        labels: Mapping[str, str],
    ) -> dict[str, Any]:
        """Return the validated subset of ``data`` or raise :class:`ValidationError`."""
        ...


class _ParsedRule:
    def __init__(self, definition: RuleDefinition, params: list[str]) -> None:
        self.definition = definition
        self.params = params

    @property
    def name(self) -> str:
        return self.definition.name


class RuleValidator:
    """Validates a mapping against string rules from the rule registry.

    Each field in ``rules`` maps to a ``'|'``-separated string or a list of
    rule strings and callables, e.g. ``{'name': ['required', 'string',
    'max:255']}``. Field keys may be dotted to address nested input.

    Only fields that have rules and are present in ``data`` end up in the
    result. Absent fields run implicit rules only (``required``,
    ``present``); with ``sometimes`` they are skipped entirely. A ``None``
    value on a ``nullable`` field is checked by implicit rules only.
    """

    def validate(
        self,
        data: Mapping[str, Any],
        rules: Mapping[str, Any],
        messages: Mapping[str, str],
        labels: Mapping[str, str],
    ) -> dict[str, Any]:
        validated: dict[str, Any] = {}
        errors: dict[str, list[str]] = {}

        for field, field_rules in rules.items():
            parsed = self._parse(field_rules)
            names = {rule.name for rule in parsed}

            present = paths.has(data, field)
            value = paths.get(data, field) if present else Missing(field)

            if not present and 'sometimes' in names:
                continue

            nullable = 'nullable' in names
            failures: list[str] = []
            for rule in parsed:
                if not self._applies(rule, value, nullable):
                    continue
                if rule.definition.check(value, *rule.params):
                    continue

                failures.append(self._message(field, rule, messages, labels))
                # A failed presence check makes the remaining rules moot.
                if rule.definition.implicit:
                    break

            if failures:
                errors[field] = failures
            elif present:
                validated = paths.set_path(validated, field, value)

        if errors:
            logger.debug('Validation failed for fields: %s', ', '.join(errors))
            raise ValidationError(errors)

        return validated

    def _applies(self, rule: _ParsedRule, value: Any, nullable: bool) -> bool:
        if rule.definition.implicit:
            return True
        if isinstance(value, Missing):
            return False
        if value is None and nullable:
            return False
        # Blank strings are only checked by implicit rules.
        if isinstance(value, str) and is_empty(value):
            return False
        return True

    def _parse(self, field_rules: RuleSpec) -> list[_ParsedRule]:
        if isinstance(field_rules, str):
            field_rules = [part for part in field_rules.split('|') if part]
        elif callable(field_rules):
            field_rules = [field_rules]

        parsed: list[_ParsedRule] = []
        for rule in field_rules:
            if callable(rule):
                parsed.append(_ParsedRule(_callable_definition(rule), []))
                continue

            name, _, param_string = rule.partition(':')
            try:
                definition = get_rule(name)
            except KeyError:
                logger.debug('Unknown validation rule "%s"', name)
                raise ValueError(f'Validation rule "{name}" does not exist.') from None

            if not param_string:
                params = []
            elif definition.split_params:
                params = param_string.split(',')
            else:
                params = [param_string]

            parsed.append(_ParsedRule(definition, params))

        return parsed

    def _message(
        self,
        field: str,
        rule: _ParsedRule,
        messages: Mapping[str, str],
        labels: Mapping[str, str],
    ) -> str:
        template = (
            messages.get(f'{field}.{rule.name}')
            or messages.get(rule.name)
            or rule.definition.message
        )

        placeholders: dict[str, str] = {}
        for index, param_name in enumerate(rule.definition.param_names):
            if param_name == 'values':
                placeholders[param_name] = ', '.join(rule.params[index:])
            elif index < len(rule.params):
                placeholders[param_name] = rule.params[index]

        text = template.replace(':attribute', labels.get(field, field.replace('_', ' ')))
        for param_name, replacement in placeholders.items():
            text = text.replace(f':{param_name}', replacement)

        return text


def _callable_definition(check: Callable[[Any], bool]) -> RuleDefinition:
    return RuleDefinition(
        name=getattr(check, '__name__', 'callable'),
        check=check,
        message=DEFAULT_MESSAGE,
    )
