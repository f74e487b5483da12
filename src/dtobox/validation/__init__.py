"""Default validator and rule registry.

``Data`` only relies on the :class:`Validator` protocol; :class:`RuleValidator`
is used when no other validator is supplied.
"""

# pyright: reportUnusedImport=false
from dtobox.validation import rules
from dtobox.validation.decorator import validation_rule
from dtobox.validation.registry import RuleDefinition, all_registered, get_rule, register
from dtobox.validation.validator import RuleValidator, ValidationError, Validator
