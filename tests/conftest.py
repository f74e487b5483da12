from collections.abc import Iterator

import pytest


@pytest.fixture(autouse=True)
def reset_rule_registry() -> Iterator[None]:
    """Restore the module-level rule registry to the built-in rules after each test."""
    import dtobox.validation.registry as registry

    builtin_rules = registry.snapshot()

    yield

    registry.restore(builtin_rules)
