"""Validator chains — ordered, short-circuiting evaluation.

A chain is a sequence of validators run left to right. The first
non-``None`` message wins and later validators are skipped, so a
``required`` check placed first keeps format rules from ever seeing an
empty value.

Chains are pure: the same ``(value, values)`` pair always produces the
same result. Exceptions raised by a validator are programming errors and
propagate unchanged.
"""

from collections.abc import Iterable
from typing import Any

from wren.validation.rules import Validator, Values


def run_chain(validators: Iterable[Validator], value: Any, values: Values) -> str | None:
    """Return the first error produced by *validators*, or ``None``."""
    for validator in validators:
        error = validator(value, values)
        if error is not None:
            return error
    return None


def reads_of(validators: Iterable[Validator]) -> frozenset[str]:
    """Collect the sibling fields a chain declares it reads."""
    names: set[str] = set()
    for validator in validators:
        names.update(getattr(validator, "reads", ()))
    return frozenset(names)


def combine(*validators: Validator) -> Validator:
    """Compose several validators into one.

    The combined validator behaves like a chain and advertises the union
    of its parts' ``reads``::

        password_rules = combine(required, min_length(8), strong_password)
    """

    def check(value: Any, values: Values | None = None) -> str | None:
        return run_chain(validators, value, values if values is not None else {})

    check.reads = tuple(sorted(reads_of(validators)))  # type: ignore[attr-defined]
    return check
