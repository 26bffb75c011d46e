"""Field validation — composable rules, ordered chains, clean results.

Usage::

    from wren.validation import validate, required, max_length, email

    result = validate(values, {
        "title": [required, max_length(200)],
        "email": [required, email],
    })
    if not result:
        show(result.errors)

The stateful form container in ``wren.forms`` evaluates the very same
chains; ``validate()`` is the one-shot, stateless entry point for code
that only needs a verdict (e.g. re-checking a submission server-side).
"""

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from wren.validation.chain import combine, reads_of, run_chain
from wren.validation.result import ValidationResult
from wren.validation.rules import (
    Validator,
    Values,
    accepted,
    email,
    equals_field,
    in_range,
    integer,
    is_blank,
    matches,
    max_length,
    min_age,
    min_length,
    number,
    numeric,
    one_of,
    phone_number,
    required,
    required_if,
    strong_password,
    url,
)

__all__ = [
    "ValidationResult",
    "Validator",
    "Values",
    "accepted",
    "combine",
    "email",
    "equals_field",
    "in_range",
    "integer",
    "is_blank",
    "matches",
    "max_length",
    "min_age",
    "min_length",
    "number",
    "numeric",
    "one_of",
    "phone_number",
    "reads_of",
    "required",
    "required_if",
    "run_chain",
    "strong_password",
    "url",
    "validate",
]


def validate(
    data: Mapping[str, Any],
    rules: Mapping[str, list[Validator] | tuple[Validator, ...]],
) -> ValidationResult:
    """Validate data against a set of chains.

    Args:
        data: Any mapping of field names to values. Missing fields are
            validated as ``None``.
        rules: A mapping of field names to ordered validator lists. Each
            validator returns an error message string on failure, or
            ``None`` on success; the first failure per field wins.

    Returns:
        A ``ValidationResult`` with ``.data`` (values of passing fields)
        and ``.errors`` (field → message).

    Example::

        result = validate({"title": "", "age": "150"}, {
            "title": [required],
            "age": [required, numeric, in_range(1, 120)],
        })
        # result.errors == {"title": "This field is required",
        #                   "age": "Must be between 1 and 120"}
    """
    view = MappingProxyType(dict(data))
    errors: dict[str, str] = {}
    cleaned: dict[str, Any] = {}

    for field_name, validators in rules.items():
        value = view.get(field_name)
        error = run_chain(validators, value, view)
        if error is not None:
            errors[field_name] = error
        else:
            cleaned[field_name] = value

    return ValidationResult(data=cleaned, errors=errors)
