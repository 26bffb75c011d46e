"""Built-in validation rules for wren forms.

Each validator is a callable with the signature::

    def rule(value: Any, values: Values | None = None) -> str | None:
        '''Return error message, or None if valid.'''

``values`` is a read-only view of every field in the form, so cross-field
rules can read their siblings. Single-field rules simply ignore it.

Parameterized validators are factory functions that return a validator::

    def max_length(n: int) -> Validator:
        def check(value, values=None):
            if not is_blank(value) and len(str(value)) > n:
                return f"Must be at most {n} characters"
            return None
        return check

Format rules return ``None`` on blank input and leave absence to
``required``, so a chain always reads ``[required, <format>, ...]``.

Cross-field factories tag the returned validator with a ``reads`` tuple
naming the sibling fields it consults. ``FormConfiguration`` uses that to
build its dependency graph.
"""

import re
from collections.abc import Callable, Mapping, Sized
from datetime import date
from typing import Any, TypeAlias

Values: TypeAlias = Mapping[str, Any]

# Type alias for a validator function
Validator: TypeAlias = Callable[[Any, Values], str | None]


def is_blank(value: Any) -> bool:
    """True for ``None``, whitespace-only strings, and empty collections."""
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, Sized):
        return len(value) == 0
    return False


def _reads(check: Validator, *fields: str) -> Validator:
    check.reads = fields  # type: ignore[attr-defined]
    return check


# ---------------------------------------------------------------------------
# Presence
# ---------------------------------------------------------------------------


def required(value: Any, values: Values | None = None) -> str | None:
    """Field must be present and non-empty."""
    if is_blank(value):
        return "This field is required"
    return None


def required_if(other: str, expected: Any, message: str | None = None) -> Validator:
    """Field is required only while *other* holds *expected*.

    Typical use: an address is mandatory when the delivery method is
    ``"delivery"`` and irrelevant for ``"pickup"``.
    """

    def check(value: Any, values: Values | None = None) -> str | None:
        if values is None or values.get(other) != expected:
            return None
        if is_blank(value):
            return message or "This field is required"
        return None

    return _reads(check, other)


def accepted(value: Any, values: Values | None = None) -> str | None:
    """Value must be ``True`` (mandatory consent checkbox)."""
    if value is not True:
        return "You must accept to continue"
    return None


# ---------------------------------------------------------------------------
# Length
# ---------------------------------------------------------------------------


def max_length(n: int) -> Validator:
    """String must be at most *n* characters."""

    def check(value: Any, values: Values | None = None) -> str | None:
        if not is_blank(value) and len(str(value)) > n:
            return f"Must be at most {n} characters"
        return None

    return check


def min_length(n: int) -> Validator:
    """String must be at least *n* characters."""

    def check(value: Any, values: Values | None = None) -> str | None:
        if not is_blank(value) and len(str(value)) < n:
            return f"Must be at least {n} characters"
        return None

    return check


# ---------------------------------------------------------------------------
# Format
# ---------------------------------------------------------------------------

# Basic email pattern — checks structure, not deliverability
_EMAIL_RE = re.compile(r"^[a-zA-Z0-9._%+\-]+@[a-zA-Z0-9.\-]+\.[a-zA-Z]{2,}$")


def email(value: Any, values: Values | None = None) -> str | None:
    """Value must be a valid email address (basic format check)."""
    if is_blank(value):
        return None
    if not _EMAIL_RE.match(str(value)):
        return "Must be a valid email address"
    return None


# Basic URL pattern — checks scheme + host structure
_URL_RE = re.compile(r"^https?://[^\s/$.?#].\S*$", re.IGNORECASE)


def url(value: Any, values: Values | None = None) -> str | None:
    """Value must be a valid URL (http/https)."""
    if is_blank(value):
        return None
    if not _URL_RE.match(str(value)):
        return "Must be a valid URL"
    return None


def matches(pattern: str, message: str | None = None) -> Validator:
    """Value must match the given regex pattern."""
    compiled = re.compile(pattern)

    def check(value: Any, values: Values | None = None) -> str | None:
        if is_blank(value):
            return None
        if not compiled.match(str(value)):
            return message or f"Must match pattern: {pattern}"
        return None

    return check


_PHONE_RE = re.compile(r"^01[016789]-?\d{3,4}-?\d{4}$")


def phone_number(value: Any, values: Values | None = None) -> str | None:
    """Value must be a mobile number such as ``010-1234-5678``.

    Whitespace is ignored; the dashes are optional.
    """
    if is_blank(value):
        return None
    if not _PHONE_RE.match(re.sub(r"\s", "", str(value))):
        return "Must be a valid phone number (e.g. 010-1234-5678)"
    return None


_SPECIAL_RE = re.compile(r"""[!@#$%^&*(),.?":{}|<>]""")


def strong_password(value: Any, values: Values | None = None) -> str | None:
    """At least 8 characters mixing upper, lower, digit, and special."""
    if is_blank(value):
        return None
    text = str(value)
    if len(text) < 8:
        return "Password must be at least 8 characters"
    has_upper = any(c.isupper() for c in text)
    has_lower = any(c.islower() for c in text)
    has_digit = any(c.isdigit() for c in text)
    if not (has_upper and has_lower and has_digit and _SPECIAL_RE.search(text)):
        return "Password must contain upper and lower case letters, a number, and a special character"
    return None


# ---------------------------------------------------------------------------
# Choice
# ---------------------------------------------------------------------------


def one_of(*choices: str) -> Validator:
    """Value must be one of the given choices."""
    allowed = frozenset(choices)

    def check(value: Any, values: Values | None = None) -> str | None:
        if is_blank(value):
            return None
        if value not in allowed:
            options = ", ".join(sorted(allowed))
            return f"Must be one of: {options}"
        return None

    return check


# ---------------------------------------------------------------------------
# Type coercion
# ---------------------------------------------------------------------------


def integer(value: Any, values: Values | None = None) -> str | None:
    """Value must be a valid integer."""
    if is_blank(value):
        return None
    try:
        int(value)
    except (ValueError, TypeError):
        return "Must be a whole number"
    return None


def number(value: Any, values: Values | None = None) -> str | None:
    """Value must be a valid number (int or float)."""
    if is_blank(value):
        return None
    try:
        float(value)
    except (ValueError, TypeError):
        return "Must be a number"
    return None


_DIGITS_RE = re.compile(r"^\d+$")


def numeric(value: Any, values: Values | None = None) -> str | None:
    """Value must consist of digits only."""
    if is_blank(value):
        return None
    if not _DIGITS_RE.match(str(value)):
        return "Only digits are allowed"
    return None


def in_range(low: float, high: float) -> Validator:
    """Numeric value must lie within ``[low, high]``.

    Non-numeric input passes; pair with ``numeric`` or ``number``.
    """

    def check(value: Any, values: Values | None = None) -> str | None:
        if is_blank(value):
            return None
        try:
            n = float(value)
        except (ValueError, TypeError):
            return None
        if n < low or n > high:
            return f"Must be between {low:g} and {high:g}"
        return None

    return check


def min_age(years: int, today: date | None = None) -> Validator:
    """ISO birth date (``YYYY-MM-DD``) must be at least *years* ago.

    *today* pins the reference date; by default it is read on each call.
    """

    def check(value: Any, values: Values | None = None) -> str | None:
        if is_blank(value):
            return None
        try:
            born = value if isinstance(value, date) else date.fromisoformat(str(value))
        except ValueError:
            return "Must be a valid date"
        ref = today or date.today()
        age = ref.year - born.year - ((ref.month, ref.day) < (born.month, born.day))
        if age < years:
            return f"You must be at least {years} years old"
        return None

    return check


# ---------------------------------------------------------------------------
# Cross-field
# ---------------------------------------------------------------------------


def equals_field(other: str, message: str | None = None) -> Validator:
    """Value must equal the current value of field *other*.

    Used for password confirmation::

        "confirm_password": FieldSpec(validators=(required, equals_field("password")))
    """

    def check(value: Any, values: Values | None = None) -> str | None:
        if is_blank(value):
            return None
        if values is None or value != values.get(other):
            return message or "Passwords do not match"
        return None

    return _reads(check, other)
