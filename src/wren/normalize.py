"""Input normalizers — reshape raw input before it is stored.

A normalizer is a plain ``(value) -> value`` callable attached to a
``FieldSpec``. The container applies it to every incoming value, so
validators and async checks only ever see the normalized form::

    "phone": FieldSpec(validators=(required, phone_number), normalize=format_phone_number)
"""

import re
from typing import Any

_NON_DIGIT_RE = re.compile(r"\D")


def format_phone_number(value: Any) -> Any:
    """Render an 11-digit mobile number as ``010-1234-5678``.

    Anything that does not reduce to exactly 11 digits is returned
    unchanged so partial input stays editable.
    """
    if not isinstance(value, str):
        return value
    digits = _NON_DIGIT_RE.sub("", value)
    if len(digits) == 11:
        return f"{digits[:3]}-{digits[3:7]}-{digits[7:]}"
    return value


def strip(value: Any) -> Any:
    """Trim surrounding whitespace from strings."""
    if isinstance(value, str):
        return value.strip()
    return value


def lower(value: Any) -> Any:
    """Lower-case strings (e.g. email addresses before a duplicate check)."""
    if isinstance(value, str):
        return value.lower()
    return value
