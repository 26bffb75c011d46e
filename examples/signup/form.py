"""Signup — remote duplicate check, formatted input, consent checkboxes.

The email field is checked against a (simulated, 0.8 s latency) registry
of existing accounts once the user stops typing. The phone number is
reformatted as it is entered, the birth date must be at least 14 years
back, and the mandatory terms box must be ticked.

Demonstrates:
- ``AsyncCheck`` with ``InMemoryDuplicateChecker``
- ``FormOptions(debounce_seconds=...)``
- ``normalize=format_phone_number``
- ``accepted`` and ``min_age`` rules
- submission blocked while the email is being checked or is taken

Run:
    python form.py
"""

import asyncio
from typing import Any

from wren import AsyncCheck, FieldSpec, FormConfiguration, FormOptions, create_form
from wren.checks import InMemoryDuplicateChecker
from wren.forms import FormContainer
from wren.normalize import format_phone_number, strip
from wren.validation import (
    accepted,
    email,
    equals_field,
    matches,
    max_length,
    min_age,
    min_length,
    phone_number,
    required,
)

EXISTING_EMAILS = ("test@example.com", "user@test.com", "admin@site.com")

email_registry = InMemoryDuplicateChecker(EXISTING_EMAILS, latency=0.8)

config = FormConfiguration(
    email=FieldSpec(
        validators=(required, email, max_length(50)),
        normalize=strip,
        check=AsyncCheck(email_registry, message="This email is already registered"),
    ),
    password=FieldSpec(
        validators=(
            required,
            min_length(8),
            matches(
                r"^(?=.*[A-Za-z])(?=.*\d)(?=.*[@$!%*#?&])",
                message="Must contain a letter, a number, and a special character",
            ),
        ),
    ),
    password_confirm=FieldSpec(validators=(required, equals_field("password"))),
    name=FieldSpec(
        validators=(
            required,
            min_length(2),
            max_length(10),
            matches(r"^[가-힣a-zA-Z\s]+$", message="Only letters are allowed"),
        ),
    ),
    phone=FieldSpec(validators=(required, phone_number), normalize=format_phone_number),
    birth_date=FieldSpec(validators=(required, min_age(14))),
    terms_required=FieldSpec(initial=False, validators=(accepted,)),
    terms_optional=FieldSpec(initial=False),
)

options = FormOptions(debounce_seconds=0.5)

accounts: list[dict[str, Any]] = []


async def create_account(values: dict[str, Any]) -> None:
    """Pretend to call the signup API, then remember the email as taken."""
    await asyncio.sleep(0)
    accounts.append(values)
    email_registry.add(values["email"])


def build_form(form_options: FormOptions | None = None) -> FormContainer:
    return create_form(config, form_options or options)


async def main() -> None:
    form = build_form()
    form.subscribe(lambda snap: print(f"  email check: {snap.async_states['email'].value}"))

    form.handle_change("email", "test@example.com")
    await asyncio.sleep(1.5)
    print(f"Error shown for email: {form.errors.get('email')}")

    form.handle_change("email", "new@example.com")
    for name, value in {
        "password": "abcd1234!",
        "password_confirm": "abcd1234!",
        "name": "Alice",
        "phone": "01012345678",
        "birth_date": "1990-05-17",
        "terms_required": True,
    }.items():
        form.handle_change(name, value)
    await asyncio.sleep(1.5)

    result = await form.handle_submit(create_account)
    print(f"Submit: {result.status.value}, phone stored as {form.values['phone']}")
    form.close()


if __name__ == "__main__":
    asyncio.run(main())
