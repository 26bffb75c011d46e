"""Registration — a synchronous form driven by validator chains.

Every rule is local: presence, length, email format, password strength,
password confirmation (cross-field), phone format, and an age range.

Demonstrates:
- ``FormConfiguration`` / ``FieldSpec`` declarations
- ``required`` placed first so format rules never see blank input
- ``equals_field`` re-validating the confirmation when the password changes
- ``handle_submit`` with an async submit handler

Run:
    python form.py
"""

import asyncio
from typing import Any

from wren import FieldSpec, FormConfiguration, FormSnapshot, create_form
from wren.forms import FormContainer
from wren.validation import (
    email,
    equals_field,
    in_range,
    max_length,
    min_length,
    numeric,
    phone_number,
    required,
    strong_password,
)

config = FormConfiguration(
    name=FieldSpec(validators=(required, min_length(2), max_length(20))),
    email=FieldSpec(validators=(required, email)),
    password=FieldSpec(validators=(required, strong_password)),
    confirm_password=FieldSpec(validators=(required, equals_field("password"))),
    phone_number=FieldSpec(validators=(required, phone_number)),
    age=FieldSpec(validators=(required, numeric, in_range(1, 120))),
)

# ---------------------------------------------------------------------------
# In-memory "database"
# ---------------------------------------------------------------------------

registered: list[dict[str, Any]] = []


async def register(values: dict[str, Any]) -> None:
    """Pretend to call a registration API."""
    await asyncio.sleep(0)
    registered.append({"name": values["name"], "email": values["email"]})


def build_form() -> FormContainer:
    return create_form(config)


def render(snapshot: FormSnapshot) -> None:
    for name in config:
        error = snapshot.error_for(name)
        if error:
            print(f"  {name}: {error}")


async def main() -> None:
    form = build_form()
    form.subscribe(render)

    print("Submitting an empty form:")
    await form.handle_submit(register)

    for name, value in {
        "name": "Alice",
        "email": "alice@example.com",
        "password": "Secur3!pass",
        "confirm_password": "Secur3!pass",
        "phone_number": "010-1234-5678",
        "age": "30",
    }.items():
        form.handle_change(name, value)

    result = await form.handle_submit(register)
    print(f"Second attempt: {result.status.value}, registered={registered}")


if __name__ == "__main__":
    asyncio.run(main())
