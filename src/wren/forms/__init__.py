"""Form state — declarative fields, a stateful container, async checks.

Usage::

    from wren.forms import FieldSpec, FormConfiguration, create_form
    from wren.validation import email, required

    config = FormConfiguration(
        email=FieldSpec(validators=(required, email)),
    )
    form = create_form(config)
    form.handle_change("email", "a@b.com")
    form.handle_blur("email")
    form.snapshot().errors  # {}
"""

from wren.forms.async_check import AsyncFieldCheck, CheckToken
from wren.forms.container import FormContainer, create_form
from wren.forms.fields import AsyncCheck, FieldSpec, FormConfiguration
from wren.forms.snapshot import AsyncCheckState, FormSnapshot, SubmitResult, SubmitStatus

__all__ = [
    "AsyncCheck",
    "AsyncCheckState",
    "AsyncFieldCheck",
    "CheckToken",
    "FieldSpec",
    "FormConfiguration",
    "FormContainer",
    "FormSnapshot",
    "SubmitResult",
    "SubmitStatus",
    "create_form",
]
