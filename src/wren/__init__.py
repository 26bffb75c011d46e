"""Wren — declarative field validation and form state.

Drives the state behind interactive input screens: per-field validator
chains, touched tracking, submission gating, and debounced remote checks
with stale-response suppression. Rendering is somebody else's job; wren
takes events in and hands read-only snapshots out.

Basic usage::

    from wren import FieldSpec, FormConfiguration, create_form
    from wren.validation import email, in_range, numeric, required

    config = FormConfiguration(
        email=FieldSpec(validators=(required, email)),
        age=FieldSpec(validators=(required, numeric, in_range(1, 120))),
    )
    form = create_form(config)
    form.handle_change("email", "a@b.com")
    result = await form.handle_submit(save)

Remote checks (``pip install wren[remote]`` for the HTTP checker)::

    from wren import AsyncCheck
    from wren.checks import HttpDuplicateChecker

    FieldSpec(
        validators=(required, email),
        check=AsyncCheck(HttpDuplicateChecker("https://api.example.com/emails/exists")),
    )
"""

__version__ = "0.1.0"
__all__ = [
    "AsyncCheck",
    "AsyncCheckState",
    "ConfigurationError",
    "FieldSpec",
    "FormConfiguration",
    "FormContainer",
    "FormOptions",
    "FormSnapshot",
    "SubmitResult",
    "SubmitStatus",
    "UnknownFieldError",
    "WrenError",
    "create_form",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import wren`` fast while providing a clean top-level API.
    """
    if name in (
        "AsyncCheck",
        "AsyncCheckState",
        "FieldSpec",
        "FormConfiguration",
        "FormContainer",
        "FormSnapshot",
        "SubmitResult",
        "SubmitStatus",
        "create_form",
    ):
        from wren import forms as _forms

        return getattr(_forms, name)

    if name == "FormOptions":
        from wren.config import FormOptions

        return FormOptions

    if name in ("ConfigurationError", "UnknownFieldError", "WrenError"):
        from wren import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
