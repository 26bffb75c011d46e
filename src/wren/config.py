"""Form engine configuration.

FormOptions is a frozen dataclass — immutable after creation, shared
safely between every container built from it.
"""

from dataclasses import dataclass
from typing import Literal


@dataclass(frozen=True, slots=True)
class FormOptions:
    """Runtime behaviour of a form container. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        options = FormOptions(debounce_seconds=0.3, revalidate="dependents")
    """

    # Async checks
    debounce_seconds: float = 0.5
    check_timeout: float = 10.0
    block_submit_while_checking: bool = True

    # "form" re-validates every field once anything is touched;
    # "dependents" only re-validates the changed field's dependency closure.
    revalidate: Literal["form", "dependents"] = "form"

    def __post_init__(self) -> None:
        if self.debounce_seconds < 0:
            msg = f"debounce_seconds must be >= 0, got {self.debounce_seconds!r}"
            raise ValueError(msg)
        if self.check_timeout <= 0:
            msg = f"check_timeout must be > 0, got {self.check_timeout!r}"
            raise ValueError(msg)
        if self.revalidate not in ("form", "dependents"):
            msg = f"revalidate must be 'form' or 'dependents', got {self.revalidate!r}"
            raise ValueError(msg)
