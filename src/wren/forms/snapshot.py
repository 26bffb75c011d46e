"""Read-only views handed to the rendering layer.

The container is the only writer of form state. Everything it hands out
is a frozen snapshot: ``FormSnapshot`` after every state change and
``SubmitResult`` from each submit attempt.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any

_EMPTY: Mapping[str, Any] = MappingProxyType({})


class AsyncCheckState(Enum):
    """Lifecycle of a field's remote check.

    IDLE: No result for the current value (never checked, debouncing,
        chain failing, or the last check errored).
    CHECKING: A request for the current value is outstanding.
    ACCEPTED: The remote side reported the current value as free.
    REJECTED: The remote side reported the current value as taken.
    """

    IDLE = "idle"
    CHECKING = "checking"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


class SubmitStatus(Enum):
    """Outcome of ``FormContainer.handle_submit()``."""

    IGNORED = "ignored"  # a submission was already in progress
    INVALID = "invalid"  # the full validation pass produced errors
    BLOCKED = "blocked"  # a remote check is rejected or still running
    SUBMITTED = "submitted"  # the submit handler completed
    FAILED = "failed"  # the submit handler raised


@dataclass(frozen=True, slots=True)
class FormSnapshot:
    """Immutable picture of a form at one instant.

    ``errors`` holds every field currently failing; whether to show an
    error is up to the renderer, and ``error_for()`` applies the usual
    rule of only showing errors for touched fields.
    """

    values: Mapping[str, Any]
    errors: Mapping[str, str]
    touched: Mapping[str, bool]
    is_valid: bool
    is_submitting: bool
    async_states: Mapping[str, AsyncCheckState] = field(default_factory=lambda: _EMPTY)
    pending_checks: frozenset[str] = frozenset()
    submit_count: int = 0
    submit_error: BaseException | None = None

    def error_for(self, name: str) -> str | None:
        """Error to display for *name*: ``None`` until the field is touched."""
        if not self.touched.get(name, False):
            return None
        return self.errors.get(name)

    @property
    def is_checking(self) -> bool:
        """True while any remote check is debouncing or in flight."""
        return bool(self.pending_checks) or any(
            state is AsyncCheckState.CHECKING for state in self.async_states.values()
        )

    @property
    def can_submit(self) -> bool:
        """Whether a submit button should be enabled."""
        if not self.is_valid or self.is_submitting or self.is_checking:
            return False
        return all(state is not AsyncCheckState.REJECTED for state in self.async_states.values())


@dataclass(frozen=True, slots=True)
class SubmitResult:
    """The outcome of one submit attempt.

    Truthy only when the submit handler ran to completion::

        result = await form.handle_submit(save)
        if not result:
            flash(result.status.value)
    """

    status: SubmitStatus
    errors: Mapping[str, str] = field(default_factory=lambda: _EMPTY)
    blocked_by: tuple[str, ...] = ()
    error: BaseException | None = None

    def __bool__(self) -> bool:
        return self.status is SubmitStatus.SUBMITTED
