"""Debounced remote validation for a single field.

Some fields cannot be judged locally ("is this email already
registered?"). ``AsyncFieldCheck`` owns that round-trip for one field:

1. Every value change calls ``schedule(value)``. The previous debounce
   timer is cancelled and a new one started, so only the last value of a
   burst of keystrokes is ever sent.
2. Nothing is scheduled while the field's own chain fails; a malformed
   address is never sent.
3. When the timer fires the state moves to ``CHECKING`` and the checker
   is awaited (bounded by ``FormOptions.check_timeout``).
4. Each request carries a ``CheckToken``: the generation counter and
   the exact value it was issued for. A response is applied only if its
   token is still the latest *and* the field still holds that value;
   anything else is stale and dropped.
5. A rejection writes the check's message into the form through
   ``set_field_error``; an acceptance clears it. A failed or timed-out
   request falls back to ``IDLE`` so a flaky network never reads as a
   duplicate.

In-flight requests are not cancelled when a new value arrives; their
responses are simply discarded by the staleness guard.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import anyio

from wren._internal.invoke import invoke
from wren.forms.snapshot import AsyncCheckState
from wren.validation.rules import is_blank

if TYPE_CHECKING:
    from wren.forms.container import FormContainer
    from wren.forms.fields import AsyncCheck

logger = logging.getLogger("wren.checks")


@dataclass(frozen=True, slots=True)
class CheckToken:
    """Identity of one scheduled check."""

    generation: int
    value: Any


class AsyncFieldCheck:
    """Single-slot debounced checker bound to one field of one form."""

    __slots__ = (
        "_check",
        "_form",
        "_generation",
        "_in_flight",
        "_posted",
        "_timer",
        "checked_value",
        "field",
        "state",
    )

    def __init__(self, form: FormContainer, field: str, check: AsyncCheck) -> None:
        self._form = form
        self._check = check
        self.field = field
        self.state = AsyncCheckState.IDLE
        self.checked_value: Any = None
        self._generation = 0
        self._timer: asyncio.Task[None] | None = None
        self._in_flight: set[asyncio.Task[Any]] = set()
        self._posted: str | None = None

    @property
    def is_pending(self) -> bool:
        """True while a debounce timer is waiting to fire."""
        return self._timer is not None and not self._timer.done()

    @property
    def message(self) -> str:
        return self._check.message

    def schedule(self, value: Any) -> CheckToken | None:
        """Restart the debounce window for *value*.

        Returns the token of the scheduled check, or ``None`` when the
        value is not eligible (blank, or failing the field's own chain).
        Must be called from inside a running event loop; without one it
        raises ``RuntimeError`` before changing anything.
        """
        loop = asyncio.get_running_loop()
        self._cancel_timer()
        self._generation += 1
        self._clear_posted()
        self.state = AsyncCheckState.IDLE
        self.checked_value = None

        if is_blank(value) or self._form.validate_field(self.field) is not None:
            logger.debug("Skipping remote check for %r: value not locally valid", self.field)
            return None

        token = CheckToken(self._generation, value)
        self._timer = loop.create_task(self._debounced(token))
        return token

    def cancel(self) -> None:
        """Drop the pending timer and every in-flight request."""
        self._cancel_timer()
        for task in list(self._in_flight):
            task.cancel()
        self._in_flight.clear()
        self._generation += 1
        self._posted = None
        self.state = AsyncCheckState.IDLE
        self.checked_value = None

    def repost(self) -> bool:
        """Re-publish a current rejection into the error map.

        Used after a validation pass wiped the synthetic error while the
        rejection still applies to the current value. Returns True if an
        error was posted.
        """
        if self.state is not AsyncCheckState.REJECTED:
            return False
        if self._form.values[self.field] != self.checked_value:
            return False
        self._post(self._check.message)
        return True

    # -- internals ---------------------------------------------------------

    def _cancel_timer(self) -> None:
        if self._timer is not None and not self._timer.done():
            self._timer.cancel()
        self._timer = None

    def _is_stale(self, token: CheckToken) -> bool:
        return token.generation != self._generation or self._form.values[self.field] != token.value

    async def _debounced(self, token: CheckToken) -> None:
        await asyncio.sleep(self._form.options.debounce_seconds)
        # From here on the request belongs to the in-flight set, not the timer slot
        task = asyncio.current_task()
        self._timer = None
        if task is not None:
            self._in_flight.add(task)
        try:
            await self._run(token)
        finally:
            if task is not None:
                self._in_flight.discard(task)

    async def _run(self, token: CheckToken) -> None:
        if self._is_stale(token):
            return
        self.state = AsyncCheckState.CHECKING
        self.checked_value = token.value
        self._form._notify()
        logger.debug("Checking %r for field %r", token.value, self.field)

        try:
            with anyio.fail_after(self._form.options.check_timeout):
                taken = await invoke(self._check.probe(), token.value)
        except Exception as exc:
            if self._is_stale(token):
                logger.debug("Discarding stale failure for %r (%r)", self.field, token.value)
                return
            logger.warning("Remote check for field %r failed: %r", self.field, exc)
            self._settle(token, AsyncCheckState.IDLE)
            return

        if self._is_stale(token):
            logger.debug("Discarding stale result for %r (%r)", self.field, token.value)
            return
        self._settle(token, AsyncCheckState.REJECTED if taken else AsyncCheckState.ACCEPTED)

    def _settle(self, token: CheckToken, state: AsyncCheckState) -> None:
        self.state = state
        self.checked_value = token.value if state is not AsyncCheckState.IDLE else None
        if state is AsyncCheckState.REJECTED:
            self._post(self._check.message)
        else:
            self._clear_posted()
        self._form._notify()

    def _post(self, message: str) -> None:
        self._posted = message
        self._form.set_field_error(self.field, message, notify=False)

    def _clear_posted(self) -> None:
        if self._posted is not None and self._form.errors.get(self.field) == self._posted:
            self._form.set_field_error(self.field, None, notify=False)
        self._posted = None
