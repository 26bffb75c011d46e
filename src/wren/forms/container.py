"""Form state container — the single owner of a form's runtime state.

One container per mounted form. It holds the current values, the error
map, touched flags, and the submission flag; nothing else writes them.
The rendering layer feeds events in and reads snapshots out::

    form = create_form(config)
    unsubscribe = form.subscribe(render)

    form.handle_change("email", "a@b.com")
    form.handle_blur("email")
    result = await form.handle_submit(save_user)

Validation timing:

- ``handle_change`` stores the value and, once *any* field has been
  touched, re-validates the form (every field, or only the changed
  field's dependency closure with ``revalidate="dependents"``). Before
  the first touch nothing is validated, so a fresh form never flashes
  errors.
- ``handle_blur`` touches the field and validates just that field
  against the values as they are at that moment.
- ``handle_submit`` touches everything and runs a full pass whose error
  set *replaces* the previous one.

``is_valid`` is derived from the error map and never stored.
Validator exceptions are programming errors and propagate.
"""

import asyncio
import logging
from collections.abc import Callable, Iterable
from types import MappingProxyType
from typing import Any, TypeAlias

from wren._internal.invoke import invoke
from wren.config import FormOptions
from wren.forms.async_check import AsyncFieldCheck
from wren.forms.fields import FieldSpec, FormConfiguration
from wren.forms.snapshot import AsyncCheckState, FormSnapshot, SubmitResult, SubmitStatus
from wren.validation.chain import run_chain

logger = logging.getLogger("wren.form")

Listener: TypeAlias = Callable[[FormSnapshot], None]
SubmitHandler: TypeAlias = Callable[[dict[str, Any]], Any]


class FormContainer:
    """Stateful validation engine for one form instance."""

    __slots__ = (
        "_checks",
        "_config",
        "_errors",
        "_handlers_running",
        "_listeners",
        "_submit_count",
        "_submit_epoch",
        "_submit_error",
        "_submitting",
        "_touched",
        "_values",
        "options",
    )

    def __init__(self, config: FormConfiguration, options: FormOptions | None = None) -> None:
        self._config = config
        self.options = options or FormOptions()
        self._values: dict[str, Any] = config.initial_values()
        self._errors: dict[str, str] = {}
        self._touched: dict[str, bool] = {}
        self._submitting = False
        self._submit_count = 0
        self._submit_error: BaseException | None = None
        # reset_form() bumps the epoch so a handler started before it cannot
        # clear flags that belong to the fresh state
        self._submit_epoch = 0
        self._handlers_running = 0
        self._listeners: list[Listener] = []
        self._checks: dict[str, AsyncFieldCheck] = {
            name: AsyncFieldCheck(self, name, config[name].check)  # type: ignore[arg-type]
            for name in config.checked_fields()
        }

    # -- read access ---------------------------------------------------------

    @property
    def config(self) -> FormConfiguration:
        return self._config

    @property
    def values(self) -> MappingProxyType[str, Any]:
        return MappingProxyType(self._values)

    @property
    def errors(self) -> MappingProxyType[str, str]:
        return MappingProxyType(self._errors)

    @property
    def touched(self) -> MappingProxyType[str, bool]:
        return MappingProxyType(self._touched)

    @property
    def is_valid(self) -> bool:
        return not self._errors

    @property
    def is_submitting(self) -> bool:
        return self._submitting

    def async_state(self, name: str) -> AsyncCheckState:
        """Remote check state of *name* (``IDLE`` for unchecked fields)."""
        self._require(name)
        check = self._checks.get(name)
        return check.state if check is not None else AsyncCheckState.IDLE

    def snapshot(self) -> FormSnapshot:
        """Freeze the current state for rendering."""
        return FormSnapshot(
            values=MappingProxyType(dict(self._values)),
            errors=MappingProxyType(dict(self._errors)),
            touched=MappingProxyType(dict(self._touched)),
            is_valid=self.is_valid,
            is_submitting=self._submitting,
            async_states=MappingProxyType({name: c.state for name, c in self._checks.items()}),
            pending_checks=frozenset(name for name, c in self._checks.items() if c.is_pending),
            submit_count=self._submit_count,
            submit_error=self._submit_error,
        )

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call *listener* with a fresh snapshot after every state change.

        Returns a function that removes the listener.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # -- validation ----------------------------------------------------------

    def validate_field(self, name: str) -> str | None:
        """Return *name*'s current error, or ``None``. Does not mutate state."""
        spec = self._config[name]
        return run_chain(spec.validators, self._values[name], MappingProxyType(self._values))

    def validate_all(self) -> bool:
        """Full pass over every field. The result replaces the error map."""
        view = MappingProxyType(self._values)
        errors: dict[str, str] = {}
        for name, spec in self._config.items():
            error = run_chain(spec.validators, self._values[name], view)
            if error is not None:
                errors[name] = error
        self._errors = errors
        return not errors

    def validate_fields(self, names: Iterable[str]) -> bool:
        """Validate only *names*, merging their results into the error map.

        Useful for multi-step forms that gate each step on its own fields.
        Returns True when none of *names* has an error.
        """
        ok = True
        for name in names:
            error = self.validate_field(name)
            if error is None:
                self._errors.pop(name, None)
            else:
                self._errors[name] = error
                ok = False
        return ok

    # -- events ----------------------------------------------------------------

    def handle_change(self, name: str, value: Any) -> None:
        """Store a new value for *name* and re-validate if anything is touched."""
        spec = self._config[name]
        check = self._checked(name)
        self._store(spec, name, value)

        if any(self._touched.values()):
            if self.options.revalidate == "dependents":
                self.validate_fields(sorted(self._config.affected_by(name)))
            else:
                self.validate_all()
            self._repost_rejections()

        if check is not None:
            check.schedule(self._values[name])
        self._notify()

    def handle_blur(self, name: str) -> None:
        """Mark *name* touched and show its own error state immediately.

        A remote rejection of the current value survives the blur pass.
        """
        self._require(name)
        self._touched[name] = True
        self.validate_fields((name,))
        self._repost_rejections()
        self._notify()

    async def handle_submit(self, on_valid: SubmitHandler) -> SubmitResult:
        """Validate everything and, if clean, run *on_valid* with the values.

        *on_valid* may be sync or async. Its exceptions are logged and
        returned in the result, never raised; ``is_submitting`` is cleared
        whatever happens.

        A handler still running after ``reset_form()`` keeps blocking new
        submissions until it returns, but no longer touches the flags of
        the reset form.
        """
        if self._submitting or self._handlers_running:
            logger.debug("Submit ignored: a submission is already in progress")
            return SubmitResult(SubmitStatus.IGNORED)

        self._touched = dict.fromkeys(self._config, True)
        valid = self.validate_all()
        # the full pass wiped synthetic errors; the gate puts current rejections back
        blocked_by = self._async_gate()
        if not valid:
            self._notify()
            logger.debug("Submit rejected: %d field error(s)", len(self._errors))
            return SubmitResult(SubmitStatus.INVALID, errors=MappingProxyType(dict(self._errors)))

        if blocked_by:
            self._notify()
            logger.debug("Submit blocked by remote checks: %s", ", ".join(blocked_by))
            return SubmitResult(
                SubmitStatus.BLOCKED,
                errors=MappingProxyType(dict(self._errors)),
                blocked_by=blocked_by,
            )

        epoch = self._submit_epoch
        self._submitting = True
        self._submit_error = None
        self._submit_count += 1
        self._handlers_running += 1
        self._notify()

        status = SubmitStatus.SUBMITTED
        error: BaseException | None = None
        try:
            await invoke(on_valid, dict(self._values))
        except Exception as exc:
            logger.exception("Submit handler failed")
            error = exc
            status = SubmitStatus.FAILED
        finally:
            self._handlers_running -= 1
            if epoch == self._submit_epoch:
                self._submitting = False
                self._submit_error = error
                self._notify()
            else:
                logger.debug("Submit handler finished after the form was reset")

        return SubmitResult(status, error=error)

    # -- escape hatches ----------------------------------------------------------

    def set_field_value(self, name: str, value: Any) -> None:
        """Impose a value without running validation.

        The field's remote check, if any, is rescheduled since any earlier
        result no longer applies.
        """
        spec = self._config[name]
        check = self._checked(name)
        self._store(spec, name, value)
        if check is not None:
            check.schedule(self._values[name])
        self._notify()

    def set_field_error(self, name: str, error: str | None, *, notify: bool = True) -> None:
        """Impose (or with ``None`` clear) an error outside the validator chain."""
        self._require(name)
        if error is None:
            self._errors.pop(name, None)
        else:
            self._errors[name] = error
        if notify:
            self._notify()

    def reset_form(self) -> None:
        """Back to initial values with no errors, no touches, nothing pending."""
        for check in self._checks.values():
            check.cancel()
        self._values = self._config.initial_values()
        self._errors = {}
        self._touched = {}
        self._submitting = False
        self._submit_epoch += 1
        self._submit_count = 0
        self._submit_error = None
        self._notify()

    def close(self) -> None:
        """Tear down: cancel timers and in-flight checks, drop listeners."""
        for check in self._checks.values():
            check.cancel()
        self._listeners.clear()

    # -- internals -----------------------------------------------------------

    def _require(self, name: str) -> FieldSpec:
        """Look up *name*, raising ``UnknownFieldError`` if undeclared."""
        return self._config[name]

    def _store(self, spec: FieldSpec, name: str, value: Any) -> None:
        if spec.normalize is not None:
            value = spec.normalize(value)
        self._values[name] = value

    def _checked(self, name: str) -> AsyncFieldCheck | None:
        """The remote check of *name*, if any.

        Checks are scheduled on the running loop, so a checked field can
        only change inside one; this fails before any state is touched.
        """
        check = self._checks.get(name)
        if check is not None:
            asyncio.get_running_loop()
        return check

    def _repost_rejections(self) -> None:
        for name, check in self._checks.items():
            if name not in self._errors:
                check.repost()

    def _async_gate(self) -> tuple[str, ...]:
        blocked: list[str] = []
        for name, check in self._checks.items():
            if check.state is AsyncCheckState.REJECTED:
                check.repost()
                blocked.append(name)
            elif self.options.block_submit_while_checking and (
                check.is_pending or check.state is AsyncCheckState.CHECKING
            ):
                blocked.append(name)
        return tuple(blocked)

    def _notify(self) -> None:
        if not self._listeners:
            return
        snap = self.snapshot()
        for listener in list(self._listeners):
            listener(snap)


def create_form(config: FormConfiguration, options: FormOptions | None = None) -> FormContainer:
    """Build a fresh container for one activation of a form."""
    return FormContainer(config, options)
