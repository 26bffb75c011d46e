"""Field declarations and the immutable form configuration.

``FieldSpec`` is the frozen definition of one field (like a route
definition); ``FormConfiguration`` is the compiled, read-only table of
every field in a form plus the static dependency graph derived from
cross-field validators.

Usage::

    config = FormConfiguration(
        password=FieldSpec(validators=(required, strong_password)),
        confirm_password=FieldSpec(validators=(required, equals_field("password"))),
    )
    config.affected_by("password")  # frozenset({"password", "confirm_password"})
"""

import copy
from collections import deque
from collections.abc import Callable, Iterator, Mapping
from dataclasses import dataclass
from typing import Any

from wren.errors import ConfigurationError, UnknownFieldError
from wren.validation.chain import reads_of
from wren.validation.rules import Validator


@dataclass(frozen=True, slots=True)
class AsyncCheck:
    """Remote check declaration for a field.

    Attributes:
        checker: A ``DuplicateChecker`` (anything with ``exists(value)``)
            or a plain sync/async callable returning ``True`` when the
            value is already taken.
        message: Error written to the field when the check rejects it.
    """

    checker: Any
    message: str = "Already in use"

    def probe(self) -> Callable[[Any], Any]:
        """The callable that performs the remote lookup."""
        return getattr(self.checker, "exists", self.checker)


@dataclass(frozen=True, slots=True)
class FieldSpec:
    """Static declaration of a field's initial value and validator chain.

    Attributes:
        initial: Value the field starts with and returns to on reset.
        validators: Ordered chain; the first error wins.
        normalize: Optional ``(value) -> value`` applied to every incoming
            value before it is stored.
        depends_on: Sibling fields this field's validators read, in
            addition to whatever the validators advertise via ``reads``.
        check: Optional remote check run after the chain passes.
    """

    initial: Any = ""
    validators: tuple[Validator, ...] = ()
    normalize: Callable[[Any], Any] | None = None
    depends_on: tuple[str, ...] = ()
    check: AsyncCheck | None = None

    def __post_init__(self) -> None:
        # Accept lists for convenience; store tuples so the spec stays immutable
        object.__setattr__(self, "validators", tuple(self.validators))
        object.__setattr__(self, "depends_on", tuple(self.depends_on))

    @property
    def reads(self) -> frozenset[str]:
        """Every sibling field this field's chain consults."""
        return frozenset(self.depends_on) | reads_of(self.validators)


class FormConfiguration(Mapping[str, FieldSpec]):
    """Read-only mapping of field name → ``FieldSpec``.

    Built once per form definition and never mutated. Construction
    validates the field table and compiles the reverse dependency index
    used to re-validate only the fields a change can affect.
    """

    __slots__ = ("_dependents", "_fields")

    def __init__(
        self,
        fields: Mapping[str, FieldSpec] | None = None,
        /,
        **kwargs: FieldSpec,
    ) -> None:
        table: dict[str, FieldSpec] = {**(fields or {}), **kwargs}
        if not table:
            msg = "A form configuration needs at least one field"
            raise ConfigurationError(msg)

        for name, spec in table.items():
            if not isinstance(spec, FieldSpec):
                msg = f"Field {name!r} must be declared with FieldSpec, got {type(spec).__name__}"
                raise ConfigurationError(msg)
            unknown = spec.reads - table.keys()
            if unknown:
                missing = ", ".join(sorted(unknown))
                msg = f"Field {name!r} depends on undeclared field(s): {missing}"
                raise ConfigurationError(msg)

        # source field -> fields whose validators read it
        dependents: dict[str, set[str]] = {name: set() for name in table}
        for name, spec in table.items():
            for source in spec.reads:
                dependents[source].add(name)

        self._fields = table
        self._dependents = {name: frozenset(deps) for name, deps in dependents.items()}

    def __getitem__(self, name: str) -> FieldSpec:
        try:
            return self._fields[name]
        except KeyError:
            raise UnknownFieldError(name) from None

    def __iter__(self) -> Iterator[str]:
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    def __repr__(self) -> str:
        return f"FormConfiguration({', '.join(self._fields)})"

    def initial_values(self) -> dict[str, Any]:
        """Fresh copy of every field's initial value."""
        return {name: copy.deepcopy(spec.initial) for name, spec in self._fields.items()}

    def dependents_of(self, name: str) -> frozenset[str]:
        """Fields whose validators read *name* directly."""
        if name not in self._fields:
            raise UnknownFieldError(name)
        return self._dependents[name]

    def affected_by(self, name: str) -> frozenset[str]:
        """*name* plus every field that transitively depends on it.

        Cycles (a ↔ b) are safe: each field is visited once.
        """
        if name not in self._fields:
            raise UnknownFieldError(name)
        seen = {name}
        queue = deque([name])
        while queue:
            current = queue.popleft()
            for dependent in self._dependents[current]:
                if dependent not in seen:
                    seen.add(dependent)
                    queue.append(dependent)
        return frozenset(seen)

    def checked_fields(self) -> tuple[str, ...]:
        """Names of fields that declare a remote check, in declaration order."""
        return tuple(name for name, spec in self._fields.items() if spec.check is not None)
