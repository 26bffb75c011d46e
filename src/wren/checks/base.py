"""Duplicate-check protocol and the in-memory registry.

The only contract the form engine relies on: a checker accepts a
candidate value and answers, asynchronously, whether it already exists.
Raising is allowed and means "could not tell", never "duplicate".
"""

import asyncio
from collections.abc import Iterable
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class DuplicateChecker(Protocol):
    """Anything that can answer "is this value already taken?"."""

    async def exists(self, value: Any) -> bool:
        """Return True if *value* is already registered."""
        ...


class InMemoryDuplicateChecker:
    """Duplicate registry backed by a set, with optional simulated latency.

    Useful for demos and tests::

        taken = InMemoryDuplicateChecker({"test@example.com"}, latency=0.8)
        await taken.exists("TEST@example.com")  # True (case-insensitive)

    Every probed value is appended to ``calls`` in arrival order.
    """

    __slots__ = ("_case_sensitive", "_existing", "calls", "latency")

    def __init__(
        self,
        existing: Iterable[str] = (),
        *,
        latency: float = 0.0,
        case_sensitive: bool = False,
    ) -> None:
        self._case_sensitive = case_sensitive
        self._existing = {self._key(v) for v in existing}
        self.latency = latency
        self.calls: list[Any] = []

    def _key(self, value: Any) -> str:
        text = str(value)
        return text if self._case_sensitive else text.lower()

    def add(self, value: str) -> None:
        """Register *value* so later probes report it as taken."""
        self._existing.add(self._key(value))

    async def exists(self, value: Any) -> bool:
        self.calls.append(value)
        if self.latency:
            await asyncio.sleep(self.latency)
        return self._key(value) in self._existing
