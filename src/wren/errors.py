"""Wren exception hierarchy.

Shared across the validation layer, the form container, and the remote
check boundary so every module raises and catches the same types.

Field validation failures are *not* exceptions: they are messages stored
in a form's error map. Only programming errors and boundary failures are
raised.
"""


class WrenError(Exception):
    """Base for all wren-specific errors."""


class ConfigurationError(WrenError):
    """Raised when a form configuration is invalid.

    Typically raised while building a ``FormConfiguration``, before any
    container exists.
    """


class UnknownFieldError(WrenError, KeyError):  # noqa: N818
    """Raised when an event names a field the configuration does not declare."""

    def __init__(self, field: str) -> None:
        self.field = field
        super().__init__(f"Unknown field: {field!r}")

    def __str__(self) -> str:
        return self.args[0]


class CheckerNotInstalledError(WrenError):
    """Raised when httpx is not installed."""


class RemoteCheckError(WrenError):
    """Raised when a remote duplicate-check endpoint returns an error."""

    def __init__(self, url: str, status: int, detail: str) -> None:
        self.url = url
        self.status = status
        self.detail = detail
        super().__init__(f"{url} returned {status}: {detail}")
