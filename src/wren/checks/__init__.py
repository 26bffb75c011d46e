"""Remote duplicate checks — the engine's only external service boundary.

Usage::

    from wren.checks import HttpDuplicateChecker, InMemoryDuplicateChecker

    emails = InMemoryDuplicateChecker({"admin@site.com"})
    remote = HttpDuplicateChecker("https://api.example.com/emails/exists")
"""

from wren.checks.base import DuplicateChecker, InMemoryDuplicateChecker
from wren.checks.http import HttpDuplicateChecker

__all__ = [
    "DuplicateChecker",
    "HttpDuplicateChecker",
    "InMemoryDuplicateChecker",
]
