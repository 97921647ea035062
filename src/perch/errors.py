"""Perch exception hierarchy.

Shared across the server, route table, and discovery so every module
raises and catches the same types.
"""

from pathlib import Path


class PerchError(Exception):
    """Base for all perch-specific errors."""


class ConfigurationError(PerchError):
    """Raised when server configuration is invalid.

    Typically raised from ``Server.prepare()`` or ``Server.start()``,
    before any connection is accepted.
    """


class HandlerLoadError(ConfigurationError):
    """A handler file under the ``api`` directory could not be registered."""

    def __init__(self, path: str | Path, reason: str) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Cannot load handler file {str(self.path)!r}: {reason}")
