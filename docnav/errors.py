"""Error taxonomy for navigation resolution.

Every error raised while resolving a tree is fatal: nothing in the resolver
recovers from one, and the CLI reports the first one it sees.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any


class NavError(Exception):
    """Base class for resolution failures."""

    def __init__(self, message: str, path: Path | None = None):
        super().__init__(message)
        self.message = message
        self.path = path

    def __str__(self) -> str:
        if self.path is None:
            return self.message
        return f"{self.message} ({self.path})"


class DecodeError(NavError):
    """A malformed nav entry or metadata block."""

    def __init__(self, message: str, value: Any = None, path: Path | None = None):
        super().__init__(message, path)
        self.value = value

    def at(self, path: Path) -> "DecodeError":
        """Return a copy of this error located at `path`."""
        return DecodeError(self.message, value=self.value, path=path)


class StructuralError(NavError):
    """Metadata is well formed but violates a tree invariant."""


class ContentError(NavError):
    """A document body is malformed (e.g. no leading h1)."""


class FileAccessError(NavError):
    """A file or directory could not be read, listed or written."""

    def __init__(self, message: str, path: Path, operation: str):
        super().__init__(message, path)
        self.operation = operation


class ConfigError(ValueError):
    """Invalid or incompatible docnav.toml."""
