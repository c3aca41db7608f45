from __future__ import annotations

from pathlib import Path


class PokeError(Exception):
    """Base class for errors raised by poke."""


class LoadError(PokeError):
    """The request file could not be turned into a usable document."""

    def __init__(self, message: str, path: Path | None = None) -> None:
        super().__init__(message)
        self.path = path


class ExecutionError(PokeError):
    """A single request could not be completed."""
