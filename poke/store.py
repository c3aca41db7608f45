from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path
from typing import overload

from .errors import LoadError
from .models import Document, ParseDiagnostic, Request
from .parsing import parse
from .variables import resolve

logger = logging.getLogger(__name__)


class RequestStore(Sequence[Request]):
    """Read-only, ordered view over the resolved requests of one loaded file."""

    def __init__(self, document: Document, path: Path | None = None) -> None:
        self._document = document
        self._requests = document.requests
        self.path = path

    @overload
    def __getitem__(self, index: int) -> Request: ...

    @overload
    def __getitem__(self, index: slice) -> Sequence[Request]: ...

    def __getitem__(self, index):
        return self._requests[index]

    def __len__(self) -> int:
        return len(self._requests)

    def get(self, index: int) -> Request | None:
        if 0 <= index < len(self._requests):
            return self._requests[index]
        return None

    @property
    def document(self) -> Document:
        return self._document

    @property
    def variables(self) -> dict[str, str]:
        return dict(self._document.variables)

    @property
    def diagnostics(self) -> tuple[ParseDiagnostic, ...]:
        return self._document.diagnostics

    @classmethod
    def from_text(cls, text: str, path: Path | None = None) -> RequestStore:
        return cls(resolve(parse(text)), path=path)


def load_store(path: Path) -> RequestStore:
    """Read, parse and resolve a ``.http`` file.

    Raises :class:`LoadError` when the file cannot be read or contains no
    request that parses.
    """
    path = Path(path).expanduser()
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise LoadError(f"File not found: {path}", path) from None
    except UnicodeDecodeError as exc:
        raise LoadError(f"{path} is not valid UTF-8: {exc.reason}", path) from exc
    except OSError as exc:
        raise LoadError(f"Could not read {path}: {exc.strerror or exc}", path) from exc

    store = RequestStore.from_text(text, path=path)
    for diagnostic in store.diagnostics:
        logger.warning("%s:%s", path, diagnostic)
    if not store:
        details = f" ({len(store.diagnostics)} malformed block(s))" if store.diagnostics else ""
        raise LoadError(f"No requests found in {path}{details}", path)
    logger.debug("Loaded %d request(s) from %s", len(store), path)
    return store
