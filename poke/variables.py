from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import replace

from .models import Document, Request

PLACEHOLDER_RE = re.compile(r"\{\{\s*(\w+)\s*\}\}")


def placeholders(*texts: str) -> list[str]:
    """Variable names referenced in ``texts``, in first-seen order."""
    names: list[str] = []
    for text in texts:
        for match in PLACEHOLDER_RE.finditer(text):
            if match.group(1) not in names:
                names.append(match.group(1))
    return names


def substitute(text: str, variables: Mapping[str, str]) -> str:
    """Replace ``{{name}}`` placeholders with their bound values.

    Unknown names are left as written. Substituted values are not scanned
    again, so a value containing ``{{other}}`` stays literal.
    """

    def _lookup(match: re.Match[str]) -> str:
        return variables.get(match.group(1), match.group(0))

    return PLACEHOLDER_RE.sub(_lookup, text)


def used_variables(request: Request, variables: Mapping[str, str]) -> list[tuple[str, str | None]]:
    return [(name, variables.get(name)) for name in placeholders(*request.templates())]


def resolve_request(request: Request, variables: Mapping[str, str]) -> Request:
    return replace(
        request,
        url=substitute(request.raw_url, variables),
        headers=tuple((key, substitute(value, variables)) for key, value in request.raw_headers),
        body=substitute(request.raw_body, variables) if request.raw_body is not None else None,
    )


def resolve(document: Document) -> Document:
    requests = tuple(resolve_request(request, document.variables) for request in document.requests)
    return replace(document, requests=requests)
