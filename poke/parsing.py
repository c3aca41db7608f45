"""Parser for ``.http`` request files.

A file is a preamble followed by blocks, each block starting at a line that
begins with ``###``. The marker's trailing text names the request::

    @baseUrl = https://api.example.com

    ### List users
    GET {{baseUrl}}/users
    Accept: application/json

    ### Create user
    POST {{baseUrl}}/users
    Content-Type: application/json

    {"name": "Ada"}

Every block is parsed on its own, so a malformed block is reported as a
diagnostic and never affects its neighbours.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path

from .models import Document, Header, Method, ParseDiagnostic, Request

logger = logging.getLogger(__name__)

SEPARATOR = "###"
REQUEST_LINE_RE = re.compile(r"^(?P<method>\S+)\s+(?P<url>(?:\{\{[^}]*\}\}|\S)+)(?:\s+HTTP/\d+(?:\.\d+)?)?\s*$")
HEADER_RE = re.compile(r"^(?P<key>[A-Za-z0-9!#$%&'*+.^_`|~-]+)\s*:\s*(?P<value>.*?)\s*$")
VARIABLE_RE = re.compile(r"^@(?P<name>[^=\s]+)\s*=\s*(?P<value>.*?)\s*$")


@dataclass
class _Block:
    start: int  # line number of the marker, 0 for the preamble
    name: str | None = None
    lines: list[tuple[int, str]] = field(default_factory=list)


def is_comment(line: str) -> bool:
    stripped = line.lstrip()
    return stripped.startswith("#") or stripped.startswith("//")


def parse_variable(line: str) -> tuple[str, str] | None:
    match = VARIABLE_RE.match(line.strip())
    if match is None:
        return None
    return match.group("name"), match.group("value")


def parse_header_line(line: str) -> Header | None:
    match = HEADER_RE.match(line)
    if match is None:
        return None
    return match.group("key"), match.group("value")


def parse_request_line(line: str) -> tuple[Method, str]:
    match = REQUEST_LINE_RE.match(line.strip())
    if match is None:
        raise ValueError(f"Expected 'METHOD URL', got {line.strip()!r}")
    return Method.parse(match.group("method")), match.group("url")


def _split_blocks(text: str) -> list[_Block]:
    blocks = [_Block(start=0)]
    for number, line in enumerate(text.splitlines(), start=1):
        if line.startswith(SEPARATOR):
            name = line.lstrip("#").strip() or None
            blocks.append(_Block(start=number, name=name))
            continue
        blocks[-1].lines.append((number, line))
    return blocks


def _parse_block(block: _Block, variables: dict[str, str]) -> Request | ParseDiagnostic | None:
    """Parse one block, collecting every variable declaration it holds."""
    lines = iter(block.lines)
    request_line: tuple[int, str] | None = None
    for number, line in lines:
        if not line.strip() or is_comment(line):
            continue
        declaration = parse_variable(line)
        if declaration is not None:
            name, value = declaration
            variables[name] = value
            continue
        request_line = (number, line)
        break

    if request_line is None:
        return None

    number, line = request_line
    try:
        method, url = parse_request_line(line)
    except ValueError as exc:
        return ParseDiagnostic(line=number, message=str(exc))

    headers: list[Header] = []
    body_lines: list[str] = []
    in_body = False
    for _, line in lines:
        # A declaration at column 0 is never header or body text.
        declaration = parse_variable(line) if line.startswith("@") else None
        if declaration is not None:
            name, value = declaration
            variables[name] = value
            continue
        if in_body:
            body_lines.append(line)
            continue
        if not line.strip():
            in_body = True
            continue
        if is_comment(line):
            continue
        header = parse_header_line(line)
        if header is None:
            in_body = True
            body_lines.append(line)
            continue
        headers.append(header)

    while body_lines and not body_lines[-1].strip():
        body_lines.pop()
    body = "\n".join(body_lines) if body_lines else None

    return Request(
        method=method,
        url=url,
        name=block.name,
        headers=tuple(headers),
        body=body,
        line=number,
    )


def parse(text: str) -> Document:
    """Turn ``.http`` text into a :class:`Document` of unresolved requests."""
    variables: dict[str, str] = {}
    requests: list[Request] = []
    diagnostics: list[ParseDiagnostic] = []

    for block in _split_blocks(text):
        result = _parse_block(block, variables)
        if result is None:
            continue
        if isinstance(result, ParseDiagnostic):
            logger.debug("Skipping block at line %s: %s", block.start, result.message)
            diagnostics.append(result)
        else:
            requests.append(result)

    return Document(requests=tuple(requests), variables=variables, diagnostics=tuple(diagnostics))


def parse_file(path: Path) -> Document:
    return parse(Path(path).read_text(encoding="utf-8"))
