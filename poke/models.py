from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class Method(str, Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"
    HEAD = "HEAD"
    OPTIONS = "OPTIONS"
    TRACE = "TRACE"

    @classmethod
    def parse(cls, token: str) -> Method:
        try:
            return cls(token.upper())
        except ValueError:
            raise ValueError(f"Unknown HTTP method: {token!r}") from None

    def __str__(self) -> str:
        return self.value


Header = tuple[str, str]


@dataclass(frozen=True)
class Request:
    method: Method
    url: str
    name: str | None = None
    headers: tuple[Header, ...] = ()
    body: str | None = None
    line: int = 0
    raw_url: str = ""
    raw_headers: tuple[Header, ...] = ()
    raw_body: str | None = None

    def __post_init__(self) -> None:
        # A freshly parsed request is its own template.
        if not self.raw_url:
            object.__setattr__(self, "raw_url", self.url)
        if not self.raw_headers:
            object.__setattr__(self, "raw_headers", self.headers)
        if self.raw_body is None:
            object.__setattr__(self, "raw_body", self.body)

    @property
    def display_name(self) -> str:
        return self.name or f"{self.method} {self.raw_url}"

    def templates(self) -> list[str]:
        """Unresolved url, header values and body, in that order."""
        texts = [self.raw_url]
        texts.extend(value for _, value in self.raw_headers)
        if self.raw_body is not None:
            texts.append(self.raw_body)
        return texts


@dataclass(frozen=True)
class ParseDiagnostic:
    line: int
    message: str

    def __str__(self) -> str:
        return f"line {self.line}: {self.message}"


@dataclass(frozen=True)
class Document:
    requests: tuple[Request, ...] = ()
    variables: dict[str, str] = field(default_factory=dict)
    diagnostics: tuple[ParseDiagnostic, ...] = ()


@dataclass(frozen=True)
class HttpResponse:
    status: int
    text: str
    duration_ms: float
    reason: str = ""
    headers: tuple[Header, ...] = ()


class ExecutionStatus(Enum):
    IDLE = "idle"
    PENDING = "pending"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass(frozen=True)
class ExecutionRecord:
    status: ExecutionStatus = ExecutionStatus.IDLE
    response: HttpResponse | None = None
    error: str | None = None

    @classmethod
    def idle(cls) -> ExecutionRecord:
        return cls()

    @classmethod
    def pending(cls) -> ExecutionRecord:
        return cls(status=ExecutionStatus.PENDING)

    @classmethod
    def succeeded(cls, response: HttpResponse) -> ExecutionRecord:
        return cls(status=ExecutionStatus.SUCCEEDED, response=response)

    @classmethod
    def failed(cls, error: str) -> ExecutionRecord:
        return cls(status=ExecutionStatus.FAILED, error=error)

    @property
    def is_pending(self) -> bool:
        return self.status is ExecutionStatus.PENDING
