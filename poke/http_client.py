from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Any
from urllib.parse import urlparse

import httpx

from .config import DEFAULT_TIMEOUT, USER_AGENT
from .errors import ExecutionError
from .models import HttpResponse, Request

logger = logging.getLogger(__name__)

ClientFactory = Callable[[], Awaitable[Any]]


def _validate_url(url: str) -> None:
    parsed = urlparse(url)
    if parsed.scheme not in {"http", "https"}:
        raise ValueError(f"Unsupported URL scheme: {parsed.scheme or 'missing'}")
    if not parsed.netloc:
        raise ValueError("Missing host in URL.")


def _request_headers(request: Request) -> list[tuple[str, str]]:
    headers = list(request.headers)
    if not any(key.lower() == "user-agent" for key, _ in headers):
        headers.append(("User-Agent", USER_AGENT))
    return headers


async def perform_http_request(
    request: Request,
    *,
    timeout: float = DEFAULT_TIMEOUT,
    verify_tls: bool = True,
    client_factory: ClientFactory | None = None,
) -> HttpResponse:
    """Send ``request`` and return the response.

    Transport failures, timeouts and invalid URLs are raised as
    :class:`ExecutionError`.
    """
    try:
        _validate_url(request.url)
    except ValueError as exc:
        raise ExecutionError(str(exc)) from exc

    loop = asyncio.get_running_loop()
    start = loop.time()
    try:
        if client_factory is not None:
            client = await client_factory()
            resp = await _send(client, request)
        else:
            async with httpx.AsyncClient(timeout=timeout, verify=verify_tls, follow_redirects=True) as client:
                resp = await _send(client, request)
    except httpx.TimeoutException as exc:
        raise ExecutionError(f"Request timed out after {timeout:g}s") from exc
    except httpx.HTTPError as exc:
        raise ExecutionError(f"Request failed: {exc}") from exc
    elapsed = (loop.time() - start) * 1000

    return HttpResponse(
        status=resp.status_code,
        text=resp.text,
        duration_ms=elapsed,
        reason=getattr(resp, "reason_phrase", "") or "",
        headers=_response_headers(resp),
    )


def _response_headers(resp: Any) -> tuple[tuple[str, str], ...]:
    headers = getattr(resp, "headers", None) or {}
    # httpx.Headers.items() folds repeated keys; multi_items() keeps them apart.
    items = headers.multi_items() if hasattr(headers, "multi_items") else headers.items()
    return tuple((str(k), str(v)) for k, v in items)


async def _send(client: Any, request: Request) -> Any:
    content = request.body.encode("utf-8") if request.body is not None else None
    logger.debug("%s %s", request.method, request.url)
    return await client.request(
        request.method.value,
        request.url,
        content=content,
        headers=_request_headers(request),
    )


class HttpExecutor:
    """Executor capability used by the execution controller."""

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT,
        verify_tls: bool = True,
        client_factory: ClientFactory | None = None,
    ) -> None:
        self.timeout = timeout
        self.verify_tls = verify_tls
        self.client_factory = client_factory

    async def send(self, request: Request) -> HttpResponse:
        return await perform_http_request(
            request,
            timeout=self.timeout,
            verify_tls=self.verify_tls,
            client_factory=self.client_factory,
        )
