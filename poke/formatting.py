from __future__ import annotations

import json
from enum import Enum

from .models import ExecutionRecord, ExecutionStatus, HttpResponse, Method, Request

IDLE_HINT = "No response yet. Press Enter to send request."
PENDING_TEXT = "Sending request..."

METHOD_STYLES = {
    Method.GET: "green",
    Method.POST: "yellow",
    Method.PUT: "blue",
    Method.PATCH: "cyan",
    Method.DELETE: "red",
}


class ResponseTab(Enum):
    BODY = "body"
    HEADERS = "headers"


def method_style(method: Method) -> str:
    return METHOD_STYLES.get(method, "white")


def status_style(status: int) -> str:
    if status < 300:
        return "green"
    if status < 400:
        return "yellow"
    return "red"


def format_body(text: str) -> str:
    try:
        parsed = json.loads(text)
    except ValueError:
        return text
    return json.dumps(parsed, indent=2, ensure_ascii=False)


def format_status(response: HttpResponse) -> str:
    reason = f" {response.reason}" if response.reason else ""
    return f"{response.status}{reason}  {response.duration_ms:.1f} ms"


def request_lines(request: Request) -> list[str]:
    lines = [f"{request.method} {request.url}"]
    lines.extend(f"{key}: {value}" for key, value in request.headers)
    if request.body is not None:
        lines.append("")
        lines.extend(request.body.splitlines())
    return lines


def response_lines(record: ExecutionRecord, tab: ResponseTab = ResponseTab.BODY) -> list[str]:
    if record.status is ExecutionStatus.PENDING:
        return [PENDING_TEXT]
    if record.status is ExecutionStatus.FAILED:
        return (record.error or "Request failed.").splitlines()
    if record.response is None:
        return [IDLE_HINT]
    if tab is ResponseTab.HEADERS:
        return [f"{key}: {value}" for key, value in record.response.headers]
    return format_body(record.response.text).splitlines()
