"""Projection of the browsing state onto panel contents.

Nothing here touches widgets or mutates its inputs; :class:`~poke.app.PokeApp`
pushes the resulting :class:`Frame` into the screen.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from rich.text import Text

from .formatting import (
    ResponseTab,
    format_status,
    method_style,
    request_lines,
    response_lines,
    status_style,
)
from .models import ExecutionRecord, ExecutionStatus, Request
from .state import Focus, UIState, current_index, visible_indices
from .store import RequestStore
from .variables import used_variables


@dataclass(frozen=True)
class Frame:
    request_list: Text
    request_list_title: str
    selected_row: int
    filter_line: Text | None
    detail: Text
    response_status: Text
    response: Text
    response_title: str
    variables: Text
    variables_title: str
    status_bar: Text
    focus: Focus


def _marker(record: ExecutionRecord) -> Text:
    if record.status is ExecutionStatus.PENDING:
        return Text("… ", style="yellow")
    if record.status is ExecutionStatus.FAILED:
        return Text("✗ ", style="red")
    if record.response is not None:
        return Text(f"{record.response.status} ", style=status_style(record.response.status))
    return Text("  ")


def render_request_list(state: UIState, store: RequestStore, records: Sequence[ExecutionRecord]) -> Text:
    text = Text(no_wrap=True, overflow="ellipsis")
    visible = visible_indices(state, store)
    if not visible and state.filter_text:
        return Text("No matching requests", style="dim")
    for row, index in enumerate(visible):
        request = store[index]
        line = Text()
        if index < len(records):
            line.append_text(_marker(records[index]))
        line.append(f"{request.method.value:7}", style=f"bold {method_style(request.method)}")
        line.append(" ")
        line.append(request.name or request.raw_url)
        if index == state.selected:
            line.stylize("reverse" if state.focus is Focus.LIST else "bold on grey23")
        if row:
            text.append("\n")
        text.append_text(line)
    return text


def request_list_title(state: UIState, store: RequestStore) -> str:
    if not state.filter_active:
        return "Requests"
    return f"Requests ({len(visible_indices(state, store))}/{len(store)})"


def render_filter_line(state: UIState) -> Text | None:
    if not state.filter_active:
        return None
    return Text(f"/{state.filter_text}", style="yellow")


def _scrolled(lines: list[str], offset: int) -> list[str]:
    return lines[offset:]


def render_detail(state: UIState, request: Request | None) -> Text:
    if request is None:
        return Text("No request selected", style="dim")
    lines = _scrolled(request_lines(request), state.scroll[Focus.DETAIL])
    text = Text()
    for number, line in enumerate(lines):
        if number:
            text.append("\n")
        if number == 0 and state.scroll[Focus.DETAIL] == 0:
            text.append(str(request.method), style=f"bold {method_style(request.method)}")
            text.append(line[len(str(request.method)) :])
        else:
            text.append(line)
    return text


def render_response_status(record: ExecutionRecord | None) -> Text:
    if record is None or record.status is ExecutionStatus.IDLE:
        return Text("Idle", style="dim")
    if record.status is ExecutionStatus.PENDING:
        return Text("Loading...", style="yellow")
    if record.status is ExecutionStatus.FAILED or record.response is None:
        return Text("Error", style="bold red")
    response = record.response
    return Text(format_status(response), style=f"bold {status_style(response.status)}")


def render_response(state: UIState, record: ExecutionRecord | None) -> Text:
    if record is None:
        return Text("")
    lines = _scrolled(response_lines(record, state.response_tab), state.scroll[Focus.RESPONSE])
    style = "red" if record.status is ExecutionStatus.FAILED else ""
    if record.status in (ExecutionStatus.IDLE, ExecutionStatus.PENDING):
        style = "dim"
    return Text("\n".join(lines), style=style)


def response_title(state: UIState) -> str:
    if state.response_tab is ResponseTab.HEADERS:
        return "Response: Body [Headers]"
    return "Response: [Body] Headers"


def render_variables(request: Request | None, store: RequestStore) -> tuple[str, Text]:
    used = used_variables(request, store.document.variables) if request is not None else []
    if not used:
        return "Variables (none)", Text("")
    text = Text()
    for number, (name, value) in enumerate(used):
        if number:
            text.append("\n")
        text.append(f"@{name}", style="cyan")
        text.append(" = ")
        if value is None:
            text.append("(undefined)", style="italic red")
        else:
            text.append(value)
    return "Variables", text


def render_status_bar(state: UIState, store: RequestStore, records: Sequence[ExecutionRecord]) -> Text:
    text = Text()
    if store.path is not None:
        text.append(str(store.path), style="bold")
        text.append("  ")
    text.append(f"{len(store)} request(s)")
    if store.diagnostics:
        text.append(f"  {len(store.diagnostics)} skipped", style="yellow")
    pending = sum(1 for record in records if record.status is ExecutionStatus.PENDING)
    if pending:
        text.append(f"  {pending} in flight", style="yellow")
    if state.status_message:
        text.append(f"  {state.status_message}", style="italic")
    return text


def render(state: UIState, store: RequestStore, records: Sequence[ExecutionRecord]) -> Frame:
    index = current_index(state, store)
    request = store.get(index) if index is not None else None
    record = records[index] if index is not None and index < len(records) else None
    visible = visible_indices(state, store)
    variables_title, variables = render_variables(request, store)
    return Frame(
        request_list=render_request_list(state, store, records),
        request_list_title=request_list_title(state, store),
        selected_row=visible.index(index) if index is not None else 0,
        filter_line=render_filter_line(state),
        detail=render_detail(state, request),
        response_status=render_response_status(record),
        response=render_response(state, record),
        response_title=response_title(state),
        variables=variables,
        variables_title=variables_title,
        status_bar=render_status_bar(state, store, records),
        focus=state.focus,
    )
