"""Browsing state and key handling.

:class:`UIState` is created by the application and handed to
:func:`handle_key` for every key press. The function mutates the state and
tells the caller what side effect, if any, the key asks for.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum

from .config import ENTER_EXECUTES_ANYWHERE, PAGE_SIZE
from .formatting import ResponseTab, request_lines, response_lines
from .models import ExecutionRecord, Request
from .store import RequestStore


class Focus(Enum):
    LIST = "list"
    DETAIL = "detail"
    RESPONSE = "response"

    def next(self) -> Focus:
        order = list(Focus)
        return order[(order.index(self) + 1) % len(order)]


class Action(Enum):
    NONE = "none"
    EXECUTE = "execute"
    RELOAD = "reload"
    QUIT = "quit"


def _zero_scroll() -> dict[Focus, int]:
    return {focus: 0 for focus in Focus}


@dataclass
class UIState:
    selected: int = 0
    focus: Focus = Focus.LIST
    scroll: dict[Focus, int] = field(default_factory=_zero_scroll)
    response_tab: ResponseTab = ResponseTab.BODY
    quitting: bool = False
    status_message: str = ""
    filter_active: bool = False
    filter_text: str = ""


DOWN_KEYS = {"j": 1, "down": 1, "pagedown": PAGE_SIZE}
UP_KEYS = {"k": -1, "up": -1, "pageup": -PAGE_SIZE}
QUIT_KEYS = {"q", "ctrl+c"}
FILTER_MOVE_KEYS = {"down": 1, "up": -1}


def matches_filter(request: Request, text: str) -> bool:
    """Case-insensitive match of ``text`` against the request's name or url."""
    needle = text.lower()
    return needle in (request.name or "").lower() or needle in request.raw_url.lower()


def visible_indices(state: UIState, store: RequestStore) -> list[int]:
    """Store indices shown in the request list, in order."""
    if not state.filter_text:
        return list(range(len(store)))
    return [index for index, request in enumerate(store) if matches_filter(request, state.filter_text)]


def current_index(state: UIState, store: RequestStore) -> int | None:
    """The selected store index, or ``None`` when nothing visible is selected."""
    if state.selected in visible_indices(state, store):
        return state.selected
    return None


def content_length(
    state: UIState, focus: Focus, store: RequestStore, records: Sequence[ExecutionRecord]
) -> int:
    """Number of lines the detail or response panel has for the selection."""
    index = current_index(state, store)
    if index is None:
        return 0
    if focus is Focus.DETAIL:
        return len(request_lines(store[index]))
    if focus is Focus.RESPONSE and index < len(records):
        return len(response_lines(records[index], state.response_tab))
    return 0


def select(state: UIState, index: int, store: RequestStore) -> None:
    index = max(0, min(index, len(store) - 1))
    if index != state.selected:
        state.selected = index
        state.scroll[Focus.DETAIL] = 0
        state.scroll[Focus.RESPONSE] = 0


def scroll(state: UIState, focus: Focus, offset: int, length: int) -> None:
    state.scroll[focus] = max(0, min(offset, length - 1))


def _select_visible(state: UIState, delta: int, store: RequestStore) -> None:
    visible = visible_indices(state, store)
    if not visible:
        return
    position = visible.index(state.selected) if state.selected in visible else 0
    position = max(0, min(position + delta, len(visible) - 1))
    select(state, visible[position], store)


def _move(state: UIState, delta: int, store: RequestStore, records: Sequence[ExecutionRecord]) -> None:
    if state.focus is Focus.LIST:
        _select_visible(state, delta, store)
    else:
        length = content_length(state, state.focus, store, records)
        scroll(state, state.focus, state.scroll[state.focus] + delta, length)


def _show_response_tab(state: UIState, tab: ResponseTab) -> None:
    if state.response_tab is not tab:
        state.response_tab = tab
        state.scroll[Focus.RESPONSE] = 0


def _keep_selection_visible(state: UIState, store: RequestStore) -> None:
    visible = visible_indices(state, store)
    if visible and state.selected not in visible:
        select(state, visible[0], store)


def _execute(state: UIState, store: RequestStore) -> Action:
    return Action.EXECUTE if current_index(state, store) is not None else Action.NONE


def _handle_filter_key(state: UIState, key: str, store: RequestStore) -> Action:
    """Keys typed while the request list is being filtered."""
    if key == "escape" or (key == "backspace" and not state.filter_text):
        state.filter_active = False
        state.filter_text = ""
    elif key == "backspace":
        state.filter_text = state.filter_text[:-1]
    elif key == "enter":
        return _execute(state, store)
    elif key in FILTER_MOVE_KEYS:
        _select_visible(state, FILTER_MOVE_KEYS[key], store)
        return Action.NONE
    elif len(key) == 1:
        state.filter_text += key
    else:
        return Action.NONE
    _keep_selection_visible(state, store)
    return Action.NONE


def handle_key(
    state: UIState,
    key: str,
    store: RequestStore,
    records: Sequence[ExecutionRecord],
    *,
    enter_anywhere: bool = ENTER_EXECUTES_ANYWHERE,
) -> Action:
    if state.quitting:
        return Action.NONE

    filtering = state.filter_active and state.focus is Focus.LIST
    if key in QUIT_KEYS and not (filtering and key == "q"):
        state.quitting = True
        return Action.QUIT
    if key == "tab":
        state.focus = state.focus.next()
        return Action.NONE
    if filtering:
        return _handle_filter_key(state, key, store)
    if key == "enter":
        if enter_anywhere or state.focus is Focus.LIST:
            return _execute(state, store)
        return Action.NONE
    if key == "r":
        return Action.RELOAD
    if key == "/" and state.focus is Focus.LIST:
        state.filter_active = True
        return Action.NONE

    if key in DOWN_KEYS:
        _move(state, DOWN_KEYS[key], store, records)
    elif key in UP_KEYS:
        _move(state, UP_KEYS[key], store, records)
    elif key == "home":
        _move(state, -max(len(store), content_length(state, state.focus, store, records)), store, records)
    elif key == "end":
        _move(state, max(len(store), content_length(state, state.focus, store, records)), store, records)
    elif state.focus is Focus.RESPONSE and key in {"h", "right"}:
        _show_response_tab(state, ResponseTab.HEADERS)
    elif state.focus is Focus.RESPONSE and key in {"b", "left"}:
        _show_response_tab(state, ResponseTab.BODY)
    return Action.NONE


def clamp_to_store(state: UIState, store: RequestStore) -> None:
    """Keep the selection valid after the store has been replaced."""
    state.selected = min(state.selected, len(store) - 1) if store else 0
    state.scroll[Focus.DETAIL] = 0
    state.scroll[Focus.RESPONSE] = 0
    _keep_selection_visible(state, store)
