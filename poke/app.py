from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from textual import events
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.message import Message
from textual.widgets import Footer, Header, Static

from .config import ENTER_EXECUTES_ANYWHERE
from .errors import LoadError
from .execution import ExecutionController, ExecutionOutcome, Executor
from .http_client import HttpExecutor
from .render import Frame, render
from .state import Action, Focus, UIState, clamp_to_store, handle_key
from .store import RequestStore, load_store
from .ui_components import ListPanel, Panel

logger = logging.getLogger(__name__)


class ExecutionFinished(Message):
    """A request task finished; carries its outcome to the UI loop."""

    def __init__(self, outcome: ExecutionOutcome) -> None:
        super().__init__()
        self.outcome = outcome


class DocumentReloaded(Message):
    def __init__(self, store: RequestStore | None = None, error: str | None = None) -> None:
        super().__init__()
        self.store = store
        self.error = error


class PokeApp(App[int]):
    """Browse and send the requests of one ``.http`` file."""

    TITLE = "poke"

    CSS = """
    Screen {
        background: #0b1221;
    }

    #main {
        height: 1fr;
    }

    #left {
        width: 35%;
    }

    #right {
        width: 65%;
    }

    #filter {
        height: 1;
        padding: 0 1;
        color: yellow;
        display: none;
    }

    #variables {
        height: 8;
    }

    #response-status {
        height: 3;
    }

    #detail {
        height: 2fr;
    }

    #response {
        height: 3fr;
    }

    #status-bar {
        height: 1;
        color: #87d7ff;
        padding: 0 1;
    }
    """

    BINDINGS = [
        Binding("enter", "handle_key('enter')", "Send", priority=True),
        Binding("tab", "handle_key('tab')", "Next panel", priority=True),
        Binding("j", "handle_key('j')", "Down", priority=True),
        Binding("down", "handle_key('down')", "Down", show=False, priority=True),
        Binding("k", "handle_key('k')", "Up", priority=True),
        Binding("up", "handle_key('up')", "Up", show=False, priority=True),
        Binding("pagedown", "handle_key('pagedown')", "Page down", show=False, priority=True),
        Binding("pageup", "handle_key('pageup')", "Page up", show=False, priority=True),
        Binding("home", "handle_key('home')", "Top", show=False, priority=True),
        Binding("end", "handle_key('end')", "Bottom", show=False, priority=True),
        Binding("h", "handle_key('h')", "Headers", show=False, priority=True),
        Binding("right", "handle_key('right')", "Headers", show=False, priority=True),
        Binding("b", "handle_key('b')", "Body", show=False, priority=True),
        Binding("left", "handle_key('left')", "Body", show=False, priority=True),
        Binding("slash", "handle_key('/')", "Filter", priority=True),
        Binding("escape", "handle_key('escape')", "Clear filter", show=False, priority=True),
        Binding("backspace", "handle_key('backspace')", "Erase", show=False, priority=True),
        Binding("r", "handle_key('r')", "Reload", priority=True),
        Binding("q", "handle_key('q')", "Quit", priority=True),
        Binding("ctrl+c", "handle_key('ctrl+c')", "Quit", show=False, priority=True),
    ]

    ENABLE_COMMAND_PALETTE = False

    def __init__(
        self,
        store: RequestStore,
        executor: Executor | None = None,
        *,
        enter_anywhere: bool = ENTER_EXECUTES_ANYWHERE,
    ) -> None:
        super().__init__()
        self.store = store
        self.ui_state = UIState()
        self.enter_anywhere = enter_anywhere
        self.controller = ExecutionController(
            store,
            executor or HttpExecutor(),
            lambda outcome: self.post_message(ExecutionFinished(outcome)),
        )
        self._reload_task: asyncio.Task[None] | None = None
        self.frame: Frame | None = None

    def compose(self) -> ComposeResult:
        yield Header(id="app-header")
        with Horizontal(id="main"):
            with Vertical(id="left"):
                yield ListPanel("Requests", id="requests")
                yield Static("", id="filter")
                yield Panel("Variables", id="variables")
            with Vertical(id="right"):
                yield Panel("Request", id="detail")
                yield Panel("Status", id="response-status")
                yield Panel("Response", id="response")
        yield Static("", id="status-bar")
        yield Footer()

    def on_mount(self) -> None:
        if self.store.path is not None:
            self.sub_title = self.store.path.name
        self.draw()

    def draw(self) -> None:
        """Project the current state onto the panels."""
        self.show_frame(render(self.ui_state, self.store, self.controller.records))

    def show_frame(self, frame: Frame) -> None:
        self.frame = frame
        self.query_one("#requests", ListPanel).show(
            frame.request_list,
            selected=frame.selected_row,
            title=frame.request_list_title,
            focused=frame.focus is Focus.LIST,
        )
        filter_line = self.query_one("#filter", Static)
        filter_line.display = frame.filter_line is not None
        filter_line.update(frame.filter_line or "")
        self.query_one("#detail", Panel).show(frame.detail, focused=frame.focus is Focus.DETAIL)
        self.query_one("#response-status", Panel).show(frame.response_status)
        self.query_one("#response", Panel).show(
            frame.response, title=frame.response_title, focused=frame.focus is Focus.RESPONSE
        )
        self.query_one("#variables", Panel).show(frame.variables, title=frame.variables_title)
        self.query_one("#status-bar", Static).update(frame.status_bar)

    def action_handle_key(self, key: str) -> None:
        action = handle_key(
            self.ui_state,
            key,
            self.store,
            self.controller.records,
            enter_anywhere=self.enter_anywhere,
        )
        if action is Action.QUIT:
            self.exit(0)
            return
        if action is Action.EXECUTE:
            self.ui_state.status_message = ""
            self.controller.execute(self.ui_state.selected)
        elif action is Action.RELOAD:
            self.reload_file()
        self.draw()

    def on_key(self, event: events.Key) -> None:
        # Characters without a binding only matter while filtering.
        if not self.ui_state.filter_active or not event.is_printable or event.character is None:
            return
        event.stop()
        self.action_handle_key(event.character)

    def on_execution_finished(self, message: ExecutionFinished) -> None:
        self.controller.apply(message.outcome)
        self.draw()

    def reload_file(self) -> None:
        if self.store.path is None or (self._reload_task and not self._reload_task.done()):
            return
        self.ui_state.status_message = "Reloading..."
        self._reload_task = asyncio.create_task(self._read_store(self.store.path))

    async def _read_store(self, path: Path) -> None:
        try:
            store = await asyncio.to_thread(load_store, path)
        except LoadError as exc:
            logger.warning("Reload failed: %s", exc)
            self.post_message(DocumentReloaded(error=str(exc)))
        else:
            self.post_message(DocumentReloaded(store=store))

    def on_document_reloaded(self, message: DocumentReloaded) -> None:
        if message.store is None:
            self.ui_state.status_message = f"Reload failed: {message.error}"
        else:
            self.store = message.store
            self.controller.reset(message.store)
            clamp_to_store(self.ui_state, message.store)
            self.ui_state.status_message = "Reloaded."
        self.draw()
