from rich.text import Text
from textual.containers import VerticalScroll
from textual.widgets import Static


class Panel(Static):
    """Bordered text panel whose border lights up while it has focus."""

    DEFAULT_CSS = """
    Panel {
        height: 1fr;
        padding: 0 1;
        border: round #2a3550;
        border-title-color: #8fb2ff;
        background: #0f182b;
        overflow: hidden hidden;
    }

    Panel.-focused {
        border: round #4f8dff;
        border-title-style: bold;
    }
    """

    def __init__(self, title: str, **kwargs) -> None:
        super().__init__("", **kwargs)
        self.border_title = title

    def show(self, content: Text, *, title: str | None = None, focused: bool = False) -> None:
        if title is not None:
            self.border_title = title
        self.set_class(focused, "-focused")
        self.update(content)


class ListPanel(VerticalScroll):
    """Scrollable request list that keeps the selected row on screen."""

    DEFAULT_CSS = """
    ListPanel {
        height: 1fr;
        padding: 0 1;
        border: round #2a3550;
        border-title-color: #8fb2ff;
        background: #0f182b;
        scrollbar-size-vertical: 1;
        scrollbar-color: #4f8dff;
        scrollbar-background: #0b1221;
    }

    ListPanel.-focused {
        border: round #4f8dff;
        border-title-style: bold;
    }

    ListPanel > Static {
        width: 100%;
    }
    """

    can_focus = False

    def __init__(self, title: str, **kwargs) -> None:
        super().__init__(**kwargs)
        self.border_title = title
        self._rows = Static("")

    def compose(self):
        yield self._rows

    def show(self, content: Text, *, selected: int, title: str | None = None, focused: bool = False) -> None:
        if title is not None:
            self.border_title = title
        self.set_class(focused, "-focused")
        self._rows.update(content)
        self.call_after_refresh(self._reveal, selected)

    def _reveal(self, row: int) -> None:
        height = self.scrollable_content_region.height
        if height <= 0:
            return
        top = round(self.scroll_y)
        if row < top:
            self.scroll_to(y=row, animate=False)
        elif row >= top + height:
            self.scroll_to(y=row - height + 1, animate=False)
