"""Generic list picker modal screen (vendors, kits, saved quotations, lines)."""

from __future__ import annotations

from typing import Callable, Generic, TypeVar

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Container
from textual.reactive import reactive
from textual.screen import ModalScreen
from textual.widgets import Static

T = TypeVar("T")

PickerRow = tuple[str, T]


class PickerModal(ModalScreen[T | None], Generic[T]):
    """Centered modal listing labelled values; Enter picks one.

    When ``on_delete`` is given, ``d`` deletes the highlighted value and the
    callback returns the refreshed rows.
    """

    BINDINGS = [
        ("escape", "close", "Close"),
        ("q", "close", "Close"),
        ("ctrl+c", "close", "Close"),
        ("j", "move_cursor(1)", "Next"),
        ("k", "move_cursor(-1)", "Previous"),
        ("up", "move_cursor(-1)", "Previous"),
        ("down", "move_cursor(1)", "Next"),
        ("enter", "pick", "Pick"),
        ("d", "delete_current", "Delete"),
    ]

    CSS = """
    PickerModal {
        align: center middle;
        background: $background 60%;
    }

    #picker-dialog {
        width: 80;
        height: auto;
        max-height: 90%;
        border: round $secondary;
        background: $panel;
        padding: 1 2;
    }

    #picker-title {
        text-style: bold;
        margin-bottom: 1;
        color: white;
    }

    #picker-body {
        margin-bottom: 1;
        color: white;
    }

    #picker-help {
        margin-top: 1;
        color: #dddddd;
    }
    """

    cursor_index = reactive(0)

    def __init__(
        self,
        title: str,
        rows: list[PickerRow],
        empty_text: str = "(nothing to show)",
        on_delete: Callable[[T], list[PickerRow]] | None = None,
    ) -> None:
        super().__init__()
        self.title_text = title
        self.rows = rows
        self.empty_text = empty_text
        self.on_delete = on_delete

    def compose(self) -> ComposeResult:
        with Container(id="picker-dialog"):
            yield Static(self.title_text, id="picker-title")
            yield Static(id="picker-body")
            yield Static(id="picker-help")

    def on_mount(self) -> None:
        self._refresh_content()

    def action_close(self) -> None:
        self.dismiss(None)

    def action_move_cursor(self, delta: int) -> None:
        if not self.rows:
            return
        self.cursor_index = (self.cursor_index + delta) % len(self.rows)
        self._refresh_content()

    def action_pick(self) -> None:
        if not self.rows:
            return
        _, value = self.rows[self.cursor_index]
        self.dismiss(value)

    def action_delete_current(self) -> None:
        if self.on_delete is None or not self.rows:
            return
        _, value = self.rows[self.cursor_index]
        self.rows = self.on_delete(value)
        self._refresh_content()

    def _refresh_content(self) -> None:
        body = self.query_one("#picker-body", Static)
        help_text = self.query_one("#picker-help", Static)

        if self.cursor_index >= len(self.rows):
            self.cursor_index = max(0, len(self.rows) - 1)

        if not self.rows:
            body.update(self.empty_text)
        else:
            content = Text(style="white")
            for idx, (label, _) in enumerate(self.rows):
                if idx > 0:
                    content.append("\n")
                pointer = "➤ " if idx == self.cursor_index else "  "
                style = "bold white" if idx == self.cursor_index else "white"
                content.append(f"{pointer}{label}", style=style)
            body.update(content)

        hint = "J/K/↑/↓ move, Enter pick"
        if self.on_delete is not None:
            hint += ", D delete"
        help_text.update(f"{hint}, Esc/q close")
