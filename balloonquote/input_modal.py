"""Single-field text/number entry modal screen."""

from __future__ import annotations

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Container
from textual.events import Key
from textual.screen import ModalScreen
from textual.widgets import Static

_NUMERIC_CHARS = set("0123456789.,%")


class InputModal(ModalScreen[str | None]):
    """Prompt for one value; dismisses with the raw text or None on cancel.

    Parsing is left to the caller so that an empty confirm can mean
    "cleared" (for example a quantity that must then be reconciled).
    """

    CSS = """
    InputModal {
        align: center middle;
        background: $background 60%;
    }

    #input-dialog {
        width: 64;
        height: auto;
        border: round $secondary;
        background: $panel;
        padding: 1 2;
    }

    #input-title {
        text-style: bold;
        margin-bottom: 1;
        color: white;
    }

    #input-prompt {
        color: white;
        margin-bottom: 1;
    }

    #input-value {
        border: heavy $secondary;
        padding: 0 1;
        color: white;
        margin-bottom: 1;
    }

    #input-help {
        color: #dddddd;
    }
    """

    def __init__(self, title: str, prompt: str = "", value: str = "", numeric: bool = False, max_length: int = 120) -> None:
        super().__init__()
        self.title_text = title
        self.prompt_text = prompt
        self.value = value
        self.numeric = numeric
        self.max_length = max_length

    def compose(self) -> ComposeResult:
        with Container(id="input-dialog"):
            yield Static(self.title_text, id="input-title")
            yield Static(self.prompt_text, id="input-prompt")
            yield Static(id="input-value")
            yield Static(self._help_text(), id="input-help")

    def on_mount(self) -> None:
        self._refresh_content()

    def _help_text(self) -> str:
        kind = "Digits only." if self.numeric else "Type text."
        return f"{kind} Enter confirm. Backspace delete. Ctrl+U clear. Esc cancel."

    def on_key(self, event: Key) -> None:
        if event.key in {"escape", "ctrl+c"}:
            self.dismiss(None)
            event.stop()
            return

        if event.key == "enter":
            self.dismiss(self.value)
            event.stop()
            return

        if event.key == "backspace":
            if self.value:
                self.value = self.value[:-1]
                self._refresh_content()
            event.stop()
            return

        if event.key == "ctrl+u":
            self.value = ""
            self._refresh_content()
            event.stop()
            return

        if event.is_printable and event.character:
            if self.numeric and event.character not in _NUMERIC_CHARS:
                event.stop()
                return
            if len(self.value) < self.max_length:
                self.value += event.character
            self._refresh_content()
            event.stop()

    def _refresh_content(self) -> None:
        value_widget = self.query_one("#input-value", Static)
        value_widget.update(Text(f"{self.value}|"))
