"""Main Textual app class."""

from __future__ import annotations

from typing import Callable

from rich.text import Text
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.css.query import NoMatches
from textual.reactive import reactive
from textual.screen import ModalScreen
from textual.widgets import Header, Static

from balloonquote.category_logic import accepts_custom_description, accepts_custom_price, shows_quantity_input
from balloonquote.data import load_catalog, load_compatibility, load_kits, load_vendors
from balloonquote.debuglog import log_debug
from balloonquote.document import check_document_dependencies, export_quotation_document
from balloonquote.input_modal import InputModal
from balloonquote.models import CatalogCategory, CatalogItem, Kit, SavedQuotation, SelectionEntry
from balloonquote.persistence import (
    LocalQuotationCache,
    PersistOutcome,
    QuotationStore,
    SqliteQuotationStore,
    delete_everywhere,
    list_saved,
)
from balloonquote.picker_modal import PickerModal, PickerRow
from balloonquote.pricing import format_money
from balloonquote.rendering import format_catalog_item, format_category_title, format_entry_line, format_totals
from balloonquote.session import QuotationSession

_CLIENT_FIELDS = (
    ("name", "Client name"),
    ("country", "Country"),
    ("phone", "Phone"),
    ("email", "Email"),
)


class QuoteApp(App):
    """A Textual app for configuring balloon systems and quoting them."""

    TITLE = "Balloon Quote"
    SUB_TITLE = "Select a manufacturer"

    CSS = """
    Screen {
        layout: vertical;
    }

    #main-layout {
        height: 1fr;
    }

    #catalog-pane {
        width: 3fr;
        border: round $primary;
        padding: 1;
    }

    #quote-pane {
        width: 2fr;
        border: round $secondary;
        padding: 1;
    }

    #category-bar {
        border: heavy $secondary;
        padding: 0 1;
        margin-bottom: 1;
        height: 3;
    }

    #items {
        height: 1fr;
        border: tall $surface;
        padding: 0 1;
    }

    #quote-lines {
        height: 1fr;
        border: tall $surface;
        padding: 0 1;
    }

    #totals {
        height: auto;
        padding: 0 1;
        margin-top: 1;
    }

    #status-bar {
        height: 2;
        padding: 0 1;
        color: #dddddd;
    }

    .pane-title {
        text-style: bold;
        margin-bottom: 1;
    }
    """

    category_index = reactive(0)
    item_index = reactive(0)

    BINDINGS = [
        ("tab", "cycle_category(1)", "Next category"),
        ("shift+tab", "cycle_category(-1)", "Previous category"),
        ("up", "move_item(-1)", "Previous item"),
        ("down", "move_item(1)", "Next item"),
        ("enter", "toggle_item", "Select/deselect"),
        ("q", "edit_quantity", "Quantity"),
        ("p", "edit_price", "Custom price"),
        ("e", "edit_description", "Custom note"),
        ("d", "edit_discount", "Discount"),
        ("c", "edit_client", "Client"),
        ("t", "edit_terms", "Payment terms"),
        ("a", "add_custom_item", "Custom line"),
        ("r", "remove_line", "Remove line"),
        ("k", "load_kit", "Load kit"),
        ("l", "load_quotation", "Load quote"),
        ("n", "new_quotation", "New quote"),
        ("v", "change_vendor", "Vendor"),
        Binding("ctrl+e", "export_document", "Export PDF", priority=True),
        Binding("ctrl+s", "save_now", "Save", priority=True),
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(self, stores: list[QuotationStore] | None = None, data_dir: str | None = None) -> None:
        super().__init__()
        self.data_dir = data_dir
        self.stores: list[QuotationStore] = (
            stores if stores is not None else [LocalQuotationCache(), SqliteQuotationStore()]
        )
        self.vendors = load_vendors(data_dir)
        self.compatibility = load_compatibility(data_dir)
        self.session: QuotationSession | None = None
        self.system_status = ""
        log_debug("app_init")

    def compose(self) -> ComposeResult:
        yield Header()
        with Horizontal(id="main-layout"):
            with Vertical(id="catalog-pane"):
                yield Static(id="category-bar")
                yield Static(id="items")
            with Vertical(id="quote-pane"):
                yield Static("Quotation", id="quote-header", classes="pane-title")
                yield Static("(no items yet)", id="quote-lines")
                yield Static(id="totals")
        yield Static(id="status-bar")

    def on_mount(self) -> None:
        _, msg = check_document_dependencies()
        self.system_status = msg
        log_debug(f"on_mount export_status={msg!r}")
        self._refresh_all()
        self._open_vendor_picker()

    # -- session lifecycle ----------------------------------------------

    def _modal_open(self) -> bool:
        return isinstance(self.screen, ModalScreen)

    def _open_vendor_picker(self) -> None:
        rows: list[PickerRow] = [(f"{vendor.name}  ({vendor.city})", vendor_id) for vendor_id, vendor in self.vendors.items()]
        self.push_screen(
            PickerModal("Select a manufacturer", rows, empty_text="No vendors configured"),
            self._on_vendor_picked,
        )

    def _on_vendor_picked(self, vendor_id: str | None) -> None:
        if vendor_id is None:
            if self.session is None:
                self._set_status("Press V to choose a manufacturer")
            return
        self._start_session(vendor_id)

    def _start_session(self, vendor_id: str) -> QuotationSession | None:
        vendor = self.vendors.get(vendor_id)
        if vendor is None:
            self._set_status(f"Unknown vendor {vendor_id!r}")
            return None
        if self.session is not None:
            self.session.flush()

        self.session = QuotationSession(
            vendor=vendor,
            catalog=load_catalog(vendor, self.data_dir),
            compatibility=self.compatibility,
            kits=load_kits(vendor.id, self.data_dir),
            stores=self.stores,
            schedule=self.set_timer,
            on_saved=self._on_autosaved,
        )
        self.sub_title = vendor.name
        self.category_index = 0
        self.item_index = 0
        log_debug(f"session_start vendor={vendor.id!r} categories={len(self.session.catalog.categories)}")
        self._refresh_all()
        return self.session

    def _on_autosaved(self, outcome: PersistOutcome | None) -> None:
        if outcome is None or self.session is None:
            return
        number = self.session.quotation_number
        if outcome.failed:
            failures = ", ".join(f"{name}: {error}" for name, error in outcome.failed)
            saved = ", ".join(outcome.saved) or "nowhere"
            self._set_status(f"Quote {number} saved to {saved}; failed {failures}")
        else:
            self._set_status(f"Autosaved {number}")

    # -- catalog navigation ---------------------------------------------

    def _categories(self) -> tuple[CatalogCategory, ...]:
        if self.session is None:
            return ()
        return self.session.catalog.categories

    def _current_category(self) -> CatalogCategory | None:
        categories = self._categories()
        if not categories:
            return None
        return categories[self.category_index % len(categories)]

    def _visible_items(self) -> list[CatalogItem]:
        category = self._current_category()
        if self.session is None or category is None:
            return []
        return self.session.selectable(category)

    def _highlighted_item(self) -> CatalogItem | None:
        items = self._visible_items()
        if not items:
            return None
        return items[min(self.item_index, len(items) - 1)]

    def _highlighted_entry(self) -> SelectionEntry | None:
        item = self._highlighted_item()
        if self.session is None or item is None:
            return None
        return self.session.store.get(item.id)

    def action_cycle_category(self, delta: int) -> None:
        if self._modal_open():
            return
        categories = self._categories()
        if not categories:
            return
        self.category_index = (self.category_index + delta) % len(categories)
        self.item_index = 0
        self._refresh_catalog()

    def action_move_item(self, delta: int) -> None:
        if self._modal_open():
            return
        items = self._visible_items()
        if not items:
            self.item_index = 0
            return
        self.item_index = (self.item_index + delta) % len(items)
        self._refresh_catalog()

    def action_toggle_item(self) -> None:
        if self._modal_open() or self.session is None:
            return
        item = self._highlighted_item()
        if item is None:
            return
        selected = self.session.toggle(item)
        log_debug(f"toggle item={item.id!r} selected={selected}")
        self._refresh_all()

    # -- per-item inputs ------------------------------------------------

    def _prompt(self, title: str, prompt: str, value: str, on_value: Callable[[str], None], numeric: bool = False) -> None:
        def handle(result: str | None) -> None:
            if result is None:
                return
            on_value(result)
            self._refresh_all()

        self.push_screen(InputModal(title, prompt, value, numeric=numeric), handle)

    def _prompt_sequence(
        self,
        steps: list[tuple[str, str, str, bool]],
        on_done: Callable[[list[str]], None],
        collected: list[str] | None = None,
    ) -> None:
        """Chain prompts; cancelling any step abandons the whole sequence."""
        collected = collected or []
        if len(collected) == len(steps):
            on_done(collected)
            self._refresh_all()
            return
        title, prompt, value, numeric = steps[len(collected)]

        def handle(result: str | None) -> None:
            if result is None:
                return
            self._prompt_sequence(steps, on_done, [*collected, result])

        self.push_screen(InputModal(title, prompt, value, numeric=numeric), handle)

    def _selected_highlight(self) -> SelectionEntry | None:
        entry = self._highlighted_entry()
        if entry is None:
            self._set_status("Select the item first (Enter)")
        return entry

    def action_edit_quantity(self) -> None:
        if self._modal_open() or self.session is None:
            return
        category = self._current_category()
        entry = self._selected_highlight()
        if entry is None or category is None:
            return
        if not shows_quantity_input(category.name, entry.item.name):
            self._set_status(f"{entry.item.name} has a fixed quantity")
            return
        session = self.session
        item_id = entry.item.id

        def apply(text: str) -> None:
            session.edit_quantity(item_id, text)
            session.commit_quantity(item_id)

        self._prompt("Quantity", entry.item.name, str(entry.quantity), apply, numeric=True)

    def action_edit_price(self) -> None:
        if self._modal_open() or self.session is None:
            return
        entry = self._selected_highlight()
        if entry is None:
            return
        if not accepts_custom_price(entry.item.name):
            self._set_status(f"{entry.item.name} uses the catalog price")
            return
        session = self.session
        item_id = entry.item.id
        current = "" if entry.custom_price is None else f"{entry.custom_price:g}"
        self._prompt("Price (€)", entry.item.name, current, lambda text: session.set_custom_price(item_id, text), numeric=True)

    def action_edit_description(self) -> None:
        if self._modal_open() or self.session is None:
            return
        entry = self._selected_highlight()
        if entry is None:
            return
        if not accepts_custom_description(entry.item.name):
            self._set_status(f"{entry.item.name} uses the catalog description")
            return
        session = self.session
        item_id = entry.item.id
        self._prompt(
            "Description / Note",
            entry.item.name,
            entry.custom_description or "",
            lambda text: session.set_custom_description(item_id, text),
        )

    # -- quotation-level inputs -----------------------------------------

    def action_edit_discount(self) -> None:
        if self._modal_open() or self.session is None:
            return
        session = self.session
        self._prompt("Discount (%)", "0 to 100", f"{session.discount:g}", session.set_discount_text, numeric=True)

    def action_edit_client(self) -> None:
        if self._modal_open() or self.session is None:
            return
        session = self.session
        steps = [(label, "Client details", getattr(session.client, key), False) for key, label in _CLIENT_FIELDS]

        def apply(values: list[str]) -> None:
            session.update_client(**{key: value for (key, _), value in zip(_CLIENT_FIELDS, values)})

        self._prompt_sequence(steps, apply)

    def action_edit_terms(self) -> None:
        if self._modal_open() or self.session is None:
            return
        session = self.session
        self._prompt("Payment terms", "Printed in the document footer", session.payment_terms, session.set_payment_terms)

    def action_add_custom_item(self) -> None:
        if self._modal_open() or self.session is None:
            return
        session = self.session
        steps = [
            ("Custom line", "Item name", "", False),
            ("Custom line", "Description", "", False),
            ("Custom line", "Price (€)", "", True),
        ]

        def apply(values: list[str]) -> None:
            name, description, price = values
            entry = session.add_custom_item(name, description, price)
            if entry is None:
                self.system_status = "Custom line needs a name and a valid price"
            else:
                self.system_status = f"Added {entry.item.name}"

        self._prompt_sequence(steps, apply)

    def action_remove_line(self) -> None:
        if self._modal_open() or self.session is None:
            return
        session = self.session
        rows: list[PickerRow] = [
            (f"{entry.item.name}  {entry.quantity} x {format_money(entry.unit_price)}", entry.item.id)
            for entry in session.entries
        ]

        def handle(item_id: str | None) -> None:
            if item_id is None:
                return
            session.remove(item_id)
            self._refresh_all()

        self.push_screen(PickerModal("Remove line", rows, empty_text="No lines selected"), handle)

    # -- kits and saved quotations --------------------------------------

    def action_load_kit(self) -> None:
        if self._modal_open() or self.session is None:
            return
        session = self.session
        if not session.kits:
            self._set_status(f"No predefined kits for {session.vendor.name}")
            return
        rows: list[PickerRow] = [
            (f"{kit.name}: {kit.envelope} / {kit.basket} / {kit.burner}", kit) for kit in session.kits
        ]

        def handle(kit: Kit | None) -> None:
            if kit is None:
                return
            loaded = session.load_kit(kit)
            self.item_index = 0
            self.system_status = f"Loaded kit {kit.name} ({len(loaded)} items)"
            self._refresh_all()

        self.push_screen(PickerModal("Load predefined kit", rows), handle)

    def _saved_rows(self) -> list[PickerRow]:
        rows: list[PickerRow] = []
        for quotation in list_saved(self.stores):
            label = (
                f"{quotation.quotation_number}  {quotation.vendor_name}  "
                f"{quotation.client_name or '[No client name]'}  "
                f"{quotation.date[:10]}  {len(quotation.items)} items  {format_money(quotation.total)}"
            )
            rows.append((label, quotation))
        return rows

    def _delete_saved(self, quotation: SavedQuotation) -> list[PickerRow]:
        outcome = delete_everywhere(quotation.quotation_number, self.stores)
        log_debug(f"delete number={quotation.quotation_number} ok={outcome.ok}")
        return self._saved_rows()

    def action_load_quotation(self) -> None:
        if self._modal_open():
            return
        self.push_screen(
            PickerModal(
                "Load previous quotation",
                self._saved_rows(),
                empty_text="No saved quotations found",
                on_delete=self._delete_saved,
            ),
            self._on_quotation_picked,
        )

    def _on_quotation_picked(self, quotation: SavedQuotation | None) -> None:
        if quotation is None:
            return
        session = self.session
        if session is None or session.vendor.id != quotation.vendor_id:
            session = self._start_session(quotation.vendor_id)
            if session is None:
                return
        session.load(quotation)
        self.category_index = 0
        self.item_index = 0
        self.system_status = f"Loaded quotation {quotation.quotation_number}"
        self._refresh_all()

    def action_new_quotation(self) -> None:
        if self._modal_open() or self.session is None:
            return
        self.session.reset()
        self.system_status = "Started a new quotation"
        self._refresh_all()

    def action_change_vendor(self) -> None:
        if self._modal_open():
            return
        self._open_vendor_picker()

    # -- output ---------------------------------------------------------

    def action_export_document(self) -> None:
        if self._modal_open() or self.session is None:
            return
        if not len(self.session.store):
            self._set_status("Nothing to export")
            return
        quotation = self.session.snapshot()
        try:
            path = export_quotation_document(quotation, self.session.vendor)
        except Exception as exc:
            self._set_status(f"Export failed: {exc}")
            log_debug(f"export_failed number={quotation.quotation_number} error={exc!r}")
            return
        self._set_status(f"Exported {path}")
        log_debug(f"export_done number={quotation.quotation_number} path={str(path)!r}")

    def action_save_now(self) -> None:
        if self.session is None:
            return
        outcome = self.session.flush() or self.session.save()
        if outcome is None:
            self._set_status("Nothing to save")

    async def action_quit(self) -> None:
        if self.session is not None:
            self.session.flush()
        self.exit()

    # -- rendering ------------------------------------------------------

    def _set_status(self, message: str) -> None:
        self.system_status = message
        self._refresh_status()

    def _refresh_all(self) -> None:
        self._refresh_catalog()
        self._refresh_quote()
        self._refresh_status()

    def _visible_rows(self, widget: Static) -> int:
        height = widget.size.height
        if height <= 0:
            return 8
        return max(1, height)

    def _window_bounds(self, total: int, rows: int, selected: int | None) -> tuple[int, int]:
        if total <= 0:
            return (0, 0)

        rows = max(1, rows)
        if total <= rows:
            return (0, total)

        if selected is None:
            start = 0
        else:
            start = max(0, selected - rows // 2)
            start = min(start, total - rows)

        return (start, start + rows)

    def _refresh_catalog(self) -> None:
        try:
            bar = self.query_one("#category-bar", Static)
            items_widget = self.query_one("#items", Static)
        except NoMatches:
            return

        category = self._current_category()
        if self.session is None or category is None:
            bar.update("No catalog loaded")
            items_widget.update("")
            return

        categories = self._categories()
        bar.update(format_category_title(category.name, self.category_index % len(categories) + 1, len(categories)))

        items = self._visible_items()
        if not items:
            items_widget.update("No compatible items")
            return
        if self.item_index >= len(items):
            self.item_index = len(items) - 1

        start, end = self._window_bounds(len(items), self._visible_rows(items_widget), self.item_index)
        lines = Text()
        if start > 0:
            lines.append("⋮\n", style="dim")
        for idx in range(start, end):
            if idx > start:
                lines.append("\n")
            item = items[idx]
            lines.append("➤ " if idx == self.item_index else "  ")
            lines.append_text(format_catalog_item(item, self.session.store.get(item.id), category.name))
        if end < len(items):
            lines.append("\n⋮", style="dim")
        items_widget.update(lines)

    def _refresh_quote(self) -> None:
        try:
            header = self.query_one("#quote-header", Static)
            lines_widget = self.query_one("#quote-lines", Static)
            totals_widget = self.query_one("#totals", Static)
        except NoMatches:
            return

        session = self.session
        if session is None:
            header.update("Quotation")
            lines_widget.update("(no items yet)")
            totals_widget.update("")
            return

        client = session.client.name or "[Customer Name]"
        number = session.quotation_number or "(unsaved)"
        header.update(Text(f"Quotation {number}  {client}"))

        entries = session.entries
        if not entries:
            lines_widget.update("(no items yet)")
        else:
            lines = Text()
            for idx, entry in enumerate(entries, start=1):
                if idx > 1:
                    lines.append("\n")
                lines.append_text(format_entry_line(idx, entry))
            lines_widget.update(lines)

        totals_widget.update(format_totals(session.subtotal, session.discount, session.discount_value, session.total))

    def _refresh_status(self) -> None:
        try:
            bar = self.query_one("#status-bar", Static)
        except NoMatches:
            return
        help_line = "Tab category, ↑/↓ item, Enter select, Q qty, D discount, C client, K kit, L load, Ctrl+E export"
        bar.update(Text(f"{help_line}\n{self.system_status or 'Ready'}"))
