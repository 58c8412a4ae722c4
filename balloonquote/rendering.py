"""Rich text helpers for the catalog and quotation panes."""

from __future__ import annotations

from rich.text import Text

from balloonquote.category_logic import (
    CategoryBehavior,
    accepts_custom_description,
    accepts_custom_price,
    is_complimentary,
    resolve_category_behavior,
    shows_quantity_input,
)
from balloonquote.models import CatalogItem, SelectionEntry
from balloonquote.pricing import format_money, line_total


def badge_style(behavior: CategoryBehavior) -> str:
    """Return a consistent badge style per selection policy."""
    if behavior is CategoryBehavior.SINGLE:
        return "bold #ffffff on #b23a48"
    if behavior is CategoryBehavior.MULTI_QTY:
        return "bold #ffffff on #2f6db5"
    return "bold #0b1f0f on #5fbf72"


def format_category_title(name: str, position: int, count: int) -> Text:
    behavior = resolve_category_behavior(name)
    text = Text()
    text.append(f" {behavior.value} ", style=badge_style(behavior))
    text.append(f" {name}", style="bold")
    text.append(f"  ({position}/{count})", style="dim")
    return text


def format_price(item: CatalogItem) -> str:
    if is_complimentary(item.name, item.price):
        return "Complimentary"
    return format_money(item.price)


def format_catalog_item(item: CatalogItem, entry: SelectionEntry | None, category_name: str) -> Text:
    """One catalog row: selection marker, name, price and the inputs it offers."""
    single = resolve_category_behavior(category_name) is CategoryBehavior.SINGLE
    if entry is None:
        marker = "( )" if single else "[ ]"
    else:
        marker = "(•)" if single else "[x]"

    text = Text()
    text.append(f"{marker} ", style="bold" if entry else "")
    text.append(item.name, style="bold" if entry else "")
    text.append(f"  {format_price(item)}", style="dim")

    if entry is not None:
        hints: list[str] = []
        if shows_quantity_input(category_name, item.name):
            hints.append(f"qty {entry.quantity}")
        if accepts_custom_price(item.name):
            hints.append(f"price {format_money(entry.unit_price)}")
        if accepts_custom_description(item.name) and entry.custom_description:
            hints.append(f"note: {entry.custom_description}")
        if hints:
            text.append(f"  [{', '.join(hints)}]", style="italic")
    return text


def format_entry_line(index: int, entry: SelectionEntry) -> Text:
    """A quotation line: name, quantity, unit price and line total."""
    text = Text()
    text.append(f"{index}. ")
    text.append(entry.item.name, style="bold")
    if entry.category:
        text.append(f"  {entry.category}", style="dim")
    text.append(f"\n      {entry.quantity} x {format_money(entry.unit_price)} = {format_money(line_total(entry))}")
    return text


def format_totals(subtotal: float, discount_percent: float, discount_value: float, total: float) -> Text:
    text = Text()
    text.append(f"Subtotal: {format_money(subtotal)}\n")
    if discount_percent > 0:
        text.append(f"Discount ({discount_percent:g}%): -{format_money(discount_value)}\n", style="#ff8080")
    text.append(f"TOTAL: {format_money(total)}", style="bold")
    return text
