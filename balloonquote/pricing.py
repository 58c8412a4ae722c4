"""Line totals, discounted grand total and numeric input parsing."""

from __future__ import annotations

import math
from typing import Iterable

from balloonquote.config import CURRENCY_SYMBOL
from balloonquote.models import SelectionEntry


def line_total(entry: SelectionEntry) -> float:
    return entry.unit_price * entry.quantity


def raw_total(entries: Iterable[SelectionEntry]) -> float:
    return sum((line_total(entry) for entry in entries), 0.0)


def discount_amount(subtotal: float, discount_percent: float) -> float:
    return subtotal * discount_percent / 100


def compute_total(entries: Iterable[SelectionEntry], discount_percent: float) -> float:
    """Discounted grand total, never below zero and never rounded."""
    subtotal = raw_total(entries)
    return max(0.0, subtotal - discount_amount(subtotal, discount_percent))


def clamp_discount(value: float) -> float:
    return min(100.0, max(0.0, value))


def parse_discount(text: str) -> float:
    """Parse a discount field; unparseable input counts as 0%."""
    try:
        return clamp_discount(float(text.strip().rstrip("%")))
    except ValueError:
        return 0.0


def parse_quantity(text: str) -> int | None:
    """Parse a quantity field.

    An empty field is the transient 0 state; anything else unparseable means
    "no change" and returns None.
    """
    raw = text.strip()
    if not raw:
        return 0
    try:
        return max(0, int(raw))
    except ValueError:
        return None


def parse_price(text: str) -> float | None:
    """Parse a price field: empty means 0, unparseable means no change."""
    raw = text.strip().replace(CURRENCY_SYMBOL, "").replace(",", "")
    if not raw:
        return 0.0
    try:
        value = float(raw)
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return max(0.0, value)


def format_money(amount: float) -> str:
    """Presentation-only currency string, e.g. ``€8,500.00``."""
    sign = "-" if amount < 0 else ""
    return f"{sign}{CURRENCY_SYMBOL}{abs(amount):,.2f}"
