"""Narrow the selectable items of a category from the current selection."""

from __future__ import annotations

from balloonquote.category_logic import BASKET, BURNER, BURNER_FRAME, ENVELOPE
from balloonquote.compatibility import CompatibilityTable
from balloonquote.models import CatalogCategory, CatalogItem
from balloonquote.selection import SelectionStore

# Order matters: the first token found in the burner name wins.
_FRAME_TYPE_BY_BURNER_TOKEN = (
    ("DOUBLE", "DOUBLE"),
    ("TRIPLE", "TRIPLE"),
    ("QUAD", "QUADRUPLE"),
)


def required_frame_type(burner_name: str | None) -> str | None:
    """Infer the frame type token a burner needs, if any.

    "QUAD" is a substring of "QUADRUPLE", so both spellings map to QUADRUPLE.
    """
    if not burner_name:
        return None
    upper = burner_name.upper()
    for token, frame_type in _FRAME_TYPE_BY_BURNER_TOKEN:
        if token in upper:
            return frame_type
    return None


def filter_selectable(
    category: CatalogCategory,
    store: SelectionStore,
    vendor_id: str,
    compatibility: CompatibilityTable,
) -> list[CatalogItem]:
    """Items of ``category`` eligible for display and selection."""
    items = list(category.items)
    category_upper = category.name.upper()
    envelope_name = store.selected_name(ENVELOPE)

    if category_upper == BURNER_FRAME:
        frame_type = required_frame_type(store.selected_name(BURNER))
        if frame_type is None:
            return items
        return [item for item in items if frame_type in item.name.upper()]

    if envelope_name is None:
        return items

    if category_upper == BASKET:
        allowed = set(compatibility.compatible_baskets(vendor_id, envelope_name))
        return [item for item in items if item.name in allowed]

    if category_upper == BURNER:
        allowed = set(compatibility.compatible_burners(vendor_id, envelope_name))
        return [item for item in items if item.name in allowed]

    return items
