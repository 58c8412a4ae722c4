"""Category selection policies and item-level input overrides."""

from __future__ import annotations

from enum import Enum


class CategoryBehavior(str, Enum):
    SINGLE = "single"
    MULTI_QTY = "multi-qty"
    MULTI_FIXED = "multi-fixed"


ENVELOPE = "ENVELOPE"
BASKET = "BASKET"
BURNER = "BURNER"
BURNER_FRAME = "BURNER FRAME"
CUSTOM = "CUSTOM"

SINGLE_CATEGORIES = frozenset({ENVELOPE, BASKET, BURNER, BURNER_FRAME})
# ANCILLARY holds the inflation fans.
QUANTITY_CATEGORIES = frozenset({"FUELTANK", "ANCILLARY", "ACCESSORIES"})

# "VENTILADOR" is the Spanish catalog wording for an inflation fan.
QUANTITY_ITEM_TOKENS = ("FAN", "FUEL", "TANK", "VENTILADOR")
CUSTOM_PRICE_TOKENS = ("ARTWORK",)
CUSTOM_DESCRIPTION_TOKENS = ("ARTWORK", "HYPERLAST CONFIGURATION", "100% HYPERLAST PANEL")


def resolve_category_behavior(category_name: str | None) -> CategoryBehavior:
    """Classify a category name (case-insensitive) into its selection policy."""
    if not category_name:
        return CategoryBehavior.MULTI_FIXED

    upper = category_name.upper()
    if upper in SINGLE_CATEGORIES:
        return CategoryBehavior.SINGLE
    if upper in QUANTITY_CATEGORIES:
        return CategoryBehavior.MULTI_QTY
    return CategoryBehavior.MULTI_FIXED


def _contains_any(name: str, tokens: tuple[str, ...]) -> bool:
    upper = name.upper()
    return any(token in upper for token in tokens)


def item_needs_quantity_selector(item_name: str) -> bool:
    """Fans and fuel tanks always get a quantity input, whatever their category."""
    return _contains_any(item_name, QUANTITY_ITEM_TOKENS)


def shows_quantity_input(category_name: str | None, item_name: str) -> bool:
    if resolve_category_behavior(category_name) is CategoryBehavior.MULTI_QTY:
        return True
    return item_needs_quantity_selector(item_name)


def accepts_custom_price(item_name: str) -> bool:
    return _contains_any(item_name, CUSTOM_PRICE_TOKENS)


def accepts_custom_description(item_name: str) -> bool:
    return _contains_any(item_name, CUSTOM_DESCRIPTION_TOKENS)


def is_complimentary(item_name: str, price: float) -> bool:
    """Zero-priced items display as complimentary unless priced per order."""
    return price == 0 and not accepts_custom_price(item_name)
