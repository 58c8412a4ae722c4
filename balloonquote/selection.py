"""The selection store: every user interaction funnels through here."""

from __future__ import annotations

from typing import Iterator
from uuid import uuid4

from balloonquote.category_logic import (
    BASKET,
    BURNER,
    CUSTOM,
    ENVELOPE,
    CategoryBehavior,
    resolve_category_behavior,
)
from balloonquote.debuglog import log_debug
from balloonquote.models import Catalog, CatalogItem, SelectionEntry


class SelectionStore:
    """Mapping of item id to selection entry for one configuration session.

    Categories are joined from the catalog at selection time. Items that are
    not part of the catalog (custom lines) fall back to their own category.
    Iteration follows insertion order.
    """

    def __init__(self, catalog: Catalog | None = None) -> None:
        self.catalog = catalog or Catalog()
        self._entries: dict[str, SelectionEntry] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, item_id: object) -> bool:
        return item_id in self._entries

    def __iter__(self) -> Iterator[SelectionEntry]:
        return iter(list(self._entries.values()))

    def category_for(self, item: CatalogItem) -> str | None:
        return self.catalog.category_of(item.id) or item.category

    def get(self, item_id: str) -> SelectionEntry | None:
        return self._entries.get(item_id)

    def entries(self) -> list[SelectionEntry]:
        return list(self._entries.values())

    def entries_in(self, category_name: str) -> list[SelectionEntry]:
        upper = category_name.upper()
        return [entry for entry in self._entries.values() if (entry.category or "").upper() == upper]

    def selected_item(self, category_name: str) -> CatalogItem | None:
        """First selected item in a category, or None."""
        entries = self.entries_in(category_name)
        return entries[0].item if entries else None

    def selected_name(self, category_name: str) -> str | None:
        item = self.selected_item(category_name)
        return item.name if item is not None else None

    def select(
        self,
        item: CatalogItem,
        quantity: int = 1,
        custom_price: float | None = None,
        custom_description: str | None = None,
    ) -> SelectionEntry:
        """Upsert a selection; single-behavior categories keep only this item."""
        if quantity < 0:
            raise ValueError("quantity must not be negative")

        category = self.category_for(item)
        if resolve_category_behavior(category) is CategoryBehavior.SINGLE:
            for sibling in self.entries_in(category or ""):
                if sibling.item.id != item.id:
                    del self._entries[sibling.item.id]

        entry = SelectionEntry(
            item=item,
            quantity=quantity,
            custom_price=custom_price,
            custom_description=custom_description,
            category=category,
        )
        self._entries[item.id] = entry
        return entry

    def remove(self, item_id: str) -> None:
        self._entries.pop(item_id, None)

    def toggle(self, item: CatalogItem) -> bool:
        """Select with quantity 1 or deselect; returns whether it is now selected."""
        if item.id in self._entries:
            self.remove(item.id)
            return False
        self.select(item, 1)
        return True

    def clear(self) -> None:
        self._entries.clear()

    def set_quantity(self, item_id: str, quantity: int) -> SelectionEntry | None:
        entry = self._entries.get(item_id)
        if entry is None:
            return None
        return self.select(entry.item, max(0, quantity), entry.custom_price, entry.custom_description)

    def reconcile_quantity(self, item_id: str) -> SelectionEntry | None:
        """Commit a quantity edit: anything below 1 becomes 1."""
        entry = self._entries.get(item_id)
        if entry is None:
            return None
        if entry.quantity < 1:
            entry.quantity = 1
        return entry

    def set_custom_price(self, item_id: str, price: float | None) -> SelectionEntry | None:
        entry = self._entries.get(item_id)
        if entry is None:
            return None
        return self.select(entry.item, entry.quantity or 1, price, entry.custom_description)

    def set_custom_description(self, item_id: str, description: str | None) -> SelectionEntry | None:
        entry = self._entries.get(item_id)
        if entry is None:
            return None
        return self.select(entry.item, entry.quantity or 1, entry.custom_price, description or None)

    def add_custom_item(self, name: str, description: str, price: float) -> SelectionEntry:
        """Add an ad-hoc line that is not part of the catalog."""
        item = CatalogItem(
            id=f"custom_{uuid4().hex}",
            name=name,
            description=description,
            price=price,
            category=CUSTOM,
        )
        return self.select(item, 1)

    def load_kit(self, envelope: str, basket: str, burner: str) -> list[SelectionEntry]:
        """Replace the selection with a kit: envelope first, then basket, then burner.

        Basket and burner eligibility depend on the envelope, so each step is
        applied to the store before the next one is resolved.
        """
        self.clear()
        loaded: list[SelectionEntry] = []
        for category_name, item_name in ((ENVELOPE, envelope), (BASKET, basket), (BURNER, burner)):
            item = self.catalog.find_by_name(category_name, item_name)
            if item is None:
                log_debug(f"kit_item_missing category={category_name!r} name={item_name!r}")
                continue
            loaded.append(self.select(item, 1))
        return loaded
