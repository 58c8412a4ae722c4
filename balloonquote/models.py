"""Domain models for balloon-quote."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class CatalogItem:
    """A priced catalog item. Category is only set on synthesized items."""

    id: str
    name: str
    description: str = ""
    price: float = 0.0
    category: str | None = None


@dataclass(frozen=True)
class CatalogCategory:
    """A named, ordered group of catalog items."""

    name: str
    items: tuple[CatalogItem, ...] = ()


@dataclass(frozen=True)
class Catalog:
    """A vendor catalog: ordered categories, read-only for a session."""

    categories: tuple[CatalogCategory, ...] = ()

    def category_named(self, name: str) -> CatalogCategory | None:
        upper = name.upper()
        for category in self.categories:
            if category.name.upper() == upper:
                return category
        return None

    def find_item(self, item_id: str) -> CatalogItem | None:
        for category in self.categories:
            for item in category.items:
                if item.id == item_id:
                    return item
        return None

    def category_of(self, item_id: str) -> str | None:
        """Name of the category that structurally owns an item id."""
        for category in self.categories:
            if any(item.id == item_id for item in category.items):
                return category.name
        return None

    def find_by_name(self, category_name: str, item_name: str) -> CatalogItem | None:
        category = self.category_named(category_name)
        if category is None:
            return None
        for item in category.items:
            if item.name == item_name:
                return item
        return None


@dataclass
class SelectionEntry:
    """A selected item with its quantity and optional overrides."""

    item: CatalogItem
    quantity: int = 1
    custom_price: float | None = None
    custom_description: str | None = None
    category: str | None = None

    @property
    def unit_price(self) -> float:
        return self.custom_price if self.custom_price is not None else self.item.price

    @property
    def description(self) -> str:
        return self.custom_description or self.item.description


@dataclass
class ClientDetails:
    """Contact fields for the quotation recipient."""

    name: str = ""
    country: str = ""
    phone: str = ""
    email: str = ""


@dataclass(frozen=True)
class VendorInfo:
    """A balloon manufacturer and where its catalog lives."""

    id: str
    name: str
    address: str = ""
    city: str = ""
    phone: str = ""
    email: str = ""
    catalog_file: str = ""


@dataclass(frozen=True)
class Kit:
    """A predefined envelope + basket + burner bundle."""

    id: str
    name: str
    envelope: str
    basket: str
    burner: str
    description: str = ""


@dataclass(frozen=True)
class CompatibilityRule:
    """Baskets and burners allowed with one envelope."""

    baskets: tuple[str, ...] = ()
    burners: tuple[str, ...] = ()


@dataclass(frozen=True)
class SavedLineItem:
    """Denormalized selection entry as stored with a quotation."""

    item_id: str
    item_name: str
    quantity: int
    price: float
    category: str = "UNKNOWN"
    description: str = ""
    custom_price: float | None = None
    custom_description: str | None = None


@dataclass(frozen=True)
class SavedQuotation:
    """A persisted, reloadable quotation snapshot."""

    quotation_number: str
    vendor_id: str
    vendor_name: str
    date: str
    client: ClientDetails = field(default_factory=ClientDetails)
    items: tuple[SavedLineItem, ...] = ()
    discount: float = 0.0
    total: float = 0.0
    payment_terms: str = ""

    @property
    def client_name(self) -> str:
        return self.client.name
