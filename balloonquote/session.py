"""An explicit configuration session for one vendor."""

from __future__ import annotations

from typing import Callable, Iterable

from balloonquote.autosave import Debouncer, Scheduler
from balloonquote.config import AUTOSAVE_DELAY_SECONDS, DEFAULT_PAYMENT_TERMS
from balloonquote.compatibility import CompatibilityTable
from balloonquote.debuglog import log_debug
from balloonquote.filtering import filter_selectable
from balloonquote.models import (
    Catalog,
    CatalogCategory,
    CatalogItem,
    ClientDetails,
    Kit,
    SavedQuotation,
    SelectionEntry,
    VendorInfo,
)
from balloonquote.persistence import PersistOutcome, QuotationStore, persist_everywhere
from balloonquote.pricing import (
    clamp_discount,
    compute_total,
    discount_amount,
    parse_discount,
    parse_price,
    parse_quantity,
    raw_total,
)
from balloonquote.quotation import QuotationMetadata, generate_quotation_number, restore, snapshot
from balloonquote.selection import SelectionStore


class QuotationSession:
    """Vendor, catalog, selections and quotation metadata for one session.

    Every mutation schedules a debounced save. Saving writes the full
    snapshot to every configured store; failures are logged and kept in
    ``last_outcome`` but never raised.
    """

    def __init__(
        self,
        vendor: VendorInfo,
        catalog: Catalog,
        compatibility: CompatibilityTable,
        kits: Iterable[Kit] = (),
        stores: Iterable[QuotationStore] = (),
        schedule: Scheduler | None = None,
        autosave_delay: float = AUTOSAVE_DELAY_SECONDS,
        on_saved: Callable[[PersistOutcome | None], None] | None = None,
    ) -> None:
        self.vendor = vendor
        self.catalog = catalog
        self.compatibility = compatibility
        self.kits = list(kits)
        self.stores = list(stores)
        self.store = SelectionStore(catalog)
        self.client = ClientDetails()
        self.discount = 0.0
        self.payment_terms = DEFAULT_PAYMENT_TERMS
        self.quotation_number: str | None = None
        self.dirty = False
        self.last_outcome: PersistOutcome | None = None
        self.on_saved = on_saved
        self._autosave = Debouncer(schedule, autosave_delay, self.save) if schedule is not None else None

    # -- derived values -------------------------------------------------

    @property
    def entries(self) -> list[SelectionEntry]:
        return self.store.entries()

    @property
    def subtotal(self) -> float:
        return raw_total(self.entries)

    @property
    def discount_value(self) -> float:
        return discount_amount(self.subtotal, self.discount)

    @property
    def total(self) -> float:
        return compute_total(self.entries, self.discount)

    def selectable(self, category: CatalogCategory) -> list[CatalogItem]:
        return filter_selectable(category, self.store, self.vendor.id, self.compatibility)

    def ensure_quotation_number(self) -> str:
        if self.quotation_number is None:
            self.quotation_number = generate_quotation_number()
            log_debug(f"quotation_number_assigned number={self.quotation_number}")
        return self.quotation_number

    def metadata(self) -> QuotationMetadata:
        return QuotationMetadata(
            quotation_number=self.ensure_quotation_number(),
            vendor_id=self.vendor.id,
            vendor_name=self.vendor.name,
            client=self.client,
            discount=self.discount,
            payment_terms=self.payment_terms,
        )

    def snapshot(self) -> SavedQuotation:
        return snapshot(self.store, self.metadata())

    # -- mutations ------------------------------------------------------

    def _changed(self) -> None:
        self.dirty = True
        if self._autosave is not None:
            self._autosave.trigger()

    def select(
        self,
        item: CatalogItem,
        quantity: int = 1,
        custom_price: float | None = None,
        custom_description: str | None = None,
    ) -> SelectionEntry:
        entry = self.store.select(item, quantity, custom_price, custom_description)
        self._changed()
        return entry

    def remove(self, item_id: str) -> None:
        self.store.remove(item_id)
        self._changed()

    def toggle(self, item: CatalogItem) -> bool:
        selected = self.store.toggle(item)
        self._changed()
        return selected

    def edit_quantity(self, item_id: str, text: str) -> None:
        """Apply a keystroke-level quantity edit; garbage input is ignored."""
        quantity = parse_quantity(text)
        if quantity is None:
            return
        if self.store.set_quantity(item_id, quantity) is not None:
            self._changed()

    def commit_quantity(self, item_id: str) -> None:
        if self.store.reconcile_quantity(item_id) is not None:
            self._changed()

    def set_quantity(self, item_id: str, text: str) -> None:
        """Edit and commit in one step, as a dialog confirm does."""
        self.edit_quantity(item_id, text)
        self.commit_quantity(item_id)

    def set_custom_price(self, item_id: str, text: str) -> None:
        price = parse_price(text)
        if price is None:
            return
        if self.store.set_custom_price(item_id, price) is not None:
            self._changed()

    def set_custom_description(self, item_id: str, text: str) -> None:
        if self.store.set_custom_description(item_id, text.strip()) is not None:
            self._changed()

    def add_custom_item(self, name: str, description: str, price_text: str) -> SelectionEntry | None:
        name = name.strip()
        price = parse_price(price_text)
        if not name or price is None:
            return None
        entry = self.store.add_custom_item(name, description.strip(), price)
        self._changed()
        return entry

    def set_discount(self, value: float) -> None:
        self.discount = clamp_discount(value)
        self._changed()

    def set_discount_text(self, text: str) -> None:
        self.set_discount(parse_discount(text))

    def update_client(self, **fields: str) -> None:
        for key, value in fields.items():
            if not hasattr(self.client, key):
                raise KeyError(f"Unknown client field '{key}'")
            setattr(self.client, key, value.strip())
        self._changed()

    def set_payment_terms(self, text: str) -> None:
        self.payment_terms = text.strip()
        self._changed()

    def load_kit(self, kit: Kit) -> list[SelectionEntry]:
        loaded = self.store.load_kit(kit.envelope, kit.basket, kit.burner)
        log_debug(f"kit_loaded vendor={self.vendor.id} kit={kit.id!r} items={len(loaded)}")
        self._changed()
        return loaded

    def load(self, quotation: SavedQuotation) -> None:
        """Resume a saved quotation; its number is kept for further saves."""
        if quotation.vendor_id != self.vendor.id:
            raise ValueError(
                f"Quotation {quotation.quotation_number} belongs to vendor {quotation.vendor_id!r}, "
                f"not {self.vendor.id!r}"
            )
        if self._autosave is not None:
            self._autosave.flush()
        self.store = restore(quotation, self.catalog)
        self.client = ClientDetails(
            name=quotation.client.name,
            country=quotation.client.country,
            phone=quotation.client.phone,
            email=quotation.client.email,
        )
        self.discount = clamp_discount(quotation.discount)
        self.payment_terms = quotation.payment_terms or DEFAULT_PAYMENT_TERMS
        self.quotation_number = quotation.quotation_number
        dropped = len(quotation.items) - len(self.store)
        log_debug(
            f"quotation_loaded number={quotation.quotation_number} items={len(self.store)} dropped={dropped}"
        )
        self._changed()

    def reset(self) -> None:
        """Start a fresh quotation for the same vendor."""
        if self._autosave is not None:
            self._autosave.flush()
        self.store = SelectionStore(self.catalog)
        self.client = ClientDetails()
        self.discount = 0.0
        self.payment_terms = DEFAULT_PAYMENT_TERMS
        self.quotation_number = None
        self.dirty = False

    # -- persistence ----------------------------------------------------

    def save(self) -> PersistOutcome | None:
        """Write the snapshot everywhere. Empty selections are not saved."""
        self.dirty = False
        if not len(self.store):
            return None
        quotation = self.snapshot()
        outcome = persist_everywhere(quotation, self.stores)
        self.last_outcome = outcome
        log_debug(
            f"autosave number={quotation.quotation_number} saved={','.join(outcome.saved) or '-'} "
            f"failed={len(outcome.failed)}"
        )
        if self.on_saved is not None:
            self.on_saved(outcome)
        return outcome

    def flush(self) -> PersistOutcome | None:
        """Write pending changes now."""
        if self._autosave is not None and self._autosave.pending:
            self._autosave.cancel()
            return self.save()
        if self.dirty:
            return self.save()
        return None
