"""Quotation snapshots: project a selection into a persistable record and back."""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from balloonquote.models import Catalog, ClientDetails, SavedLineItem, SavedQuotation, SelectionEntry
from balloonquote.pricing import compute_total
from balloonquote.selection import SelectionStore


@dataclass(frozen=True)
class QuotationMetadata:
    """Everything besides the selections that a snapshot carries."""

    quotation_number: str
    vendor_id: str
    vendor_name: str
    client: ClientDetails = field(default_factory=ClientDetails)
    discount: float = 0.0
    payment_terms: str = ""


def generate_quotation_number(year: int | None = None) -> str:
    """``YYYY-NNN`` with a random three-digit sequence."""
    if year is None:
        year = datetime.now().year
    return f"{year}-{random.randint(100, 999)}"


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _line_from_entry(entry: SelectionEntry) -> SavedLineItem:
    return SavedLineItem(
        item_id=entry.item.id,
        item_name=entry.item.name,
        quantity=entry.quantity,
        price=entry.item.price,
        category=entry.category or "UNKNOWN",
        description=entry.item.description,
        custom_price=entry.custom_price,
        custom_description=entry.custom_description,
    )


def snapshot(store: SelectionStore, metadata: QuotationMetadata) -> SavedQuotation:
    """Project the store and metadata into a quotation. Does not touch the store."""
    entries = store.entries()
    return SavedQuotation(
        quotation_number=metadata.quotation_number,
        vendor_id=metadata.vendor_id,
        vendor_name=metadata.vendor_name,
        date=_utc_now_iso(),
        client=ClientDetails(
            name=metadata.client.name,
            country=metadata.client.country,
            phone=metadata.client.phone,
            email=metadata.client.email,
        ),
        items=tuple(_line_from_entry(entry) for entry in entries),
        discount=metadata.discount,
        total=compute_total(entries, metadata.discount),
        payment_terms=metadata.payment_terms,
    )


def restore(quotation: SavedQuotation, catalog: Catalog) -> SelectionStore:
    """Rebuild a store against the current catalog.

    Lines whose item id is gone from the catalog are dropped; catalog drift
    between save and load is not an error. Stored quantities below 1 come
    back as 1.
    """
    store = SelectionStore(catalog)
    for line in quotation.items:
        item = catalog.find_item(line.item_id)
        if item is None:
            continue
        store.select(
            item,
            max(1, line.quantity),
            custom_price=line.custom_price,
            custom_description=line.custom_description,
        )
    return store


def quotation_to_dict(quotation: SavedQuotation) -> dict[str, Any]:
    return {
        "quotationNumber": quotation.quotation_number,
        "vendorId": quotation.vendor_id,
        "vendorName": quotation.vendor_name,
        "date": quotation.date,
        "clientName": quotation.client.name,
        "clientDetails": {
            "name": quotation.client.name,
            "country": quotation.client.country,
            "phone": quotation.client.phone,
            "email": quotation.client.email,
        },
        "items": [
            {
                "itemId": line.item_id,
                "itemName": line.item_name,
                "category": line.category,
                "description": line.description,
                "quantity": line.quantity,
                "price": line.price,
                "customPrice": line.custom_price,
                "customDescription": line.custom_description,
            }
            for line in quotation.items
        ],
        "discount": quotation.discount,
        "total": quotation.total,
        "paymentTerms": quotation.payment_terms,
    }


def _optional_float(value: Any) -> float | None:
    if value is None:
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def quotation_from_dict(raw: dict[str, Any]) -> SavedQuotation:
    """Parse a stored quotation dict; missing fields fall back to defaults."""
    if not raw.get("quotationNumber"):
        raise ValueError("quotation record has no quotationNumber")

    client_raw = raw.get("clientDetails") or {}
    items: list[SavedLineItem] = []
    for line in raw.get("items") or []:
        if not isinstance(line, dict) or not line.get("itemId"):
            continue
        try:
            quantity = int(line.get("quantity", 1))
        except (TypeError, ValueError):
            quantity = 1
        items.append(
            SavedLineItem(
                item_id=str(line["itemId"]),
                item_name=str(line.get("itemName") or ""),
                quantity=quantity,
                price=_optional_float(line.get("price")) or 0.0,
                category=str(line.get("category") or "UNKNOWN"),
                description=str(line.get("description") or ""),
                custom_price=_optional_float(line.get("customPrice")),
                custom_description=line.get("customDescription") or None,
            )
        )

    return SavedQuotation(
        quotation_number=str(raw["quotationNumber"]),
        vendor_id=str(raw.get("vendorId") or ""),
        vendor_name=str(raw.get("vendorName") or ""),
        date=str(raw.get("date") or ""),
        client=ClientDetails(
            name=str(client_raw.get("name") or raw.get("clientName") or ""),
            country=str(client_raw.get("country") or ""),
            phone=str(client_raw.get("phone") or ""),
            email=str(client_raw.get("email") or ""),
        ),
        items=tuple(items),
        discount=_optional_float(raw.get("discount")) or 0.0,
        total=_optional_float(raw.get("total")) or 0.0,
        payment_terms=str(raw.get("paymentTerms") or ""),
    )
