import re

import pytest

from balloonquote.models import Catalog, CatalogCategory, ClientDetails
from balloonquote.quotation import (
    QuotationMetadata,
    generate_quotation_number,
    quotation_from_dict,
    quotation_to_dict,
    restore,
    snapshot,
)

from conftest import VENDOR_ID


def _metadata(**overrides):
    values = dict(
        quotation_number="2026-123",
        vendor_id=VENDOR_ID,
        vendor_name="Acme Balloons",
        client=ClientDetails(name="Skyward Ltd", country="Spain", phone="+34 600", email="ops@skyward.example"),
        discount=10.0,
        payment_terms="Net 30",
    )
    values.update(overrides)
    return QuotationMetadata(**values)


def _filled_store(catalog, store):
    store.select(catalog.find_item("env-c77"))
    store.select(catalog.find_item("tnk-40"), 2)
    store.select(catalog.find_item("opt-art"), 1, custom_price=800.0, custom_description="Logo on both sides")
    store.add_custom_item("Trailer", "Road legal", 2500.0)
    return store


def test_quotation_number_format():
    number = generate_quotation_number(2026)
    assert re.fullmatch(r"2026-\d{3}", number)
    assert 100 <= int(number.split("-")[1]) <= 999


def test_snapshot_projects_entries_and_total(catalog, store):
    _filled_store(catalog, store)
    quotation = snapshot(store, _metadata())

    assert quotation.quotation_number == "2026-123"
    assert quotation.client_name == "Skyward Ltd"
    assert [line.item_name for line in quotation.items] == [
        "Classic 77",
        "Fuel Tank 40 L",
        "Custom Artwork",
        "Trailer",
    ]
    assert quotation.items[0].category == "Envelope"
    assert quotation.items[3].category == "CUSTOM"
    subtotal = 38900.0 + 2 * 1390.0 + 800.0 + 2500.0
    assert quotation.total == pytest.approx(subtotal * 0.9)
    assert quotation.date


def test_snapshot_leaves_store_untouched(catalog, store):
    _filled_store(catalog, store)
    before = [(e.item.id, e.quantity, e.custom_price, e.custom_description) for e in store.entries()]
    snapshot(store, _metadata())
    snapshot(store, _metadata(discount=50.0))
    after = [(e.item.id, e.quantity, e.custom_price, e.custom_description) for e in store.entries()]
    assert before == after


def test_snapshot_copies_client(catalog, store):
    client = ClientDetails(name="Before")
    quotation = snapshot(store, _metadata(client=client))
    client.name = "After"
    assert quotation.client.name == "Before"


def test_restore_round_trip(catalog, store):
    _filled_store(catalog, store)
    store.remove(store.entries()[-1].item.id)  # custom lines are not in the catalog
    quotation = snapshot(store, _metadata())

    restored = restore(quotation, catalog)
    original = [(e.item.id, e.quantity, e.custom_price, e.custom_description) for e in store.entries()]
    roundtrip = [(e.item.id, e.quantity, e.custom_price, e.custom_description) for e in restored.entries()]
    assert roundtrip == original


def test_restore_drops_items_missing_from_catalog(catalog, store):
    _filled_store(catalog, store)
    quotation = snapshot(store, _metadata())

    shrunk = Catalog(
        categories=tuple(
            CatalogCategory(name=c.name, items=tuple(i for i in c.items if i.id != "tnk-40"))
            for c in catalog.categories
        )
    )
    restored = restore(quotation, shrunk)
    ids = [entry.item.id for entry in restored.entries()]
    assert ids == ["env-c77", "opt-art"]


def test_dict_round_trip(catalog, store):
    _filled_store(catalog, store)
    quotation = snapshot(store, _metadata())
    raw = quotation_to_dict(quotation)

    assert raw["quotationNumber"] == "2026-123"
    assert raw["clientName"] == "Skyward Ltd"
    assert raw["items"][2]["customPrice"] == 800.0
    assert quotation_from_dict(raw) == quotation


def test_from_dict_tolerates_sparse_records():
    quotation = quotation_from_dict(
        {
            "quotationNumber": "2025-500",
            "clientName": "Legacy Client",
            "items": [{"itemId": "env-e1", "quantity": "x"}, {"itemName": "no id"}, "junk"],
        }
    )
    assert quotation.client.name == "Legacy Client"
    assert len(quotation.items) == 1
    assert quotation.items[0].quantity == 1
    assert quotation.items[0].category == "UNKNOWN"
    assert quotation.discount == 0.0


def test_from_dict_requires_number():
    with pytest.raises(ValueError):
        quotation_from_dict({"vendorId": VENDOR_ID})


@pytest.mark.parametrize("stored_quantity", [0, -2])
def test_restore_reconciles_quantities_below_one(catalog, stored_quantity):
    quotation = quotation_from_dict(
        {
            "quotationNumber": "2026-321",
            "vendorId": VENDOR_ID,
            "items": [{"itemId": "env-c77", "quantity": stored_quantity}, {"itemId": "tnk-40", "quantity": 3}],
        }
    )
    restored = restore(quotation, catalog)
    assert [(e.item.id, e.quantity) for e in restored.entries()] == [("env-c77", 1), ("tnk-40", 3)]
