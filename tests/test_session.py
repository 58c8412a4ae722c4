import pytest

from balloonquote.config import DEFAULT_PAYMENT_TERMS
from balloonquote.persistence import LocalQuotationCache
from balloonquote.session import QuotationSession

from test_persistence import BrokenStore


@pytest.fixture
def cache(tmp_path) -> LocalQuotationCache:
    return LocalQuotationCache(tmp_path / "quotations.json")


@pytest.fixture
def session(vendor, catalog, compatibility, kit, cache, scheduler) -> QuotationSession:
    return QuotationSession(
        vendor,
        catalog,
        compatibility,
        kits=[kit],
        stores=[cache],
        schedule=scheduler,
        autosave_delay=1.0,
    )


def test_burst_of_edits_saves_once(session, catalog, cache, scheduler):
    session.select(catalog.find_item("env-c77"))
    session.select(catalog.find_item("bsk-s"))
    session.set_discount_text("15")
    session.update_client(name="Skyward Ltd")

    assert len(scheduler.live) == 1
    assert cache.list() == []

    scheduler.fire_pending()
    saved = cache.list()
    assert len(saved) == 1
    assert saved[0].quotation_number == session.quotation_number
    assert saved[0].client_name == "Skyward Ltd"
    assert saved[0].total == pytest.approx((38900.0 + 4950.0) * 0.85)
    assert not session.dirty


def test_repeated_saves_keep_one_record(session, catalog, cache, scheduler):
    session.select(catalog.find_item("env-c77"))
    scheduler.fire_pending()
    session.select(catalog.find_item("tnk-40"))
    session.set_quantity("tnk-40", "3")
    scheduler.fire_pending()

    saved = cache.list()
    assert len(saved) == 1
    assert [line.quantity for line in saved[0].items] == [1, 3]


def test_empty_session_is_not_saved(session, catalog, cache, scheduler):
    session.update_client(name="Nobody yet")
    scheduler.fire_pending()
    assert cache.list() == []
    assert session.quotation_number is None


def test_quantity_edit_lifecycle(session, catalog):
    session.select(catalog.find_item("tnk-40"), 4)
    session.edit_quantity("tnk-40", "")
    assert session.store.get("tnk-40").quantity == 0
    session.edit_quantity("tnk-40", "abc")
    assert session.store.get("tnk-40").quantity == 0
    session.commit_quantity("tnk-40")
    assert session.store.get("tnk-40").quantity == 1


def test_custom_line_validation(session):
    assert session.add_custom_item("  ", "x", "100") is None
    assert session.add_custom_item("Trailer", "x", "lots") is None
    entry = session.add_custom_item("Trailer", " Road legal ", "2,500")
    assert entry.item.price == 2500.0
    assert entry.item.description == "Road legal"
    assert session.subtotal == 2500.0


def test_discount_is_clamped(session, catalog):
    session.select(catalog.find_item("env-e1"))
    session.set_discount(140)
    assert session.discount == 100.0
    assert session.total == 0.0
    session.set_discount_text("junk")
    assert session.discount == 0.0
    assert session.total == session.subtotal


def test_update_client_rejects_unknown_field(session):
    with pytest.raises(KeyError):
        session.update_client(fax="123")


def test_load_kit_narrows_selectable(session, catalog, kit):
    session.select(catalog.find_item("tnk-40"))
    loaded = session.load_kit(kit)
    assert [entry.item.name for entry in loaded] == ["E1", "B1", "BR1"]
    assert [item.name for item in session.selectable(catalog.category_named("BASKET"))] == ["B1"]


def test_load_preserves_number(session, catalog, cache, scheduler, vendor, compatibility):
    session.select(catalog.find_item("env-c77"))
    session.update_client(name="Skyward Ltd", country="Spain")
    session.set_payment_terms("Net 30")
    session.flush()
    number = session.quotation_number
    saved = cache.get(number)

    other = QuotationSession(vendor, catalog, compatibility, stores=[cache], schedule=scheduler)
    other.load(saved)
    assert other.quotation_number == number
    assert other.client.country == "Spain"
    assert other.payment_terms == "Net 30"

    other.select(catalog.find_item("tnk-40"))
    other.flush()
    assert [q.quotation_number for q in cache.list()] == [number]
    assert len(cache.get(number).items) == 2


def test_load_rejects_other_vendor(session, catalog, compatibility, cache):
    from dataclasses import replace

    session.select(catalog.find_item("env-c77"))
    session.flush()
    foreign = replace(cache.get(session.quotation_number), vendor_id="elsewhere")
    with pytest.raises(ValueError):
        session.load(foreign)


def test_failing_store_does_not_block_local(vendor, catalog, compatibility, cache, scheduler):
    outcomes = []
    session = QuotationSession(
        vendor,
        catalog,
        compatibility,
        stores=[BrokenStore(), cache],
        schedule=scheduler,
        on_saved=outcomes.append,
    )
    session.select(catalog.find_item("env-e1"))
    scheduler.fire_pending()

    assert cache.get(session.quotation_number) is not None
    assert outcomes[0].saved == ("local",)
    assert session.last_outcome.failed[0][0] == "broken"


def test_reset_flushes_and_starts_fresh(session, catalog, cache, scheduler):
    session.select(catalog.find_item("env-c77"))
    session.set_payment_terms("Net 30")
    first = session.quotation_number
    session.reset()

    assert first is None
    assert len(cache.list()) == 1
    assert len(session.store) == 0
    assert session.quotation_number is None
    assert session.payment_terms == DEFAULT_PAYMENT_TERMS
    scheduler.fire_pending()
    assert len(cache.list()) == 1


def test_session_without_scheduler_saves_on_flush(vendor, catalog, compatibility, cache):
    session = QuotationSession(vendor, catalog, compatibility, stores=[cache])
    session.select(catalog.find_item("env-e1"))
    assert cache.list() == []
    outcome = session.flush()
    assert outcome.ok
    assert len(cache.list()) == 1


def test_load_saves_pending_edits_of_previous_quotation(session, catalog, cache, scheduler):
    from balloonquote.quotation import quotation_from_dict

    session.select(catalog.find_item("env-c77"))
    scheduler.fire_pending()
    first = session.quotation_number

    session.select(catalog.find_item("bsk-s"))
    other = quotation_from_dict(
        {"quotationNumber": "2026-999", "vendorId": "acme", "items": [{"itemId": "env-e1", "quantity": 1}]}
    )
    session.load(other)
    scheduler.fire_pending()
    session.flush()

    assert [line.item_id for line in cache.get(first).items] == ["env-c77", "bsk-s"]
    assert [line.item_id for line in cache.get("2026-999").items] == ["env-e1"]
