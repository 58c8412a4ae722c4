from balloonquote.compatibility import CompatibilityTable
from balloonquote.filtering import filter_selectable, required_frame_type

from conftest import VENDOR_ID


def _names(items):
    return [item.name for item in items]


def _select(store, catalog, category, name):
    return store.select(catalog.find_by_name(category, name))


def test_no_envelope_shows_everything(catalog, store, compatibility):
    for category in catalog.categories:
        assert filter_selectable(category, store, VENDOR_ID, compatibility) == list(category.items)


def test_basket_restricted_to_envelope_rule(catalog, store, compatibility):
    _select(store, catalog, "ENVELOPE", "Classic 77")
    baskets = filter_selectable(catalog.category_named("BASKET"), store, VENDOR_ID, compatibility)
    assert _names(baskets) == ["Wicker S", "Wicker M"]


def test_burner_restricted_to_envelope_rule(catalog, store, compatibility):
    _select(store, catalog, "ENVELOPE", "Classic 77")
    burners = filter_selectable(catalog.category_named("BURNER"), store, VENDOR_ID, compatibility)
    assert _names(burners) == ["Triple Burner TB3"]


def test_missing_rule_is_a_hard_restriction(catalog, store, compatibility):
    _select(store, catalog, "ENVELOPE", "Orphan 10")
    assert filter_selectable(catalog.category_named("BASKET"), store, VENDOR_ID, compatibility) == []
    assert filter_selectable(catalog.category_named("BURNER"), store, VENDOR_ID, compatibility) == []


def test_unknown_vendor_yields_nothing_once_envelope_selected(catalog, store, compatibility):
    _select(store, catalog, "ENVELOPE", "Classic 77")
    assert filter_selectable(catalog.category_named("BASKET"), store, "nobody", compatibility) == []


def test_other_categories_never_filtered(catalog, store):
    _select(store, catalog, "ENVELOPE", "Orphan 10")
    fuel = catalog.category_named("FUELTANK")
    assert filter_selectable(fuel, store, VENDOR_ID, CompatibilityTable()) == list(fuel.items)


def test_frame_follows_burner_even_without_envelope(catalog, store, compatibility):
    _select(store, catalog, "BURNER", "Double Burner DB2")
    frames = filter_selectable(catalog.category_named("BURNER FRAME"), store, VENDOR_ID, compatibility)
    assert _names(frames) == ["Double Frame"]


def test_quad_burner_needs_quadruple_frame(catalog, store, compatibility):
    _select(store, catalog, "BURNER", "Quad Burner Q4")
    frames = filter_selectable(catalog.category_named("BURNER FRAME"), store, VENDOR_ID, compatibility)
    assert _names(frames) == ["Quadruple Frame"]


def test_frame_unfiltered_when_type_unknown(catalog, store, compatibility):
    frames_category = catalog.category_named("BURNER FRAME")
    assert filter_selectable(frames_category, store, VENDOR_ID, compatibility) == list(frames_category.items)
    _select(store, catalog, "BURNER", "BR1")
    assert filter_selectable(frames_category, store, VENDOR_ID, compatibility) == list(frames_category.items)


def test_required_frame_type():
    assert required_frame_type("Double Burner") == "DOUBLE"
    assert required_frame_type("triple burner") == "TRIPLE"
    assert required_frame_type("Quad Burner") == "QUADRUPLE"
    assert required_frame_type("Quadruple Burner") == "QUADRUPLE"
    assert required_frame_type("Single Burner") is None
    assert required_frame_type(None) is None
