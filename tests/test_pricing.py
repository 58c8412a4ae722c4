import pytest

from balloonquote.models import CatalogItem, SelectionEntry
from balloonquote.pricing import (
    clamp_discount,
    compute_total,
    discount_amount,
    format_money,
    line_total,
    parse_discount,
    parse_price,
    parse_quantity,
    raw_total,
)


def _entry(price, quantity=1, custom_price=None):
    return SelectionEntry(item=CatalogItem(id=f"i{price}-{quantity}", name="x", price=price), quantity=quantity,
                          custom_price=custom_price)


def test_ten_thousand_at_fifteen_percent():
    entries = [_entry(6000.0), _entry(2000.0, quantity=2)]
    assert raw_total(entries) == 10000.0
    assert compute_total(entries, 15) == pytest.approx(8500.0)
    assert format_money(compute_total(entries, 15)) == "€8,500.00"


def test_custom_price_overrides_catalog_price():
    entry = _entry(100.0, quantity=3, custom_price=40.0)
    assert line_total(entry) == 120.0


def test_custom_price_zero_is_respected():
    assert line_total(_entry(100.0, custom_price=0.0)) == 0.0


def test_total_monotonic_and_non_negative():
    entries = [_entry(1234.5, 3), _entry(99.99, 7), _entry(0.0, 2)]
    previous = None
    for percent in range(0, 101, 5):
        total = compute_total(entries, percent)
        assert total >= 0
        if previous is not None:
            assert total <= previous
        previous = total
    assert compute_total(entries, 100) == 0.0


def test_no_internal_rounding():
    entries = [_entry(0.1), _entry(0.2)]
    assert compute_total(entries, 0) == 0.1 + 0.2
    assert discount_amount(10.0, 33.3) == 10.0 * 33.3 / 100


def test_empty_selection_totals_zero():
    assert compute_total([], 50) == 0.0


def test_clamp_discount():
    assert clamp_discount(-5) == 0
    assert clamp_discount(150) == 100
    assert clamp_discount(12.5) == 12.5


def test_parse_discount():
    assert parse_discount("15") == 15
    assert parse_discount("15%") == 15
    assert parse_discount("abc") == 0
    assert parse_discount("250") == 100


def test_parse_quantity():
    assert parse_quantity("") == 0
    assert parse_quantity(" 4 ") == 4
    assert parse_quantity("-2") == 0
    assert parse_quantity("four") is None


def test_parse_price():
    assert parse_price("") == 0.0
    assert parse_price("1,250.50") == 1250.5
    assert parse_price("€99") == 99.0
    assert parse_price("n/a") is None


def test_format_money():
    assert format_money(0) == "€0.00"
    assert format_money(1234567.891) == "€1,234,567.89"
    assert format_money(-5) == "-€5.00"


@pytest.mark.parametrize("text", ["nan", "inf", "-inf"])
def test_parse_price_rejects_non_finite(text):
    assert parse_price(text) is None
