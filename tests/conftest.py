from __future__ import annotations

import pytest

from balloonquote.compatibility import CompatibilityTable
from balloonquote.models import Catalog, CatalogCategory, CatalogItem, CompatibilityRule, Kit, VendorInfo
from balloonquote.selection import SelectionStore

VENDOR_ID = "acme"


def _category(name: str, *items: tuple[str, str, float]) -> CatalogCategory:
    return CatalogCategory(
        name=name,
        items=tuple(CatalogItem(id=item_id, name=item_name, description=f"{item_name} desc", price=price)
                    for item_id, item_name, price in items),
    )


@pytest.fixture
def catalog() -> Catalog:
    return Catalog(
        categories=(
            _category(
                "Envelope",
                ("env-c77", "Classic 77", 38900.0),
                ("env-e1", "E1", 20000.0),
                ("env-orphan", "Orphan 10", 9000.0),
            ),
            _category(
                "BASKET",
                ("bsk-s", "Wicker S", 4950.0),
                ("bsk-m", "Wicker M", 6200.0),
                ("bsk-l", "Wicker L", 9400.0),
                ("bsk-b1", "B1", 5000.0),
            ),
            _category(
                "BURNER",
                ("brn-double", "Double Burner DB2", 9800.0),
                ("brn-triple", "Triple Burner TB3", 14200.0),
                ("brn-quad", "Quad Burner Q4", 19900.0),
                ("brn-br1", "BR1", 7000.0),
            ),
            _category(
                "BURNER FRAME",
                ("frm-double", "Double Frame", 1450.0),
                ("frm-triple", "Triple Frame", 1980.0),
                ("frm-quad", "Quadruple Frame", 2600.0),
            ),
            _category("FUELTANK", ("tnk-40", "Fuel Tank 40 L", 1390.0)),
            _category("ANCILLARY", ("anc-fan", "Inflation Fan", 1850.0)),
            _category(
                "OPTIONS",
                ("opt-art", "Custom Artwork", 0.0),
                ("opt-docs", "Flight Manual", 0.0),
                ("opt-hyper", "Hyperlast Configuration", 1200.0),
            ),
        )
    )


@pytest.fixture
def compatibility() -> CompatibilityTable:
    return CompatibilityTable(
        {
            VENDOR_ID: {
                "Classic 77": CompatibilityRule(baskets=("Wicker S", "Wicker M"), burners=("Triple Burner TB3",)),
                "E1": CompatibilityRule(baskets=("B1",), burners=("BR1",)),
            }
        }
    )


@pytest.fixture
def vendor() -> VendorInfo:
    return VendorInfo(
        id=VENDOR_ID,
        name="Acme Balloons",
        address="1 Field Road",
        city="Testville",
        phone="+1 555 0100",
        email="sales@acme.example",
    )


@pytest.fixture
def kit() -> Kit:
    return Kit(id="kit-e1", name="Starter", envelope="E1", basket="B1", burner="BR1")


@pytest.fixture
def store(catalog: Catalog) -> SelectionStore:
    return SelectionStore(catalog)


class FakeTimer:
    def __init__(self, delay: float, callback) -> None:
        self.delay = delay
        self.callback = callback
        self.stopped = False

    def stop(self) -> None:
        self.stopped = True


class FakeScheduler:
    """Collects scheduled callbacks; ``fire_pending`` simulates the quiet period ending."""

    def __init__(self) -> None:
        self.timers: list[FakeTimer] = []

    def __call__(self, delay: float, callback) -> FakeTimer:
        timer = FakeTimer(delay, callback)
        self.timers.append(timer)
        return timer

    @property
    def live(self) -> list[FakeTimer]:
        return [timer for timer in self.timers if not timer.stopped]

    def fire_pending(self) -> None:
        for timer in self.live:
            timer.stopped = True
            timer.callback()


@pytest.fixture
def scheduler() -> FakeScheduler:
    return FakeScheduler()
