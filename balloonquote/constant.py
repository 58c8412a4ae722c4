"""Editable static vendor, catalog, compatibility and kit data."""

from __future__ import annotations

VENDORS: dict[str, dict[str, str]] = {
    "schroeder": {
        "id": "schroeder",
        "name": "THEO SCHROEDER fire balloons GmbH",
        "address": "Am Bahnhof 12",
        "city": "54338 Schweich, Germany",
        "phone": "+49 6502 99260",
        "email": "mail@schroederballon.de",
        "catalog_file": "catalog-schroeder.json",
    },
    "pasha": {
        "id": "pasha",
        "name": "Pasha Balloons",
        "address": "Organize Sanayi Bolgesi 4. Cadde No 7",
        "city": "50100 Nevsehir, Turkey",
        "phone": "+90 384 213 4050",
        "email": "info@pashaballoons.com",
        "catalog_file": "catalog-pasha.json",
    },
}

CATALOGS: dict[str, list[dict[str, object]]] = {
    "schroeder": [
        {
            "name": "ENVELOPE",
            "items": [
                {"id": "sch-env-g22", "name": "G 22/24", "description": "2200 m3 sport envelope\nHyperlast top", "price": 16950},
                {"id": "sch-env-g34", "name": "G 34/24", "description": "3400 m3 sport envelope\nHyperlast top", "price": 19800},
                {"id": "sch-env-g42", "name": "G 42/24", "description": "4200 m3 envelope\nFull Hyperlast", "price": 23400},
                {"id": "sch-env-c77", "name": "Classic 77", "description": "7700 m3 passenger envelope", "price": 38900},
            ],
        },
        {
            "name": "BASKET",
            "items": [
                {"id": "sch-bsk-s", "name": "Wicker S", "description": "1.05 x 1.05 m, 2 persons", "price": 4950},
                {"id": "sch-bsk-m", "name": "Wicker M", "description": "1.15 x 1.40 m, 4 persons", "price": 6200},
                {"id": "sch-bsk-l", "name": "Wicker L", "description": "1.40 x 2.10 m, 6 persons, T-partition", "price": 9400},
            ],
        },
        {
            "name": "BURNER",
            "items": [
                {"id": "sch-brn-single", "name": "Single Burner SB1", "description": "Stainless steel single burner", "price": 5200},
                {"id": "sch-brn-double", "name": "Double Burner DB2", "description": "Double burner with liquid fire", "price": 9800},
                {"id": "sch-brn-triple", "name": "Triple Burner TB3", "description": "Triple burner for passenger sizes", "price": 14200},
            ],
        },
        {
            "name": "BURNER FRAME",
            "items": [
                {"id": "sch-frm-double", "name": "Double Frame Standard", "description": "Frame for double burners", "price": 1450},
                {"id": "sch-frm-triple", "name": "Triple Frame Standard", "description": "Frame for triple burners", "price": 1980},
            ],
        },
        {
            "name": "FUELTANK",
            "items": [
                {"id": "sch-tnk-40", "name": "Fuel Tank 40 L", "description": "Stainless steel, master tank", "price": 1390},
                {"id": "sch-tnk-60", "name": "Fuel Tank 60 L", "description": "Stainless steel", "price": 1690},
            ],
        },
        {
            "name": "ANCILLARY",
            "items": [
                {"id": "sch-anc-fan", "name": "Inflation Fan 6.5 HP", "description": "Petrol inflation fan", "price": 1850},
                {"id": "sch-anc-rope", "name": "Crown Line", "description": "30 m crown line", "price": 180},
            ],
        },
        {
            "name": "ACCESSORIES",
            "items": [
                {"id": "sch-acc-instr", "name": "Flight Instrument", "description": "Altimeter, variometer, envelope temperature", "price": 890},
                {"id": "sch-acc-bag", "name": "Envelope Bag", "description": "Heavy-duty transport bag", "price": 520},
            ],
        },
        {
            "name": "OPTIONS",
            "items": [
                {"id": "sch-opt-artwork", "name": "Custom Artwork", "description": "Logo or lettering on envelope", "price": 0},
                {"id": "sch-opt-hyperlast", "name": "Hyperlast Configuration", "description": "Hyperlast panel layout", "price": 1200},
                {"id": "sch-opt-docs", "name": "Flight Manual & Logbook", "description": "English documentation set", "price": 0},
            ],
        },
    ],
    "pasha": [
        {
            "name": "ENVELOPE",
            "items": [
                {"id": "psh-env-90", "name": "PB-90", "description": "9000 m3 commercial envelope", "price": 42500},
                {"id": "psh-env-120", "name": "PB-120", "description": "12000 m3 commercial envelope", "price": 51800},
                {"id": "psh-env-150", "name": "PB-150", "description": "15000 m3 commercial envelope", "price": 63200},
            ],
        },
        {
            "name": "BASKET",
            "items": [
                {"id": "psh-bsk-12", "name": "Basket 12 PAX", "description": "Four compartments", "price": 11800},
                {"id": "psh-bsk-16", "name": "Basket 16 PAX", "description": "Four compartments, pilot centre", "price": 14600},
                {"id": "psh-bsk-20", "name": "Basket 20 PAX", "description": "Five compartments", "price": 17900},
            ],
        },
        {
            "name": "BURNER",
            "items": [
                {"id": "psh-brn-triple", "name": "Triple Burner", "description": "Triple burner unit", "price": 15400},
                {"id": "psh-brn-quad", "name": "Quad Burner", "description": "Four-way burner unit", "price": 19900},
            ],
        },
        {
            "name": "BURNER FRAME",
            "items": [
                {"id": "psh-frm-triple", "name": "Triple Frame", "description": "Frame for triple burners", "price": 2100},
                {"id": "psh-frm-quad", "name": "Quadruple Frame", "description": "Frame for four-way burners", "price": 2600},
            ],
        },
        {
            "name": "FUELTANK",
            "items": [
                {"id": "psh-tnk-80", "name": "Fuel Tank 80 L", "description": "Aluminium tank", "price": 1950},
            ],
        },
        {
            "name": "ANCILLARY",
            "items": [
                {"id": "psh-anc-fan", "name": "Ventilador 9 HP", "description": "Inflation fan", "price": 2400},
            ],
        },
        {
            "name": "OPTIONS",
            "items": [
                {"id": "psh-opt-artwork", "name": "Artwork Panel", "description": "Printed advertising panel", "price": 0},
                {"id": "psh-opt-hyperlast", "name": "100% Hyperlast Panel", "description": "Full Hyperlast fabric", "price": 3900},
            ],
        },
    ],
}

COMPATIBILITY_RULES: dict[str, dict[str, dict[str, list[str]]]] = {
    "schroeder": {
        "G 22/24": {"baskets": ["Wicker S"], "burners": ["Single Burner SB1", "Double Burner DB2"]},
        "G 34/24": {"baskets": ["Wicker S", "Wicker M"], "burners": ["Double Burner DB2"]},
        "G 42/24": {"baskets": ["Wicker M"], "burners": ["Double Burner DB2", "Triple Burner TB3"]},
        "Classic 77": {"baskets": ["Wicker S", "Wicker M"], "burners": ["Triple Burner TB3"]},
    },
    "pasha": {
        "PB-90": {"baskets": ["Basket 12 PAX"], "burners": ["Triple Burner"]},
        "PB-120": {"baskets": ["Basket 12 PAX", "Basket 16 PAX"], "burners": ["Triple Burner", "Quad Burner"]},
        "PB-150": {"baskets": ["Basket 20 PAX"], "burners": ["Quad Burner"]},
    },
}

PREDEFINED_KITS: dict[str, list[dict[str, str]]] = {
    "pasha": [
        {
            "id": "pasha-12",
            "name": "Commercial 12",
            "envelope": "PB-90",
            "basket": "Basket 12 PAX",
            "burner": "Triple Burner",
            "description": "Entry commercial system for 12 passengers",
        },
        {
            "id": "pasha-16",
            "name": "Commercial 16",
            "envelope": "PB-120",
            "basket": "Basket 16 PAX",
            "burner": "Quad Burner",
            "description": "Mid-size commercial system for 16 passengers",
        },
        {
            "id": "pasha-20",
            "name": "Commercial 20",
            "envelope": "PB-150",
            "basket": "Basket 20 PAX",
            "burner": "Quad Burner",
            "description": "Large commercial system for 20 passengers",
        },
    ],
}

DOCUMENT_NOTES: list[str] = [
    "All prices are in EUR, VAT not included",
    "Delivery time: 10-12 weeks from order confirmation",
    "Prices are Ex Works (customer arranges shipping)",
    "Custom artwork and colors available upon request",
    "Quotation valid for 30 days from issue date",
]
