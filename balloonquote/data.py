"""Typed reference data: vendors, catalogs, compatibility rules and kits.

Built-in data comes from ``balloonquote.constant``. When ``DATA_DIR`` is set,
JSON files found there replace the matching built-in tables. Malformed
records are skipped so a partial data set still yields a usable catalog.
"""

from __future__ import annotations

import json
import math
from pathlib import Path
from typing import Any

from balloonquote.compatibility import CompatibilityTable
from balloonquote.config import DATA_DIR
from balloonquote.constant import CATALOGS, COMPATIBILITY_RULES, PREDEFINED_KITS, VENDORS
from balloonquote.debuglog import log_debug
from balloonquote.models import Catalog, CatalogCategory, CatalogItem, CompatibilityRule, Kit, VendorInfo

VENDORS_FILE = "vendors.json"
COMPATIBILITY_FILE = "compatibility-rules.json"
KITS_FILE = "predefined-kits.json"


def _read_json_override(filename: str, data_dir: str | None = None) -> Any | None:
    directory = data_dir if data_dir is not None else DATA_DIR
    if not directory or not filename:
        return None
    path = Path(directory) / filename
    if not path.is_file():
        return None
    try:
        with path.open("r", encoding="utf-8") as fh:
            return json.load(fh)
    except (OSError, ValueError) as exc:
        log_debug(f"data_override_unreadable file={str(path)!r} error={exc!r}")
        return None


def _item_from_raw(raw: Any) -> CatalogItem | None:
    if not isinstance(raw, dict):
        return None
    item_id = raw.get("id")
    name = raw.get("name")
    if not item_id or not name:
        return None
    try:
        price = float(raw.get("price", 0) or 0)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(price) or price < 0:
        return None
    return CatalogItem(
        id=str(item_id),
        name=str(name),
        description=str(raw.get("description") or ""),
        price=price,
    )


def catalog_from_raw(raw: Any) -> Catalog:
    """Build a catalog from ``[{name, items}]`` or ``{"categories": [...]}``."""
    if isinstance(raw, dict):
        raw = raw.get("categories")
    if not isinstance(raw, list):
        return Catalog()

    categories: list[CatalogCategory] = []
    for raw_category in raw:
        if not isinstance(raw_category, dict) or not raw_category.get("name"):
            continue
        raw_items = raw_category.get("items")
        items = [
            item
            for item in (_item_from_raw(entry) for entry in (raw_items if isinstance(raw_items, list) else []))
            if item is not None
        ]
        categories.append(CatalogCategory(name=str(raw_category["name"]), items=tuple(items)))
    return Catalog(categories=tuple(categories))


def _names(raw: Any) -> tuple[str, ...]:
    if not isinstance(raw, list):
        return ()
    return tuple(str(name) for name in raw if isinstance(name, str))


def compatibility_from_raw(raw: Any) -> CompatibilityTable:
    """Build the compatibility table from ``vendor -> envelope -> {baskets, burners}``."""
    rules: dict[str, dict[str, CompatibilityRule]] = {}
    if not isinstance(raw, dict):
        return CompatibilityTable(rules)
    for vendor_id, envelopes in raw.items():
        if not isinstance(envelopes, dict):
            continue
        vendor_rules: dict[str, CompatibilityRule] = {}
        for envelope_name, entry in envelopes.items():
            if not isinstance(entry, dict):
                continue
            vendor_rules[str(envelope_name)] = CompatibilityRule(
                baskets=_names(entry.get("baskets")),
                burners=_names(entry.get("burners")),
            )
        rules[str(vendor_id)] = vendor_rules
    return CompatibilityTable(rules)


def kits_from_raw(raw: Any) -> dict[str, list[Kit]]:
    kits: dict[str, list[Kit]] = {}
    if not isinstance(raw, dict):
        return kits
    for vendor_id, entries in raw.items():
        vendor_kits: list[Kit] = []
        for entry in entries if isinstance(entries, list) else []:
            if not isinstance(entry, dict):
                continue
            try:
                vendor_kits.append(
                    Kit(
                        id=str(entry.get("id") or entry["name"]),
                        name=str(entry["name"]),
                        envelope=str(entry["envelope"]),
                        basket=str(entry["basket"]),
                        burner=str(entry["burner"]),
                        description=str(entry.get("description") or ""),
                    )
                )
            except KeyError:
                continue
        kits[str(vendor_id)] = vendor_kits
    return kits


def vendors_from_raw(raw: Any) -> dict[str, VendorInfo]:
    vendors: dict[str, VendorInfo] = {}
    if not isinstance(raw, dict):
        return vendors
    for vendor_id, entry in raw.items():
        if not isinstance(entry, dict) or not entry.get("name"):
            continue
        vendors[str(vendor_id)] = VendorInfo(
            id=str(entry.get("id") or vendor_id),
            name=str(entry["name"]),
            address=str(entry.get("address") or ""),
            city=str(entry.get("city") or ""),
            phone=str(entry.get("phone") or ""),
            email=str(entry.get("email") or ""),
            catalog_file=str(entry.get("catalog_file") or entry.get("catalogFile") or ""),
        )
    return vendors


def load_vendors(data_dir: str | None = None) -> dict[str, VendorInfo]:
    override = _read_json_override(VENDORS_FILE, data_dir)
    return vendors_from_raw(override if override is not None else VENDORS)


def load_catalog(vendor: VendorInfo, data_dir: str | None = None) -> Catalog:
    """Load a vendor catalog once per vendor session."""
    override = _read_json_override(vendor.catalog_file, data_dir)
    raw = override if override is not None else CATALOGS.get(vendor.id)
    catalog = catalog_from_raw(raw)
    if not catalog.categories:
        log_debug(f"catalog_empty vendor={vendor.id!r}")
    return catalog


def load_compatibility(data_dir: str | None = None) -> CompatibilityTable:
    override = _read_json_override(COMPATIBILITY_FILE, data_dir)
    return compatibility_from_raw(override if override is not None else COMPATIBILITY_RULES)


def load_kits(vendor_id: str, data_dir: str | None = None) -> list[Kit]:
    override = _read_json_override(KITS_FILE, data_dir)
    return kits_from_raw(override if override is not None else PREDEFINED_KITS).get(vendor_id, [])
