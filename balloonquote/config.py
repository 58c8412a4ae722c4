"""Runtime configuration defaults for persistence, autosave and export."""

from __future__ import annotations

import os

DB_PATH = os.environ.get("BALLOON_QUOTE_DB_PATH", "data/quotations.db")
LOCAL_CACHE_PATH = os.environ.get("BALLOON_QUOTE_CACHE_PATH", "data/quotations.json")

# Optional directory of JSON overrides: vendors.json, compatibility-rules.json,
# predefined-kits.json and one catalog file per vendor.
DATA_DIR = os.environ.get("BALLOON_QUOTE_DATA_DIR", "")

EXPORT_DIR = os.environ.get("BALLOON_QUOTE_EXPORT_DIR", "exports")
DEBUG_LOG_PATH = os.environ.get("BALLOON_QUOTE_DEBUG_LOG", "/tmp/balloon-quote-debug.log")

AUTOSAVE_DELAY_SECONDS = float(os.environ.get("BALLOON_QUOTE_AUTOSAVE_DELAY", "1.0"))

CURRENCY_SYMBOL = "€"
QUOTATION_VALID_DAYS = 30
DEFAULT_PAYMENT_TERMS = "50% deposit, 50% before delivery"

DOCUMENT_FONT_PATH = os.environ.get("BALLOON_QUOTE_FONT_PATH", "/System/Library/Fonts/SFNS.ttf")
DOCUMENT_WIDTH_PX = 1240
DOCUMENT_HEIGHT_PX = 1754
DOCUMENT_MARGIN_PX = 70
DOCUMENT_DPI = 150
