"""Quotation persistence: a local JSON cache and a SQLite quotation store.

Both stores upsert by quotation number and replace the whole record on every
save. Callers that must not fail (autosave) go through ``persist_everywhere``.
"""

from __future__ import annotations

import json
import sqlite3
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Protocol

from balloonquote.config import DB_PATH, LOCAL_CACHE_PATH
from balloonquote.debuglog import log_debug
from balloonquote.models import SavedQuotation
from balloonquote.quotation import quotation_from_dict, quotation_to_dict


class QuotationStore(Protocol):
    name: str

    def upsert(self, quotation: SavedQuotation) -> None: ...

    def list(self) -> list[SavedQuotation]: ...

    def get(self, quotation_number: str) -> SavedQuotation | None: ...

    def delete(self, quotation_number: str) -> None: ...


class LocalQuotationCache:
    """All quotations as one JSON list in a local file."""

    name = "local"

    def __init__(self, path: str | Path = LOCAL_CACHE_PATH) -> None:
        self.path = Path(path)

    def _read_all(self) -> list[SavedQuotation]:
        if not self.path.is_file():
            return []
        try:
            with self.path.open("r", encoding="utf-8") as fh:
                raw = json.load(fh)
        except ValueError as exc:
            log_debug(f"local_cache_unreadable file={str(self.path)!r} error={exc!r}")
            return []
        quotations: list[SavedQuotation] = []
        for entry in raw if isinstance(raw, list) else []:
            if not isinstance(entry, dict):
                continue
            try:
                quotations.append(quotation_from_dict(entry))
            except ValueError:
                continue
        return quotations

    def _write_all(self, quotations: Iterable[SavedQuotation]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        with tmp_path.open("w", encoding="utf-8") as fh:
            json.dump([quotation_to_dict(q) for q in quotations], fh, ensure_ascii=False, indent=2)
        tmp_path.replace(self.path)

    def upsert(self, quotation: SavedQuotation) -> None:
        existing = [q for q in self._read_all() if q.quotation_number != quotation.quotation_number]
        self._write_all([*existing, quotation])

    def list(self) -> list[SavedQuotation]:
        return sorted(self._read_all(), key=lambda q: q.date, reverse=True)

    def get(self, quotation_number: str) -> SavedQuotation | None:
        for quotation in self._read_all():
            if quotation.quotation_number == quotation_number:
                return quotation
        return None

    def delete(self, quotation_number: str) -> None:
        remaining = [q for q in self._read_all() if q.quotation_number != quotation_number]
        self._write_all(remaining)


class SqliteQuotationStore:
    """Durable quotation store; one row per quotation number."""

    name = "remote"

    def __init__(self, path: str | Path = DB_PATH) -> None:
        self.path = Path(path)
        self._schema_ready = False

    def _connect(self) -> sqlite3.Connection:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        conn = sqlite3.connect(self.path)
        if not self._schema_ready:
            self.bootstrap_schema(conn)
            self._schema_ready = True
        return conn

    @staticmethod
    def bootstrap_schema(conn: sqlite3.Connection) -> None:
        """Create the quotation table if it does not already exist."""
        conn.executescript(
            """
            CREATE TABLE IF NOT EXISTS quotations (
                quotation_number TEXT PRIMARY KEY,
                vendor_id TEXT NOT NULL,
                vendor_name TEXT NOT NULL,
                client_name TEXT NOT NULL DEFAULT '',
                record_json TEXT NOT NULL,
                discount REAL NOT NULL DEFAULT 0,
                total REAL NOT NULL DEFAULT 0,
                payment_terms TEXT NOT NULL DEFAULT '',
                date TEXT NOT NULL,
                created_at TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%fZ', 'now'))
            );

            CREATE INDEX IF NOT EXISTS idx_quotations_created_at
                ON quotations(created_at);
            """
        )

    def upsert(self, quotation: SavedQuotation) -> None:
        record = json.dumps(quotation_to_dict(quotation), ensure_ascii=False)
        with self._connect() as conn:
            conn.execute(
                """
                INSERT INTO quotations (
                    quotation_number, vendor_id, vendor_name, client_name,
                    record_json, discount, total, payment_terms, date
                )
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                ON CONFLICT(quotation_number) DO UPDATE SET
                    vendor_id = excluded.vendor_id,
                    vendor_name = excluded.vendor_name,
                    client_name = excluded.client_name,
                    record_json = excluded.record_json,
                    discount = excluded.discount,
                    total = excluded.total,
                    payment_terms = excluded.payment_terms,
                    date = excluded.date
                """,
                (
                    quotation.quotation_number,
                    quotation.vendor_id,
                    quotation.vendor_name,
                    quotation.client_name,
                    record,
                    quotation.discount,
                    quotation.total,
                    quotation.payment_terms,
                    quotation.date,
                ),
            )

    def list(self) -> list[SavedQuotation]:
        with self._connect() as conn:
            rows = conn.execute("SELECT record_json FROM quotations ORDER BY created_at DESC").fetchall()
        quotations: list[SavedQuotation] = []
        for (record,) in rows:
            try:
                quotations.append(quotation_from_dict(json.loads(record)))
            except ValueError as exc:
                log_debug(f"remote_row_unreadable error={exc!r}")
                continue
        return quotations

    def get(self, quotation_number: str) -> SavedQuotation | None:
        with self._connect() as conn:
            row = conn.execute(
                "SELECT record_json FROM quotations WHERE quotation_number = ?",
                (quotation_number,),
            ).fetchone()
        if row is None:
            return None
        return quotation_from_dict(json.loads(row[0]))

    def delete(self, quotation_number: str) -> None:
        with self._connect() as conn:
            conn.execute("DELETE FROM quotations WHERE quotation_number = ?", (quotation_number,))


@dataclass(frozen=True)
class PersistOutcome:
    """Which stores accepted a write and which failed, with reasons."""

    saved: tuple[str, ...]
    failed: tuple[tuple[str, str], ...]

    @property
    def ok(self) -> bool:
        return not self.failed


def persist_everywhere(quotation: SavedQuotation, stores: Iterable[QuotationStore]) -> PersistOutcome:
    """Write to each store independently; a failing store never blocks the others."""
    saved: list[str] = []
    failed: list[tuple[str, str]] = []
    for store in stores:
        try:
            store.upsert(quotation)
        except Exception as exc:
            failed.append((store.name, str(exc)))
            log_debug(f"persist_failed store={store.name} quotation={quotation.quotation_number} error={exc!r}")
            continue
        saved.append(store.name)
    return PersistOutcome(saved=tuple(saved), failed=tuple(failed))


def list_saved(stores: Iterable[QuotationStore]) -> list[SavedQuotation]:
    """Merge listings, newest first; the first store wins on duplicate numbers."""
    merged: dict[str, SavedQuotation] = {}
    for store in stores:
        try:
            quotations = store.list()
        except Exception as exc:
            log_debug(f"list_failed store={store.name} error={exc!r}")
            continue
        for quotation in quotations:
            merged.setdefault(quotation.quotation_number, quotation)
    return sorted(merged.values(), key=lambda q: q.date, reverse=True)


def delete_everywhere(quotation_number: str, stores: Iterable[QuotationStore]) -> PersistOutcome:
    saved: list[str] = []
    failed: list[tuple[str, str]] = []
    for store in stores:
        try:
            store.delete(quotation_number)
        except Exception as exc:
            failed.append((store.name, str(exc)))
            log_debug(f"delete_failed store={store.name} quotation={quotation_number} error={exc!r}")
            continue
        saved.append(store.name)
    return PersistOutcome(saved=tuple(saved), failed=tuple(failed))
