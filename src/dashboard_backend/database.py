"""
SQLite document table for dashboard content.

Documents are stored as JSON keyed by their ``type`` discriminator, which
gives the content store a single-slot, multi-record-capable backend with
atomic replace-or-insert semantics.
"""

import json
import sqlite3
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional

from .utils import ensure_directory


DEFAULT_DB_PATH = Path("data/dashboard.db")


@dataclass(frozen=True)
class UpsertResult:
    matched_count: int
    modified_count: int
    upserted_count: int


def _serialize_datetime(dt: Optional[datetime]) -> Optional[str]:
    """Serialize datetime to ISO format string."""
    return dt.isoformat() if dt else None


class ContentDatabase:
    """
    SQLite storage for content documents, one row per discriminator value.

    Every write runs inside a single ``BEGIN IMMEDIATE`` transaction so that
    concurrent writers serialize and a document is never partially stored.
    """

    def __init__(self, db_path: Path = DEFAULT_DB_PATH):
        self.db_path = Path(db_path)
        ensure_directory(self.db_path.parent)
        self._init_db()

    @contextmanager
    def _get_connection(self):
        """Get a database connection with proper settings."""
        conn = sqlite3.connect(str(self.db_path), timeout=30.0)
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA journal_mode=WAL")
        try:
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def _init_db(self) -> None:
        """Initialize database schema."""
        with self._get_connection() as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS components (
                    type TEXT PRIMARY KEY,
                    document TEXT NOT NULL,
                    updated_at TEXT
                )
            """)

    def ping(self) -> None:
        """Raise if the database file cannot be opened and queried."""
        with self._get_connection() as conn:
            conn.execute("SELECT 1").fetchone()

    def find_one(self, content_type: str) -> Optional[Dict[str, Any]]:
        """
        Retrieve the document stored under a discriminator.

        Returns:
            The decoded document or None if nothing is stored yet
        """
        with self._get_connection() as conn:
            row = conn.execute(
                "SELECT document FROM components WHERE type = ?", (content_type,)
            ).fetchone()

            if not row:
                return None

            return json.loads(row["document"])

    def insert_if_absent(self, content_type: str, document: Dict[str, Any]) -> Dict[str, Any]:
        """
        Store ``document`` unless a document already exists for the discriminator.

        Returns:
            Whichever document is stored once the transaction commits
        """
        with self._get_connection() as conn:
            conn.execute("BEGIN IMMEDIATE")
            conn.execute(
                "INSERT OR IGNORE INTO components (type, document, updated_at) VALUES (?, ?, ?)",
                (content_type, json.dumps(document), document.get("updatedAt")),
            )
            row = conn.execute(
                "SELECT document FROM components WHERE type = ?", (content_type,)
            ).fetchone()
            return json.loads(row["document"])

    def replace_one(
        self,
        content_type: str,
        document: Dict[str, Any],
        updated_at: Optional[datetime] = None,
        upsert: bool = True,
    ) -> UpsertResult:
        """
        Replace the document for a discriminator, inserting it when absent.

        Args:
            content_type: Discriminator value identifying the row
            document: The complete replacement document
            updated_at: Modification timestamp recorded alongside the row
            upsert: Insert when no row matches; otherwise leave the table untouched

        Returns:
            Counts of matched, modified and inserted rows
        """
        payload = json.dumps(document)
        with self._get_connection() as conn:
            conn.execute("BEGIN IMMEDIATE")
            existing = conn.execute(
                "SELECT document FROM components WHERE type = ?", (content_type,)
            ).fetchone()

            if existing:
                conn.execute(
                    "UPDATE components SET document = ?, updated_at = ? WHERE type = ?",
                    (payload, _serialize_datetime(updated_at), content_type),
                )
                modified = 0 if existing["document"] == payload else 1
                return UpsertResult(matched_count=1, modified_count=modified, upserted_count=0)

            if not upsert:
                return UpsertResult(matched_count=0, modified_count=0, upserted_count=0)

            conn.execute(
                "INSERT INTO components (type, document, updated_at) VALUES (?, ?, ?)",
                (content_type, payload, _serialize_datetime(updated_at)),
            )
            return UpsertResult(matched_count=0, modified_count=0, upserted_count=1)
