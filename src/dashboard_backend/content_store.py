"""
Single-document persistence for dashboard content.

The deployment holds exactly one content document. Instead of a generated
identifier it is located by the fixed ``type`` discriminator
(``"dashboard_content"``), so every write is an upsert against that one key
and the first read of an empty store creates the default document.

Writes are last-write-wins: there is no locking or edit detection between
operators, but each upsert is a single transaction so a document is never
stored half-written.
"""

from __future__ import annotations

import logging
import sqlite3
from typing import Any, Dict

from pydantic import ValidationError as PydanticValidationError

from .database import ContentDatabase
from .errors import StoreUnavailable
from .models import CONTENT_TYPE, ContentDocument, SaveOutcome, StoredContentDocument, default_content
from .utils import utc_now
from .validation import validate_content

logger = logging.getLogger(__name__)


class ContentStore:
    """
    Persistence facade over ``ContentDatabase`` for the one content document.

    Database and filesystem failures are logged and re-raised as
    ``StoreUnavailable`` so callers only deal with the store taxonomy.
    """

    def __init__(self, database: ContentDatabase, content_type: str = CONTENT_TYPE):
        self.database = database
        self.content_type = content_type

    def _default_document(self) -> Dict[str, Any]:
        document = default_content().to_wire()
        document["type"] = self.content_type
        return document

    def fetch(self) -> StoredContentDocument:
        """
        Return the stored document, creating the default one if none exists.

        Raises:
            StoreUnavailable: If the database cannot be read or written
        """
        try:
            data = self.database.find_one(self.content_type)
            if data is None:
                logger.info(f"No '{self.content_type}' document found; writing defaults")
                data = self.database.insert_if_absent(self.content_type, self._default_document())
        except (sqlite3.Error, OSError) as exc:
            logger.error(f"Error fetching component data: {exc}")
            raise StoreUnavailable(f"Failed to fetch component data: {exc}") from exc

        try:
            return StoredContentDocument.model_validate(data)
        except PydanticValidationError as exc:
            logger.error(f"Stored component data is unreadable: {exc}")
            raise StoreUnavailable("Stored component data is unreadable") from exc

    def save(self, payload: ContentDocument) -> SaveOutcome:
        """
        Upsert the content document, stamping ``updatedAt`` with the current time.

        The content rules are checked again before the database is touched, so
        in-process callers cannot store a document the API would reject.

        Returns:
            SaveOutcome with the modified/upserted counts of the write

        Raises:
            ContentValidationError: If the payload breaks a content rule
            StoreUnavailable: If the database cannot be written
        """
        validate_content(payload)

        updated_at = utc_now()
        stored = StoredContentDocument(
            type=self.content_type,
            header=payload.header,
            navbar=payload.navbar,
            footer=payload.footer,
            updated_at=updated_at,
        )

        try:
            result = self.database.replace_one(
                self.content_type,
                stored.to_wire(),
                updated_at=updated_at,
                upsert=True,
            )
        except (sqlite3.Error, OSError) as exc:
            logger.error(f"Error saving component data: {exc}")
            raise StoreUnavailable(f"Failed to save component data: {exc}") from exc

        logger.info(
            f"Saved '{self.content_type}' document "
            f"(modified={result.modified_count}, upserted={result.upserted_count})"
        )
        return SaveOutcome(
            modified_count=result.modified_count,
            upserted_count=result.upserted_count,
        )

    def ping(self) -> None:
        try:
            self.database.ping()
        except (sqlite3.Error, OSError) as exc:
            logger.warning(f"Database ping failed: {exc}")
            raise StoreUnavailable(str(exc)) from exc
