"""
Best-effort local mirror of the content document.

The cache holds a single key whose value is the serialized document, stored
as ``<directory>/<key>.json``. It is advisory only: it is consulted when the
API cannot be reached and refreshed after every save attempt.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional

from pydantic import ValidationError as PydanticValidationError

from .errors import StoreFatal
from .models import ContentDocument
from .utils import atomic_write_text

logger = logging.getLogger(__name__)

DEFAULT_CACHE_KEY = "dashboardData"


class LocalCache:
    def __init__(self, directory: Path, key: str = DEFAULT_CACHE_KEY):
        self.directory = Path(directory)
        self.key = key

    @property
    def path(self) -> Path:
        return self.directory / f"{self.key}.json"

    def read(self) -> Optional[ContentDocument]:
        """
        Return the cached document, or None when nothing usable is cached.

        A corrupt entry is logged and ignored rather than raised, since the
        cache is never the authoritative copy.
        """
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except OSError as exc:
            raise StoreFatal(f"Local cache is unavailable: {exc}") from exc

        try:
            return ContentDocument.model_validate(json.loads(raw))
        except (json.JSONDecodeError, PydanticValidationError) as exc:
            logger.warning(f"Ignoring unreadable cache entry {self.path}: {exc}")
            return None

    def write(self, document: ContentDocument) -> None:
        """
        Replace the cached document.

        Raises:
            StoreFatal: If the cache directory cannot be written
        """
        payload = ContentDocument(header=document.header, navbar=document.navbar, footer=document.footer)
        try:
            atomic_write_text(self.path, json.dumps(payload.to_wire()))
        except OSError as exc:
            logger.error(f"Failed to write local cache {self.path}: {exc}")
            raise StoreFatal(f"Local cache is unavailable: {exc}") from exc

    def clear(self) -> None:
        try:
            self.path.unlink(missing_ok=True)
        except OSError as exc:
            raise StoreFatal(f"Local cache is unavailable: {exc}") from exc
