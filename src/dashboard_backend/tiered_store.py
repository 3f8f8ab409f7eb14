"""
Two-tier content storage: the API is authoritative, the local cache advisory.

Reads prefer the remote document and fall back to the cache, then to the
default document. Writes go to the remote store first and are then mirrored
to the cache regardless of the remote outcome, so the last document the
operator submitted can always be recovered locally.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Protocol

from .errors import StoreUnavailable
from .local_cache import LocalCache
from .models import ContentDocument, ContentSource, SaveOutcome, default_content

logger = logging.getLogger(__name__)

SAVED_MESSAGE = "Dashboard settings updated and saved successfully!"
SAVED_LOCALLY_MESSAGE = "saved locally only"


class RemoteContentStore(Protocol):
    def get_components(self) -> ContentDocument: ...

    def save_components(self, document: ContentDocument) -> SaveOutcome: ...


@dataclass
class FetchResult:
    document: ContentDocument
    source: ContentSource
    error: Optional[str] = None


@dataclass
class SaveResult:
    document: ContentDocument
    remote_saved: bool
    message: str
    outcome: Optional[SaveOutcome] = None
    error: Optional[str] = None


class TieredContentStore:
    def __init__(self, remote: RemoteContentStore, cache: LocalCache):
        self.remote = remote
        self.cache = cache

    def fetch(self) -> FetchResult:
        """
        Load the content document from the best available tier.

        The cache is never written here, so a document saved only locally
        stays recoverable after the API comes back.

        Raises:
            StoreFatal: If the remote store is down and the cache cannot be read
        """
        try:
            document = self.remote.get_components()
        except StoreUnavailable as exc:
            logger.warning(f"Remote content unavailable, falling back to local cache: {exc}")
            cached = self.cache.read()
            if cached is not None:
                return FetchResult(document=cached, source=ContentSource.CACHE, error=str(exc))
            return FetchResult(document=default_content().content(), source=ContentSource.DEFAULT, error=str(exc))

        return FetchResult(document=document, source=ContentSource.REMOTE)

    def read_local(self) -> Optional[ContentDocument]:
        return self.cache.read()

    def save(self, document: ContentDocument) -> SaveResult:
        """
        Save remotely, then mirror to the local cache whatever the remote outcome.

        The mirror is written even when the API rejects the payload, and any
        ``RemoteValidationError`` is re-raised afterwards.

        Raises:
            RemoteValidationError: If the API rejected the payload
            StoreFatal: If the local mirror cannot be written
        """
        outcome: Optional[SaveOutcome] = None
        error: Optional[str] = None
        try:
            outcome = self.remote.save_components(document)
        except StoreUnavailable as exc:
            logger.warning(f"Remote save failed, keeping local copy only: {exc}")
            error = str(exc)
        finally:
            self.cache.write(document)

        if outcome is None:
            return SaveResult(
                document=document,
                remote_saved=False,
                message=SAVED_LOCALLY_MESSAGE,
                error=error,
            )
        return SaveResult(document=document, remote_saved=True, message=SAVED_MESSAGE, outcome=outcome)
