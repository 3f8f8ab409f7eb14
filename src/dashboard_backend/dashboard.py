"""
Operator session state for the content dashboard.

``DashboardSession`` is the explicit state container behind the editing UI:
it owns the working copy of the content document, the load/save status and
the last error, and exposes reducer-style operations to mutate them. All
persistence goes through a ``TieredContentStore``.

Status transitions::

    loading --load()--> ready --submit()--> saving --> ready
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, TypeVar, Union

import httpx
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from .client import ContentApiClient
from .configuration import make_runtime_config
from .errors import ContentValidationError, MalformedContent
from .local_cache import LocalCache
from .models import ContentDocument, ContentSource, NavLink, SessionStatus, default_content
from .tiered_store import SaveResult, TieredContentStore
from .validation import describe_validation_error, validate_content

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

LOAD_FAILED_MESSAGE = "Failed to load data from server"
SAVE_FAILED_MESSAGE = "Failed to save data"


class DashboardSession:
    def __init__(self, store: TieredContentStore, initial: Optional[ContentDocument] = None):
        self.store = store
        self.status = SessionStatus.LOADING
        self.content: ContentDocument = initial or default_content().content()
        self.source: Optional[ContentSource] = None
        self.error: Optional[str] = None

    @property
    def ready(self) -> bool:
        return self.status == SessionStatus.READY

    def load(self) -> ContentDocument:
        """Populate the session from the remote store, the cache or the defaults."""
        self.status = SessionStatus.LOADING
        self.error = None
        try:
            result = self.store.fetch()
            self.content = result.document
            self.source = result.source
            if result.source != ContentSource.REMOTE:
                self.error = LOAD_FAILED_MESSAGE
        finally:
            self.status = SessionStatus.READY
        return self.content

    def load_local(self) -> bool:
        """Replace the working copy with the cached document, if one exists."""
        cached = self.store.read_local()
        if cached is None:
            return False
        self.content = cached
        self.source = ContentSource.CACHE
        return True

    def replace_content(self, document: ContentDocument) -> None:
        self.content = document

    def update_header(self, **fields: Any) -> None:
        header = _rebuild(self.content.header, fields)
        self.content = self.content.model_copy(update={"header": header})

    def update_navbar(self, links: Sequence[Union[NavLink, dict]]) -> None:
        navbar = _rebuild(self.content.navbar, {"links": list(links)})
        self.content = self.content.model_copy(update={"navbar": navbar})

    def update_link(self, index: int, **fields: Any) -> None:
        links: List[NavLink] = list(self.content.navbar.links)
        links[index] = _rebuild(links[index], fields)
        self.update_navbar(links)

    def update_footer(self, **fields: Any) -> None:
        footer = _rebuild(self.content.footer, fields)
        self.content = self.content.model_copy(update={"footer": footer})

    def submit(self) -> SaveResult:
        """
        Validate the working copy and persist it.

        Validation failures are raised before the store is touched. Otherwise
        the session passes through ``saving`` and always returns to ``ready``.

        Raises:
            ContentValidationError: If the working copy breaks a content rule
            StoreFatal: If neither the API nor the local cache could be written
        """
        try:
            validate_content(self.content)
        except ContentValidationError as exc:
            self.error = exc.message
            raise

        self.status = SessionStatus.SAVING
        self.error = None
        try:
            result = self.store.save(self.content)
        except ContentValidationError as exc:
            self.error = exc.message
            raise
        finally:
            self.status = SessionStatus.READY

        if not result.remote_saved:
            self.error = SAVE_FAILED_MESSAGE
        else:
            logger.info("Dashboard content saved")
        return result


def create_session(
    overrides: Optional[Dict[str, Any]] = None,
    *,
    http_client: Optional[httpx.Client] = None,
) -> DashboardSession:
    """
    Build a session wired to the configured API and local cache.

    Args:
        overrides: Config values to apply on top of the loaded settings
        http_client: Existing client to send requests through (e.g. a ``TestClient``)
    """
    settings = make_runtime_config(overrides)
    api = ContentApiClient(
        str(settings.api.base_url),
        client=http_client,
        timeout=float(settings.api.timeout),
    )
    cache = LocalCache(Path(str(settings.cache.directory)), key=str(settings.cache.key))
    return DashboardSession(TieredContentStore(api, cache))


def _rebuild(model: ModelT, fields: Dict[str, Any]) -> ModelT:
    """
    Return a validated copy of ``model`` with ``fields`` replaced.

    Fields may be given by attribute name (``image_url``) or wire name (``imageUrl``).

    Raises:
        MalformedContent: If a replacement value has the wrong type
    """
    model_fields = type(model).model_fields
    data = model.model_dump(by_alias=True)
    for name, value in fields.items():
        info = model_fields.get(name)
        data[(info.alias or name) if info else name] = value
    try:
        return type(model).model_validate(data)
    except PydanticValidationError as exc:
        raise MalformedContent(describe_validation_error(exc)) from exc
