"""HTTP client for the dashboard content API."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import httpx
from pydantic import ValidationError as PydanticValidationError

from .errors import RemoteValidationError, StoreUnavailable
from .models import ContentDocument, SaveOutcome, StoredContentDocument

logger = logging.getLogger(__name__)

COMPONENTS_PATH = "/components"
HEALTH_PATH = "/health"


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text or f"HTTP {response.status_code}"
    if isinstance(body, dict):
        return str(body.get("message") or body.get("error") or body)
    return str(body)


class ContentApiClient:
    """
    Thin wrapper around ``/api/components`` and ``/api/health``.

    Transport failures and server errors surface as ``StoreUnavailable``;
    a 400 response surfaces as ``RemoteValidationError``. An existing
    ``httpx.Client`` (or FastAPI ``TestClient``) can be passed in, in which
    case ``base_url`` is used as a path prefix on that client.
    """

    def __init__(
        self,
        base_url: str = "",
        *,
        client: Optional[httpx.Client] = None,
        timeout: float = 10.0,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._owns_client = client is None
        self._client = client or httpx.Client(timeout=timeout)

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> "ContentApiClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        url = f"{self.base_url}{path}"
        try:
            response = self._client.request(method, url, **kwargs)
        except httpx.HTTPError as exc:
            logger.warning(f"{method} {url} failed: {exc}")
            raise StoreUnavailable(f"Could not reach content API: {exc}") from exc

        if response.status_code == 400:
            raise RemoteValidationError(_error_message(response))
        if response.status_code >= 400:
            message = _error_message(response)
            logger.warning(f"{method} {url} returned {response.status_code}: {message}")
            raise StoreUnavailable(f"Content API error ({response.status_code}): {message}")
        return response

    def get_components(self) -> StoredContentDocument:
        response = self._request("GET", COMPONENTS_PATH)
        try:
            return StoredContentDocument.model_validate(response.json())
        except (ValueError, PydanticValidationError) as exc:
            raise StoreUnavailable(f"Content API returned an unreadable document: {exc}") from exc

    def save_components(self, document: ContentDocument) -> SaveOutcome:
        payload = ContentDocument(header=document.header, navbar=document.navbar, footer=document.footer)
        response = self._request("POST", COMPONENTS_PATH, json=payload.to_wire())
        try:
            return SaveOutcome.model_validate(response.json())
        except (ValueError, PydanticValidationError) as exc:
            raise StoreUnavailable(f"Content API returned an unreadable save result: {exc}") from exc

    def health(self) -> Dict[str, Any]:
        return self._request("GET", HEALTH_PATH).json()
