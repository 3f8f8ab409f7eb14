"""
Exception taxonomy shared by the API, the content store and the client session.

Validation errors describe operator mistakes and block a save before any
storage is touched. Store errors describe storage failures: ``StoreUnavailable``
is recoverable through the local cache, ``StoreFatal`` is not.
"""

from __future__ import annotations

from typing import Optional


class ContentValidationError(ValueError):
    """A content payload violated one of the content rules."""

    code = "ValidationError"
    default_message = "Invalid component data"

    def __init__(self, message: Optional[str] = None, field: Optional[str] = None):
        self.message = message or self.default_message
        self.field = field
        super().__init__(self.message)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code!r}, field={self.field!r}, message={self.message!r})"


class MissingComponentData(ContentValidationError):
    code = "MissingComponentData"
    default_message = "Missing required component data (header, navbar, or footer)"


class MalformedContent(ContentValidationError):
    code = "MalformedContent"
    default_message = "Component data is malformed"


class EmptyTitle(ContentValidationError):
    code = "EmptyTitle"
    default_message = "Please enter a header title."


class InvalidNavbar(ContentValidationError):
    code = "InvalidNavbar"
    default_message = "Navbar must contain exactly 3 links"


class EmptyLink(ContentValidationError):
    code = "EmptyLink"
    default_message = "Please fill in all navigation link labels and paths/URLs."


class InvalidLinkUrl(ContentValidationError):
    code = "InvalidLinkUrl"
    default_message = (
        "Please enter valid paths (e.g., /about) or URLs (e.g., https://example.com) for navigation links."
    )


class IncompleteFooter(ContentValidationError):
    code = "IncompleteFooter"
    default_message = "Please fill in all footer contact information."


class InvalidEmail(ContentValidationError):
    code = "InvalidEmail"
    default_message = "Please enter a valid email address."


class RemoteValidationError(ContentValidationError):
    """The API rejected a payload with a 400 response."""

    code = "RemoteValidationError"


class StoreError(RuntimeError):
    """Base class for persistence failures."""


class StoreUnavailable(StoreError):
    """The authoritative store could not be read or written."""


class StoreFatal(StoreError):
    """The local cache itself is unusable; there is no further fallback."""
