"""
Content validation rules applied before a dashboard document is saved.

Two entry points are provided:

- ``validate_content`` checks an already-parsed ``ContentDocument`` against the
  operator-facing form rules (titles, links, footer contact info).
- ``validate_component_data`` checks a raw request body: it verifies the
  structural shape first (all three sections present, exactly three links)
  and then applies ``validate_content`` to the parsed document.

Both are pure: they never touch storage and raise on the first violation.
"""

from __future__ import annotations

import re
from typing import Any, Mapping
from urllib.parse import urlsplit

from pydantic import ValidationError as PydanticValidationError

from .errors import (
    EmptyLink,
    EmptyTitle,
    IncompleteFooter,
    InvalidEmail,
    InvalidLinkUrl,
    InvalidNavbar,
    MalformedContent,
    MissingComponentData,
)
from .models import ContentDocument

NAVBAR_LINK_COUNT = 3

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

# Relative paths such as "relative/path.html"
PATH_SAFE_PATTERN = re.compile(r"^[A-Za-z0-9\-_./]+$")

SCHEME_PATTERN = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*$")

# Schemes that are only meaningful with a host component
HOST_SCHEMES = {"http", "https", "ftp", "ws", "wss"}


def _is_blank(value: str) -> bool:
    return not value.strip()


def is_absolute_url(url: str) -> bool:
    """
    Return True when ``url`` parses as an absolute URL.

    A URL is absolute when it carries a scheme. Hierarchical schemes such as
    ``http`` must also name a host; other schemes need nothing after the colon.
    Whitespace is never allowed.
    """
    if not url or any(char.isspace() for char in url):
        return False
    try:
        parts = urlsplit(url)
    except ValueError:
        return False
    if not parts.scheme or not SCHEME_PATTERN.match(parts.scheme):
        return False
    if parts.scheme.lower() in HOST_SCHEMES:
        return bool(parts.hostname)
    # Opaque schemes such as "mailto:" or "abc:" may have an empty body.
    return True


def is_valid_link_url(url: str) -> bool:
    """
    Accept root-relative paths, anchors, absolute URLs and path-safe relative paths.

    Example:
        >>> is_valid_link_url("/about")
        True
        >>> is_valid_link_url("not a url!")
        False
    """
    candidate = url.strip()
    if candidate.startswith("/") or candidate.startswith("#"):
        return True
    if is_absolute_url(candidate):
        return True
    return bool(PATH_SAFE_PATTERN.match(candidate))


def is_valid_email(email: str) -> bool:
    return bool(EMAIL_PATTERN.match(email))


def validate_content(payload: ContentDocument) -> None:
    """
    Check a content document against the dashboard form rules.

    Rules are applied in order and the first violation is raised:

    1. the header title is not blank
    2. there are exactly three navigation links, each has a label and a url
    3. every navigation url is a path, an anchor or a URL
    4. footer email, phone and address are filled in
    5. the footer email looks like an email address

    Raises:
        EmptyTitle, InvalidNavbar, EmptyLink, InvalidLinkUrl, IncompleteFooter, InvalidEmail
    """
    if _is_blank(payload.header.title):
        raise EmptyTitle(field="header.title")

    links = payload.navbar.links
    if len(links) != NAVBAR_LINK_COUNT:
        raise InvalidNavbar(field="navbar.links")

    for index, link in enumerate(links):
        if _is_blank(link.label):
            raise EmptyLink(field=f"navbar.links[{index}].label")
        if _is_blank(link.url):
            raise EmptyLink(field=f"navbar.links[{index}].url")

    for index, link in enumerate(links):
        if not is_valid_link_url(link.url):
            raise InvalidLinkUrl(field=f"navbar.links[{index}].url")

    footer = payload.footer
    for name in ("email", "phone", "address"):
        if _is_blank(getattr(footer, name)):
            raise IncompleteFooter(field=f"footer.{name}")

    # The raw value is checked so surrounding whitespace is rejected too.
    if not is_valid_email(footer.email):
        raise InvalidEmail(field="footer.email")


def describe_validation_error(exc: PydanticValidationError) -> str:
    first = exc.errors()[0]
    location = ".".join(str(part) for part in first.get("loc", ()))
    return f"Invalid value for {location}: {first.get('msg', 'invalid')}"


def validate_component_data(data: Any) -> ContentDocument:
    """
    Validate a raw request body and return the parsed document.

    Structural checks run before the content rules so that a body with the
    wrong shape is reported with a message naming the broken section.
    """
    if not isinstance(data, Mapping):
        raise MissingComponentData()

    header = data.get("header")
    navbar = data.get("navbar")
    footer = data.get("footer")
    if not isinstance(header, Mapping) or not isinstance(navbar, Mapping) or not isinstance(footer, Mapping):
        raise MissingComponentData()

    title = header.get("title")
    if not title or not isinstance(title, str):
        raise EmptyTitle("Header title is required and must be a string", field="header.title")

    links = navbar.get("links")
    if not isinstance(links, list) or len(links) != NAVBAR_LINK_COUNT:
        raise InvalidNavbar(field="navbar.links")

    if not footer.get("email") or not footer.get("phone") or not footer.get("address"):
        raise IncompleteFooter("Footer must contain email, phone, and address", field="footer")

    try:
        document = ContentDocument.model_validate(
            {"header": dict(header), "navbar": dict(navbar), "footer": dict(footer)}
        )
    except PydanticValidationError as exc:
        raise MalformedContent(describe_validation_error(exc)) from exc

    validate_content(document)
    return document
