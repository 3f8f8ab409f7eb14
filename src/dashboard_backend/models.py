from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

CONTENT_TYPE = "dashboard_content"


class _WireModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    def to_wire(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class HeaderContent(_WireModel):
    title: str
    image_url: str = Field(default="", alias="imageUrl")


class NavLink(_WireModel):
    label: str
    url: str


class NavbarContent(_WireModel):
    links: List[NavLink]


class FooterContent(_WireModel):
    email: str
    phone: str
    address: str


class ContentDocument(_WireModel):
    header: HeaderContent
    navbar: NavbarContent
    footer: FooterContent


class StoredContentDocument(ContentDocument):
    type: str = CONTENT_TYPE
    updated_at: Optional[datetime] = Field(default=None, alias="updatedAt")

    def content(self) -> ContentDocument:
        return ContentDocument(header=self.header, navbar=self.navbar, footer=self.footer)


class SaveOutcome(_WireModel):
    success: bool = True
    message: str = "Component data saved successfully"
    modified_count: int = Field(alias="modifiedCount")
    upserted_count: int = Field(alias="upsertedCount")


class ContentSource(str, Enum):
    REMOTE = "remote"
    CACHE = "cache"
    DEFAULT = "default"


class SessionStatus(str, Enum):
    LOADING = "loading"
    READY = "ready"
    SAVING = "saving"


def default_content() -> StoredContentDocument:
    """Document written the first time the store is read while empty."""
    return StoredContentDocument(
        type=CONTENT_TYPE,
        header=HeaderContent(title="Welcome to My Website", image_url=""),
        navbar=NavbarContent(
            links=[
                NavLink(label="Home", url="/"),
                NavLink(label="About", url="/about"),
                NavLink(label="Contact", url="/contact"),
            ]
        ),
        footer=FooterContent(
            email="info@example.com",
            phone="+1 (555) 123-4567",
            address="123 Main St, City, State 12345",
        ),
    )
