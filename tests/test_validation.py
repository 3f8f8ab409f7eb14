"""
Tests for content validation.

Tests cover:
- Form rules applied to parsed documents (validate_content)
- Structural checks applied to raw request bodies (validate_component_data)
- Link URL and email helpers
"""

import copy

import pytest

from dashboard_backend.errors import (
    EmptyLink,
    EmptyTitle,
    IncompleteFooter,
    InvalidEmail,
    InvalidLinkUrl,
    InvalidNavbar,
    MalformedContent,
    MissingComponentData,
)
from dashboard_backend.models import ContentDocument
from dashboard_backend.validation import (
    is_valid_email,
    is_valid_link_url,
    validate_component_data,
    validate_content,
)


def _document(payload, **changes):
    data = copy.deepcopy(payload)
    for path, value in changes.items():
        section, field = path.split("__")
        data[section][field] = value
    return ContentDocument.model_validate(data)


class TestLinkUrls:
    @pytest.mark.parametrize(
        "url",
        [
            "/about",
            "#section",
            "https://example.com",
            "relative/path.html",
            "mailto:info@example.com",
            "  /padded  ",
            "abc:",
        ],
    )
    def test_accepted(self, url):
        assert is_valid_link_url(url)

    @pytest.mark.parametrize("url", ["not a url!", "about us", "page?id=1", "http://"])
    def test_rejected(self, url):
        assert not is_valid_link_url(url)


class TestEmails:
    def test_accepted(self):
        assert is_valid_email("a@b.com")

    @pytest.mark.parametrize("email", ["not-an-email", "a@b", "a b@c.com", " a@b.com"])
    def test_rejected(self, email):
        assert not is_valid_email(email)


class TestValidateContent:
    def test_valid_document_passes(self, valid_document):
        assert validate_content(valid_document) is None

    @pytest.mark.parametrize("title", ["", "   ", "\t\n"])
    def test_blank_title(self, valid_payload, title):
        with pytest.raises(EmptyTitle) as info:
            validate_content(_document(valid_payload, header__title=title))
        assert info.value.code == "EmptyTitle"
        assert info.value.field == "header.title"

    @pytest.mark.parametrize("count", [0, 2, 4])
    def test_wrong_link_count(self, valid_payload, count):
        valid_payload["navbar"]["links"] = [{"label": f"L{i}", "url": f"/l{i}"} for i in range(count)]
        with pytest.raises(InvalidNavbar) as info:
            validate_content(ContentDocument.model_validate(valid_payload))
        assert info.value.message == "Navbar must contain exactly 3 links"
        assert info.value.field == "navbar.links"

    def test_blank_link_label(self, valid_payload):
        valid_payload["navbar"]["links"][1]["label"] = "  "
        with pytest.raises(EmptyLink) as info:
            validate_content(ContentDocument.model_validate(valid_payload))
        assert info.value.field == "navbar.links[1].label"

    def test_blank_link_url(self, valid_payload):
        valid_payload["navbar"]["links"][2]["url"] = ""
        with pytest.raises(EmptyLink):
            validate_content(ContentDocument.model_validate(valid_payload))

    def test_invalid_link_url(self, valid_payload):
        valid_payload["navbar"]["links"][0]["url"] = "not a url!"
        with pytest.raises(InvalidLinkUrl) as info:
            validate_content(ContentDocument.model_validate(valid_payload))
        assert info.value.code == "InvalidLinkUrl"
        assert info.value.field == "navbar.links[0].url"

    def test_empty_links_reported_before_invalid_urls(self, valid_payload):
        valid_payload["navbar"]["links"][0]["url"] = "not a url!"
        valid_payload["navbar"]["links"][2]["label"] = ""
        with pytest.raises(EmptyLink):
            validate_content(ContentDocument.model_validate(valid_payload))

    @pytest.mark.parametrize("field", ["email", "phone", "address"])
    def test_incomplete_footer(self, valid_payload, field):
        with pytest.raises(IncompleteFooter) as info:
            validate_content(_document(valid_payload, **{f"footer__{field}": " "}))
        assert info.value.field == f"footer.{field}"

    def test_invalid_email(self, valid_payload):
        with pytest.raises(InvalidEmail) as info:
            validate_content(_document(valid_payload, footer__email="not-an-email"))
        assert info.value.message == "Please enter a valid email address."

    def test_title_checked_first(self, valid_payload):
        document = _document(valid_payload, header__title="", footer__email="nope")
        with pytest.raises(EmptyTitle):
            validate_content(document)


class TestValidateComponentData:
    def test_returns_parsed_document(self, valid_payload):
        document = validate_component_data(valid_payload)
        assert isinstance(document, ContentDocument)
        assert document.header.image_url == "https://cdn.example.com/logo.png"

    def test_image_url_is_optional(self, valid_payload):
        del valid_payload["header"]["imageUrl"]
        assert validate_component_data(valid_payload).header.image_url == ""

    @pytest.mark.parametrize("section", ["header", "navbar", "footer"])
    def test_missing_section(self, valid_payload, section):
        del valid_payload[section]
        with pytest.raises(MissingComponentData) as info:
            validate_component_data(valid_payload)
        assert info.value.message == "Missing required component data (header, navbar, or footer)"

    def test_non_object_body(self):
        with pytest.raises(MissingComponentData):
            validate_component_data(["header", "navbar", "footer"])

    def test_title_must_be_string(self, valid_payload):
        valid_payload["header"]["title"] = 42
        with pytest.raises(EmptyTitle) as info:
            validate_component_data(valid_payload)
        assert info.value.message == "Header title is required and must be a string"

    @pytest.mark.parametrize("count", [0, 2, 4])
    def test_navbar_needs_exactly_three_links(self, valid_payload, count):
        valid_payload["navbar"]["links"] = [{"label": f"L{i}", "url": f"/l{i}"} for i in range(count)]
        with pytest.raises(InvalidNavbar) as info:
            validate_component_data(valid_payload)
        assert info.value.message == "Navbar must contain exactly 3 links"

    def test_footer_fields_required(self, valid_payload):
        del valid_payload["footer"]["phone"]
        with pytest.raises(IncompleteFooter) as info:
            validate_component_data(valid_payload)
        assert info.value.message == "Footer must contain email, phone, and address"

    def test_malformed_link(self, valid_payload):
        valid_payload["navbar"]["links"][1] = "Home"
        with pytest.raises(MalformedContent):
            validate_component_data(valid_payload)

    def test_form_rules_applied_after_structure(self, valid_payload):
        valid_payload["footer"]["email"] = "not-an-email"
        with pytest.raises(InvalidEmail):
            validate_component_data(valid_payload)
