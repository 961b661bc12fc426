"""Tests for the resource envelope models."""

from datetime import datetime

import pytest

from contentful_kit import InvalidArgumentError
from contentful_kit.models import Entry, Link, Resource, SystemProperties, extract_identity, require_id
from contentful_kit.models.sys import is_resource_aware


class TestSystemProperties:
    """Tests for SystemProperties."""

    def test_parse_from_api(self) -> None:
        sys = SystemProperties.model_validate(
            {
                "id": "abc",
                "type": "Entry",
                "version": 4,
                "publishedVersion": 3,
                "createdAt": "2024-01-01T12:00:00.000Z",
                "space": {"sys": {"type": "Link", "linkType": "Space", "id": "space1"}},
                "contentType": {"sys": {"type": "Link", "linkType": "ContentType", "id": "post"}},
            }
        )

        assert sys.id == "abc"
        assert sys.version == 4
        assert sys.published_version == 3
        assert isinstance(sys.created_at, datetime)
        assert sys.space is not None and sys.space.id == "space1"
        assert sys.content_type is not None and sys.content_type.link_type == "ContentType"

    def test_unknown_keys_are_kept(self) -> None:
        sys = SystemProperties.model_validate({"id": "a", "locale": "en-US"})

        assert sys.model_extra == {"locale": "en-US"}


class TestLink:
    """Tests for Link."""

    def test_to(self) -> None:
        link = Link.to("Upload", "up1")

        assert link.model_dump(by_alias=True) == {
            "sys": {"type": "Link", "linkType": "Upload", "id": "up1"}
        }


class TestResource:
    """Tests for the Resource base model."""

    def test_identity_properties(self) -> None:
        resource = Resource.model_validate({"sys": {"id": "x", "version": 2}})

        assert resource.id == "x"
        assert resource.version == 2
        assert resource.is_published is False
        assert resource.is_archived is False

    def test_published_and_archived(self) -> None:
        resource = Resource.model_validate(
            {"sys": {"id": "x", "publishedVersion": 1, "archivedVersion": 2}}
        )

        assert resource.is_published is True
        assert resource.is_archived is True

    def test_resource_aware_tag(self) -> None:
        class Plain:
            pass

        assert is_resource_aware(Entry) is True
        assert is_resource_aware(dict) is False
        assert is_resource_aware(Plain) is False


class TestExtractIdentity:
    """Tests for extract_identity."""

    def test_from_document(self) -> None:
        assert extract_identity({"sys": {"id": "a", "version": 7}}) == ("a", 7)

    def test_from_resource(self) -> None:
        entry = Entry.model_validate({"sys": {"id": "b", "version": 1}})

        assert extract_identity(entry) == ("b", 1)

    def test_without_sys(self) -> None:
        assert extract_identity({}) == (None, None)


class TestRequireId:
    """Tests for require_id."""

    def test_returns_value(self) -> None:
        assert require_id("abc", "entry id") == "abc"

    @pytest.mark.parametrize("value", [None, ""])
    def test_rejects_missing(self, value: str | None) -> None:
        with pytest.raises(InvalidArgumentError) as exc_info:
            require_id(value, "entry id")

        assert exc_info.value.argument == "entry id"
        assert "entry id" in str(exc_info.value)

    def test_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            require_id("", "asset id")
