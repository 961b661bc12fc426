"""Pytest configuration and shared fixtures."""

from typing import Any

import pytest

from contentful_kit import ContentfulConfig

BASE_URL = "https://api.contentful.com"
UPLOAD_URL = "https://upload.contentful.com"
SPACE_URL = f"{BASE_URL}/spaces/space1"


@pytest.fixture
def contentful_config() -> ContentfulConfig:
    """Create a test configuration.

    Returns:
        Test configuration with mock values
    """
    return ContentfulConfig(
        management_token="CFPAT-test-token-12345678",  # noqa: S106
        space_id="space1",
    )


def make_entry(
    entry_id: str = "entry1",
    version: int = 1,
    fields: dict[str, Any] | None = None,
    content_type_id: str = "blogPost",
) -> dict[str, Any]:
    """Build a raw entry document."""
    return {
        "sys": {
            "id": entry_id,
            "type": "Entry",
            "version": version,
            "space": {"sys": {"type": "Link", "linkType": "Space", "id": "space1"}},
            "contentType": {"sys": {"type": "Link", "linkType": "ContentType", "id": content_type_id}},
            "createdAt": "2024-01-01T00:00:00.000Z",
            "updatedAt": "2024-01-01T00:00:00.000Z",
        },
        "fields": fields if fields is not None else {"title": {"en-US": "Hello"}},
    }


def make_asset(
    asset_id: str = "asset1",
    version: int = 1,
    url: str | None = None,
    locale: str = "en-US",
) -> dict[str, Any]:
    """Build a raw asset document; the file is processed when ``url`` is set."""
    file: dict[str, Any] = {"fileName": "logo.png", "contentType": "image/png"}
    if url is None:
        file["upload"] = "https://example.com/logo.png"
    else:
        file["url"] = url
        file["details"] = {"size": 1024, "image": {"width": 64, "height": 64}}
    return {
        "sys": {"id": asset_id, "type": "Asset", "version": version},
        "fields": {"title": {locale: "Logo"}, "file": {locale: file}},
    }


def make_locales(*codes: str, default: str | None = "en-US") -> dict[str, Any]:
    """Build a raw locale collection."""
    return {
        "sys": {"type": "Array"},
        "total": len(codes),
        "skip": 0,
        "limit": 100,
        "items": [
            {
                "sys": {"id": f"loc-{code}", "type": "Locale", "version": 1},
                "code": code,
                "name": code,
                "default": code == default,
                "fallbackCode": None,
                "contentDeliveryApi": True,
                "contentManagementApi": True,
                "optional": False,
            }
            for code in codes
        ],
    }


@pytest.fixture
def entry_document() -> dict[str, Any]:
    return make_entry(
        fields={
            "title": {"en-US": "Hello", "de-DE": "Hallo"},
            "body": {"en-US": "Body text"},
        },
        version=5,
    )


@pytest.fixture
def entry_collection() -> dict[str, Any]:
    """Two entries and an asset in one page of a larger result set."""
    return {
        "sys": {"type": "Array"},
        "total": 25,
        "skip": 0,
        "limit": 3,
        "items": [
            make_entry("first", fields={"title": {"en-US": "First"}, "rating": {"en-US": 4}}),
            make_entry("second", fields={"title": {"en-US": "Second"}, "rating": {"en-US": 2}}),
            make_asset("media"),
        ],
    }


@pytest.fixture
def entry_factory():
    return make_entry


@pytest.fixture
def asset_factory():
    return make_asset


@pytest.fixture
def locales_factory():
    return make_locales
