"""Tests for entry, asset, locale, collection and content type models."""

from contentful_kit.models import (
    Asset,
    AssetFile,
    Collection,
    ContentType,
    Entry,
    Locale,
    UploadReference,
)


class TestEntry:
    """Tests for Entry."""

    def test_parse(self, entry_document: dict) -> None:
        entry = Entry.model_validate(entry_document)

        assert entry.id == "entry1"
        assert entry.version == 5
        assert entry.content_type_id == "blogPost"
        assert entry.fields["title"] == {"en-US": "Hello", "de-DE": "Hallo"}

    def test_fields_for(self, entry_document: dict) -> None:
        entry = Entry.model_validate(entry_document)

        assert entry.fields_for("en-US") == {"title": "Hello", "body": "Body text"}
        assert entry.fields_for("de-DE") == {"title": "Hallo"}

    def test_for_locale(self) -> None:
        entry = Entry.for_locale({"title": "Hallo"}, "de-DE", entry_id="new")

        assert entry.id == "new"
        assert entry.to_payload() == {"fields": {"title": {"de-DE": "Hallo"}}}


class TestAsset:
    """Tests for Asset and AssetFile."""

    def test_unprocessed(self, asset_factory) -> None:
        asset = Asset.model_validate(asset_factory())

        assert asset.files["en-US"].file_name == "logo.png"
        assert asset.files["en-US"].is_processed is False
        assert asset.is_processed("en-US") is False

    def test_processed(self, asset_factory) -> None:
        asset = Asset.model_validate(asset_factory(url="//images.example.com/logo.png"))

        assert asset.is_processed("en-US") is True
        assert asset.files["en-US"].size == 1024

    def test_unknown_locale_is_not_processed(self, asset_factory) -> None:
        asset = Asset.model_validate(asset_factory(url="//images.example.com/logo.png"))

        assert asset.is_processed("de-DE") is False

    def test_title_and_description(self, asset_factory) -> None:
        asset = Asset.model_validate(asset_factory())

        assert asset.title == {"en-US": "Logo"}
        assert asset.description is None

    def test_payload_uses_wire_names(self) -> None:
        asset = Asset.model_validate(
            {
                "sys": {"id": "a"},
                "fields": {
                    "title": {"en-US": "Logo"},
                    "file": {"en-US": {"fileName": "logo.png", "contentType": "image/png"}},
                },
            }
        )

        assert asset.to_payload() == {
            "fields": {
                "title": {"en-US": "Logo"},
                "file": {"en-US": {"fileName": "logo.png", "contentType": "image/png"}},
            }
        }

    def test_file_size_without_details(self) -> None:
        assert AssetFile(file_name="x").size is None


class TestUploadReference:
    """Tests for UploadReference."""

    def test_as_link_strips_metadata(self) -> None:
        upload = UploadReference.model_validate(
            {
                "sys": {
                    "id": "up1",
                    "type": "Upload",
                    "createdAt": "2024-01-01T00:00:00.000Z",
                    "createdBy": {"sys": {"type": "Link", "linkType": "User", "id": "u1"}},
                    "space": {"sys": {"type": "Link", "linkType": "Space", "id": "space1"}},
                }
            }
        )

        link = upload.as_link()

        assert link.model_dump(by_alias=True) == {
            "sys": {"type": "Link", "linkType": "Upload", "id": "up1"}
        }


class TestLocale:
    """Tests for Locale."""

    def test_parse(self, locales_factory) -> None:
        document = locales_factory("en-US", "de-DE")["items"][1]

        locale = Locale.model_validate(document)

        assert locale.code == "de-DE"
        assert locale.default is False
        assert locale.content_delivery_api is True

    def test_payload_excludes_default_and_sys(self) -> None:
        locale = Locale(code="fr-FR", name="French", fallback_code="en-US", default=True)

        assert locale.to_payload() == {
            "code": "fr-FR",
            "name": "French",
            "fallbackCode": "en-US",
            "contentDeliveryApi": True,
            "contentManagementApi": True,
            "optional": False,
        }


class TestCollection:
    """Tests for Collection."""

    def test_total_independent_of_items(self) -> None:
        page = Collection[dict].model_validate(
            {"total": 30, "skip": 0, "limit": 2, "items": [{"a": 1}, {"a": 2}]}
        )

        assert len(page) == 2
        assert page.total == 30
        assert page.has_more is True
        assert page.items == [{"a": 1}, {"a": 2}]

    def test_last_page(self) -> None:
        page = Collection[dict].model_validate({"total": 3, "skip": 2, "items": [{"a": 3}]})

        assert page.has_more is False


class TestContentType:
    """Tests for ContentType."""

    def _content_type(self) -> ContentType:
        return ContentType.model_validate(
            {
                "sys": {"id": "blogPost", "type": "ContentType", "version": 3, "publishedVersion": 2},
                "name": "Blog Post",
                "displayField": "title",
                "fields": [
                    {"id": "title", "name": "Title", "type": "Symbol", "localized": True},
                    {"id": "author", "name": "Author", "type": "Link", "linkType": "Entry"},
                    {
                        "id": "images",
                        "name": "Images",
                        "type": "Array",
                        "items": {"type": "Link", "linkType": "Asset"},
                    },
                ],
            }
        )

    def test_field_helpers(self) -> None:
        content_type = self._content_type()

        assert content_type.display_field == "title"
        assert content_type.is_active is True
        assert content_type.get_field_type("title") == "Symbol"
        assert content_type.is_link_field("author") is True
        assert content_type.get_link_type("author") == "Entry"
        assert content_type.get_link_type("images") == "Asset"
        assert content_type.get_link_type("title") is None
        assert content_type.get_field("missing") is None
        assert content_type.localized_field_ids() == ["title"]

    def test_payload(self) -> None:
        payload = self._content_type().to_payload()

        assert set(payload) == {"name", "displayField", "fields"}
        assert payload["fields"][1]["linkType"] == "Entry"
