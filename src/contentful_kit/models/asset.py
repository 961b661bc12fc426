"""Asset models.

An asset's processing state is not stored anywhere: a locale's file is
processed once the server has filled in its ``url``. :meth:`Asset.is_processed`
is the single place that rule lives.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .sys import Link, Resource


class AssetFile(BaseModel):
    """File descriptor for one locale of an asset."""

    file_name: str | None = Field(None, alias="fileName")
    content_type: str | None = Field(None, alias="contentType")
    upload: str | None = None
    upload_from: Link | None = Field(None, alias="uploadFrom")
    url: str | None = None
    details: dict[str, Any] | None = None

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    @property
    def is_processed(self) -> bool:
        return self.url is not None

    @property
    def size(self) -> int | None:
        if self.details:
            return self.details.get("size")
        return None


class AssetFields(BaseModel):
    """Locale-keyed asset fields."""

    title: dict[str, str] | None = None
    description: dict[str, str] | None = None
    file: dict[str, AssetFile] = Field(default_factory=dict)

    model_config = ConfigDict(populate_by_name=True, extra="allow")


class Asset(Resource):
    """A media asset.

    Example:
        >>> asset = Asset.model_validate({
        ...     "sys": {"id": "logo", "type": "Asset", "version": 1},
        ...     "fields": {"file": {"en-US": {"fileName": "logo.png", "upload": "https://x"}}},
        ... })
        >>> asset.is_processed("en-US")
        False
    """

    fields: AssetFields = Field(default_factory=AssetFields)

    @property
    def title(self) -> dict[str, str] | None:
        return self.fields.title

    @property
    def description(self) -> dict[str, str] | None:
        return self.fields.description

    @property
    def files(self) -> dict[str, AssetFile]:
        return self.fields.file

    def is_processed(self, locale: str) -> bool:
        """Return whether the file for ``locale`` has a resolved URL."""
        file = self.fields.file.get(locale)
        return file is not None and file.is_processed

    def to_payload(self) -> dict[str, Any]:
        """Body for create and update calls."""
        return {"fields": self.fields.model_dump(by_alias=True, exclude_none=True)}
