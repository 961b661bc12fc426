"""Content type models.

A content type is the schema entries are validated against: an ordered
list of field definitions plus the field used as the entry title.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .sys import Resource


class ContentTypeField(BaseModel):
    """A single field definition of a content type."""

    id: str
    name: str
    type: str
    link_type: str | None = Field(None, alias="linkType")
    items: dict[str, Any] | None = None
    required: bool = False
    localized: bool = False
    disabled: bool = False
    omitted: bool = False
    validations: list[dict[str, Any]] = Field(default_factory=list)

    model_config = ConfigDict(populate_by_name=True, extra="allow")


class ContentType(Resource):
    """Content type schema."""

    name: str
    description: str | None = None
    display_field: str | None = Field(None, alias="displayField")
    fields: list[ContentTypeField] = Field(default_factory=list)

    @property
    def is_active(self) -> bool:
        """Whether the current version has been activated."""
        return self.sys.published_version is not None

    def get_field(self, field_id: str) -> ContentTypeField | None:
        """Get a field definition by id.

        Args:
            field_id: Field id as used in entry ``fields``

        Returns:
            The field definition or None if not found
        """
        for field in self.fields:
            if field.id == field_id:
                return field
        return None

    def get_field_type(self, field_id: str) -> str | None:
        field = self.get_field(field_id)
        return field.type if field else None

    def is_link_field(self, field_id: str) -> bool:
        """Check if a field links to entries or assets."""
        return self.get_field_type(field_id) == "Link"

    def get_link_type(self, field_id: str) -> str | None:
        """Get ``Entry`` or ``Asset`` for a link field, including arrays of links.

        Args:
            field_id: Field id

        Returns:
            Link type or None if the field is not a link
        """
        field = self.get_field(field_id)
        if field is None:
            return None
        if field.type == "Link":
            return field.link_type
        if field.type == "Array" and field.items and field.items.get("type") == "Link":
            return field.items.get("linkType")
        return None

    def localized_field_ids(self) -> list[str]:
        """Ids of fields that accept a value per locale."""
        return [field.id for field in self.fields if field.localized]

    def to_payload(self) -> dict[str, Any]:
        """Body for create and update calls."""
        return self.model_dump(
            by_alias=True,
            exclude_none=True,
            include={"name", "description", "display_field", "fields"},
        )
