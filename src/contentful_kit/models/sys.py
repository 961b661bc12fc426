"""Resource envelope models.

Every management API resource carries a ``sys`` block with its identity
(id, version, type), back-references (space, environment, content type)
and audit metadata. This module models that block and the helpers that
read identity out of parsed documents.
"""

from datetime import datetime
from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field

from ..exceptions import InvalidArgumentError


class LinkProperties(BaseModel):
    """The ``sys`` block of a link to another resource."""

    type: str = "Link"
    link_type: str = Field(alias="linkType")
    id: str

    model_config = ConfigDict(populate_by_name=True)


class Link(BaseModel):
    """Reference to another resource, e.g. ``{"sys": {"type": "Link", ...}}``."""

    sys: LinkProperties

    model_config = ConfigDict(populate_by_name=True)

    @classmethod
    def to(cls, link_type: str, resource_id: str) -> "Link":
        """Build a link to a resource of the given type.

        Examples:
            >>> Link.to("ContentType", "blogPost").sys.link_type
            'ContentType'
        """
        return cls(sys=LinkProperties(link_type=link_type, id=resource_id))

    @property
    def id(self) -> str:
        return self.sys.id

    @property
    def link_type(self) -> str:
        return self.sys.link_type


class SystemProperties(BaseModel):
    """Identity and metadata block shared by all resources.

    ``id`` is assigned by the server on creation. ``version`` starts at 1
    and is incremented by the server on every mutating call.
    """

    id: str | None = None
    type: str | None = None
    version: int | None = None
    link_type: str | None = Field(None, alias="linkType")
    space: Link | None = None
    environment: Link | None = None
    content_type: Link | None = Field(None, alias="contentType")
    created_at: datetime | None = Field(None, alias="createdAt")
    created_by: Link | None = Field(None, alias="createdBy")
    updated_at: datetime | None = Field(None, alias="updatedAt")
    updated_by: Link | None = Field(None, alias="updatedBy")
    published_version: int | None = Field(None, alias="publishedVersion")
    published_at: datetime | None = Field(None, alias="publishedAt")
    archived_version: int | None = Field(None, alias="archivedVersion")
    archived_at: datetime | None = Field(None, alias="archivedAt")
    expires_at: datetime | None = Field(None, alias="expiresAt")

    model_config = ConfigDict(populate_by_name=True, extra="allow")


class Resource(BaseModel):
    """Base class for typed management API resources.

    Subclasses declare ``resource_aware = True`` so collection parsing
    knows their payloads can be validated as-is, without unwrapping the
    ``fields`` node first.
    """

    resource_aware: ClassVar[bool] = True

    sys: SystemProperties = Field(default_factory=SystemProperties)

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    @property
    def id(self) -> str | None:
        return self.sys.id

    @property
    def version(self) -> int | None:
        return self.sys.version

    @property
    def is_published(self) -> bool:
        return self.sys.published_version is not None

    @property
    def is_archived(self) -> bool:
        return self.sys.archived_version is not None


def is_resource_aware(item_type: Any) -> bool:
    """Return whether ``item_type`` declared the resource-aware capability."""
    return bool(getattr(item_type, "resource_aware", False))


def extract_identity(document: dict[str, Any] | Resource) -> tuple[str | None, int | None]:
    """Read ``(id, version)`` from a parsed document or a typed resource.

    Examples:
        >>> extract_identity({"sys": {"id": "abc", "version": 3}})
        ('abc', 3)
        >>> extract_identity({"name": "no sys"})
        (None, None)
    """
    if isinstance(document, Resource):
        return document.id, document.version

    sys = document.get("sys") or {}
    return sys.get("id"), sys.get("version")


def require_id(value: str | None, argument: str) -> str:
    """Return ``value`` or raise if it is ``None`` or empty.

    Raises:
        InvalidArgumentError: If ``value`` is missing
    """
    if not value:
        raise InvalidArgumentError(argument)
    return value
