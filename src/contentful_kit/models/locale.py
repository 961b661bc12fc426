"""Locale model."""

from typing import Any

from pydantic import Field

from .sys import Resource


class Locale(Resource):
    """A locale of a space.

    Exactly one locale per space is the default. ``fallback_code`` chains
    form a directed graph the server is expected to keep acyclic; no
    client-side validation is done.
    """

    code: str
    name: str | None = None
    fallback_code: str | None = Field(None, alias="fallbackCode")
    content_delivery_api: bool = Field(True, alias="contentDeliveryApi")
    content_management_api: bool = Field(True, alias="contentManagementApi")
    optional: bool = False
    default: bool = False

    def to_payload(self) -> dict[str, Any]:
        """Body for create and update calls. ``default`` is server-controlled."""
        return self.model_dump(
            by_alias=True,
            include={
                "code",
                "name",
                "fallback_code",
                "content_delivery_api",
                "content_management_api",
                "optional",
            },
        )
