"""Entry model."""

from typing import Any

from pydantic import Field

from ..fields import localize_fields, resolve_fields
from .sys import Link, Resource, SystemProperties


class Entry(Resource):
    """A content entry.

    ``fields`` keeps the wire shape: field name to locale code to value.
    Use :meth:`fields_for` to read the values of a single locale.

    Example:
        >>> entry = Entry.model_validate({
        ...     "sys": {"id": "hello", "type": "Entry", "version": 2},
        ...     "fields": {"title": {"en-US": "Hello", "de-DE": "Hallo"}},
        ... })
        >>> entry.fields_for("de-DE")
        {'title': 'Hallo'}
    """

    fields: dict[str, dict[str, Any]] = Field(default_factory=dict)
    metadata: dict[str, Any] | None = None

    @classmethod
    def for_locale(
        cls,
        flat: dict[str, Any],
        locale: str,
        entry_id: str | None = None,
    ) -> "Entry":
        """Build an unsaved entry from single-locale values."""
        return cls(sys=SystemProperties(id=entry_id), fields=localize_fields(flat, locale))

    @property
    def content_type_id(self) -> str | None:
        link: Link | None = self.sys.content_type
        return link.id if link else None

    def fields_for(self, locale: str) -> dict[str, Any]:
        """Return field values for ``locale`` as a flat mapping."""
        return resolve_fields(self.fields, locale)

    def to_payload(self) -> dict[str, Any]:
        """Body for create and update calls."""
        return {"fields": self.fields}
