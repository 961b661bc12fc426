"""Response parsing.

Turns parsed JSON documents into typed resources and collections.
"""

import logging
from typing import Any, TypeVar

from pydantic import ValidationError as PydanticValidationError

from .exceptions import FormatError
from .fields import unwrap_entry_fields
from .models.collection import Collection
from .models.sys import is_resource_aware

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ResourceParser:
    """Materializes single documents and collection pages.

    Item types that declare ``resource_aware = True`` (every
    :class:`~contentful_kit.models.sys.Resource` subclass) are validated
    directly. Any other type, including plain ``dict`` or a user-defined
    pydantic model describing only the entry's fields, sees each entry with
    its ``fields`` promoted to top-level properties.

    Example:
        >>> from pydantic import BaseModel
        >>> class Post(BaseModel):
        ...     title: str
        >>> page = ResourceParser().parse_collection(
        ...     {"total": 1, "items": [{"sys": {"type": "Entry"}, "fields": {"title": "Hi"}}]},
        ...     Post,
        ... )
        >>> page.items[0].title
        'Hi'
    """

    def parse_collection(self, document: dict[str, Any], item_type: type[T]) -> Collection[T]:
        """Parse a collection document into a fully materialized page.

        Args:
            document: Raw collection document (``total``, ``skip``, ``limit``, ``items``)
            item_type: Type of each item

        Returns:
            Collection with items in server order

        Raises:
            FormatError: If the document does not match ``item_type``
        """
        if not is_resource_aware(item_type):
            document = unwrap_entry_fields(document)

        logger.debug(
            f"Parsing collection of {len(document.get('items') or [])} "
            f"{getattr(item_type, '__name__', item_type)} items"
        )
        try:
            return Collection[item_type].model_validate(document)  # type: ignore[valid-type]
        except PydanticValidationError as e:
            raise FormatError(
                f"Collection items do not match {getattr(item_type, '__name__', item_type)}",
                details={"errors": e.errors(include_url=False)},
            ) from e

    def parse_resource(self, document: dict[str, Any], model: type[T]) -> T:
        """Parse a single resource document.

        Raises:
            FormatError: If the document does not match ``model``
        """
        try:
            return model.model_validate(document)  # type: ignore[attr-defined,no-any-return]
        except PydanticValidationError as e:
            raise FormatError(
                f"Response does not match {model.__name__}",
                details={"errors": e.errors(include_url=False)},
            ) from e
