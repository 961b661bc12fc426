"""Streaming pagination utilities for large result sets.

This module provides an async generator that fetches pages with
``skip``/``limit`` as needed, yielding items one at a time.
"""

from collections.abc import AsyncGenerator
from typing import TYPE_CHECKING, Any, TypeVar

from ..models.entry import Entry

if TYPE_CHECKING:
    from ..client.async_client import AsyncClient

T = TypeVar("T")


async def stream_entries(
    client: "AsyncClient",
    item_type: type[T] = Entry,  # type: ignore[assignment]
    query: dict[str, Any] | None = None,
    page_size: int = 100,
    space_id: str | None = None,
) -> AsyncGenerator[T, None]:
    """Stream entries with automatic pagination.

    Args:
        client: AsyncClient instance
        item_type: Type of each item (see AsyncClient.get_entries)
        query: Optional query parameters (filters, ordering, content_type)
        page_size: Items per page (default: 100)
        space_id: Space to read from (defaults to the configured space)

    Yields:
        Items one at a time, in server order

    Example:
        >>> async with AsyncClient(config) as client:
        ...     async for entry in stream_entries(client, page_size=50):
        ...         print(entry.id)
    """
    if page_size < 1:
        raise ValueError("page_size must be at least 1")

    skip = 0
    while True:
        params = {**(query or {}), "skip": skip, "limit": page_size}
        page = await client.get_entries(item_type, query=params, space_id=space_id)

        for item in page.items:
            yield item

        skip += len(page.items)
        if not page.items or skip >= page.total:
            break
