"""Paginated collection model."""

from typing import Any, Generic, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class Collection(BaseModel, Generic[T]):
    """One page of a collection response.

    ``total`` is the size of the full result set and may exceed
    ``len(items)`` when the response is paged.
    """

    total: int = 0
    skip: int = 0
    limit: int = 100
    items: list[T] = Field(default_factory=list)
    sys: dict[str, Any] | None = None

    def __len__(self) -> int:
        return len(self.items)

    @property
    def has_more(self) -> bool:
        return self.skip + len(self.items) < self.total
