"""Client implementations for the content management API."""

from .async_client import AsyncClient
from .base import BaseClient

__all__ = ["AsyncClient", "BaseClient"]
