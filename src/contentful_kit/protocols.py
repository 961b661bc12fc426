"""Collaborator protocols for dependency injection.

The client only depends on these shapes, so tests and applications can
inject their own transport or configuration source.
"""

from typing import Any, Protocol, runtime_checkable

import httpx


@runtime_checkable
class ConfigProvider(Protocol):
    """Anything that can supply client configuration."""

    def get_base_url(self) -> str: ...

    def get_upload_url(self) -> str: ...

    def get_management_token(self) -> str: ...

    @property
    def space_id(self) -> str | None: ...

    @property
    def environment_id(self) -> str | None: ...

    @property
    def timeout(self) -> float: ...

    @property
    def max_connections(self) -> int: ...

    @property
    def verify_ssl(self) -> bool: ...

    @property
    def processing_max_delay(self) -> int: ...


@runtime_checkable
class AsyncHTTPClient(Protocol):
    """Asynchronous transport.

    Headers are always passed per request; implementations must not be
    relied upon to carry request-specific headers between calls.
    """

    async def request(
        self,
        method: str,
        url: str,
        *,
        params: Any = None,
        json: Any = None,
        content: Any = None,
        headers: dict[str, str] | None = None,
    ) -> httpx.Response: ...

    async def aclose(self) -> None: ...
