"""Asynchronous client for the content management API.

Every method is a coroutine that suspends only while a request is in
flight (and, for asset processing, between polls). Cancelling the task
running a method aborts it at the next of those suspension points.
"""

import logging
from typing import Any, TypeVar

import httpx
from pydantic import BaseModel

from ..exceptions import (
    ConnectionError as ContentfulConnectionError,
)
from ..exceptions import (
    FormatError,
    TransportError,
)
from ..exceptions import (
    TimeoutError as ContentfulTimeoutError,
)
from ..fields import default_locale_code, merge_locale_fields
from ..models.asset import Asset
from ..models.collection import Collection
from ..models.content_type import ContentType
from ..models.entry import Entry
from ..models.locale import Locale
from ..models.space import Space
from ..models.sys import require_id
from ..models.upload import UploadReference
from ..operations.processing import AssetProcessor, ProcessingState
from ..parsers import ResourceParser
from ..protocols import AsyncHTTPClient, ConfigProvider
from .base import MANAGEMENT_CONTENT_TYPE, UPLOAD_CONTENT_TYPE, BaseClient

logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R", bound=BaseModel)


def _flat_values(values: dict[str, Any] | BaseModel) -> dict[str, Any]:
    """Return a flat field object as a plain dict.

    Models are dumped in full, defaults included, under their aliases.
    """
    if isinstance(values, BaseModel):
        return values.model_dump(by_alias=True, mode="json")
    return dict(values)


class AsyncClient(BaseClient):
    """Asynchronous client for the content management API.

    Example:
        ```python
        import asyncio
        from contentful_kit import AsyncClient, ContentfulConfig

        async def main():
            config = ContentfulConfig(
                management_token="CFPAT-xxxx",
                space_id="abc123",
            )

            async with AsyncClient(config) as client:
                entry = await client.create_entry_for_locale(
                    {"title": "Hello"}, "hello", content_type_id="blogPost"
                )
                await client.publish_entry(entry.id, entry.version)

        asyncio.run(main())
        ```
    """

    def __init__(
        self,
        config: ConfigProvider,
        http_client: AsyncHTTPClient | None = None,
        parser: ResourceParser | None = None,
    ) -> None:
        """Initialize the asynchronous client.

        Args:
            config: Configuration provider (typically ContentfulConfig)
            http_client: Async HTTP client (defaults to httpx.AsyncClient with pooling)
            parser: Response parser (passed to BaseClient)
        """
        super().__init__(config, parser=parser)

        self._client: AsyncHTTPClient | httpx.AsyncClient = (
            http_client or self._create_default_http_client()
        )
        self._owns_client = http_client is None

    def _create_default_http_client(self) -> httpx.AsyncClient:
        """Create default async HTTP client with connection pooling.

        Returns:
            Configured httpx.AsyncClient instance
        """
        return httpx.AsyncClient(
            timeout=self.config.timeout,
            verify=self.config.verify_ssl,
            limits=httpx.Limits(
                max_connections=self.config.max_connections,
                max_keepalive_connections=self.config.max_connections,
            ),
        )

    async def __aenter__(self) -> "AsyncClient":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit - closes the client."""
        await self.close()

    async def close(self) -> None:
        """Close the HTTP client and release connections.

        Only closes the client if it was created by this instance
        (not injected from outside).
        """
        if self._owns_client:
            await self._client.aclose()
        logger.info("Closed asynchronous management client")

    async def request(
        self,
        method: str,
        endpoint: str,
        *,
        params: dict[str, Any] | None = None,
        json: Any = None,
        content: bytes | None = None,
        headers: dict[str, str] | None = None,
        version: int | None = None,
        organization_id: str | None = None,
        content_type_id: str | None = None,
        upload: bool = False,
    ) -> dict[str, Any]:
        """Send one request and return its parsed JSON body.

        All request-specific headers, including the version precondition,
        are built for this call only.

        Args:
            method: HTTP method (GET, POST, PUT, DELETE)
            endpoint: Path relative to the API root
            params: URL query parameters
            json: JSON request body
            content: Raw request body (uploads)
            headers: Additional headers
            version: Version precondition
            organization_id: Organization scope header
            content_type_id: Content type scope header
            upload: Send to the upload host

        Returns:
            Response JSON data ({} for empty responses)

        Raises:
            RemoteError: On non-success responses (ConflictError on 409)
            ConnectionError: On connection failures
            TimeoutError: On request timeout
            FormatError: If the body is not JSON
        """
        url = self._build_url(endpoint, upload=upload)
        request_headers = self._get_headers(
            headers,
            version=version,
            organization_id=organization_id,
            content_type_id=content_type_id,
            content_type=UPLOAD_CONTENT_TYPE if content is not None else MANAGEMENT_CONTENT_TYPE,
        )

        logger.debug(f"{method} {url} params={params} version={version}")

        try:
            response = await self._client.request(
                method,
                url,
                params=params,
                json=json,
                content=content,
                headers=request_headers,
            )
        except httpx.ConnectError as e:
            raise ContentfulConnectionError(f"Failed to connect to {url}: {e}") from e
        except httpx.TimeoutException as e:
            raise ContentfulTimeoutError(
                f"Request timed out after {self.config.timeout}s: {e}"
            ) from e
        except httpx.TransportError as e:
            raise TransportError(f"Transport failure for {method} {url}: {e}") from e

        if not response.is_success:
            self._handle_error_response(response, method=method, url=url)

        if response.status_code == 204 or not response.content:
            logger.debug(f"Response: {response.status_code} (no content)")
            return {}

        try:
            data: dict[str, Any] = response.json()
        except ValueError as json_error:
            content_type = response.headers.get("content-type", "unknown")
            body_preview = response.text[:500] if response.text else ""
            raise FormatError(
                f"Received non-JSON response (content-type: {content_type})",
                details={"body_preview": body_preview},
            ) from json_error

        logger.debug(f"Response: {response.status_code}")
        return data

    async def _get_resource(self, endpoint: str, model: type[R], **kwargs: Any) -> R:
        data = await self.request("GET", endpoint, **kwargs)
        return self.parser.parse_resource(data, model)

    async def _get_collection(
        self, endpoint: str, item_type: type[T], params: dict[str, Any] | None = None
    ) -> Collection[T]:
        data = await self.request("GET", endpoint, params=params)
        return self.parser.parse_collection(data, item_type)

    # Spaces

    async def create_space(
        self,
        name: str,
        default_locale: str,
        organization_id: str | None = None,
    ) -> Space:
        """Create a space.

        Args:
            name: Name of the space
            default_locale: Code of the space's default locale
            organization_id: Organization to create the space in. Only
                needed when the token belongs to several organizations.
        """
        data = await self.request(
            "POST",
            "spaces",
            json={"name": name, "defaultLocale": default_locale},
            organization_id=organization_id,
        )
        return self.parser.parse_resource(data, Space)

    async def get_space(self, space_id: str) -> Space:
        require_id(space_id, "space id")
        return await self._get_resource(f"spaces/{space_id}", Space)

    async def get_spaces(self) -> Collection[Space]:
        return await self._get_collection("spaces", Space)

    async def update_space_name(
        self,
        space_id: str,
        name: str,
        version: int,
        organization_id: str | None = None,
    ) -> Space:
        """Rename a space.

        Raises:
            InvalidArgumentError: If ``space_id`` is empty
            ConflictError: If ``version`` is not the current version
        """
        require_id(space_id, "space id")
        data = await self.request(
            "PUT",
            f"spaces/{space_id}",
            json={"name": name},
            version=version,
            organization_id=organization_id,
        )
        return self.parser.parse_resource(data, Space)

    async def delete_space(self, space_id: str) -> None:
        require_id(space_id, "space id")
        await self.request("DELETE", f"spaces/{space_id}")

    # Content types

    async def get_content_types(self, space_id: str | None = None) -> Collection[ContentType]:
        return await self._get_collection(f"{self._space_path(space_id)}/content_types", ContentType)

    async def get_activated_content_types(
        self, space_id: str | None = None
    ) -> Collection[ContentType]:
        """List content types whose current version is activated."""
        return await self._get_collection(
            f"{self._space_path(space_id)}/public/content_types", ContentType
        )

    async def get_content_type(
        self, content_type_id: str, space_id: str | None = None
    ) -> ContentType:
        require_id(content_type_id, "content type id")
        return await self._get_resource(
            f"{self._space_path(space_id)}/content_types/{content_type_id}", ContentType
        )

    async def create_or_update_content_type(
        self,
        content_type: ContentType,
        version: int | None = None,
        space_id: str | None = None,
    ) -> ContentType:
        """Create a content type with a given id, or update it if it exists.

        Raises:
            InvalidArgumentError: If the content type has no id
        """
        content_type_id = require_id(content_type.id, "content type id")
        data = await self.request(
            "PUT",
            f"{self._space_path(space_id)}/content_types/{content_type_id}",
            json=content_type.to_payload(),
            version=version,
        )
        return self.parser.parse_resource(data, ContentType)

    async def delete_content_type(self, content_type_id: str, space_id: str | None = None) -> None:
        require_id(content_type_id, "content type id")
        await self.request(
            "DELETE", f"{self._space_path(space_id)}/content_types/{content_type_id}"
        )

    async def activate_content_type(
        self, content_type_id: str, version: int, space_id: str | None = None
    ) -> ContentType:
        """Activate the current version of a content type."""
        require_id(content_type_id, "content type id")
        data = await self.request(
            "PUT",
            f"{self._space_path(space_id)}/content_types/{content_type_id}/published",
            version=version,
        )
        return self.parser.parse_resource(data, ContentType)

    async def deactivate_content_type(
        self, content_type_id: str, space_id: str | None = None
    ) -> None:
        require_id(content_type_id, "content type id")
        await self.request(
            "DELETE", f"{self._space_path(space_id)}/content_types/{content_type_id}/published"
        )

    # Entries

    async def get_entries(
        self,
        item_type: type[T] = Entry,  # type: ignore[assignment]
        query: dict[str, Any] | None = None,
        space_id: str | None = None,
    ) -> Collection[T]:
        """List entries.

        Args:
            item_type: Type of each item. ``Entry`` (or any other resource
                model) keeps the wire shape. Any other type, such as a
                pydantic model of the fields or ``dict``, receives each
                entry's fields as top-level properties next to ``sys``.
            query: Query parameters (``content_type``, ``skip``, ``limit``,
                field filters, ``order``)
            space_id: Space to read from

        Returns:
            One page of entries, in server order

        Examples:
            >>> class BlogPost(BaseModel):
            ...     title: dict[str, str]
            >>> page = await client.get_entries(BlogPost, {"content_type": "blogPost"})
            >>> page.items[0].title["en-US"]
            'Hello'
        """
        return await self._get_collection(
            f"{self._space_path(space_id)}/entries", item_type, params=query
        )

    async def get_entry(self, entry_id: str, space_id: str | None = None) -> Entry:
        """Get a single entry.

        Raises:
            InvalidArgumentError: If ``entry_id`` is empty
            NotFoundError: If the entry does not exist
        """
        require_id(entry_id, "entry id")
        return await self._get_resource(f"{self._space_path(space_id)}/entries/{entry_id}", Entry)

    async def create_entry(
        self,
        entry: Entry,
        content_type_id: str,
        space_id: str | None = None,
    ) -> Entry:
        """Create an entry with a server-generated id.

        Raises:
            InvalidArgumentError: If ``content_type_id`` is empty
        """
        require_id(content_type_id, "content type id")
        data = await self.request(
            "POST",
            f"{self._space_path(space_id)}/entries",
            json=entry.to_payload(),
            content_type_id=content_type_id,
        )
        return self.parser.parse_resource(data, Entry)

    async def create_or_update_entry(
        self,
        entry: Entry,
        content_type_id: str | None = None,
        version: int | None = None,
        space_id: str | None = None,
    ) -> Entry:
        """Create an entry with the given id, or replace its fields.

        Args:
            entry: Entry with ``sys.id`` set and wire-shaped fields
            content_type_id: Content type, required when creating
            version: Last known version, required by the server when updating
            space_id: Space to write to

        Raises:
            InvalidArgumentError: If the entry has no id
            ConflictError: If ``version`` is not the current version
        """
        entry_id = require_id(entry.id, "entry id")
        data = await self.request(
            "PUT",
            f"{self._space_path(space_id)}/entries/{entry_id}",
            json=entry.to_payload(),
            version=version,
            content_type_id=content_type_id,
        )
        return self.parser.parse_resource(data, Entry)

    async def create_entry_for_locale(
        self,
        values: dict[str, Any] | BaseModel,
        entry_id: str,
        content_type_id: str,
        locale: str | None = None,
        space_id: str | None = None,
    ) -> Entry:
        """Create an entry from the values of a single locale.

        Args:
            values: Flat field name to value mapping (or a pydantic model)
            entry_id: Id of the entry to create
            content_type_id: Content type of the entry
            locale: Locale of the values (defaults to the space's default)
            space_id: Space to write to

        Raises:
            InvalidArgumentError: If ``entry_id`` is empty, or no locale is
                given and the space has no default locale
        """
        require_id(entry_id, "entry id")
        if not locale:
            locale = await self.get_default_locale(space_id)

        entry = Entry.for_locale(_flat_values(values), locale, entry_id=entry_id)
        return await self.create_or_update_entry(
            entry, content_type_id=content_type_id, space_id=space_id
        )

    async def update_entry_for_locale(
        self,
        values: dict[str, Any] | BaseModel,
        entry_id: str,
        locale: str | None = None,
        space_id: str | None = None,
    ) -> Entry:
        """Update the values of one locale of an existing entry.

        The current entry is fetched first and written back with its
        version as precondition. Only fields the entry already has are
        updated; names in ``values`` that the entry lacks are ignored. A
        pydantic model is written in full, so fields left at their defaults
        overwrite the stored value for ``locale``.

        Raises:
            InvalidArgumentError: If ``entry_id`` is empty, or no locale is
                given and the space has no default locale
            ConflictError: If the entry changed between fetch and update
        """
        current = await self.get_entry(entry_id, space_id=space_id)
        if not locale:
            locale = await self.get_default_locale(space_id)

        merged = current.model_copy(
            update={"fields": merge_locale_fields(current.fields, _flat_values(values), locale)}
        )
        return await self.create_or_update_entry(
            merged, version=current.version, space_id=space_id
        )

    async def delete_entry(self, entry_id: str, version: int, space_id: str | None = None) -> None:
        require_id(entry_id, "entry id")
        await self.request(
            "DELETE", f"{self._space_path(space_id)}/entries/{entry_id}", version=version
        )

    async def _transition_entry(
        self, method: str, entry_id: str, state: str, version: int, space_id: str | None
    ) -> Entry:
        require_id(entry_id, "entry id")
        data = await self.request(
            method, f"{self._space_path(space_id)}/entries/{entry_id}/{state}", version=version
        )
        return self.parser.parse_resource(data, Entry)

    async def publish_entry(self, entry_id: str, version: int, space_id: str | None = None) -> Entry:
        return await self._transition_entry("PUT", entry_id, "published", version, space_id)

    async def unpublish_entry(
        self, entry_id: str, version: int, space_id: str | None = None
    ) -> Entry:
        return await self._transition_entry("DELETE", entry_id, "published", version, space_id)

    async def archive_entry(self, entry_id: str, version: int, space_id: str | None = None) -> Entry:
        return await self._transition_entry("PUT", entry_id, "archived", version, space_id)

    async def unarchive_entry(
        self, entry_id: str, version: int, space_id: str | None = None
    ) -> Entry:
        return await self._transition_entry("DELETE", entry_id, "archived", version, space_id)

    # Assets

    async def get_assets(
        self, query: dict[str, Any] | None = None, space_id: str | None = None
    ) -> Collection[Asset]:
        return await self._get_collection(
            f"{self._space_path(space_id)}/assets", Asset, params=query
        )

    async def get_published_assets(self, space_id: str | None = None) -> Collection[Asset]:
        return await self._get_collection(f"{self._space_path(space_id)}/public/assets", Asset)

    async def get_asset(self, asset_id: str, space_id: str | None = None) -> Asset:
        """Get a single asset.

        Raises:
            InvalidArgumentError: If ``asset_id`` is empty
        """
        require_id(asset_id, "asset id")
        return await self._get_resource(f"{self._space_path(space_id)}/assets/{asset_id}", Asset)

    async def create_asset(self, asset: Asset, space_id: str | None = None) -> Asset:
        """Create an asset with a server-generated id."""
        data = await self.request(
            "POST", f"{self._space_path(space_id)}/assets", json=asset.to_payload()
        )
        return self.parser.parse_resource(data, Asset)

    async def create_or_update_asset(
        self,
        asset: Asset,
        version: int | None = None,
        space_id: str | None = None,
    ) -> Asset:
        """Create an asset with the given id, or replace its fields.

        Raises:
            InvalidArgumentError: If the asset has no id
            ConflictError: If ``version`` is not the current version
        """
        asset_id = require_id(asset.id, "asset id")
        data = await self.request(
            "PUT",
            f"{self._space_path(space_id)}/assets/{asset_id}",
            json=asset.to_payload(),
            version=version,
        )
        return self.parser.parse_resource(data, Asset)

    async def delete_asset(self, asset_id: str, version: int, space_id: str | None = None) -> None:
        require_id(asset_id, "asset id")
        await self.request(
            "DELETE", f"{self._space_path(space_id)}/assets/{asset_id}", version=version
        )

    async def _transition_asset(
        self, method: str, asset_id: str, state: str, version: int, space_id: str | None
    ) -> Asset:
        require_id(asset_id, "asset id")
        data = await self.request(
            method, f"{self._space_path(space_id)}/assets/{asset_id}/{state}", version=version
        )
        return self.parser.parse_resource(data, Asset)

    async def publish_asset(self, asset_id: str, version: int, space_id: str | None = None) -> Asset:
        return await self._transition_asset("PUT", asset_id, "published", version, space_id)

    async def unpublish_asset(
        self, asset_id: str, version: int, space_id: str | None = None
    ) -> Asset:
        return await self._transition_asset("DELETE", asset_id, "published", version, space_id)

    async def archive_asset(self, asset_id: str, version: int, space_id: str | None = None) -> Asset:
        return await self._transition_asset("PUT", asset_id, "archived", version, space_id)

    async def unarchive_asset(
        self, asset_id: str, version: int, space_id: str | None = None
    ) -> Asset:
        return await self._transition_asset("DELETE", asset_id, "archived", version, space_id)

    async def process_asset(
        self,
        asset_id: str,
        version: int,
        locale: str,
        space_id: str | None = None,
    ) -> None:
        """Trigger processing of the file of one locale.

        The server accepts the request and processes the file in the
        background; use :meth:`process_asset_until_completed` to wait.

        Raises:
            InvalidArgumentError: If ``asset_id`` or ``locale`` is empty
            ConflictError: If ``version`` is not the current version
        """
        require_id(asset_id, "asset id")
        require_id(locale, "locale")
        await self.request(
            "PUT",
            f"{self._space_path(space_id)}/assets/{asset_id}/files/{locale}/process",
            version=version,
        )

    async def process_asset_until_completed(
        self,
        asset_id: str,
        version: int,
        locale: str,
        max_delay: int | None = None,
        space_id: str | None = None,
    ) -> Asset:
        """Trigger processing of one locale and poll until it finishes.

        Args:
            asset_id: Id of the asset
            version: Current version of the asset
            locale: Locale whose file is processed
            max_delay: Delay ceiling in milliseconds (defaults to
                ``config.processing_max_delay``)
            space_id: Space of the asset

        Returns:
            The asset with a resolved URL for ``locale``

        Raises:
            ProcessingTimeoutError: If processing did not finish in time
        """
        processor = AssetProcessor(
            self,
            max_delay=self.config.processing_max_delay if max_delay is None else max_delay,
            space_id=space_id,
        )
        return await processor.process(asset_id, version, locale)

    # Locales

    async def get_locales(self, space_id: str | None = None) -> Collection[Locale]:
        return await self._get_collection(f"{self._space_path(space_id)}/locales", Locale)

    async def get_default_locale(self, space_id: str | None = None) -> str:
        """Return the code of the space's default locale.

        Raises:
            InvalidArgumentError: If the space has no default locale
        """
        locales = await self.get_locales(space_id)
        return default_locale_code(locales.items)

    async def get_locale(self, locale_id: str, space_id: str | None = None) -> Locale:
        require_id(locale_id, "locale id")
        return await self._get_resource(f"{self._space_path(space_id)}/locales/{locale_id}", Locale)

    async def create_locale(self, locale: Locale, space_id: str | None = None) -> Locale:
        data = await self.request(
            "POST", f"{self._space_path(space_id)}/locales", json=locale.to_payload()
        )
        return self.parser.parse_resource(data, Locale)

    async def update_locale(self, locale: Locale, space_id: str | None = None) -> Locale:
        """Update a locale.

        Raises:
            InvalidArgumentError: If the locale has no id
        """
        locale_id = require_id(locale.id, "locale id")
        data = await self.request(
            "PUT",
            f"{self._space_path(space_id)}/locales/{locale_id}",
            json=locale.to_payload(),
            version=locale.version,
        )
        return self.parser.parse_resource(data, Locale)

    async def delete_locale(self, locale_id: str, space_id: str | None = None) -> None:
        require_id(locale_id, "locale id")
        await self.request("DELETE", f"{self._space_path(space_id)}/locales/{locale_id}")

    # Uploads

    async def upload_file(self, data: bytes, space_id: str | None = None) -> UploadReference:
        """Upload raw bytes to the upload host.

        Returns:
            Reference to bind to an asset's file
        """
        response = await self.request(
            "POST", f"{self._space_path(space_id)}/uploads", content=data, upload=True
        )
        return self.parser.parse_resource(response, UploadReference)

    async def get_upload(self, upload_id: str, space_id: str | None = None) -> UploadReference:
        require_id(upload_id, "upload id")
        data = await self.request(
            "GET", f"{self._space_path(space_id)}/uploads/{upload_id}", upload=True
        )
        return self.parser.parse_resource(data, UploadReference)

    async def delete_upload(self, upload_id: str, space_id: str | None = None) -> None:
        require_id(upload_id, "upload id")
        await self.request(
            "DELETE", f"{self._space_path(space_id)}/uploads/{upload_id}", upload=True
        )

    async def upload_file_and_create_asset(
        self,
        asset: Asset,
        data: bytes,
        space_id: str | None = None,
    ) -> Asset:
        """Upload a file, bind it to every locale of ``asset`` and trigger processing.

        Processing is triggered once per locale of the created asset. The
        created asset is returned without waiting for processing to finish.

        Raises:
            InvalidArgumentError: If the asset has no id
        """
        require_id(asset.id, "asset id")
        upload = await self.upload_file(data, space_id=space_id)
        processor = AssetProcessor(self, space_id=space_id, state=ProcessingState.UPLOADED)
        bound = processor.attach(asset, upload)
        created = await self.create_or_update_asset(bound, space_id=space_id)

        asset_id = require_id(created.id, "asset id")
        for locale in created.files:
            await processor.trigger(asset_id, created.version or 1, locale)

        return created
