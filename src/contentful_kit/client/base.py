"""Base HTTP client for the management API.

This module provides URL building, per-request header construction and
the mapping of error responses to exceptions. It holds no per-request
state, so one client can serve concurrent calls.
"""

import logging
from typing import Any

import httpx

from ..exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    NotFoundError,
    RateLimitError,
    RemoteError,
    ServerError,
    ValidationError,
)
from ..models.sys import require_id
from ..parsers import ResourceParser
from ..protocols import ConfigProvider
from ..versioning import scope_headers

logger = logging.getLogger(__name__)

MANAGEMENT_CONTENT_TYPE = "application/vnd.contentful.management.v1+json"
UPLOAD_CONTENT_TYPE = "application/octet-stream"
REQUEST_ID_HEADER = "X-Contentful-Request-Id"


class BaseClient:
    """Base HTTP client for management API operations.

    Provides:
    - Authentication header per request
    - Space and environment scoped URL building
    - Error response to exception mapping
    - Response parsing into typed models

    Not intended to be used directly - use AsyncClient instead.
    """

    def __init__(self, config: ConfigProvider, parser: ResourceParser | None = None) -> None:
        """Initialize the base client.

        Args:
            config: Configuration with token, hosts and default space
            parser: Response parser (defaults to ResourceParser)

        Raises:
            ValueError: If the management token is empty
        """
        self.config = config
        self.base_url = config.get_base_url()
        self.upload_url = config.get_upload_url()
        self.parser = parser or ResourceParser()

        if not config.get_management_token():
            raise ValueError("Management token is required and cannot be empty")

        logger.info(f"Initialized management client for {self.base_url}")

    def _get_headers(
        self,
        extra_headers: dict[str, str] | None = None,
        *,
        version: int | None = None,
        organization_id: str | None = None,
        content_type_id: str | None = None,
        content_type: str = MANAGEMENT_CONTENT_TYPE,
    ) -> dict[str, str]:
        """Build a fresh header mapping for a single request.

        Args:
            extra_headers: Additional headers to include
            version: Version precondition for the request
            organization_id: Organization scope for space creation
            content_type_id: Content type scope for entry creation
            content_type: Request body content type

        Returns:
            Complete headers dictionary
        """
        headers = {
            "Content-Type": content_type,
            "Accept": "application/json",
            "Authorization": f"Bearer {self.config.get_management_token()}",
            **scope_headers(
                version=version,
                organization_id=organization_id,
                content_type_id=content_type_id,
            ),
        }

        if extra_headers:
            headers.update(extra_headers)

        return headers

    def _space_path(self, space_id: str | None = None) -> str:
        """Return ``spaces/{space}`` (plus environment when configured).

        Raises:
            InvalidArgumentError: If no space id is given or configured
        """
        space = require_id(space_id or self.config.space_id, "space id")
        environment = self.config.environment_id
        if environment:
            return f"spaces/{space}/environments/{environment}"
        return f"spaces/{space}"

    def _build_url(self, endpoint: str, *, upload: bool = False) -> str:
        """Build full URL for an endpoint.

        Args:
            endpoint: Path relative to the API root (e.g. "spaces/abc/entries")
            upload: Target the upload host instead of the management host

        Returns:
            Complete URL
        """
        host = self.upload_url if upload else self.base_url
        return f"{host}/{endpoint.strip('/')}"

    def _handle_error_response(
        self,
        response: httpx.Response,
        method: str | None = None,
        url: str | None = None,
    ) -> None:
        """Raise the exception matching an error response.

        Args:
            response: HTTPX response object
            method: HTTP method of the request, for error context
            url: URL of the request, for error context

        Raises:
            Appropriate RemoteError subclass based on status code
        """
        status_code = response.status_code

        try:
            error_data = response.json()
        except ValueError:
            error_data = None

        if isinstance(error_data, dict):
            error_message = error_data.get("message") or response.text
            error_details: dict[str, Any] = error_data
        else:
            error_message = response.text or f"HTTP {status_code}"
            error_details = {}

        context: dict[str, Any] = {
            "status_code": status_code,
            "details": error_details,
            "request_id": response.headers.get(REQUEST_ID_HEADER) or error_details.get("requestId"),
            "method": method,
            "url": url,
        }

        if status_code == 401:
            raise AuthenticationError(f"Authentication failed: {error_message}", **context)
        elif status_code == 403:
            raise AuthorizationError(f"Authorization failed: {error_message}", **context)
        elif status_code == 404:
            raise NotFoundError(f"Resource not found: {error_message}", **context)
        elif status_code in (400, 422):
            raise ValidationError(f"Validation error: {error_message}", **context)
        elif status_code == 409:
            raise ConflictError(f"Version conflict: {error_message}", **context)
        elif status_code == 429:
            retry_after = response.headers.get("X-Contentful-RateLimit-Reset") or response.headers.get(
                "Retry-After"
            )
            raise RateLimitError(
                f"Rate limit exceeded: {error_message}",
                retry_after=int(retry_after) if retry_after and retry_after.isdigit() else None,
                **context,
            )
        elif 500 <= status_code < 600:
            raise ServerError(f"Server error: {error_message}", **context)
        else:
            raise RemoteError(
                f"Unexpected error (HTTP {status_code}): {error_message}", **context
            )
