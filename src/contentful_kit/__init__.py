"""contentful-kit: an async Python client for the content management API.

This package provides:
- An asynchronous client for spaces, content types, entries, assets,
  locales and uploads
- Typed pydantic models for every resource
- Conversion between locale-keyed and single-locale entry fields
- Optimistic concurrency through per-request version headers
- Asset processing with bounded polling
"""

from .__version__ import __version__
from .client import AsyncClient
from .exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    ContentfulError,
    FormatError,
    InvalidArgumentError,
    NotFoundError,
    ProcessingTimeoutError,
    RateLimitError,
    RemoteError,
    ServerError,
    TransportError,
    ValidationError,
)
from .fields import (
    default_locale_code,
    localize_fields,
    merge_locale_fields,
    resolve_fields,
    unwrap_entry_fields,
)
from .models import (
    Asset,
    AssetFile,
    Collection,
    ContentfulConfig,
    ContentType,
    ContentTypeField,
    Entry,
    Link,
    Locale,
    Resource,
    Space,
    SystemProperties,
    UploadReference,
)
from .operations import AssetProcessor, ProcessingState, attach_upload, stream_entries
from .parsers import ResourceParser
from .protocols import AsyncHTTPClient, ConfigProvider
from .versioning import VERSION_HEADER, with_version

__all__ = [
    "__version__",
    # Client
    "AsyncClient",
    # Configuration
    "ContentfulConfig",
    # Models
    "Asset",
    "AssetFile",
    "Collection",
    "ContentType",
    "ContentTypeField",
    "Entry",
    "Link",
    "Locale",
    "Resource",
    "Space",
    "SystemProperties",
    "UploadReference",
    # Field projection
    "localize_fields",
    "merge_locale_fields",
    "resolve_fields",
    "unwrap_entry_fields",
    "default_locale_code",
    # Parsing
    "ResourceParser",
    # Versioning
    "VERSION_HEADER",
    "with_version",
    # Operations
    "AssetProcessor",
    "ProcessingState",
    "attach_upload",
    "stream_entries",
    # Protocols (for dependency injection)
    "AsyncHTTPClient",
    "ConfigProvider",
    # Exceptions
    "ContentfulError",
    "InvalidArgumentError",
    "RemoteError",
    "ConflictError",
    "ValidationError",
    "AuthenticationError",
    "AuthorizationError",
    "NotFoundError",
    "RateLimitError",
    "ServerError",
    "TransportError",
    "FormatError",
    "ProcessingTimeoutError",
]
