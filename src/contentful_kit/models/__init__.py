"""Data models for contentful-kit.

Configuration, the resource envelope and the typed resources returned by
the management API.
"""

from .asset import Asset, AssetFields, AssetFile
from .collection import Collection
from .config import ContentfulConfig
from .content_type import ContentType, ContentTypeField
from .entry import Entry
from .locale import Locale
from .space import Space
from .sys import Link, LinkProperties, Resource, SystemProperties, extract_identity, require_id
from .upload import UploadReference

__all__ = [
    # Configuration
    "ContentfulConfig",
    # Envelope
    "Resource",
    "SystemProperties",
    "Link",
    "LinkProperties",
    "extract_identity",
    "require_id",
    # Resources
    "Asset",
    "AssetFields",
    "AssetFile",
    "Collection",
    "ContentType",
    "ContentTypeField",
    "Entry",
    "Locale",
    "Space",
    "UploadReference",
]
