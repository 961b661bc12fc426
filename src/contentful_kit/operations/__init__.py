"""Operations module for contentful-kit.

Multi-step workflows built on top of the client: asset processing and
paginated iteration.
"""

from contentful_kit.operations.processing import (
    AssetProcessor,
    ProcessingState,
    attach_upload,
)
from contentful_kit.operations.streaming import stream_entries

__all__ = [
    "AssetProcessor",
    "ProcessingState",
    "attach_upload",
    "stream_entries",
]
