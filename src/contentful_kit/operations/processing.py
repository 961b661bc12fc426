"""Asset processing.

Files are uploaded raw, bound to an asset, and then processed by the
server for one locale at a time. Processing is asynchronous on the server
side; completion shows up as a resolved ``url`` on the locale's file.

The lifecycle of one locale is::

    UPLOADED -> ATTACHED_TO_ASSET -> PROCESSING_TRIGGERED -> READY | TIMED_OUT

``TIMED_OUT`` is final: the caller has to start over.
"""

import asyncio
import logging
import math
from collections.abc import Awaitable, Callable
from enum import Enum
from typing import TYPE_CHECKING

from tenacity import (
    AsyncRetrying,
    RetryError,
    before_sleep_log,
    retry_if_result,
    stop_after_attempt,
    wait_incrementing,
)

from ..exceptions import ProcessingTimeoutError
from ..models.asset import Asset, AssetFile
from ..models.sys import require_id
from ..models.upload import UploadReference

if TYPE_CHECKING:
    from ..client.async_client import AsyncClient

logger = logging.getLogger(__name__)

DEFAULT_MAX_DELAY = 2000
DEFAULT_DELAY_STEP = 200


class ProcessingState(str, Enum):
    """Processing state of one locale of an asset."""

    UPLOADED = "uploaded"
    ATTACHED_TO_ASSET = "attached_to_asset"
    PROCESSING_TRIGGERED = "processing_triggered"
    READY = "ready"
    TIMED_OUT = "timed_out"


def attach_upload(
    asset: Asset,
    upload: UploadReference,
    locales: list[str] | None = None,
) -> Asset:
    """Bind an upload to the file descriptors of an asset.

    Args:
        asset: Asset whose ``files`` already name the file per locale
        upload: Upload returned by the upload host
        locales: Locales to bind (defaults to every locale in ``asset.files``)

    Returns:
        A copy of ``asset`` whose files reference the upload
    """
    link = upload.as_link()
    bound = asset.model_copy(deep=True)
    targets = locales if locales is not None else list(bound.files)
    for locale in targets:
        file = bound.files.get(locale) or AssetFile()
        bound.files[locale] = file.model_copy(update={"upload_from": link, "upload": None})
    return bound


class AssetProcessor:
    """Drives the file of an asset from upload to processed.

    A processor created right after an upload starts in ``UPLOADED`` and
    binds it with :meth:`attach`. One created for an asset that already
    references its file starts in ``ATTACHED_TO_ASSET``.

    Delays between fetches grow by ``delay_step`` milliseconds (0, 200,
    400, ...). Polling stops as soon as the file has a URL, or once the
    accumulated delay reaches ``max_delay``.

    Example:
        >>> processor = AssetProcessor(client, max_delay=4000)
        >>> asset = await processor.process("logo", version=1, locale="en-US")
        >>> asset.files["en-US"].url
        '//images.example.com/logo.png'
    """

    def __init__(
        self,
        client: "AsyncClient",
        *,
        max_delay: int = DEFAULT_MAX_DELAY,
        delay_step: int = DEFAULT_DELAY_STEP,
        space_id: str | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        state: ProcessingState = ProcessingState.ATTACHED_TO_ASSET,
    ) -> None:
        if delay_step <= 0:
            raise ValueError("delay_step must be positive")
        if max_delay < 0:
            raise ValueError("max_delay cannot be negative")

        self.client = client
        self.max_delay = max_delay
        self.delay_step = delay_step
        self.space_id = space_id
        self.state = state
        self._sleep = sleep

    @property
    def max_fetches(self) -> int:
        """Upper bound of asset fetches while waiting."""
        return 1 + math.ceil(self.max_delay / self.delay_step)

    def attach(
        self,
        asset: Asset,
        upload: UploadReference,
        locales: list[str] | None = None,
    ) -> Asset:
        """Bind ``upload`` to ``asset`` and move to ``ATTACHED_TO_ASSET``.

        Raises:
            ValueError: If the processor is past the upload stage
        """
        if self.state is not ProcessingState.UPLOADED:
            raise ValueError(f"Cannot attach an upload in state {self.state.value}")
        bound = attach_upload(asset, upload, locales)
        self.state = ProcessingState.ATTACHED_TO_ASSET
        return bound

    async def trigger(self, asset_id: str, version: int, locale: str) -> None:
        """Ask the server to process the file of ``locale``.

        Raises:
            InvalidArgumentError: If ``asset_id`` or ``locale`` is empty
            ConflictError: If ``version`` is not the current version
        """
        require_id(asset_id, "asset id")
        require_id(locale, "locale")
        await self.client.process_asset(asset_id, version, locale, space_id=self.space_id)
        self.state = ProcessingState.PROCESSING_TRIGGERED

    async def wait_until_processed(self, asset_id: str, locale: str) -> Asset:
        """Poll the asset until the file of ``locale`` has a URL.

        Returns:
            The processed asset

        Raises:
            ProcessingTimeoutError: If the delay ceiling is reached first
        """
        require_id(asset_id, "asset id")
        require_id(locale, "locale")

        retrying = AsyncRetrying(
            stop=stop_after_attempt(self.max_fetches),
            wait=wait_incrementing(start=0, increment=self.delay_step / 1000),
            retry=retry_if_result(lambda fetched: not fetched.is_processed(locale)),
            before_sleep=before_sleep_log(logger, logging.DEBUG),
            sleep=self._sleep,
        )

        try:
            async for attempt in retrying:
                with attempt:
                    asset = await self.client.get_asset(asset_id, space_id=self.space_id)
                if not attempt.retry_state.outcome.failed:  # type: ignore[union-attr]
                    attempt.retry_state.set_result(asset)
        except RetryError as e:
            self.state = ProcessingState.TIMED_OUT
            logger.warning(
                f"Processing of asset {asset_id} ({locale}) not finished "
                f"after {self.max_delay}ms"
            )
            raise ProcessingTimeoutError(self.max_delay, asset_id=asset_id, locale=locale) from e

        self.state = ProcessingState.READY
        return asset

    async def process(self, asset_id: str, version: int, locale: str) -> Asset:
        """Trigger processing of ``locale`` and wait for it to finish."""
        await self.trigger(asset_id, version, locale)
        return await self.wait_until_processed(asset_id, locale)
