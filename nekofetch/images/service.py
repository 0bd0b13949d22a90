"""Image fetch service: one image from one provider per call."""

import asyncio
import json
import logging
import random
from typing import Any

import httpx

from nekofetch.utils import AsyncContextManager, register_cleanup

from .config import ImageConfig, get_image_config
from .errors import ImageError, ParseError, ProviderFetchError
from .normalizer import extract
from .providers import get_provider
from .relay import Relay
from .request import build_url
from .transport import ResilientTransport
from .types import ImageResult, ImageSource

logger = logging.getLogger(__name__)


class ImageService(AsyncContextManager):
    """Fetch a random image from a given provider.

    Pipeline:
    1. Build the request URL (random category for the rating mode)
    2. Fetch through the resilient transport, or the CORS relay for
       providers flagged needs_relay
    3. Parse JSON and extract the image URL with the provider's extractor

    Usage:
        service = get_image_service()
        result = await service.fetch_image(ImageSource.WAIFU_PICS, explicit=False)

        # Or as context manager for proper cleanup:
        async with ImageService() as service:
            result = await service.fetch_image(ImageSource.NEKOS_BEST)
    """

    def __init__(
        self,
        config: ImageConfig | None = None,
        transport: ResilientTransport | None = None,
        relay: Relay | None = None,
        rng: random.Random | None = None,
    ):
        self._config = config or get_image_config()
        self._transport = transport or ResilientTransport(self._config)
        self._relay = relay or Relay(config=self._config)
        self._rng = rng

    async def fetch_image(
        self,
        source: ImageSource,
        explicit: bool = False,
        *,
        rng: random.Random | None = None,
        cancel: asyncio.Event | None = None,
    ) -> ImageResult:
        """Fetch one image URL from `source`.

        Args:
            source: Provider to fetch from
            explicit: Content rating mode
            rng: Random source for category selection (overrides the service's)
            cancel: Optional event that aborts the fetch when set

        Returns:
            ImageResult with the image URL and its source

        Raises:
            ProviderFetchError: Wraps the typed failure (TransportError,
                HttpStatusError, RelayError, ParseError, MissingFieldError,
                FetchCancelledError) with the provider attached
        """
        provider = get_provider(source)
        try:
            url = build_url(source, explicit, rng or self._rng)
            logger.debug(f"Fetching from {source.value}: {url}")

            if provider.needs_relay:
                response = await self._relay.fetch(url, cancel)
            else:
                response = await self._transport.fetch_raw(url, cancel)

            body = self._parse_body(response, source)
            image_url = extract(provider, body)
        except ImageError as e:
            logger.error(f"Failed to fetch from {provider.display_name}: {e}")
            raise ProviderFetchError(source, e) from e

        logger.info(f"Fetched image from {provider.display_name}: {image_url}")
        return ImageResult(url=image_url, source=source)

    def _parse_body(self, response: httpx.Response, source: ImageSource) -> Any:
        try:
            return response.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise ParseError(
                f"Invalid JSON from {source.value}: {e}", provider=source.value
            ) from e

    async def close(self) -> None:
        """Close HTTP connections."""
        await self._transport.close()
        await self._relay.close()


# Module singleton
_service: ImageService | None = None


def get_image_service() -> ImageService:
    """Get global ImageService instance."""
    global _service
    if _service is None:
        _service = ImageService()
        register_cleanup("ImageService", _close_image_service)
    return _service


async def _close_image_service() -> None:
    """Close the global ImageService."""
    global _service
    if _service:
        await _service.close()
        _service = None
