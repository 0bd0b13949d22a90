"""CORS relay path for providers that reject direct calls.

The target URL is URL-encoded into each relay endpoint template (the {url}
placeholder) and the endpoints are tried in order. There is no backoff and
no strategy chain here: one request per endpoint.
"""

import asyncio
import logging
from typing import Optional, Sequence
from urllib.parse import quote

import httpx

from nekofetch.utils import BaseAsyncHttpClient, OperationCancelled, run_cancellable

from .config import ImageConfig, get_image_config
from .errors import FetchCancelledError, HttpStatusError, RelayError

logger = logging.getLogger(__name__)


def relay_url(endpoint: str, target: str) -> str:
    """Substitute the URL-encoded target into a relay endpoint template."""
    return endpoint.replace("{url}", quote(target, safe=""))


class Relay(BaseAsyncHttpClient):
    """Ordered list of CORS relay endpoints.

    Usage:
        async with Relay(["https://api.allorigins.win/raw?url={url}"]) as relay:
            response = await relay.fetch("https://nekos.moe/api/v1/random/image")
    """

    def __init__(
        self,
        endpoints: Sequence[str] | None = None,
        config: ImageConfig | None = None,
        client: httpx.AsyncClient | None = None,
    ):
        self._config = config or get_image_config()
        super().__init__(timeout=self._config.timeout, client=client)
        self.endpoints = tuple(endpoints if endpoints is not None else self._config.relay_endpoints)

    async def fetch(
        self,
        target: str,
        cancel: Optional[asyncio.Event] = None,
    ) -> httpx.Response:
        """GET `target` through the first relay that answers with a 2xx.

        Args:
            target: URL the relay should fetch
            cancel: Optional event that aborts the in-flight request

        Returns:
            The relay's 2xx response (the target's body)

        Raises:
            RelayError: Every endpoint raised or answered non-2xx
            FetchCancelledError: `cancel` was set
        """
        client = await self._get_client()
        errors: list[Exception] = []

        for index, endpoint in enumerate(self.endpoints):
            url = relay_url(endpoint, target)
            try:
                response = await run_cancellable(client.get(url), cancel)
            except OperationCancelled:
                raise FetchCancelledError(f"Relay fetch of {target} cancelled") from None
            except httpx.HTTPError as e:
                logger.warning(f"Relay {index + 1}/{len(self.endpoints)} failed for {target}: {e!r}")
                errors.append(e)
                continue

            if not response.is_success:
                logger.warning(
                    f"Relay {index + 1}/{len(self.endpoints)} answered "
                    f"HTTP {response.status_code} for {target}"
                )
                errors.append(HttpStatusError(url, response.status_code))
                continue

            if index:
                logger.info(f"Fetched {target} via fallback relay {index + 1}")
            return response

        logger.error(f"All relays failed for {target}")
        raise RelayError(target, errors)
