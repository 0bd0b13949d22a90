"""Resilient HTTP transport for provider APIs.

Strategy chain (each attempt changes how the request looks, not just when
it is sent):
1. browser - User-Agent from the desktop or mobile profile, picked by
   inspecting the caller's client descriptor
2. anonymous - no identifying User-Agent at all
3. no_cache - explicit cross-origin and no-cache directives

Only exceptions raised by the request itself (connection failures,
timeouts, protocol errors) move on to the next strategy, after a linear
backoff of backoff_base * (attempt + 1). A non-2xx status is final: it is
raised as HttpStatusError straight away, so transient 5xx answers are not
retried.
"""

import asyncio
import logging
import re
from dataclasses import dataclass, field
from typing import Awaitable, Callable, Optional

import httpx

from nekofetch.utils import BaseAsyncHttpClient, OperationCancelled, run_cancellable

from .config import ImageConfig, get_image_config
from .errors import FetchCancelledError, HttpStatusError, TransportError

logger = logging.getLogger(__name__)

DESKTOP_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"
)
MOBILE_USER_AGENT = (
    "Mozilla/5.0 (iPhone; CPU iPhone OS 17_0 like Mac OS X) AppleWebKit/605.1.15 "
    "(KHTML, like Gecko) Version/17.0 Mobile/15E148 Safari/604.1"
)

HEADER_PROFILES: dict[str, dict[str, str]] = {
    "desktop": {"User-Agent": DESKTOP_USER_AGENT},
    "mobile": {"User-Agent": MOBILE_USER_AGENT},
}

NO_CACHE_HEADERS = {
    "Sec-Fetch-Mode": "cors",
    "Cache-Control": "no-cache",
    "Pragma": "no-cache",
}

_MOBILE_PATTERN = re.compile(r"android|iphone|ipad|ipod|mobile", re.IGNORECASE)

Sleep = Callable[[float], Awaitable[None]]


def detect_client_type(client_descriptor: Optional[str]) -> str:
    """Classify a user agent / platform string as "mobile" or "desktop"."""
    if client_descriptor and _MOBILE_PATTERN.search(client_descriptor):
        return "mobile"
    return "desktop"


@dataclass(frozen=True)
class FetchStrategy:
    """How one attempt shapes its request."""

    name: str
    headers: dict[str, str] = field(default_factory=dict)
    # Drop the client's default User-Agent as well
    anonymous: bool = False


def build_strategies(client_descriptor: Optional[str] = None) -> tuple[FetchStrategy, ...]:
    """The three-attempt strategy chain for a given client."""
    profile = detect_client_type(client_descriptor)
    return (
        FetchStrategy(name=f"browser:{profile}", headers=dict(HEADER_PROFILES[profile])),
        FetchStrategy(name="anonymous", anonymous=True),
        FetchStrategy(name="no_cache", headers=dict(NO_CACHE_HEADERS)),
    )


class ResilientTransport(BaseAsyncHttpClient):
    """HTTP GET with a layered fallback across request strategies.

    Usage:
        async with ResilientTransport() as transport:
            response = await transport.fetch_raw("https://nekos.life/api/v2/img/waifu")
    """

    def __init__(
        self,
        config: ImageConfig | None = None,
        client: httpx.AsyncClient | None = None,
        sleep: Sleep = asyncio.sleep,
    ):
        self._config = config or get_image_config()
        super().__init__(timeout=self._config.timeout, client=client)
        self._sleep = sleep
        self.strategies = build_strategies(self._config.client_descriptor)

    async def fetch_raw(
        self,
        url: str,
        cancel: Optional[asyncio.Event] = None,
    ) -> httpx.Response:
        """GET `url`, falling through the strategy chain on request exceptions.

        Args:
            url: Request URL
            cancel: Optional event; setting it aborts the in-flight request
                and skips remaining attempts and backoff

        Returns:
            The 2xx response

        Raises:
            HttpStatusError: Non-2xx status (raised on the attempt that got it)
            TransportError: Every strategy raised
            FetchCancelledError: `cancel` was set
        """
        client = await self._get_client()
        last_error: Exception | None = None

        for attempt, strategy in enumerate(self.strategies):
            try:
                response = await run_cancellable(self._send(client, url, strategy), cancel)
            except OperationCancelled:
                raise FetchCancelledError(f"Fetch of {url} cancelled") from None
            except httpx.HTTPError as e:
                last_error = e
                logger.warning(
                    f"Attempt {attempt + 1}/{len(self.strategies)} ({strategy.name}) "
                    f"failed for {url}: {e!r}"
                )
                if attempt < len(self.strategies) - 1:
                    await self._backoff(attempt, cancel)
                continue

            if not response.is_success:
                logger.warning(f"HTTP {response.status_code} from {url} ({strategy.name})")
                raise HttpStatusError(url, response.status_code)

            if attempt:
                logger.info(f"Fetched {url} with fallback strategy {strategy.name}")
            return response

        logger.error(f"All {len(self.strategies)} strategies failed for {url}")
        raise TransportError(url, last_error, len(self.strategies)) from last_error

    async def _send(
        self,
        client: httpx.AsyncClient,
        url: str,
        strategy: FetchStrategy,
    ) -> httpx.Response:
        request = client.build_request("GET", url, headers=strategy.headers)
        if strategy.anonymous:
            request.headers.pop("User-Agent", None)
        logger.debug(f"GET {url} ({strategy.name})")
        return await client.send(request)

    async def _backoff(self, attempt: int, cancel: Optional[asyncio.Event]) -> None:
        delay = self._config.backoff_base * (attempt + 1)
        logger.debug(f"Backing off {delay:.1f}s before next strategy")
        try:
            await run_cancellable(self._sleep(delay), cancel)
        except OperationCancelled:
            raise FetchCancelledError("Fetch cancelled during backoff") from None
