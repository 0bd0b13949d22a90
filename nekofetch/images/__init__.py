"""Multi-provider anime image fetcher.

Fetch one random image URL from one of several public image APIs, with a
layered retry policy and a CORS relay for providers that need one.

Example:
    from nekofetch.images import ImageSource, fetch_image

    # Uses the persisted explicit mode preference
    result = await fetch_image(ImageSource.WAIFU_PICS)
    print(result.url)

    # Explicit rating mode passed in
    result = await fetch_image(ImageSource.WAIFU_IM, explicit=False)

Environment Variables:
    IMAGE_TIMEOUT: Request timeout in seconds
    IMAGE_RETRY_BACKOFF: Base backoff between retry strategies
    IMAGE_CLIENT_DESCRIPTOR: Caller's user agent, selects the header profile
    IMAGE_RELAY_ENDPOINTS: Comma-separated CORS relay templates
    NEKOFETCH_SETTINGS_PATH: Preferences file
"""

from .config import ImageConfig, get_image_config
from .errors import (
    FetchCancelledError,
    HttpStatusError,
    ImageError,
    MissingFieldError,
    ParseError,
    ProviderFetchError,
    RelayError,
    TransportError,
)
from .normalizer import extract
from .providers import display_name, get_provider, list_providers
from .relay import Relay
from .request import build_url
from .service import ImageService, get_image_service
from .settings import SettingsStore, get_explicit_mode, set_explicit_mode
from .transport import ResilientTransport
from .types import ImageResult, ImageSource


async def fetch_image(
    source: ImageSource,
    explicit: bool | None = None,
) -> ImageResult:
    """Fetch one image from `source`.

    Args:
        source: Provider to fetch from
        explicit: Content rating mode; None reads the persisted preference

    Returns:
        ImageResult with the image URL and its source

    Raises:
        ProviderFetchError: The fetch failed (typed cause in `.error`)
    """
    if explicit is None:
        explicit = get_explicit_mode()
    service = get_image_service()
    return await service.fetch_image(source, explicit)


__all__ = [
    # Main functions
    "fetch_image",
    "list_providers",
    "display_name",
    "get_explicit_mode",
    "set_explicit_mode",
    # Building blocks
    "build_url",
    "extract",
    "get_provider",
    "ResilientTransport",
    "Relay",
    "SettingsStore",
    # Service
    "get_image_service",
    "ImageService",
    # Types
    "ImageResult",
    "ImageSource",
    # Config
    "ImageConfig",
    "get_image_config",
    # Errors
    "ImageError",
    "TransportError",
    "HttpStatusError",
    "ParseError",
    "MissingFieldError",
    "RelayError",
    "FetchCancelledError",
    "ProviderFetchError",
]
