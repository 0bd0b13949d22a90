"""Response normalization: provider extractor plus validation."""

import logging
from typing import Any

from .errors import MissingFieldError
from .providers import BaseImageProvider

logger = logging.getLogger(__name__)


def extract(provider: BaseImageProvider, body: Any) -> str:
    """Extract the image URL from a parsed response body.

    Args:
        provider: Provider whose extractor knows the response shape
        body: Parsed JSON body

    Returns:
        Non-empty image URL

    Raises:
        MissingFieldError: The extractor found nothing usable
    """
    url = provider.extract(body)
    if not url or not url.strip():
        logger.warning(f"No image URL in {provider.source.value} response")
        raise MissingFieldError(
            f"No image URL found in {provider.display_name} response",
            provider=provider.source.value,
        )
    return url.strip()
