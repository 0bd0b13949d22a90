"""Purrbot image provider.

API: https://docs.purrbot.site/api
Rating: /sfw/{category}/gif or /nsfw/{category}/gif path
"""

from typing import Any

from ..types import ImageSource
from .base import BaseImageProvider, get_field
from .categories import PURR_CATEGORIES


class PurrProvider(BaseImageProvider):
    """Purrbot GIF endpoints. The image URL comes back as `link`."""

    source = ImageSource.PURR
    display_name = "Purr"
    base_url = "https://purrbot.site/api/img"
    categories = PURR_CATEGORIES

    def compose_category_url(self, explicit: bool, category: str) -> str:
        return f"{super().compose_category_url(explicit, category)}/gif"

    def extract(self, body: Any) -> str | None:
        # Purrbot reports failures in-band as {"error": true, ...}
        if isinstance(body, dict) and body.get("error") is True:
            return None
        return get_field(body, "link")
