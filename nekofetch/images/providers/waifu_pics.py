"""Waifu.pics image provider.

API: https://waifu.pics/docs
Rating: /sfw/{category} or /nsfw/{category} path
"""

from typing import Any

from ..types import ImageSource
from .base import BaseImageProvider, get_field
from .categories import WAIFU_PICS_CATEGORIES


class WaifuPicsProvider(BaseImageProvider):
    """Waifu.pics: one random image per category endpoint."""

    source = ImageSource.WAIFU_PICS
    display_name = "Waifu.pics"
    base_url = "https://api.waifu.pics"
    categories = WAIFU_PICS_CATEGORIES

    def extract(self, body: Any) -> str | None:
        return get_field(body, "url")
