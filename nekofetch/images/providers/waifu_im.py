"""Waifu.im image provider.

API: https://docs.waifu.im/
Rating: is_nsfw query flag, no category path
"""

from typing import Any

from ..types import ImageSource
from .base import BaseImageProvider, first_item, get_field


class WaifuImProvider(BaseImageProvider):
    """Waifu.im search endpoint; returns a list of matching images."""

    source = ImageSource.WAIFU_IM
    display_name = "Waifu.im"
    base_url = "https://api.waifu.im/search"

    def compose_url(self, explicit: bool) -> str:
        return f"{self.base_url}?is_nsfw={'true' if explicit else 'false'}"

    def extract(self, body: Any) -> str | None:
        return get_field(first_item(body, "images"), "url")
