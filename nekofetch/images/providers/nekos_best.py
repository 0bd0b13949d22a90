"""Nekos.best image providers.

API: https://docs.nekos.best/
Two fixed endpoints (waifu, neko), both answering {"results": [{"url": ...}]}.
"""

from typing import Any

from ..types import ImageSource
from .base import BaseImageProvider, first_item, get_field


class _NekosBestEndpoint(BaseImageProvider):
    def extract(self, body: Any) -> str | None:
        return get_field(first_item(body, "results"), "url")


class NekosApiProvider(_NekosBestEndpoint):
    source = ImageSource.NEKOS_API
    display_name = "Nekos API"
    base_url = "https://nekos.best/api/v2/waifu"


class NekosBestProvider(_NekosBestEndpoint):
    source = ImageSource.NEKOS_BEST
    display_name = "Nekos.best"
    base_url = "https://nekos.best/api/v2/neko"
