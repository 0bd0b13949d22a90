"""Nekos.life image provider. Single fixed endpoint answering {"url": ...}."""

from typing import Any

from ..types import ImageSource
from .base import BaseImageProvider, get_field


class NekosLifeProvider(BaseImageProvider):
    source = ImageSource.NEKOS_LIFE
    display_name = "Nekos.life"
    base_url = "https://nekos.life/api/v2/img/waifu"

    def extract(self, body: Any) -> str | None:
        return get_field(body, "url")
