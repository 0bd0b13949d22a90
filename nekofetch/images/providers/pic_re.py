"""Pic.re image provider. Single fixed endpoint, no rating distinction."""

from typing import Any

from ..types import ImageSource
from .base import BaseImageProvider, get_field


class PicReProvider(BaseImageProvider):
    source = ImageSource.PIC_RE
    display_name = "Pic.re"
    base_url = "https://api.pic.re/waifu"

    def extract(self, body: Any) -> str | None:
        return get_field(body, "url")
