"""NekoBot image provider. The image URL comes back in `message`."""

from typing import Any

from ..types import ImageSource
from .base import BaseImageProvider, get_field


class NekoBotProvider(BaseImageProvider):
    source = ImageSource.NEKO_BOT
    display_name = "NekoBot"
    base_url = "https://nekobot.xyz/api/image?type=waifu"

    def extract(self, body: Any) -> str | None:
        # NekoBot puts error text in `message` too, flagged by success=false
        if isinstance(body, dict) and body.get("success") is False:
            return None
        return get_field(body, "message")
