"""Nekos.moe image provider.

API: https://docs.nekos.moe/
The random endpoint returns image ids only; the image URL is built from the
id. Direct calls are rejected from browser contexts, so requests go through
the CORS relay.
"""

from typing import Any

from ..types import ImageSource
from .base import BaseImageProvider, first_item

IMAGE_URL = "https://nekos.moe/image/{id}"


class NekosMoeProvider(BaseImageProvider):
    source = ImageSource.NEKOS_MOE
    display_name = "Nekos.moe"
    base_url = "https://nekos.moe/api/v1/random/image?nsfw=false"
    needs_relay = True

    def extract(self, body: Any) -> str | None:
        image = first_item(body, "images")
        if not isinstance(image, dict):
            return None
        image_id = image.get("id")
        if isinstance(image_id, (str, int)) and str(image_id).strip():
            return IMAGE_URL.format(id=image_id)
        return None
