"""Type definitions for the image fetch client."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class ImageSource(str, Enum):
    """Supported image providers."""

    WAIFU_IM = "waifuIm"
    PIC_RE = "picRe"
    WAIFU_PICS = "waifuPics"
    PURR = "purr"
    NEKOS_MOE = "nekosMoe"
    NEKO_BOT = "nekoBot"
    NEKOS_API = "nekosApi"
    NEKOS_BEST = "nekosBest"
    NEKOS_LIFE = "nekosLife"


class ImageResult(BaseModel):
    """A single fetched image."""

    model_config = ConfigDict(frozen=True)

    url: str = Field(description="Direct image URL")
    source: ImageSource
