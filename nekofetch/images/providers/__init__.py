"""Image provider registry."""

from ..types import ImageSource
from .base import BaseImageProvider, CategoryLists
from .nekobot import NekoBotProvider
from .nekos_best import NekosApiProvider, NekosBestProvider
from .nekos_life import NekosLifeProvider
from .nekos_moe import NekosMoeProvider
from .pic_re import PicReProvider
from .purr import PurrProvider
from .waifu_im import WaifuImProvider
from .waifu_pics import WaifuPicsProvider

PROVIDER_REGISTRY: dict[ImageSource, BaseImageProvider] = {
    ImageSource.WAIFU_IM: WaifuImProvider(),
    ImageSource.PIC_RE: PicReProvider(),
    ImageSource.WAIFU_PICS: WaifuPicsProvider(),
    ImageSource.PURR: PurrProvider(),
    ImageSource.NEKOS_MOE: NekosMoeProvider(),
    ImageSource.NEKO_BOT: NekoBotProvider(),
    ImageSource.NEKOS_API: NekosApiProvider(),
    ImageSource.NEKOS_BEST: NekosBestProvider(),
    ImageSource.NEKOS_LIFE: NekosLifeProvider(),
}

_missing = set(ImageSource) - set(PROVIDER_REGISTRY)
if _missing:
    raise RuntimeError(f"No provider registered for: {sorted(s.value for s in _missing)}")
for _source, _provider in PROVIDER_REGISTRY.items():
    if _provider.source is not _source:
        raise RuntimeError(f"{type(_provider).__name__} registered under {_source.value}")


def get_provider(source: ImageSource) -> BaseImageProvider:
    """Get the provider for a source. Every ImageSource has one."""
    return PROVIDER_REGISTRY[source]


def list_providers() -> list[ImageSource]:
    """All supported sources, in declaration order."""
    return list(ImageSource)


def display_name(source: ImageSource) -> str:
    """Human-readable provider label, falling back to the raw id."""
    provider = PROVIDER_REGISTRY.get(source)
    if provider is None:
        return source.value if isinstance(source, ImageSource) else str(source)
    return provider.display_name


__all__ = [
    "BaseImageProvider",
    "CategoryLists",
    "NekoBotProvider",
    "NekosApiProvider",
    "NekosBestProvider",
    "NekosLifeProvider",
    "NekosMoeProvider",
    "PicReProvider",
    "PurrProvider",
    "WaifuImProvider",
    "WaifuPicsProvider",
    "PROVIDER_REGISTRY",
    "get_provider",
    "list_providers",
    "display_name",
]
