"""Static category word lists for providers with per-category endpoints."""

from .base import CategoryLists

WAIFU_PICS_CATEGORIES = CategoryLists(
    safe=(
        "waifu", "neko", "shinobu", "megumin", "cuddle", "hug", "kiss", "lick",
        "pat", "bonk", "blush", "smile", "wave", "highfive", "nom", "bite",
        "glomp", "slap", "kick", "happy", "wink", "poke", "dance",
    ),
    explicit=("waifu", "neko", "trap", "blowjob"),
)

PURR_CATEGORIES = CategoryLists(
    safe=(
        "angry", "bite", "blush", "comfy", "cry", "cuddle", "dance", "fluff",
        "hug", "kiss", "lay", "lick", "neko", "pat", "poke", "pout", "slap",
        "smile", "tail", "tickle", "waifu",
    ),
    explicit=("anal", "blowjob", "cum", "fuck", "neko", "pussylick", "solo", "yuri"),
)
