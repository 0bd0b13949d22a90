"""Request URL construction."""

import random

from .providers import get_provider
from .types import ImageSource


def build_url(source: ImageSource, explicit: bool, rng: random.Random | None = None) -> str:
    """Build the request URL for one fetch from `source`.

    Pure given (source, explicit, rng draw); no I/O.

    Args:
        source: Provider to fetch from
        explicit: Content rating mode
        rng: Random source for category selection (module random if None)

    Returns:
        Concrete request URL
    """
    return get_provider(source).build_url(explicit, rng)
