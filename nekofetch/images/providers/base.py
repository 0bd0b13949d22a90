"""Base provider class for image sources."""

import random
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, ClassVar

from ..types import ImageSource


@dataclass(frozen=True)
class CategoryLists:
    """Category words for one provider, split by content rating."""

    safe: tuple[str, ...] = ()
    explicit: tuple[str, ...] = ()

    def for_rating(self, explicit: bool) -> tuple[str, ...]:
        return self.explicit if explicit else self.safe


class BaseImageProvider(ABC):
    """Abstract base for image providers.

    Subclasses are stateless: the registry builds one instance of each at
    import time and shares it. A provider knows how to build its request URL
    and how to find the image URL in its response; HTTP is done elsewhere.
    """

    source: ClassVar[ImageSource]
    display_name: ClassVar[str]
    base_url: ClassVar[str]
    categories: ClassVar[CategoryLists | None] = None
    needs_relay: ClassVar[bool] = False

    def build_url(self, explicit: bool, rng: random.Random | None = None) -> str:
        """Build the request URL for one fetch.

        Args:
            explicit: Content rating mode
            rng: Random source for category selection (module random if None)

        Returns:
            Concrete request URL
        """
        category = self.pick_category(explicit, rng)
        if category is None:
            return self.compose_url(explicit)
        return self.compose_category_url(explicit, category)

    def pick_category(self, explicit: bool, rng: random.Random | None = None) -> str | None:
        """Pick a category uniformly at random for the rating mode.

        Returns None when the provider has no categories, or none for this
        mode; the URL is then built as for a category-less provider.
        """
        if self.categories is None:
            return None
        choices = self.categories.for_rating(explicit)
        if not choices:
            return None
        return (rng or random).choice(choices)

    def compose_url(self, explicit: bool) -> str:
        """URL when no category applies. Fixed endpoints return base_url."""
        return self.base_url

    def compose_category_url(self, explicit: bool, category: str) -> str:
        segment = "nsfw" if explicit else "sfw"
        return f"{self.base_url}/{segment}/{category}"

    @abstractmethod
    def extract(self, body: Any) -> str | None:
        """Find the image URL in a parsed response body.

        Must not raise on unexpected shapes; return None instead.
        """
        pass


def get_field(obj: Any, key: str) -> str | None:
    """Return obj[key] if obj is a dict and the value is a non-blank string."""
    if not isinstance(obj, dict):
        return None
    value = obj.get(key)
    if isinstance(value, str) and value.strip():
        return value
    return None


def first_item(obj: Any, key: str) -> Any:
    """Return the first element of the list at obj[key], or None."""
    if not isinstance(obj, dict):
        return None
    items = obj.get(key)
    if isinstance(items, list) and items:
        return items[0]
    return None
