"""Configuration for the image fetch client."""

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

DEFAULT_RELAY_ENDPOINTS = (
    "https://api.allorigins.win/raw?url={url}",
    "https://corsproxy.io/?url={url}",
)


def _relay_endpoints_from_env() -> tuple[str, ...]:
    raw = os.environ.get("IMAGE_RELAY_ENDPOINTS")
    if not raw:
        return DEFAULT_RELAY_ENDPOINTS
    return tuple(e.strip() for e in raw.split(",") if e.strip())


@dataclass
class ImageConfig:
    """Configuration for the image fetch service.

    Environment Variables:
        IMAGE_TIMEOUT: Request timeout in seconds (default: 15)
        IMAGE_RETRY_BACKOFF: Base backoff between retry strategies in seconds (default: 0.5)
        IMAGE_CLIENT_DESCRIPTOR: Caller's user agent / platform string, used to
            pick the desktop or mobile header profile (default: desktop)
        IMAGE_RELAY_ENDPOINTS: Comma-separated relay templates with a {url}
            placeholder, tried in order
        NEKOFETCH_SETTINGS_PATH: JSON file holding persisted preferences
            (default: ~/.nekofetch/settings.json)
    """

    timeout: float = field(
        default_factory=lambda: float(os.environ.get("IMAGE_TIMEOUT", "15"))
    )
    backoff_base: float = field(
        default_factory=lambda: float(os.environ.get("IMAGE_RETRY_BACKOFF", "0.5"))
    )
    client_descriptor: str = field(
        default_factory=lambda: os.environ.get("IMAGE_CLIENT_DESCRIPTOR", "")
    )
    relay_endpoints: tuple[str, ...] = field(default_factory=_relay_endpoints_from_env)
    settings_path: Path = field(
        default_factory=lambda: Path(
            os.environ.get(
                "NEKOFETCH_SETTINGS_PATH",
                str(Path.home() / ".nekofetch" / "settings.json"),
            )
        ).expanduser()
    )

    def __post_init__(self):
        if self.timeout <= 0:
            raise ValueError("IMAGE_TIMEOUT must be positive")
        if self.backoff_base < 0:
            raise ValueError("IMAGE_RETRY_BACKOFF must not be negative")
        for endpoint in self.relay_endpoints:
            if "{url}" not in endpoint:
                raise ValueError(f"Relay endpoint missing {{url}} placeholder: {endpoint}")


_config: ImageConfig | None = None


def get_image_config() -> ImageConfig:
    """Get global ImageConfig instance."""
    global _config
    if _config is None:
        _config = ImageConfig()
    return _config
