"""
Pytest configuration for nekofetch tests.

Provides a logging run per test module plus fixtures for offline HTTP:
an ImageConfig pointing at a temp settings file, a recording sleep, and
httpx clients backed by MockTransport.

Usage:
    pytest testing/
    pytest testing/test_transport.py
"""

from collections.abc import Callable, Generator

import httpx
import pytest

from nekofetch.images import ImageConfig
from nekofetch.logging import end_run, start_run

TEST_RELAYS = (
    "https://relay-one.test/raw?url={url}",
    "https://relay-two.test/?url={url}",
)

# Known-good response body per provider, keyed by ImageSource value
PROVIDER_FIXTURES = {
    "waifuIm": {
        "images": [
            {
                "image_id": 8108,
                "extension": ".jpg",
                "is_nsfw": False,
                "url": "https://cdn.waifu.im/8108.jpg",
            }
        ]
    },
    "picRe": {"url": "https://pic.re/image/a1b2c3.jpg", "tags": ["long_hair"]},
    "waifuPics": {"url": "https://i.waifu.pics/QpS~yNn.png"},
    "purr": {
        "error": False,
        "link": "https://cdn.purrbot.site/sfw/hug/gif/hug_001.gif",
        "time": 0,
    },
    "nekosMoe": {"images": [{"id": "HJmdd3CJE", "nsfw": False, "tags": ["cat ears"]}]},
    "nekoBot": {
        "success": True,
        "message": "https://i0.nekobot.xyz/8/2/a/5c5a1b0e.png",
        "color": 13548190,
        "version": "20200609",
    },
    "nekosApi": {
        "results": [
            {"artist_name": "yukisawa", "url": "https://nekos.best/api/v2/waifu/0f8c.png"}
        ]
    },
    "nekosBest": {
        "results": [
            {"artist_name": "nagi", "url": "https://nekos.best/api/v2/neko/7d2e.png"}
        ]
    },
    "nekosLife": {"url": "https://cdn.nekos.life/waifu/waifu_031.jpg"},
}


@pytest.fixture(autouse=True)
def logging_run(request: pytest.FixtureRequest) -> Generator[None, None, None]:
    """Rotate logs at test module boundaries.

    When running with pytest-xdist, each worker uses a separate log directory
    to prevent file corruption from concurrent writes.
    """
    import os

    worker_id = os.environ.get("PYTEST_XDIST_WORKER")
    if worker_id:
        os.environ["NEKOFETCH_LOG_DIR"] = f"logs/test-{worker_id}"

    test_path = request.node.nodeid.split("::")[0]
    test_name = test_path.replace("/", "-").replace(".py", "")
    start_run(f"test-{test_name}")
    yield
    end_run()


@pytest.fixture
def image_config(tmp_path) -> ImageConfig:
    """Config with fixed timings, test relays and a temp settings file."""
    return ImageConfig(
        timeout=5.0,
        backoff_base=0.5,
        client_descriptor="",
        relay_endpoints=TEST_RELAYS,
        settings_path=tmp_path / "settings.json",
    )


class RecordingSleep:
    """Stand-in for asyncio.sleep that records delays without waiting."""

    def __init__(self):
        self.delays: list[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


@pytest.fixture
def recording_sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def mock_client() -> Callable[..., httpx.AsyncClient]:
    """Factory for httpx clients whose requests go to `handler`."""

    def factory(handler) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(handler))

    return factory


def pytest_configure(config):
    """Configure custom markers."""
    config.addinivalue_line(
        "markers",
        "integration: marks tests that call the real provider APIs",
    )
