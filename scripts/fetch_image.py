#!/usr/bin/env python3
"""
Fetch one random image URL from a provider and print it.

This script:
1. Reads the persisted explicit mode preference (or --explicit / --safe)
2. Fetches one image from the chosen provider
3. Prints the image URL (or a readable error)

Usage:
    python scripts/fetch_image.py --source nekosBest
    python scripts/fetch_image.py --source waifuPics --safe
    python scripts/fetch_image.py --list
    python scripts/fetch_image.py --set-explicit-mode off
"""

import argparse
import asyncio
import logging
import sys
import uuid
from pathlib import Path

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from nekofetch.config import configure_logging
from nekofetch.images import (
    ImageSource,
    ProviderFetchError,
    display_name,
    fetch_image,
    get_explicit_mode,
    list_providers,
    set_explicit_mode,
)
from nekofetch.logging import end_run
from nekofetch.utils import cleanup_all_clients

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Fetch a random image URL from a provider")
    parser.add_argument(
        "--source",
        choices=[s.value for s in ImageSource],
        default=ImageSource.NEKOS_BEST.value,
        help="Provider to fetch from (default: nekosBest)",
    )
    rating = parser.add_mutually_exclusive_group()
    rating.add_argument("--explicit", dest="explicit", action="store_true", default=None)
    rating.add_argument("--safe", dest="explicit", action="store_false")
    parser.set_defaults(explicit=None)
    parser.add_argument("--list", action="store_true", help="List providers and exit")
    parser.add_argument(
        "--set-explicit-mode",
        choices=["on", "off"],
        help="Persist the explicit mode preference and exit",
    )
    return parser.parse_args(argv)


async def run(args: argparse.Namespace) -> int:
    if args.list:
        for source in list_providers():
            print(f"{source.value:<12} {display_name(source)}")
        return 0

    if args.set_explicit_mode:
        set_explicit_mode(args.set_explicit_mode == "on")
        print(f"explicitMode = {str(get_explicit_mode()).lower()}")
        return 0

    source = ImageSource(args.source)
    try:
        result = await fetch_image(source, args.explicit)
    except ProviderFetchError as e:
        logger.error(f"Fetch failed: {e}")
        print(f"Could not fetch an image from {display_name(source)}: {e.error}", file=sys.stderr)
        return 1
    finally:
        await cleanup_all_clients()

    print(result.url)
    return 0


def main() -> int:
    args = parse_args()
    configure_logging(f"fetch-{uuid.uuid4().hex[:8]}")
    try:
        return asyncio.run(run(args))
    finally:
        end_run()


if __name__ == "__main__":
    sys.exit(main())
