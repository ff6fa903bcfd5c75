"""
Download Scryfall card prints for sets into the local card cache.

Cached sets are served without hitting Scryfall at request time.

Usage:
    python -m packodds.jobs.download_cards znr zne
    python -m packodds.jobs.download_cards --from-feed znr
"""

import argparse
import asyncio
import logging

import httpx

from packodds.config import settings
from packodds.services.booster_catalog import load_booster_catalog
from packodds.services.card_catalog import USER_AGENT, fetch_set_records, save_set_cache

logger = logging.getLogger(__name__)


async def run_download(set_codes: list[str]) -> dict[str, int]:
    """
    Fetch and cache each set.

    Returns:
        Set code -> number of card objects cached
    """
    results: dict[str, int] = {}

    async with httpx.AsyncClient(
        timeout=settings.http_timeout,
        headers={"User-Agent": USER_AGENT, "Accept": "application/json"},
    ) as client:
        for set_code in set_codes:
            logger.info("Fetching cards for %s...", set_code)
            records = await fetch_set_records(set_code, client)
            path = save_set_cache(set_code, records)
            results[set_code] = len(records)
            logger.info("Cached %d cards for %s at %s", len(records), set_code, path)

    return results


def resolve_set_codes(set_codes: list[str], from_feed: bool) -> list[str]:
    """Expand set codes to their products' source sets when asked."""
    if not from_feed:
        return [code.lower() for code in set_codes]

    catalog = load_booster_catalog()
    expanded: dict[str, None] = {}
    for code in set_codes:
        expanded.update(dict.fromkeys(catalog.source_set_codes(code)))
    return list(expanded)


def main() -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(description="Cache Scryfall card prints for sets")
    parser.add_argument("set_codes", nargs="+", help="Set codes to download")
    parser.add_argument(
        "--from-feed",
        action="store_true",
        help="Download every source set of the given sets' booster products",
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    set_codes = resolve_set_codes(args.set_codes, args.from_feed)
    results = asyncio.run(run_download(set_codes))
    logger.info("Card download complete. Total cards cached: %d", sum(results.values()))


if __name__ == "__main__":
    main()
