"""
Download the booster reference feed.

Run this job before starting the API; the feed is loaded once at startup.
"""

import asyncio
import logging

from packodds.services.booster_catalog import download_booster_feed, load_booster_catalog

logger = logging.getLogger(__name__)


async def run_download() -> None:
    """Download the booster feed and check that it validates."""
    logger.info("Downloading booster feed...")

    try:
        path = await download_booster_feed()
        logger.info("Downloaded booster feed to %s", path)
    except Exception as e:
        logger.error("Failed to download booster feed: %s", e)
        raise

    catalog = load_booster_catalog(path)
    logger.info(
        "Booster feed has %d products across %d paper sets",
        len(catalog),
        len(catalog.paper_set_codes()),
    )


def main() -> None:
    """CLI entry point."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    asyncio.run(run_download())


if __name__ == "__main__":
    main()
