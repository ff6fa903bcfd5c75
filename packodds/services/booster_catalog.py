"""
Booster catalog service.

Loads the booster reference feed once and serves it read-only for the
lifetime of the process.
"""

import json
import logging
from collections.abc import Iterator
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

import httpx

from packodds.analysis.pack_assembler import is_paper_product
from packodds.config import settings
from packodds.models.booster import PackProduct
from packodds.parsers.booster_feed import parse_booster_feed

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BoosterCatalog:
    """
    Immutable collection of validated booster products, in feed order.

    Attributes:
        products: Every product in the feed
    """

    products: tuple[PackProduct, ...] = ()

    def __iter__(self) -> Iterator[PackProduct]:
        return iter(self.products)

    def __len__(self) -> int:
        return len(self.products)

    def for_set(self, set_code: str) -> list[PackProduct]:
        """All products of a set, including non-paper ones."""
        set_code = set_code.lower()
        return [p for p in self.products if p.set_code == set_code]

    def source_set_codes(self, set_code: str) -> list[str]:
        """Distinct source sets of a set's paper products, in first-seen order."""
        codes: dict[str, None] = {}
        for product in self.for_set(set_code):
            if is_paper_product(product):
                codes.update(dict.fromkeys(product.source_set_codes))
        return list(codes)

    def paper_set_codes(self) -> list[str]:
        """Sets that have at least one paper product, sorted."""
        return sorted({p.set_code for p in self.products if is_paper_product(p)})

    def has_set(self, set_code: str) -> bool:
        return bool(self.for_set(set_code))


async def download_booster_feed(output_path: Path | None = None) -> Path:
    """
    Download the booster reference feed.

    Args:
        output_path: Where to save the file. Defaults to settings.booster_data_path

    Returns:
        Path to downloaded file.

    Raises:
        httpx.HTTPError: If download fails
    """
    if output_path is None:
        output_path = settings.booster_data_path

    output_path.parent.mkdir(parents=True, exist_ok=True)

    async with httpx.AsyncClient(timeout=settings.http_timeout, follow_redirects=True) as client:
        async with client.stream("GET", settings.booster_data_url, timeout=300.0) as response:
            response.raise_for_status()
            with open(output_path, "wb") as f:
                async for chunk in response.aiter_bytes(8192):
                    f.write(chunk)

    return output_path


def load_booster_catalog(path: Path | None = None) -> BoosterCatalog:
    """
    Load and validate the booster feed from file.

    Args:
        path: Path to the feed JSON. Defaults to settings.booster_data_path

    Returns:
        BoosterCatalog of every product in the feed.

    Raises:
        FileNotFoundError: If the feed file doesn't exist
        ValueError: If the file is not valid JSON
        BoosterDataError: If any product fails validation
    """
    if path is None:
        path = settings.booster_data_path

    if not path.exists():
        raise FileNotFoundError(
            f"Booster feed not found at {path}. "
            "Run `python -m packodds.jobs.download_boosters` first."
        )

    try:
        with open(path, encoding="utf-8") as f:
            records = json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(f"Booster feed at {path} is corrupted: {e}") from e

    if not isinstance(records, list):
        raise ValueError(f"Booster feed at {path} must be a JSON list of products")

    catalog = BoosterCatalog(products=tuple(parse_booster_feed(records)))

    logger.info(
        "booster_catalog_loaded",
        extra={"path": str(path), "product_count": len(catalog)},
    )
    return catalog


@lru_cache(maxsize=1)
def get_booster_catalog() -> BoosterCatalog:
    """
    Get cached booster catalog.

    Cached after first load.

    Raises:
        FileNotFoundError: If the feed file doesn't exist
    """
    return load_booster_catalog()
