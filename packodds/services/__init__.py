"""
PackOdds services.

Reference data catalogs the odds engine reads from.
"""

from packodds.services.booster_catalog import (
    BoosterCatalog,
    download_booster_feed,
    get_booster_catalog,
    load_booster_catalog,
)
from packodds.services.card_catalog import (
    CardCatalog,
    CatalogSnapshot,
    fetch_set_records,
    get_card_catalog,
    load_set_cache,
    save_set_cache,
)

__all__ = [
    # Booster feed
    "BoosterCatalog",
    "download_booster_feed",
    "get_booster_catalog",
    "load_booster_catalog",
    # Card catalog
    "CardCatalog",
    "CatalogSnapshot",
    "fetch_set_records",
    "get_card_catalog",
    "load_set_cache",
    "save_set_cache",
]
