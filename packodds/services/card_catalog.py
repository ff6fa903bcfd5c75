"""
Card catalog service.

Holds paper card prints grouped by set code. Sets are fetched from the
Scryfall search API on demand (one paginated query per set) or read from
the local card cache written by `packodds.jobs.download_cards`.

The catalog is copy-on-write: `ingest` swaps in a new mapping, so a
snapshot taken before an ingest never changes underneath the odds engine.
"""

import asyncio
import json
import logging
from collections.abc import Iterable, Mapping
from pathlib import Path
from types import MappingProxyType
from typing import Any

import httpx

from packodds.config import settings
from packodds.models.card import CardPrint, PrintKey
from packodds.models.failure import CardFetchError
from packodds.parsers.scryfall import parse_paper_cards

logger = logging.getLogger(__name__)

USER_AGENT = "PackOdds/1.0"

CatalogSnapshot = Mapping[str, tuple[CardPrint, ...]]


def build_search_url() -> str:
    return f"{settings.scryfall_api_url}/cards/search"


def _search_params(set_code: str) -> dict[str, str]:
    """Query for every paper print of a set, variants included."""
    return {
        "q": f"e:{set_code.lower()} game:paper",
        "unique": "prints",
        "order": "set",
        "include_extras": "true",
        "include_variations": "true",
    }


async def fetch_set_records(
    set_code: str,
    client: httpx.AsyncClient | None = None,
) -> list[dict[str, Any]]:
    """
    Fetch every Scryfall card object of a set, following pagination.

    A set Scryfall doesn't know (404) yields an empty list.

    Args:
        set_code: Set to fetch
        client: Optional httpx client for connection reuse

    Returns:
        Raw Scryfall card objects in page order

    Raises:
        CardFetchError: On HTTP failure or if the page limit is exceeded
    """
    owns_client = client is None
    if client is None:
        client = httpx.AsyncClient(
            timeout=settings.http_timeout,
            headers={"User-Agent": USER_AGENT, "Accept": "application/json"},
        )

    records: list[dict[str, Any]] = []
    url: str | None = build_search_url()
    params: dict[str, str] | None = _search_params(set_code)
    pages = 0

    try:
        while url:
            pages += 1
            if pages > settings.scryfall_page_limit:
                raise CardFetchError(
                    set_code, f"more than {settings.scryfall_page_limit} result pages"
                )

            response = await client.get(url, params=params)
            if response.status_code == 404:
                break
            response.raise_for_status()

            page = response.json()
            records.extend(page.get("data", []))

            # next_page already carries the query string
            url = page.get("next_page") if page.get("has_more") else None
            params = None
    except httpx.HTTPError as e:
        raise CardFetchError(set_code, str(e)) from e
    finally:
        if owns_client:
            await client.aclose()

    logger.info(
        "card_set_fetched",
        extra={"set_code": set_code, "card_count": len(records), "pages": pages},
    )
    return records


def cache_path_for(set_code: str, cache_dir: Path | None = None) -> Path:
    if cache_dir is None:
        cache_dir = settings.card_cache_dir
    return cache_dir / f"{set_code.lower()}.json"


def save_set_cache(
    set_code: str,
    records: list[dict[str, Any]],
    cache_dir: Path | None = None,
) -> Path:
    """Write raw Scryfall card objects for a set to the card cache."""
    path = cache_path_for(set_code, cache_dir)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(records, f)
    return path


def load_set_cache(set_code: str, cache_dir: Path | None = None) -> list[CardPrint] | None:
    """
    Read a set's prints from the card cache.

    Returns:
        Paper prints of the set, or None if the set is not cached
    """
    path = cache_path_for(set_code, cache_dir)
    if not path.exists():
        return None

    with open(path, encoding="utf-8") as f:
        return parse_paper_cards(json.load(f))


class CardCatalog:
    """
    Paper card prints grouped by set code.

    Replaces shared mutable card maps: callers `ingest` prints and hand the
    odds engine a `snapshot()`.
    """

    def __init__(self, cards: Iterable[CardPrint] = ()) -> None:
        self._by_set: CatalogSnapshot = MappingProxyType({})
        self._loaded_sets: frozenset[str] = frozenset()
        self._set_locks: dict[str, asyncio.Lock] = {}
        self.ingest(cards)

    def __len__(self) -> int:
        return sum(len(prints) for prints in self._by_set.values())

    def __contains__(self, set_code: object) -> bool:
        return isinstance(set_code, str) and set_code.lower() in self._loaded_sets

    def set_codes(self) -> list[str]:
        return sorted(self._loaded_sets)

    def snapshot(self) -> CatalogSnapshot:
        """Immutable view of the catalog as it is now."""
        return self._by_set

    def ingest(self, cards: Iterable[CardPrint]) -> int:
        """
        Add prints to the catalog.

        A print already in the catalog (same set, collector number and face)
        is ignored. Sets of ingested prints are marked as loaded.

        Returns:
            Number of prints added
        """
        by_set: dict[str, list[CardPrint]] = {code: list(p) for code, p in self._by_set.items()}
        known: set[PrintKey] = {card.key for prints in by_set.values() for card in prints}
        loaded = set(self._loaded_sets)

        added = 0
        for card in cards:
            loaded.add(card.set_code)
            if card.key in known:
                continue
            known.add(card.key)
            by_set.setdefault(card.set_code, []).append(card)
            added += 1

        self._by_set = MappingProxyType({code: tuple(p) for code, p in by_set.items()})
        self._loaded_sets = frozenset(loaded)
        return added

    def mark_loaded(self, set_code: str) -> None:
        """Record that a set was loaded, even if it holds no paper prints."""
        self._loaded_sets = self._loaded_sets | {set_code.lower()}

    async def ensure_sets(
        self,
        set_codes: Iterable[str],
        client: httpx.AsyncClient | None = None,
        cache_dir: Path | None = None,
    ) -> list[str]:
        """
        Load any of the given sets the catalog doesn't hold yet.

        Each missing set is read from the card cache if present, otherwise
        fetched from Scryfall. Concurrent calls wait on a per-set lock, so a
        set is fetched once even when several requests need it.

        Returns:
            Set codes that were loaded by this call

        Raises:
            CardFetchError: If a Scryfall fetch fails
        """
        loaded: list[str] = []
        for set_code in dict.fromkeys(code.lower() for code in set_codes):
            if set_code in self:
                continue

            async with self._set_locks.setdefault(set_code, asyncio.Lock()):
                # Another request may have loaded the set while we waited
                if set_code in self:
                    continue

                cards = load_set_cache(set_code, cache_dir)
                if cards is None:
                    cards = parse_paper_cards(await fetch_set_records(set_code, client))

                added = self.ingest(cards)
                self.mark_loaded(set_code)
            loaded.append(set_code)

            logger.info(
                "card_set_ingested",
                extra={"set_code": set_code, "cards_added": added},
            )

        return loaded


_catalog = CardCatalog()


def get_card_catalog() -> CardCatalog:
    """Process-wide card catalog (FastAPI dependency)."""
    return _catalog
