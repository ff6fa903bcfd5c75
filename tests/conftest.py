import json
from collections.abc import AsyncGenerator
from pathlib import Path
from typing import Any

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from packodds.api.odds import booster_catalog_dependency
from packodds.db.database import get_session
from packodds.main import app
from packodds.models.booster import PackProduct
from packodds.models.card import CardPrint, PrintKey
from packodds.models.db import Base
from packodds.parsers.booster_feed import parse_booster_feed
from packodds.services.booster_catalog import BoosterCatalog
from packodds.services.card_catalog import CardCatalog, get_card_catalog


def _commons() -> dict[str, int]:
    return {f"tst:{n}": 1 for n in range(1, 11)}


@pytest.fixture
def sample_feed() -> list[dict[str, Any]]:
    """Booster feed records for a small test set."""
    return [
        {
            "name": "Test Set Draft Booster",
            "code": "tst-draft",
            "set_code": "TST",
            "source_set_codes": ["tst"],
            "sheets": {
                "common": {"total_weight": 10, "cards": _commons()},
                "rare": {
                    "total_weight": 5,
                    "cards": {"tst:11": 2, "tst:12": 2, "tst:12:foil": 1},
                },
                "land": {"total_weight": 1, "fixed": True, "cards": {"tst:13": 1}},
            },
            "boosters": [
                {"weight": 3, "sheets": {"common": 10, "rare": 1, "land": 1}},
                {"weight": 1, "sheets": {"common": 9, "rare": 2, "land": 1}},
            ],
        },
        {
            "name": "Test Set Promo Pack",
            "code": "tst-promo",
            "set_code": "tst",
            "source_set_codes": ["tst"],
            "sheets": {"rare": {"total_weight": 2, "cards": {"tst:11": 1, "tst:12": 1}}},
            "boosters": [{"weight": 1, "sheets": {"rare": 1}}],
        },
        {
            "name": "Test Set Arena Booster",
            "code": "tst-arena",
            "set_code": "tst",
            "source_set_codes": ["tst"],
            "sheets": {"rare": {"total_weight": 2, "cards": {"tst:11": 1, "tst:12": 1}}},
            "boosters": [{"weight": 1, "sheets": {"rare": 1}}],
        },
        {
            "name": "Test Set Collector Booster",
            "code": "tst-collector",
            "set_code": "tst",
            "source_set_codes": ["tst", "tsx"],
            "sheets": {
                "rare": {"total_weight": 4, "cards": {"tst:11:foil": 1, "tst:12:foil": 3}},
                "bonus": {"total_weight": 2, "cards": {"tsx:1": 1, "tsx:2a": 1}},
            },
            "boosters": [{"weight": 1, "sheets": {"rare": 2, "bonus": 1}}],
        },
        {
            "name": "Other Set Draft Booster",
            "code": "oth-draft",
            "set_code": "oth",
            "source_set_codes": ["oth"],
            "sheets": {"rare": {"total_weight": 1, "cards": {"oth:1": 1}}},
            "boosters": [{"weight": 1, "sheets": {"rare": 1}}],
        },
    ]


@pytest.fixture
def sample_products(sample_feed: list[dict[str, Any]]) -> list[PackProduct]:
    return parse_booster_feed(sample_feed)


@pytest.fixture
def booster_catalog(sample_products: list[PackProduct]) -> BoosterCatalog:
    return BoosterCatalog(products=tuple(sample_products))


@pytest.fixture
def sample_cards() -> list[CardPrint]:
    """Paper prints matching the sample feed."""
    cards = [
        CardPrint(key=PrintKey("tst", str(n)), name=f"Common {n}", games=frozenset({"paper"}))
        for n in range(1, 11)
    ]
    cards += [
        CardPrint(
            key=PrintKey("tst", "11"), name="Rare One", rarity="rare", games=frozenset({"paper"})
        ),
        CardPrint(
            key=PrintKey("tst", "12"), name="Rare Two", rarity="mythic", games=frozenset({"paper"})
        ),
        CardPrint(key=PrintKey("tst", "13"), name="Basic Land", games=frozenset({"paper"})),
        CardPrint(
            key=PrintKey("tsx", "1"), name="Bonus Sheet Card", rarity="rare",
            games=frozenset({"paper"}),
        ),
        CardPrint(
            key=PrintKey("tsx", "2", "a"),
            name="Day Side // Night Side",
            rarity="mythic",
            games=frozenset({"paper"}),
            multi_faced=True,
            face_names=("Day Side", "Night Side"),
        ),
        CardPrint(
            key=PrintKey("oth", "1"), name="Rare One", rarity="rare", games=frozenset({"paper"})
        ),
    ]
    return cards


@pytest.fixture
def card_catalog(sample_cards: list[CardPrint]) -> CardCatalog:
    return CardCatalog(sample_cards)


@pytest.fixture
async def async_engine() -> AsyncGenerator[AsyncEngine, None]:
    """Create an in-memory SQLite engine for testing."""
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def session(async_engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """Provide a database session for tests."""
    async_session = async_sessionmaker(async_engine, class_=AsyncSession, expire_on_commit=False)
    async with async_session() as session:
        yield session


@pytest.fixture
async def client(
    async_engine: AsyncEngine,
    booster_catalog: BoosterCatalog,
    card_catalog: CardCatalog,
    monkeypatch: pytest.MonkeyPatch,
) -> AsyncGenerator[AsyncClient, None]:
    """Provide an async test client with overridden database and reference data."""
    async_session = async_sessionmaker(async_engine, class_=AsyncSession, expire_on_commit=False)

    async def override_get_session() -> AsyncGenerator[AsyncSession, None]:
        async with async_session() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_session] = override_get_session
    app.dependency_overrides[booster_catalog_dependency] = lambda: booster_catalog
    app.dependency_overrides[get_card_catalog] = lambda: card_catalog
    monkeypatch.setattr("packodds.api.health.get_booster_catalog", lambda: booster_catalog)

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture
def feed_file(sample_feed: list[dict[str, Any]], tmp_path: Path) -> Path:
    """Write the sample feed to a temporary file."""
    path = tmp_path / "sealed_basic_data.json"
    with open(path, "w", encoding="utf-8") as f:
        json.dump(sample_feed, f)
    return path


@pytest.fixture
def scryfall_card() -> dict[str, Any]:
    """A single-faced Scryfall card object."""
    return {
        "object": "card",
        "name": "Rare One",
        "set": "TST",
        "collector_number": "11",
        "rarity": "rare",
        "games": ["paper", "mtgo"],
    }


@pytest.fixture
def scryfall_dfc() -> dict[str, Any]:
    """A double-faced Scryfall card object."""
    return {
        "object": "card",
        "name": "Day Side // Night Side",
        "set": "tsx",
        "collector_number": "2",
        "rarity": "mythic",
        "games": ["paper"],
        "card_faces": [{"name": "Day Side"}, {"name": "Night Side"}],
    }
