"""Tests for odds API endpoints."""

from pathlib import Path

import httpx
import pytest
import respx
from httpx import AsyncClient

from packodds.config import settings
from packodds.main import app
from packodds.services.booster_catalog import BoosterCatalog
from packodds.services.card_catalog import CardCatalog, get_card_catalog


class TestListSets:
    async def test_lists_paper_sets(self, client: AsyncClient) -> None:
        response = await client.get("/odds/sets")

        assert response.status_code == 200
        assert response.json() == {"sets": ["oth", "tst"], "count": 2}

    async def test_missing_feed_is_503(
        self, client: AsyncClient, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Without a downloaded feed the odds endpoints are unavailable."""
        from packodds.api.odds import booster_catalog_dependency

        def missing_feed() -> BoosterCatalog:
            raise FileNotFoundError("no feed")

        del app.dependency_overrides[booster_catalog_dependency]
        monkeypatch.setattr("packodds.api.odds.get_booster_catalog", missing_feed)

        response = await client.get("/odds/sets")

        assert response.status_code == 503
        assert response.json()["kind"] == "booster_data_unavailable"


class TestStoredWishlistOdds:
    async def test_odds_for_stored_wishlist(self, client: AsyncClient) -> None:
        """Each paper product reports its chance of a wishlist card."""
        await client.put("/wishlist/user-123", json={"cards": ["Rare One"]})

        response = await client.get("/odds/user-123/TST")

        assert response.status_code == 200
        data = response.json()
        assert data["set_code"] == "tst"
        assert data["wishlist_size"] == 1
        assert [p["pack_code"] for p in data["packs"]] == ["tst-draft", "tst-collector"]

        draft, collector = data["packs"]
        assert draft["variant_name"] == "draft"
        assert draft["odds_percent"] == pytest.approx(46.0)
        assert [b["odds_percent"] for b in draft["boosters"]] == [
            pytest.approx(40.0),
            pytest.approx(64.0),
        ]
        assert draft["boosters"][0]["sheets"] == {"common": 10, "rare": 1, "land": 1}
        assert draft["sheets"]["rare"]["total_target_weight"] == 2
        assert draft["sheets"]["rare"]["cards"] == [
            {"name": "Rare One", "code": "tst:11", "weight": 2, "foil": False}
        ]
        assert draft["cards_ranked_by_odds"][0]["set_code"] == "tst"
        assert draft["cards_ranked_by_odds"][0]["collector_number"] == "11"

        # Foil slot only: 1 in 4, rolled twice
        assert collector["odds_percent"] == pytest.approx(43.75)
        assert collector["sheets"]["rare"]["cards"][0]["code"] == "tst:11:foil"

    async def test_unknown_user_is_404(self, client: AsyncClient) -> None:
        response = await client.get("/odds/nobody/tst")

        assert response.status_code == 404
        data = response.json()
        assert data["kind"] == "not_found"
        assert "nobody" in data["message"]

    async def test_unknown_set_is_404(self, client: AsyncClient) -> None:
        await client.put("/wishlist/user-123", json={"cards": ["Rare One"]})

        response = await client.get("/odds/user-123/zzz")

        assert response.status_code == 404
        data = response.json()
        assert data["kind"] == "unknown_set"
        assert "zzz" in data["message"]

    async def test_wishlist_changes_apply_to_next_request(self, client: AsyncClient) -> None:
        """Odds are recomputed from the wishlist as it is now."""
        await client.put("/wishlist/user-123", json={"cards": ["Rare One"]})
        before = (await client.get("/odds/user-123/tst")).json()

        await client.put("/wishlist/user-123", json={"cards": ["Rare One", "Rare Two"]})
        after = (await client.get("/odds/user-123/tst")).json()

        assert before["packs"][0]["odds_percent"] == pytest.approx(46.0)
        assert after["packs"][0]["odds_percent"] == pytest.approx(100.0)


class TestInlineOdds:
    async def test_inline_wishlist(self, client: AsyncClient) -> None:
        """A face name finds a multi-faced print from a second source set."""
        response = await client.post("/odds/tst", json={"text": "1 Day Side"})

        assert response.status_code == 200
        packs = response.json()["packs"]
        assert packs[0]["odds_percent"] == 0.0
        assert packs[0]["cards_ranked_by_odds"] == []
        assert packs[1]["odds_percent"] == pytest.approx(50.0)
        assert packs[1]["cards_ranked_by_odds"][0]["name"] == "Day Side // Night Side"

    async def test_empty_wishlist_rejected(self, client: AsyncClient) -> None:
        response = await client.post("/odds/tst", json={"text": "# nothing\n"})

        assert response.status_code == 400
        assert response.json()["kind"] == "empty_wishlist"

    @respx.mock
    async def test_card_fetch_failure_is_502(
        self, client: AsyncClient, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Sets not yet loaded are fetched; a Scryfall failure surfaces as 502."""
        monkeypatch.setattr(settings, "card_cache_dir", tmp_path)
        app.dependency_overrides[get_card_catalog] = lambda: CardCatalog()
        respx.get("https://api.scryfall.com/cards/search").mock(
            return_value=httpx.Response(500)
        )

        response = await client.post("/odds/tst", json={"text": "Rare One"})

        assert response.status_code == 502
        assert response.json()["kind"] == "external_api_error"
