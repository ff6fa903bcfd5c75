"""Tests for the download jobs."""

import json
from pathlib import Path
from unittest.mock import AsyncMock, patch

import pytest

from packodds.jobs import download_boosters, download_cards
from packodds.services.booster_catalog import BoosterCatalog


class TestDownloadBoosters:
    async def test_downloads_and_validates(self, feed_file: Path) -> None:
        """The downloaded feed is loaded to check it validates."""
        with patch(
            "packodds.jobs.download_boosters.download_booster_feed",
            new_callable=AsyncMock,
            return_value=feed_file,
        ) as mock_download:
            await download_boosters.run_download()

        mock_download.assert_awaited_once()

    async def test_download_failure_propagates(self) -> None:
        import httpx

        with (
            patch(
                "packodds.jobs.download_boosters.download_booster_feed",
                new_callable=AsyncMock,
                side_effect=httpx.ConnectError("offline"),
            ),
            pytest.raises(httpx.ConnectError),
        ):
            await download_boosters.run_download()


class TestDownloadCards:
    async def test_caches_each_set(self, tmp_path: Path) -> None:
        records = [{"name": "Rare One", "set": "tst", "collector_number": "11"}]

        with (
            patch(
                "packodds.jobs.download_cards.fetch_set_records",
                new_callable=AsyncMock,
                return_value=records,
            ),
            patch(
                "packodds.jobs.download_cards.save_set_cache",
                side_effect=lambda code, recs: tmp_path / f"{code}.json",
            ) as mock_save,
        ):
            results = await download_cards.run_download(["tst", "tsx"])

        assert results == {"tst": 1, "tsx": 1}
        assert mock_save.call_count == 2

    def test_resolve_set_codes_plain(self) -> None:
        assert download_cards.resolve_set_codes(["TST"], from_feed=False) == ["tst"]

    def test_resolve_set_codes_from_feed(self, booster_catalog: BoosterCatalog) -> None:
        """Source sets of the set's paper products are expanded."""
        with patch(
            "packodds.jobs.download_cards.load_booster_catalog",
            return_value=booster_catalog,
        ):
            codes = download_cards.resolve_set_codes(["tst", "oth"], from_feed=True)

        assert codes == ["tst", "tsx", "oth"]

    def test_cache_file_is_json_list(self, tmp_path: Path) -> None:
        from packodds.services.card_catalog import save_set_cache

        path = save_set_cache("tst", [{"name": "A"}], cache_dir=tmp_path)

        assert json.loads(path.read_text(encoding="utf-8")) == [{"name": "A"}]
