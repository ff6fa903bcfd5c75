from types import MappingProxyType

import pytest

from packodds.analysis.card_odds import card_booster_probability, card_odds
from packodds.models.booster import BoosterConfig, OddsRecord
from packodds.models.card import PrintKey


def _booster(weight: int, **rolls: int) -> BoosterConfig:
    return BoosterConfig(weight=weight, rolls=MappingProxyType(rolls))


class TestCardBoosterProbability:
    def test_two_sheets_ten_percent_each(self) -> None:
        """A card on two sheets rolled once each: 1 - 0.9 * 0.9."""
        records = [
            OddsRecord(sheet_name="rare", foil=False, odds=10.0),
            OddsRecord(sheet_name="foil", foil=True, odds=10.0),
        ]

        probability = card_booster_probability(records, _booster(1, rare=1, foil=1))

        assert probability == pytest.approx(0.19)

    def test_rolls_raise_miss_to_power(self) -> None:
        records = [OddsRecord(sheet_name="common", foil=False, odds=10.0)]

        probability = card_booster_probability(records, _booster(1, common=3))

        assert probability == pytest.approx(0.271)

    def test_records_on_unrolled_sheets_ignored(self) -> None:
        """A booster that never rolls the card's sheet can't contain it."""
        records = [OddsRecord(sheet_name="bonus", foil=False, odds=50.0)]

        assert card_booster_probability(records, _booster(1, common=10)) == 0.0

    def test_fixed_sheet_over_hundred_percent_is_certain(self) -> None:
        """Odds above 100% from fixed sheets still give a probability of 1."""
        records = [OddsRecord(sheet_name="land", foil=False, odds=200.0)]

        assert card_booster_probability(records, _booster(1, land=1)) == 1.0


class TestCardOdds:
    def test_weighted_across_boosters(self) -> None:
        """Per-booster chances are mixed by booster weight."""
        key = PrintKey("tst", "1")
        records = {key: [OddsRecord(sheet_name="rare", foil=False, odds=40.0)]}
        boosters = [_booster(3, rare=1), _booster(1, rare=2)]

        result = card_odds(records, boosters, total_weight=4)

        assert result[key] == pytest.approx(0.4 * 0.75 + 0.64 * 0.25)

    def test_total_weight_defaults_to_sum(self) -> None:
        key = PrintKey("tst", "1")
        records = {key: [OddsRecord(sheet_name="rare", foil=False, odds=100.0)]}
        boosters = [_booster(1, rare=1), _booster(1, common=1)]

        assert card_odds(records, boosters)[key] == pytest.approx(0.5)

    def test_keeps_record_order(self) -> None:
        """Results follow the order of the odds records."""
        first, second = PrintKey("tst", "2"), PrintKey("tst", "1")
        records = {
            first: [OddsRecord(sheet_name="rare", foil=False, odds=5.0)],
            second: [OddsRecord(sheet_name="rare", foil=False, odds=50.0)],
        }

        result = card_odds(records, [_booster(1, rare=1)])

        assert list(result) == [first, second]

    def test_values_in_range(self) -> None:
        key = PrintKey("tst", "1")
        records = {
            key: [
                OddsRecord(sheet_name="a", foil=False, odds=99.0),
                OddsRecord(sheet_name="b", foil=True, odds=150.0),
            ]
        }
        boosters = [_booster(5, a=1), _booster(2, a=1, b=1)]

        assert 0.0 <= card_odds(records, boosters)[key] <= 1.0
