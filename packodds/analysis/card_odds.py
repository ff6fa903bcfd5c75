"""
Per-card odds.

Chance of opening one specific wishlist print in a single pack, across all
of the product's booster configurations.
"""

from collections.abc import Mapping, Sequence

from packodds.models.booster import BoosterConfig, OddsRecord
from packodds.models.card import PrintKey


def _roll_miss(record: OddsRecord) -> float:
    # Fixed sheets can report more than 100%; a roll can't miss less than never
    return min(1.0, max(0.0, 1.0 - record.odds / 100.0))


def card_booster_probability(records: Sequence[OddsRecord], booster: BoosterConfig) -> float:
    """
    Chance (0.0-1.0) that one booster contains a print.

    Only records on sheets this booster rolls count. Records are treated as
    independent, so two records on rolled sheets multiply into the miss term.
    """
    miss = 1.0
    for record in records:
        rolls = booster.rolls.get(record.sheet_name, 0)
        if rolls:
            miss *= _roll_miss(record) ** rolls

    return 1.0 - miss


def card_odds(
    odds_records: Mapping[PrintKey, Sequence[OddsRecord]],
    boosters: Sequence[BoosterConfig],
    total_weight: int | None = None,
) -> dict[PrintKey, float]:
    """
    Chance (0.0-1.0) of opening each print at least once in one pack.

    Args:
        odds_records: Print key -> per-sheet odds from sheet matching
        boosters: The product's booster configurations
        total_weight: Sum of booster weights (computed if omitted)

    Returns:
        Print key -> probability, in the order of `odds_records`
    """
    if total_weight is None:
        total_weight = sum(booster.weight for booster in boosters)

    probabilities: dict[PrintKey, float] = {}
    for key, records in odds_records.items():
        probabilities[key] = sum(
            card_booster_probability(records, booster) * (booster.weight / total_weight)
            for booster in boosters
        )

    return probabilities
