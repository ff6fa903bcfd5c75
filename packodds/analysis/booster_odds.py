"""
Booster odds.

Chance that a booster contains at least one wishlist card. Sheets are
treated as independent, and every roll re-samples the whole sheet (draws
with replacement).
"""

from collections.abc import Mapping, Sequence

from packodds.models.booster import BoosterConfig, TargetSheet
from packodds.models.pack_result import BoosterOdds


def sheet_miss_probability(target: TargetSheet) -> float:
    """
    Chance that a single roll of a sheet misses every wishlist entry.

    A fixed sheet always contains all of its entries: it misses only when
    none of them are wanted.

    A print reachable through a repeated source set counts once per
    repeat, so target weight can exceed the sheet total; the miss chance
    never drops below 0.
    """
    if target.fixed:
        return 0.0 if target.total_target_weight > 0 else 1.0

    return max(0.0, 1.0 - target.total_target_weight / target.total_weight)


def booster_odds(booster: BoosterConfig, target_sheets: Mapping[str, TargetSheet]) -> float:
    """
    Chance (0.0-1.0) that one booster contains a wishlist card.

    Args:
        booster: The booster configuration
        target_sheets: Wishlist views of the product's sheets

    Returns:
        1 - product over rolled sheets of (miss per roll) ^ rolls
    """
    miss = 1.0
    for sheet_name, rolls in booster.rolls.items():
        miss *= sheet_miss_probability(target_sheets[sheet_name]) ** rolls

    return 1.0 - miss


def product_odds(
    boosters: Sequence[BoosterConfig],
    target_sheets: Mapping[str, TargetSheet],
) -> tuple[float, list[BoosterOdds]]:
    """
    Chance that one pack of a product contains a wishlist card.

    Each booster's odds are weighted by how often that variant appears in
    the product.

    Returns:
        Tuple of (product odds, per-booster odds in product order)
    """
    total_weight = sum(booster.weight for booster in boosters)
    per_booster = [
        BoosterOdds(config=booster, odds=booster_odds(booster, target_sheets))
        for booster in boosters
    ]

    total = sum(item.odds * (item.config.weight / total_weight) for item in per_booster)
    return total, per_booster
