"""
Pack assembly.

Computes wishlist odds for every paper booster product of a set and ranks
the wishlist prints each product can contain.

Inputs are snapshots: nothing here mutates the booster catalog, the card
catalog or the wishlist, and results are rebuilt on every call.
"""

import logging
from collections.abc import Iterable, Mapping, Sequence

from packodds.analysis.booster_odds import product_odds
from packodds.analysis.card_odds import card_odds
from packodds.analysis.sheet_matcher import CardPredicate, match_product_sheets
from packodds.config import EXCLUDED_PRODUCT_CATEGORIES
from packodds.models.booster import PackProduct
from packodds.models.card import CardPrint
from packodds.models.pack_result import PackResult, RankedCard

logger = logging.getLogger(__name__)


def is_paper_product(product: PackProduct) -> bool:
    """Check that a product's name is not in an excluded (non-paper) category."""
    return not any(category in product.name for category in EXCLUDED_PRODUCT_CATEGORIES)


def products_for_set(products: Iterable[PackProduct], set_code: str) -> list[PackProduct]:
    """Paper products of a set, in feed order."""
    set_code = set_code.lower()
    return [p for p in products if p.set_code == set_code and is_paper_product(p)]


def possible_cards_for(
    product: PackProduct,
    cards_by_set: Mapping[str, Sequence[CardPrint]],
) -> list[CardPrint]:
    """
    All prints a product can draw from.

    Concatenates the catalog entries of every source set. A source set the
    catalog does not hold contributes nothing. A source set listed twice is
    counted twice.
    """
    possible: list[CardPrint] = []
    for source in product.source_set_codes:
        possible.extend(cards_by_set.get(source, ()))
    return possible


def assemble_pack(
    product: PackProduct,
    cards_by_set: Mapping[str, Sequence[CardPrint]],
    is_wanted: CardPredicate,
) -> PackResult:
    """
    Compute wishlist odds for one product.

    Args:
        product: A validated product
        cards_by_set: Card catalog snapshot, set code -> prints
        is_wanted: Wishlist membership predicate

    Returns:
        PackResult with prints ranked by probability (ties keep discovery order)
    """
    possible_cards = possible_cards_for(product, cards_by_set)
    matches = match_product_sheets(product.sheets, possible_cards, is_wanted)

    total_odds, per_booster = product_odds(product.boosters, matches.target_sheets)
    probabilities = card_odds(
        matches.odds_records, product.boosters, product.total_booster_weight
    )

    ranked = [
        RankedCard(card=matches.cards[key], probability=probability, discovery_index=index)
        for index, (key, probability) in enumerate(probabilities.items())
    ]
    ranked.sort(key=lambda r: (-r.probability, r.discovery_index))

    return PackResult(
        pack_name=product.name,
        pack_code=product.code,
        set_code=product.set_code,
        variant_name=product.variant_name,
        total_odds=total_odds,
        booster_odds=per_booster,
        sheets=matches.target_sheets,
        cards_ranked_by_odds=ranked,
    )


def assemble_packs(
    set_code: str,
    products: Iterable[PackProduct],
    cards_by_set: Mapping[str, Sequence[CardPrint]],
    is_wanted: CardPredicate,
) -> list[PackResult]:
    """
    Compute wishlist odds for every paper product of a set.

    Args:
        set_code: Set to report on (case-insensitive)
        products: Booster catalog products
        cards_by_set: Card catalog snapshot, set code -> prints
        is_wanted: Wishlist membership predicate

    Returns:
        One PackResult per paper product of the set, in feed order
    """
    results = [
        assemble_pack(product, cards_by_set, is_wanted)
        for product in products_for_set(products, set_code)
    ]

    logger.debug(
        "pack_odds_computed",
        extra={
            "set_code": set_code,
            "product_count": len(results),
            "products_with_hits": sum(1 for r in results if r.has_hits),
        },
    )

    return results
