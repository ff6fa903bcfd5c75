from packodds.analysis.booster_odds import booster_odds, product_odds, sheet_miss_probability
from packodds.analysis.card_odds import card_booster_probability, card_odds
from packodds.analysis.pack_assembler import (
    assemble_pack,
    assemble_packs,
    is_paper_product,
    possible_cards_for,
    products_for_set,
)
from packodds.analysis.sheet_matcher import SheetMatches, match_product_sheets, match_sheet

__all__ = [
    "SheetMatches",
    "assemble_pack",
    "assemble_packs",
    "booster_odds",
    "card_booster_probability",
    "card_odds",
    "is_paper_product",
    "match_product_sheets",
    "match_sheet",
    "possible_cards_for",
    "product_odds",
    "products_for_set",
    "sheet_miss_probability",
]
