from packodds.parsers.booster_feed import (
    parse_booster,
    parse_booster_feed,
    parse_product,
    parse_sheet,
)
from packodds.parsers.scryfall import parse_card, parse_paper_cards
from packodds.parsers.wishlist_import import (
    parse_wishlist_line,
    parse_wishlist_names,
    parse_wishlist_text,
)

__all__ = [
    "parse_booster",
    "parse_booster_feed",
    "parse_card",
    "parse_paper_cards",
    "parse_product",
    "parse_sheet",
    "parse_wishlist_line",
    "parse_wishlist_names",
    "parse_wishlist_text",
]
