from packodds.db.database import get_session, init_db
from packodds.db.operations import (
    add_wishlist_cards,
    create_wishlist,
    delete_wishlist,
    get_or_create_wishlist,
    get_wishlist,
    replace_wishlist_cards,
    wishlist_card_names,
    wishlist_to_model,
)

__all__ = [
    "add_wishlist_cards",
    "create_wishlist",
    "delete_wishlist",
    "get_or_create_wishlist",
    "get_session",
    "get_wishlist",
    "init_db",
    "replace_wishlist_cards",
    "wishlist_card_names",
    "wishlist_to_model",
]
