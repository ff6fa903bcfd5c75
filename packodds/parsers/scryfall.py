"""
Scryfall card parser.

Converts Scryfall card objects into CardPrint models.

Card objects: https://scryfall.com/docs/api/cards
"""

from collections.abc import Iterable
from typing import Any, TypedDict

from packodds.models.card import FRONT_FACE_SUFFIX, CardPrint, PrintKey

VALID_RARITIES = frozenset({"common", "uncommon", "rare", "mythic", "special", "bonus"})


def _normalize_rarity(rarity: str) -> str:
    """Normalize rarity to one of the Scryfall rarities, defaulting to common."""
    return rarity if rarity in VALID_RARITIES else "common"


class ScryfallCard(TypedDict, total=False):
    """The fields of a Scryfall card object we read."""

    name: str
    set: str
    collector_number: str
    rarity: str
    games: list[str]
    card_faces: list[dict[str, Any]]


def parse_card(card: ScryfallCard | dict[str, Any]) -> CardPrint:
    """
    Build a CardPrint from a Scryfall card object.

    Multi-faced prints get the front-face suffix so their sheet code matches
    the booster feed (e.g., "znr:5a").

    Raises:
        KeyError: If name, set or collector_number is missing
    """
    faces = card.get("card_faces") or []
    multi_faced = len(faces) > 1

    key = PrintKey(
        set_code=str(card["set"]).lower(),
        collector_number=str(card["collector_number"]),
        face_suffix=FRONT_FACE_SUFFIX if multi_faced else "",
    )

    return CardPrint(
        key=key,
        name=card["name"],
        rarity=_normalize_rarity(card.get("rarity", "common")),
        games=frozenset(card.get("games") or ()),
        multi_faced=multi_faced,
        face_names=tuple(face["name"] for face in faces if face.get("name")) if multi_faced else (),
    )


def parse_paper_cards(cards: Iterable[ScryfallCard | dict[str, Any]]) -> list[CardPrint]:
    """
    Parse Scryfall card objects, keeping only prints that exist in paper.

    Order is preserved; the same print seen twice is kept once.
    """
    prints: list[CardPrint] = []
    seen: set[PrintKey] = set()

    for raw in cards:
        card = parse_card(raw)
        if not card.is_paper or card.key in seen:
            continue
        seen.add(card.key)
        prints.append(card)

    return prints
