"""
Parser for free-text wishlists.

Accepts one card per line in any of these shapes:
- "Lightning Bolt"
- "4 Lightning Bolt" or "4x Lightning Bolt" (quantity is dropped)
- "1 Lightning Bolt (LEB) 163" (Arena export; set and number are dropped)

Blank lines, comments ("#" or "//") and deck section headers are skipped.
Wishlists are not quantity-aware: every name appears once.
"""

import re

from packodds.models.wishlist import Wishlist, normalize_card_name

# Pattern: "4 Lightning Bolt" or "4x Lightning Bolt" or "4X Lightning Bolt"
# Groups: (card_name)
# Bare quantities are 1-3 digits so "1996 World Champion" keeps its number;
# an "x" suffix marks a quantity of any length
QUANTITY_PREFIX = re.compile(r"^(?:\d{1,3}|\d+x)\s+(.+)$", re.IGNORECASE)

# Pattern: "Lightning Bolt (LEB) 163" or "Lightning Bolt (LEB)"
ARENA_SUFFIX = re.compile(r"\s+\([A-Za-z0-9]{2,6}\)(\s+\S+)?$")

SECTION_HEADERS = frozenset(
    {"deck", "sideboard", "commander", "companion", "maybeboard", "about", "wishlist"}
)


def parse_wishlist_line(line: str) -> str | None:
    """
    Extract a card name from one line.

    Returns:
        The card name, or None for blank, comment and header lines.
    """
    line = " ".join(line.split())
    if not line or line.startswith(("#", "//")):
        return None

    if line.casefold() in SECTION_HEADERS:
        return None

    match = QUANTITY_PREFIX.match(line)
    if match:
        line = match.group(1)

    line = ARENA_SUFFIX.sub("", line).strip()
    return line or None


def parse_wishlist_names(text: str) -> list[str]:
    """
    Parse card names from text, in order, without duplicates.

    Duplicates are detected case-insensitively; the first spelling wins.
    """
    names: list[str] = []
    seen: set[str] = set()

    for raw_line in text.splitlines():
        name = parse_wishlist_line(raw_line)
        if name is None:
            continue
        key = normalize_card_name(name)
        if key in seen:
            continue
        seen.add(key)
        names.append(name)

    return names


def parse_wishlist_text(text: str) -> Wishlist:
    """Parse free text into a Wishlist."""
    return Wishlist(names=frozenset(parse_wishlist_names(text)))
