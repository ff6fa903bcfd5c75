from dataclasses import dataclass, field

from packodds.models.card import CardPrint


def normalize_card_name(name: str) -> str:
    """Case-fold and collapse whitespace for name comparison."""
    return " ".join(name.split()).casefold()


@dataclass(frozen=True)
class Wishlist:
    """
    An immutable, deduplicated set of wanted card names.

    Quantities are not tracked. Matching is case-insensitive and accepts
    either the full name of a multi-faced card ("A // B") or any face name.
    """

    names: frozenset[str] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "_normalized", frozenset(normalize_card_name(n) for n in self.names)
        )

    def __contains__(self, card_name: object) -> bool:
        if not isinstance(card_name, str):
            return False
        normalized: frozenset[str] = self._normalized  # type: ignore[attr-defined]
        return normalize_card_name(card_name) in normalized

    def __len__(self) -> int:
        return len(self.names)

    def matches(self, card: CardPrint) -> bool:
        """Check if any name of a print is on the wishlist."""
        return any(name in self for name in card.all_names())

    def with_names(self, *names: str) -> "Wishlist":
        """Return a new wishlist with extra names added."""
        return Wishlist(names=self.names | frozenset(names))

    def is_empty(self) -> bool:
        return not self.names
