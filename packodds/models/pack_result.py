from dataclasses import dataclass, field

from packodds.models.booster import BoosterConfig, TargetSheet
from packodds.models.card import CardPrint


@dataclass(frozen=True, slots=True)
class RankedCard:
    """
    A wishlist print with its chance of being opened in one pack.

    Attributes:
        card: The print
        probability: Chance (0.0-1.0) of pulling the print at least once
        discovery_index: Order in which the print was first matched; breaks ties
    """

    card: CardPrint
    probability: float
    discovery_index: int

    @property
    def percent(self) -> float:
        return self.probability * 100.0


@dataclass(frozen=True, slots=True)
class BoosterOdds:
    """Chance that one booster configuration contains a wishlist card."""

    config: BoosterConfig
    odds: float


@dataclass
class PackResult:
    """
    Wishlist odds for one booster product.

    Attributes:
        pack_name: Product display name
        pack_code: Product code
        set_code: Set the product belongs to
        variant_name: Product variant (e.g., "draft", "set", "collector")
        total_odds: Chance (0.0-1.0) that one pack contains any wishlist card
        booster_odds: Per-configuration odds, in product order
        sheets: Sheet name -> wishlist view of that sheet
        cards_ranked_by_odds: Wishlist prints, most likely first
    """

    pack_name: str
    pack_code: str
    set_code: str
    variant_name: str
    total_odds: float
    booster_odds: list[BoosterOdds] = field(default_factory=list)
    sheets: dict[str, TargetSheet] = field(default_factory=dict)
    cards_ranked_by_odds: list[RankedCard] = field(default_factory=list)

    @property
    def odds_percent(self) -> float:
        return self.total_odds * 100.0

    @property
    def has_hits(self) -> bool:
        """True if any wishlist card can be opened from this product."""
        return bool(self.cards_ranked_by_odds)
