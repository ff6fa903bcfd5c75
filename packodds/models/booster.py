"""
Booster product models.

A product (e.g., "Zendikar Rising Set Booster") is a weighted mixture of
booster configurations. Each configuration rolls a number of cards from
one or more sheets, and each sheet is a weighted pool of card slots.

All models are frozen: the booster catalog is loaded once and shared
read-only between requests.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from packodds.models.card import CardPrint


@dataclass(frozen=True, slots=True)
class Sheet:
    """
    A weighted pool of card slots.

    Attributes:
        name: Sheet name within its product (e.g., "rare_mythic")
        total_weight: Denominator of a single weighted draw
        fixed: True if every entry is always included rather than drawn
        cards: Card code (optionally suffixed ":foil") -> weight
    """

    name: str
    total_weight: int
    fixed: bool = False
    cards: Mapping[str, int] = field(default_factory=lambda: MappingProxyType({}))

    @property
    def effective_total_weight(self) -> int:
        """Total weight used by odds formulas. Fixed sheets always use 1."""
        return 1 if self.fixed else self.total_weight


@dataclass(frozen=True, slots=True)
class BoosterConfig:
    """
    One booster variant within a product.

    Attributes:
        weight: Relative frequency of this variant within the product
        rolls: Sheet name -> number of independent draws from that sheet
    """

    weight: int
    rolls: Mapping[str, int] = field(default_factory=lambda: MappingProxyType({}))


@dataclass(frozen=True, slots=True)
class PackProduct:
    """
    A retail booster product.

    Attributes:
        name: Display name (e.g., "Zendikar Rising Set Booster")
        code: Product code (e.g., "znr-set")
        set_code: Set the product belongs to
        source_set_codes: Sets the product's cards are pooled from
        sheets: Sheet name -> Sheet
        boosters: Booster variants of the product
    """

    name: str
    code: str
    set_code: str
    source_set_codes: tuple[str, ...]
    sheets: Mapping[str, Sheet]
    boosters: tuple[BoosterConfig, ...]

    @property
    def total_booster_weight(self) -> int:
        return sum(booster.weight for booster in self.boosters)

    @property
    def variant_name(self) -> str:
        """
        Product variant derived from the code.

        "znr-set" -> "set", "znr-collector" -> "collector", "znr" -> "default".
        """
        prefix = f"{self.set_code}-"
        if self.code.startswith(prefix):
            return self.code[len(prefix) :]
        return "default"


@dataclass(frozen=True, slots=True)
class TargetEntry:
    """A wishlist print found on a sheet."""

    card: CardPrint
    weight: int
    foil: bool


@dataclass(slots=True)
class TargetSheet:
    """
    The wishlist-restricted view of a sheet.

    Built fresh for every wishlist snapshot.

    Attributes:
        total_weight: Effective total weight of the source sheet (1 for fixed sheets)
        fixed: Copied from the source sheet
        total_target_weight: Sum of weights of entries matching the wishlist
        target_entries: Matching entries in discovery order
    """

    total_weight: int
    fixed: bool = False
    total_target_weight: int = 0
    target_entries: list[TargetEntry] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class OddsRecord:
    """
    Chance of drawing one print from a single roll of one sheet.

    Attributes:
        sheet_name: Sheet the print was found on
        foil: True if the entry is the sheet's foil slot for the print
        odds: Percent chance per roll; may exceed 100 on fixed sheets
    """

    sheet_name: str
    foil: bool
    odds: float
