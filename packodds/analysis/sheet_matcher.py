"""
Sheet matching.

Cross-references wishlist card prints against a product's sheets to build
the wishlist view of each sheet, and records the per-roll chance of every
matched print on every sheet it appears on.
"""

from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass, field

from packodds.models.booster import OddsRecord, Sheet, TargetEntry, TargetSheet
from packodds.models.card import CardPrint, PrintKey

CardPredicate = Callable[[CardPrint], bool]


@dataclass
class SheetMatches:
    """
    Result of matching a product's sheets against a wishlist.

    Attributes:
        target_sheets: Sheet name -> wishlist view of the sheet
        odds_records: Print key -> per-sheet odds for that print
        cards: Print key -> print, in first-discovery order
    """

    target_sheets: dict[str, TargetSheet] = field(default_factory=dict)
    odds_records: dict[PrintKey, list[OddsRecord]] = field(default_factory=dict)
    cards: dict[PrintKey, CardPrint] = field(default_factory=dict)

    def record(self, card: CardPrint, odds_record: OddsRecord) -> None:
        """Append an odds record for a print, remembering when it was first seen."""
        if card.key not in self.cards:
            self.cards[card.key] = card
            self.odds_records[card.key] = []
        self.odds_records[card.key].append(odds_record)


def match_sheet(
    sheet: Sheet,
    wanted_cards: Iterable[CardPrint],
    matches: SheetMatches,
) -> TargetSheet:
    """
    Build the wishlist view of one sheet.

    Each wanted print is looked up by its sheet code and by its foil code.
    Every hit becomes a target entry, adds to the sheet's target weight and
    records the print's per-roll odds in `matches`.

    Fixed sheets use a total weight of 1, so a fixed sheet holding several
    wanted entries can report more than 100% combined odds. That value is
    kept as-is.

    Args:
        sheet: The sheet to match
        wanted_cards: Prints already filtered to the wishlist
        matches: Shared accumulator for the product being matched

    Returns:
        The sheet's TargetSheet (empty if nothing matched)
    """
    total_weight = sheet.effective_total_weight
    target = TargetSheet(total_weight=total_weight, fixed=sheet.fixed)

    for card in wanted_cards:
        for code, foil in ((card.key.code, False), (card.key.foil_code, True)):
            weight = sheet.cards.get(code)
            if weight is None:
                continue

            target.target_entries.append(TargetEntry(card=card, weight=weight, foil=foil))
            target.total_target_weight += weight
            matches.record(
                card,
                OddsRecord(
                    sheet_name=sheet.name,
                    foil=foil,
                    odds=weight / total_weight * 100.0,
                ),
            )

    return target


def match_product_sheets(
    sheets: Mapping[str, Sheet],
    possible_cards: Sequence[CardPrint],
    is_wanted: CardPredicate,
) -> SheetMatches:
    """
    Match every sheet of a product against the wishlist.

    Args:
        sheets: The product's sheets, by name
        possible_cards: Prints from all of the product's source sets
        is_wanted: Wishlist membership predicate

    Returns:
        SheetMatches with one TargetSheet per sheet, including empty ones
    """
    wanted = [card for card in possible_cards if is_wanted(card)]
    matches = SheetMatches()

    for name, sheet in sheets.items():
        matches.target_sheets[name] = match_sheet(sheet, wanted, matches)

    return matches
