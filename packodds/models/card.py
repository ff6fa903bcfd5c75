"""
Card print models.

A card print is one physical printing of a card. Many prints can share a
name (reprints, showcase variants), so prints are identified by value:
set code, collector number and face suffix.
"""

from dataclasses import dataclass, field

# Suffix appended to the sheet code of a multi-faced print's front face
FRONT_FACE_SUFFIX = "a"

FOIL_SUFFIX = ":foil"


@dataclass(frozen=True, slots=True, order=True)
class PrintKey:
    """
    Value identity of a card print.

    Attributes:
        set_code: Lowercase set code (e.g., "znr")
        collector_number: Collector number within the set (e.g., "123", "45s")
        face_suffix: Face suffix for multi-faced prints, empty otherwise
    """

    set_code: str
    collector_number: str
    face_suffix: str = ""

    @property
    def code(self) -> str:
        """Sheet code used by the booster feed (e.g., "znr:5a")."""
        return f"{self.set_code}:{self.collector_number}{self.face_suffix}"

    @property
    def foil_code(self) -> str:
        """Sheet code of the foil slot for this print."""
        return f"{self.code}{FOIL_SUFFIX}"


@dataclass(frozen=True, slots=True)
class CardPrint:
    """
    One printing of a card.

    Equality and hashing use the print key only; two records describing
    the same printing compare equal even when loaded separately.

    Attributes:
        key: Value identity (set, collector number, face)
        name: Full card name as printed (e.g., "Agadeem's Awakening // Agadeem, the Undercrypt")
        rarity: common, uncommon, rare, mythic or special
        games: Formats this print exists in (paper, arena, mtgo)
        multi_faced: True if the print has more than one face
        face_names: Names of the individual faces, empty for single-faced prints
    """

    key: PrintKey
    name: str = field(compare=False)
    rarity: str = field(default="common", compare=False)
    games: frozenset[str] = field(default_factory=frozenset, compare=False)
    multi_faced: bool = field(default=False, compare=False)
    face_names: tuple[str, ...] = field(default=(), compare=False)

    @property
    def set_code(self) -> str:
        return self.key.set_code

    @property
    def collector_number(self) -> str:
        return self.key.collector_number

    @property
    def code(self) -> str:
        return self.key.code

    @property
    def is_paper(self) -> bool:
        return "paper" in self.games

    def all_names(self) -> tuple[str, ...]:
        """Full name followed by each face name."""
        return (self.name, *self.face_names)
