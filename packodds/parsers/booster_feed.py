"""
Booster reference feed parser.

Turns raw feed records into validated PackProduct models. The feed is
trusted but externally authored, so every product is checked once here;
the odds engine assumes validated input and never re-checks.

Feed record shape:
    {
        "name": "Zendikar Rising Set Booster",
        "code": "znr-set",
        "set_code": "znr",
        "source_set_codes": ["znr", "zne"],
        "sheets": {
            "rare": {"total_weight": 80, "cards": {"znr:1": 2, "znr:1:foil": 1}},
            "land": {"total_weight": 1, "fixed": true, "cards": {"znr:266": 1}},
        },
        "boosters": [{"weight": 3, "sheets": {"rare": 1, "land": 1}}],
    }
"""

from collections.abc import Iterable, Mapping
from types import MappingProxyType
from typing import Any

from packodds.config import (
    MAX_BOOSTERS_PER_PRODUCT,
    MAX_ENTRIES_PER_SHEET,
    MAX_ROLLS_PER_SHEET,
    MAX_SHEETS_PER_PRODUCT,
)
from packodds.models.booster import BoosterConfig, PackProduct, Sheet
from packodds.models.failure import BoosterDataError


def _require_int(value: Any, product_code: str, what: str, minimum: int = 0) -> int:
    """Validate a non-negative integer field (bools are rejected)."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise BoosterDataError(product_code, f"{what} must be an integer, got {value!r}")
    if value < minimum:
        raise BoosterDataError(product_code, f"{what} must be >= {minimum}, got {value}")
    return value


def parse_sheet(product_code: str, sheet_name: str, raw: Mapping[str, Any]) -> Sheet:
    """
    Parse and validate one sheet.

    Raises:
        BoosterDataError: If weights are missing, negative, or inconsistent
    """
    raw_cards = raw.get("cards")
    if not isinstance(raw_cards, Mapping):
        raise BoosterDataError(product_code, f"sheet '{sheet_name}' has no cards table")
    if len(raw_cards) > MAX_ENTRIES_PER_SHEET:
        raise BoosterDataError(
            product_code,
            f"sheet '{sheet_name}' has {len(raw_cards)} entries (limit {MAX_ENTRIES_PER_SHEET})",
        )

    cards: dict[str, int] = {}
    for card_code, weight in raw_cards.items():
        cards[str(card_code).lower()] = _require_int(
            weight, product_code, f"weight of '{card_code}' on sheet '{sheet_name}'"
        )

    fixed = bool(raw.get("fixed", False))
    entry_weight = sum(cards.values())

    if fixed:
        # Fixed sheets are not drawn from; the declared total is informational
        total_weight = _require_int(
            raw.get("total_weight", entry_weight),
            product_code,
            f"total_weight of sheet '{sheet_name}'",
        )
    else:
        if "total_weight" not in raw:
            raise BoosterDataError(product_code, f"sheet '{sheet_name}' has no total_weight")
        total_weight = _require_int(
            raw["total_weight"],
            product_code,
            f"total_weight of sheet '{sheet_name}'",
            minimum=1,
        )
        if entry_weight > total_weight:
            raise BoosterDataError(
                product_code,
                f"sheet '{sheet_name}' entries weigh {entry_weight}, "
                f"more than its total_weight {total_weight}",
            )

    return Sheet(
        name=sheet_name,
        total_weight=total_weight,
        fixed=fixed,
        cards=MappingProxyType(cards),
    )


def parse_booster(
    product_code: str,
    index: int,
    raw: Mapping[str, Any],
    sheets: Mapping[str, Sheet],
) -> BoosterConfig:
    """
    Parse and validate one booster configuration.

    Every rolled sheet must exist in the product's sheet table. A missing
    sheet is reported, never treated as zero rolls.
    """
    weight = _require_int(raw.get("weight"), product_code, f"weight of booster #{index}")

    raw_rolls = raw.get("sheets")
    if not isinstance(raw_rolls, Mapping):
        raise BoosterDataError(product_code, f"booster #{index} has no sheets table")

    rolls: dict[str, int] = {}
    for sheet_name, count in raw_rolls.items():
        if sheet_name not in sheets:
            raise BoosterDataError(
                product_code,
                f"booster #{index} rolls unknown sheet '{sheet_name}'",
            )
        count = _require_int(count, product_code, f"roll count of sheet '{sheet_name}'")
        if count > MAX_ROLLS_PER_SHEET:
            raise BoosterDataError(
                product_code,
                f"booster #{index} rolls sheet '{sheet_name}' {count} times "
                f"(limit {MAX_ROLLS_PER_SHEET})",
            )
        rolls[sheet_name] = count

    return BoosterConfig(weight=weight, rolls=MappingProxyType(rolls))


def parse_product(raw: Mapping[str, Any]) -> PackProduct:
    """
    Parse and validate one feed record.

    Returns:
        A frozen PackProduct ready for the odds engine

    Raises:
        BoosterDataError: If the record is malformed
    """
    product_code = str(raw.get("code") or raw.get("name") or "<unnamed>")

    for required in ("name", "code", "set_code"):
        if not raw.get(required):
            raise BoosterDataError(product_code, f"missing required field '{required}'")

    raw_sheets = raw.get("sheets")
    if not isinstance(raw_sheets, Mapping):
        raise BoosterDataError(product_code, "missing sheets table")
    if len(raw_sheets) > MAX_SHEETS_PER_PRODUCT:
        raise BoosterDataError(
            product_code,
            f"{len(raw_sheets)} sheets (limit {MAX_SHEETS_PER_PRODUCT})",
        )

    raw_boosters = raw.get("boosters")
    if not isinstance(raw_boosters, list) or not raw_boosters:
        raise BoosterDataError(product_code, "missing boosters list")
    if len(raw_boosters) > MAX_BOOSTERS_PER_PRODUCT:
        raise BoosterDataError(
            product_code,
            f"{len(raw_boosters)} boosters (limit {MAX_BOOSTERS_PER_PRODUCT})",
        )

    sheets = {
        name: parse_sheet(product_code, name, sheet_raw) for name, sheet_raw in raw_sheets.items()
    }
    boosters = tuple(
        parse_booster(product_code, i, booster_raw, sheets)
        for i, booster_raw in enumerate(raw_boosters)
    )

    if sum(b.weight for b in boosters) <= 0:
        raise BoosterDataError(product_code, "booster weights sum to zero")

    set_code = str(raw["set_code"]).lower()
    source_set_codes = tuple(str(code).lower() for code in raw.get("source_set_codes") or ())

    return PackProduct(
        name=str(raw["name"]),
        code=str(raw["code"]),
        set_code=set_code,
        source_set_codes=source_set_codes or (set_code,),
        sheets=MappingProxyType(sheets),
        boosters=boosters,
    )


def parse_booster_feed(records: Iterable[Mapping[str, Any]]) -> list[PackProduct]:
    """
    Parse every product in the feed, in feed order.

    Fails fast: the first malformed product raises BoosterDataError.
    """
    return [parse_product(record) for record in records]
