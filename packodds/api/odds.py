"""
Odds API endpoints.

Reports, for each paper booster product of a set, the chance of opening
any wishlist card and which wishlist prints are most likely.

Each request takes a snapshot of the card catalog and the wishlist before
computing, and nothing is cached between requests.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from packodds.analysis.pack_assembler import assemble_packs
from packodds.db import get_wishlist, wishlist_to_model
from packodds.db.database import get_session
from packodds.models.failure import FailureKind, KnownError
from packodds.models.pack_result import PackResult
from packodds.models.wishlist import Wishlist
from packodds.parsers.wishlist_import import parse_wishlist_text
from packodds.services.booster_catalog import BoosterCatalog, get_booster_catalog
from packodds.services.card_catalog import CardCatalog, get_card_catalog

router = APIRouter(prefix="/odds", tags=["odds"])


class CardOddsResponse(BaseModel):
    """One wishlist print and its chance per pack."""

    name: str
    set_code: str
    collector_number: str
    rarity: str
    odds_percent: float


class BoosterResponse(BaseModel):
    """One booster configuration of a product."""

    weight: int
    sheets: dict[str, int] = Field(default_factory=dict, description="Sheet name -> rolls")
    odds_percent: float


class TargetCardResponse(BaseModel):
    """A wishlist entry on a sheet."""

    name: str
    code: str
    weight: int
    foil: bool


class SheetResponse(BaseModel):
    """Wishlist view of one sheet."""

    total_weight: int
    total_target_weight: int
    fixed: bool
    cards: list[TargetCardResponse] = Field(default_factory=list)


class PackResultResponse(BaseModel):
    """Wishlist odds for one booster product."""

    pack_name: str
    pack_code: str
    set_code: str
    variant_name: str
    boosters: list[BoosterResponse] = Field(default_factory=list)
    sheets: dict[str, SheetResponse] = Field(default_factory=dict)
    odds_percent: float
    cards_ranked_by_odds: list[CardOddsResponse] = Field(default_factory=list)


class SetOddsResponse(BaseModel):
    """Odds for every paper product of a set."""

    set_code: str
    wishlist_size: int
    packs: list[PackResultResponse]


class SetListResponse(BaseModel):
    """Sets with paper booster products."""

    sets: list[str]
    count: int


class InlineOddsRequest(BaseModel):
    """Request model for odds on a wishlist that isn't stored."""

    text: str = Field(
        ...,
        description="Wishlist text, one card per line",
        examples=["Sheoldred, the Apocalypse\nLiliana of the Veil"],
    )


def booster_catalog_dependency() -> BoosterCatalog:
    """Booster catalog, or 503 if the feed hasn't been downloaded."""
    try:
        return get_booster_catalog()
    except FileNotFoundError as e:
        raise KnownError(
            kind=FailureKind.BOOSTER_DATA_UNAVAILABLE,
            message="Booster data not available. Please try again later.",
            detail=str(e),
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        ) from e


def pack_result_to_response(result: PackResult) -> PackResultResponse:
    """Convert an engine result to its API shape."""
    return PackResultResponse(
        pack_name=result.pack_name,
        pack_code=result.pack_code,
        set_code=result.set_code,
        variant_name=result.variant_name,
        boosters=[
            BoosterResponse(
                weight=b.config.weight,
                sheets=dict(b.config.rolls),
                odds_percent=b.odds * 100.0,
            )
            for b in result.booster_odds
        ],
        sheets={
            name: SheetResponse(
                total_weight=sheet.total_weight,
                total_target_weight=sheet.total_target_weight,
                fixed=sheet.fixed,
                cards=[
                    TargetCardResponse(
                        name=entry.card.name,
                        code=entry.card.key.foil_code if entry.foil else entry.card.code,
                        weight=entry.weight,
                        foil=entry.foil,
                    )
                    for entry in sheet.target_entries
                ],
            )
            for name, sheet in result.sheets.items()
        },
        odds_percent=result.odds_percent,
        cards_ranked_by_odds=[
            CardOddsResponse(
                name=ranked.card.name,
                set_code=ranked.card.set_code,
                collector_number=ranked.card.collector_number,
                rarity=ranked.card.rarity,
                odds_percent=ranked.percent,
            )
            for ranked in result.cards_ranked_by_odds
        ],
    )


async def compute_set_odds(
    set_code: str,
    wishlist: Wishlist,
    boosters: BoosterCatalog,
    cards: CardCatalog,
) -> SetOddsResponse:
    """
    Load the card sets a set's products draw from, then compute odds.

    Raises:
        KnownError: 404 (unknown_set) if the feed has no products for the set
        CardFetchError: If a needed card set can't be fetched
    """
    set_code = set_code.lower()
    if not boosters.has_set(set_code):
        raise KnownError(
            kind=FailureKind.UNKNOWN_SET,
            message=f"No booster products found for set '{set_code}'",
            suggestion="GET /odds/sets lists the sets with paper boosters.",
            status_code=status.HTTP_404_NOT_FOUND,
        )

    await cards.ensure_sets(boosters.source_set_codes(set_code))
    snapshot = cards.snapshot()

    results = assemble_packs(set_code, boosters, snapshot, wishlist.matches)
    return SetOddsResponse(
        set_code=set_code,
        wishlist_size=len(wishlist),
        packs=[pack_result_to_response(r) for r in results],
    )


@router.get("/sets", response_model=SetListResponse)
async def list_sets(
    boosters: Annotated[BoosterCatalog, Depends(booster_catalog_dependency)],
) -> SetListResponse:
    """List sets that have at least one paper booster product."""
    sets = boosters.paper_set_codes()
    return SetListResponse(sets=sets, count=len(sets))


@router.get("/{user_id}/{set_code}", response_model=SetOddsResponse)
async def get_wishlist_odds(
    user_id: str,
    set_code: str,
    session: Annotated[AsyncSession, Depends(get_session)],
    boosters: Annotated[BoosterCatalog, Depends(booster_catalog_dependency)],
    cards: Annotated[CardCatalog, Depends(get_card_catalog)],
) -> SetOddsResponse:
    """
    Odds for a user's stored wishlist.

    Returns 404 if the user has no wishlist or the set has no products.
    """
    db_wishlist = await get_wishlist(session, user_id)
    if db_wishlist is None:
        raise KnownError(
            kind=FailureKind.NOT_FOUND,
            message=f"No wishlist found for user '{user_id}'",
            suggestion="Create one with PUT /wishlist/{user_id}.",
            status_code=status.HTTP_404_NOT_FOUND,
        )

    wishlist = wishlist_to_model(db_wishlist)
    return await compute_set_odds(set_code, wishlist, boosters, cards)


@router.post("/{set_code}", response_model=SetOddsResponse)
async def get_inline_odds(
    set_code: str,
    request: InlineOddsRequest,
    boosters: Annotated[BoosterCatalog, Depends(booster_catalog_dependency)],
    cards: Annotated[CardCatalog, Depends(get_card_catalog)],
) -> SetOddsResponse:
    """Odds for a wishlist given in the request body. Nothing is stored."""
    wishlist = parse_wishlist_text(request.text)
    if wishlist.is_empty():
        raise KnownError(
            kind=FailureKind.EMPTY_WISHLIST,
            message="No card names found in wishlist text",
            suggestion="Enter one card name per line.",
        )

    return await compute_set_odds(set_code, wishlist, boosters, cards)
