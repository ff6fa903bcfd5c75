"""
Wishlist API endpoints.

Stores one wishlist of card names per user. Odds are never stored: every
odds request reads the wishlist as it is at that moment.
"""

from typing import Annotated, Literal

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from packodds.db import (
    add_wishlist_cards,
    delete_wishlist,
    get_wishlist,
    replace_wishlist_cards,
    wishlist_card_names,
)
from packodds.db.database import get_session
from packodds.parsers.wishlist_import import parse_wishlist_names

router = APIRouter(prefix="/wishlist", tags=["wishlist"])


class WishlistResponse(BaseModel):
    """Response model for wishlist data."""

    user_id: str
    cards: list[str] = Field(default_factory=list)
    card_count: int = 0


class WishlistUpdateRequest(BaseModel):
    """Request model for replacing a wishlist."""

    cards: list[str] = Field(
        ...,
        description="Card names to want",
        examples=[["Lightning Bolt", "Sheoldred, the Apocalypse"]],
    )


class WishlistImportRequest(BaseModel):
    """Request model for importing a wishlist from text."""

    text: str = Field(
        ...,
        description="One card per line; quantities and Arena set codes are ignored",
        examples=["Lightning Bolt\n4x Sheoldred, the Apocalypse"],
    )
    mode: Literal["add", "replace"] = Field(
        default="add",
        description="'add' merges into the existing wishlist, 'replace' overwrites it",
    )


class ImportResponse(BaseModel):
    """Response model for wishlist import."""

    user_id: str
    cards_parsed: int
    cards_added: int
    cards: list[str] = Field(default_factory=list)
    replaced_existing: bool = False


class DeleteResponse(BaseModel):
    """Response model for delete operations."""

    user_id: str
    deleted: bool


@router.get("/{user_id}", response_model=WishlistResponse)
async def get_user_wishlist(
    user_id: str,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> WishlistResponse:
    """Get a user's wishlist. A user without one gets an empty list."""
    db_wishlist = await get_wishlist(session, user_id)
    if db_wishlist is None:
        return WishlistResponse(user_id=user_id)

    names = wishlist_card_names(db_wishlist)
    return WishlistResponse(user_id=user_id, cards=names, card_count=len(names))


@router.put("/{user_id}", response_model=WishlistResponse)
async def update_user_wishlist(
    user_id: str,
    request: WishlistUpdateRequest,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> WishlistResponse:
    """
    Replace a user's wishlist.

    Creates the wishlist if it doesn't exist. Duplicate names are dropped.
    """
    if not request.cards:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Cards cannot be empty",
        )

    for card_name in request.cards:
        if not card_name or not card_name.strip():
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Card names cannot be empty",
            )

    db_wishlist = await replace_wishlist_cards(session, user_id, request.cards)
    names = wishlist_card_names(db_wishlist)
    return WishlistResponse(user_id=user_id, cards=names, card_count=len(names))


@router.post("/{user_id}/import", response_model=ImportResponse)
async def import_user_wishlist(
    user_id: str,
    request: WishlistImportRequest,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> ImportResponse:
    """
    Import a wishlist from free text.

    Accepted lines:
    - "Lightning Bolt"
    - "4 Lightning Bolt" / "4x Lightning Bolt"
    - "1 Lightning Bolt (LEB) 163"
    """
    names = parse_wishlist_names(request.text)
    if not names:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="No card names found in import text",
        )

    existing = await get_wishlist(session, user_id)
    replacing = request.mode == "replace"

    if replacing:
        db_wishlist = await replace_wishlist_cards(session, user_id, names)
        added = len(db_wishlist.entries)
    else:
        db_wishlist, added = await add_wishlist_cards(session, user_id, names)

    return ImportResponse(
        user_id=user_id,
        cards_parsed=len(names),
        cards_added=added,
        cards=wishlist_card_names(db_wishlist),
        replaced_existing=replacing and existing is not None,
    )


@router.delete("/{user_id}", response_model=DeleteResponse)
async def delete_user_wishlist(
    user_id: str,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> DeleteResponse:
    """Delete a user's wishlist."""
    deleted = await delete_wishlist(session, user_id)
    return DeleteResponse(user_id=user_id, deleted=deleted)
