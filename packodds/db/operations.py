"""
Database CRUD operations.

Provides async functions for creating, reading, updating, and deleting
wishlists.
"""

from collections.abc import Iterable

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from packodds.models.db import WishlistDB, WishlistEntryDB
from packodds.models.wishlist import Wishlist, normalize_card_name


def _dedupe(names: Iterable[str], existing: Iterable[str] = ()) -> list[str]:
    """Drop blank names and case-insensitive duplicates, keeping first spelling."""
    seen = {normalize_card_name(n) for n in existing}
    unique: list[str] = []
    for name in names:
        name = " ".join(name.split())
        key = normalize_card_name(name)
        if not key or key in seen:
            continue
        seen.add(key)
        unique.append(name)
    return unique


async def get_wishlist(session: AsyncSession, user_id: str) -> WishlistDB | None:
    """
    Get a user's wishlist by user_id.

    Returns None if no wishlist exists for this user.
    """
    result = await session.execute(
        select(WishlistDB)
        .where(WishlistDB.user_id == user_id)
        .options(selectinload(WishlistDB.entries))
    )
    return result.scalar_one_or_none()


async def create_wishlist(session: AsyncSession, user_id: str) -> WishlistDB:
    """
    Create a new wishlist for a user.

    Raises IntegrityError if wishlist already exists.
    """
    wishlist = WishlistDB(user_id=user_id)
    session.add(wishlist)
    await session.flush()
    return wishlist


async def get_or_create_wishlist(session: AsyncSession, user_id: str) -> tuple[WishlistDB, bool]:
    """
    Get existing wishlist or create new one.

    Returns:
        Tuple of (wishlist, created) where created is True if new.
    """
    wishlist = await get_wishlist(session, user_id)
    if wishlist:
        return wishlist, False

    wishlist = await create_wishlist(session, user_id)
    return wishlist, True


async def _load_for_update(session: AsyncSession, user_id: str) -> WishlistDB:
    await get_or_create_wishlist(session, user_id)

    # Always re-fetch with eager loading to avoid async lazy load issues
    loaded = await get_wishlist(session, user_id)
    if not loaded:
        msg = f"Wishlist for user {user_id} not found after creation"
        raise RuntimeError(msg)
    return loaded


async def replace_wishlist_cards(
    session: AsyncSession,
    user_id: str,
    card_names: Iterable[str],
) -> WishlistDB:
    """
    Replace a user's wishlist with new card names.

    Deletes existing entries and creates new ones.
    """
    wishlist = await _load_for_update(session, user_id)

    await session.execute(delete(WishlistEntryDB).where(WishlistEntryDB.wishlist_id == wishlist.id))
    # Clear the ORM list to stay in sync
    wishlist.entries.clear()

    for name in _dedupe(card_names):
        wishlist.entries.append(WishlistEntryDB(card_name=name))

    await session.flush()
    return wishlist


async def add_wishlist_cards(
    session: AsyncSession,
    user_id: str,
    card_names: Iterable[str],
) -> tuple[WishlistDB, int]:
    """
    Add card names to a user's wishlist.

    Names already on the wishlist (case-insensitive) are skipped.

    Returns:
        Tuple of (wishlist, number of names added)
    """
    wishlist = await _load_for_update(session, user_id)

    new_names = _dedupe(card_names, existing=(e.card_name for e in wishlist.entries))
    for name in new_names:
        wishlist.entries.append(WishlistEntryDB(card_name=name))

    await session.flush()
    return wishlist, len(new_names)


def wishlist_to_model(wishlist: WishlistDB) -> Wishlist:
    """Convert a database wishlist to a domain model."""
    return Wishlist(names=frozenset(entry.card_name for entry in wishlist.entries))


def wishlist_card_names(wishlist: WishlistDB) -> list[str]:
    """Card names in the order they were added."""
    return [entry.card_name for entry in wishlist.entries]


async def delete_wishlist(session: AsyncSession, user_id: str) -> bool:
    """
    Delete a user's wishlist.

    Returns True if deleted, False if not found.
    """
    wishlist = await get_wishlist(session, user_id)
    if not wishlist:
        return False

    await session.delete(wishlist)
    return True
