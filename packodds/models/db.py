"""
SQLAlchemy ORM models for persistent storage.

Models mirror the dataclass models but add database persistence.
"""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer, String, UniqueConstraint, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass


class WishlistDB(Base):
    """
    A user's wishlist stored in the database.

    Each user has one wishlist of wanted card names.
    """

    __tablename__ = "wishlists"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(String(255), unique=True, index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    entries: Mapped[list["WishlistEntryDB"]] = relationship(
        back_populates="wishlist",
        cascade="all, delete-orphan",
        order_by="WishlistEntryDB.id",
    )

    def __repr__(self) -> str:
        return f"<WishlistDB(id={self.id}, user_id={self.user_id})>"


class WishlistEntryDB(Base):
    """One wanted card name."""

    __tablename__ = "wishlist_entries"
    __table_args__ = (UniqueConstraint("wishlist_id", "card_name", name="uq_wishlist_card"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    wishlist_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("wishlists.id", ondelete="CASCADE"), index=True
    )
    card_name: Mapped[str] = mapped_column(String(255), index=True)

    wishlist: Mapped["WishlistDB"] = relationship(back_populates="entries")

    def __repr__(self) -> str:
        return f"<WishlistEntryDB(card={self.card_name})>"
