from datetime import datetime
from typing import TYPE_CHECKING
from uuid import uuid4

from sqlalchemy import ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from artmarket.database.base import Base, created_at_column, updated_at_column
from artmarket.models.saved_listing import saved_listings

if TYPE_CHECKING:
    from artmarket.models.identity import Identity


class Listing(Base):
    """
    Artwork offered by an artist.

    Access: public read; writes only by the identity in owner_id.
    """

    __tablename__ = "listings"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid4()),
    )
    owner_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("identities.id", ondelete="CASCADE"),
        index=True,
        nullable=False,
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    image_url: Mapped[str] = mapped_column(String(1024), nullable=False)
    location: Mapped[str | None] = mapped_column(String(255), nullable=True)
    country: Mapped[str | None] = mapped_column(String(100), nullable=True)
    type_of_art: Mapped[str] = mapped_column(String(100), nullable=False)
    price: Mapped[str | None] = mapped_column(String(50), nullable=True)

    created_at: Mapped[datetime] = created_at_column()
    updated_at: Mapped[datetime] = updated_at_column()

    # Relationships
    owner: Mapped["Identity"] = relationship("Identity", back_populates="listings")
    saved_by: Mapped[list["Identity"]] = relationship(
        "Identity",
        secondary=saved_listings,
        back_populates="saved",
        passive_deletes=True,
    )
