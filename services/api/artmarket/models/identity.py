from datetime import datetime
from typing import TYPE_CHECKING
from uuid import uuid4

from sqlalchemy import Enum as SAEnum
from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from artmarket.database.base import Base, created_at_column, updated_at_column
from artmarket.models.enums import Role
from artmarket.models.saved_listing import saved_listings

if TYPE_CHECKING:
    from artmarket.models.listing import Listing


class Identity(Base):
    """
    Registered account, either a user or an artist.

    Artists own listings; users bookmark them. The password is only ever
    stored as a salted hash.
    """

    __tablename__ = "identities"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid4()),
    )
    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        index=True,
        nullable=False,
    )
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[Role] = mapped_column(
        SAEnum(Role, native_enum=False),
        nullable=False,
    )

    firstname: Mapped[str] = mapped_column(String(100), nullable=False)
    lastname: Mapped[str | None] = mapped_column(String(100), nullable=True)
    phone: Mapped[str | None] = mapped_column(String(32), nullable=True)
    city: Mapped[str | None] = mapped_column(String(100), nullable=True)
    profile_pic: Mapped[str | None] = mapped_column(String(1024), nullable=True)

    created_at: Mapped[datetime] = created_at_column()
    updated_at: Mapped[datetime] = updated_at_column()

    # Relationships
    listings: Mapped[list["Listing"]] = relationship(
        "Listing",
        back_populates="owner",
        cascade="all",
        passive_deletes=True,
        order_by="Listing.created_at",
    )
    saved: Mapped[list["Listing"]] = relationship(
        "Listing",
        secondary=saved_listings,
        back_populates="saved_by",
    )

    @property
    def owned_listing_ids(self) -> list[str]:
        return [listing.id for listing in self.listings]

    @property
    def saved_listing_ids(self) -> list[str]:
        return [listing.id for listing in self.saved]
