from sqlalchemy import Column, ForeignKey, String, Table

from artmarket.database.base import Base

# Users' bookmarked listings (many-to-many)
saved_listings = Table(
    "saved_listings",
    Base.metadata,
    Column(
        "identity_id",
        String(36),
        ForeignKey("identities.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "listing_id",
        String(36),
        ForeignKey("listings.id", ondelete="CASCADE"),
        primary_key=True,
    ),
)
