"""Listing repository: CRUD over listings owned by artists."""

import logging
from typing import Any

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from artmarket.auth.guard import authorize_owner
from artmarket.errors import NotFound, ValidationError
from artmarket.models.enums import Role
from artmarket.models.identity import Identity
from artmarket.models.listing import Listing
from artmarket.schemas.listing import ListingCreate, ListingUpdate

logger = logging.getLogger(__name__)

# Columns that may be changed but never cleared
NON_NULLABLE_FIELDS = {"title", "description", "image_url", "type_of_art"}


class ListingRepository:
    """Listings persisted through a request-scoped session."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def create(self, owner: Identity, data: ListingCreate) -> Listing:
        """Create a listing owned by ``owner`` (an artist)."""
        if owner.role != Role.ARTIST:
            raise ValidationError("Only artists can own listings")

        listing = Listing(
            owner_id=owner.id,
            title=data.title,
            description=data.description,
            image_url=data.image_url,
            location=data.location,
            country=data.country,
            type_of_art=data.type_of_art,
            price=data.price,
        )
        self.db.add(listing)
        owner.listings.append(listing)
        self.db.commit()
        self.db.refresh(listing)

        logger.info("Artist %s created listing %s", owner.id, listing.id)
        return listing

    def get(self, listing_id: str) -> Listing:
        """Load a listing with its owner, or raise NotFound."""
        listing = self.db.scalars(
            select(Listing)
            .options(selectinload(Listing.owner))
            .where(Listing.id == listing_id)
        ).first()
        if listing is None:
            raise NotFound("Listing not found")
        return listing

    def list(self) -> list[Listing]:
        return list(self.db.scalars(select(Listing).order_by(Listing.created_at)))

    def update(self, listing_id: str, requester: Identity, data: ListingUpdate) -> Listing:
        """
        Apply the fields sent in ``data`` to a listing the requester owns.

        Raises:
            NotFound: no listing with this id
            Forbidden: the requester does not own it
            ValidationError: a required field was sent as null
        """
        listing = self.get(listing_id)
        authorize_owner(requester, listing)

        changes: dict[str, Any] = data.model_dump(exclude_unset=True)
        for field in NON_NULLABLE_FIELDS & changes.keys():
            if changes[field] is None:
                raise ValidationError(f"{field} cannot be empty")

        for field, value in changes.items():
            setattr(listing, field, value)

        self.db.commit()
        self.db.refresh(listing)

        logger.info("Listing %s updated fields %s", listing.id, sorted(changes))
        return listing

    def delete(self, listing_id: str, requester: Identity) -> Listing:
        """
        Delete a listing the requester owns and return the removed record.

        A missing id is reported as NotFound before any ownership check.
        """
        listing = self.get(listing_id)
        authorize_owner(requester, listing)

        self.db.delete(listing)
        self.db.commit()

        logger.info("Listing %s deleted by %s", listing_id, requester.id)
        return listing
