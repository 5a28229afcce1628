"""Users' saved (bookmarked) listings."""

import logging

from sqlalchemy.orm import Session

from artmarket.models.identity import Identity
from artmarket.models.listing import Listing
from artmarket.services.listings import ListingRepository

logger = logging.getLogger(__name__)


def save_listing(db: Session, user: Identity, listing_id: str) -> Listing:
    """Bookmark a listing. Saving twice is a no-op."""
    listing = ListingRepository(db).get(listing_id)
    if listing not in user.saved:
        user.saved.append(listing)
        db.commit()
        logger.info("User %s saved listing %s", user.id, listing_id)
    return listing


def unsave_listing(db: Session, user: Identity, listing_id: str) -> None:
    """Remove a bookmark. Unknown or unsaved ids are ignored."""
    for listing in list(user.saved):
        if listing.id == listing_id:
            user.saved.remove(listing)
            db.commit()
            logger.info("User %s removed saved listing %s", user.id, listing_id)
            return


def list_saved(user: Identity) -> list[Listing]:
    return list(user.saved)
