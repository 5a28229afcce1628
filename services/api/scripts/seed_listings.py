"""
Reset the listings table to a sample catalogue.

All existing listings are removed, then the sample listings below are
inserted, owned by a demo artist that is created if it doesn't exist.

Usage:
    cd services/api
    python -m scripts.seed_listings [--create-tables] [--artist-email EMAIL]

Options:
    --create-tables   Create missing tables first (local SQLite only;
                      use alembic everywhere else)
    --artist-email    Owner of the seeded listings (default: demo@artmarket.dev)
    --password        Password for a newly created demo artist
"""

import argparse
import logging
import sys
from pathlib import Path

from sqlalchemy import delete
from sqlalchemy.orm import Session

# Add the api directory to path so we can import artmarket modules
sys.path.insert(0, str(Path(__file__).parent.parent))

from artmarket.auth.passwords import hash_password
from artmarket.config import get_settings
from artmarket.database.base import Base
from artmarket.database.engine import build_engine
from artmarket.database.session import build_session_factory
from artmarket.models.enums import Role
from artmarket.models.identity import Identity
from artmarket.models.listing import Listing
from artmarket.services.identities import get_identity_by_email, normalize_email

logger = logging.getLogger(__name__)

SAMPLE_LISTINGS = [
    {
        "title": "Sunset Over the Dunes",
        "description": "Acrylic on canvas, warm desert palette.",
        "image_url": "https://images.unsplash.com/photo-1501785888041-af3ef285b470",
        "location": "Jaisalmer",
        "country": "India",
        "type_of_art": "Painting",
        "price": "1200",
    },
    {
        "title": "Neon Koi",
        "description": "Digital illustration printed on aluminium.",
        "image_url": "https://images.unsplash.com/photo-1518998053901-5348d3961a04",
        "location": "Tokyo",
        "country": "Japan",
        "type_of_art": "Digital Art",
        "price": "450",
    },
    {
        "title": "Harbour Morning",
        "description": "Watercolour study of fishing boats at dawn.",
        "image_url": "https://images.unsplash.com/photo-1500530855697-b586d89ba3ee",
        "location": "Lisbon",
        "country": "Portugal",
        "type_of_art": "Watercolor",
        "price": "300",
    },
    {
        "title": "Stone Listener",
        "description": "Hand-carved soapstone figure, 40 cm.",
        "image_url": "https://images.unsplash.com/photo-1544967082-d9d25d867d66",
        "location": "Florence",
        "country": "Italy",
        "type_of_art": "Sculpture",
        "price": "2100",
    },
    {
        "title": "Monsoon Streets",
        "description": "Black and white street photograph, archival print.",
        "image_url": "https://images.unsplash.com/photo-1469474968028-56623f02e42e",
        "location": "Mumbai",
        "country": "India",
        "type_of_art": "Photography",
        "price": "180",
    },
]


def get_or_create_artist(db: Session, email: str, password: str) -> Identity:
    artist = get_identity_by_email(db, email)
    if artist is not None:
        if artist.role != Role.ARTIST:
            raise ValueError(f"{email} is registered as a {artist.role.value}")
        return artist

    artist = Identity(
        email=normalize_email(email),
        password_hash=hash_password(password),
        role=Role.ARTIST,
        firstname="Demo",
        lastname="Artist",
        city="Anywhere",
    )
    db.add(artist)
    db.flush()
    logger.info("Created demo artist %s", artist.id)
    return artist


def seed(db: Session, artist_email: str, password: str) -> list[Listing]:
    """Replace every listing with the sample catalogue. Returns the new rows."""
    artist = get_or_create_artist(db, artist_email, password)

    removed = db.execute(delete(Listing)).rowcount
    logger.info("Removed %s existing listings", removed)

    listings = [Listing(owner_id=artist.id, **data) for data in SAMPLE_LISTINGS]
    db.add_all(listings)
    db.commit()

    logger.info("Inserted %d sample listings", len(listings))
    return listings


def main() -> int:
    parser = argparse.ArgumentParser(description="Reset listings to sample data")
    parser.add_argument(
        "--create-tables",
        action="store_true",
        help="Create missing tables before seeding (local SQLite only)",
    )
    parser.add_argument("--artist-email", default="demo@artmarket.dev")
    parser.add_argument("--password", default="demo-password")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")

    engine = build_engine(get_settings())
    if args.create_tables:
        Base.metadata.create_all(engine)

    session_factory = build_session_factory(engine)
    with session_factory() as db:
        listings = seed(db, args.artist_email, args.password)

    print(f"Data was initialized: {len(listings)} listings")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
