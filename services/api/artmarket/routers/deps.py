"""Router dependencies for collaborators built at startup."""

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from artmarket.database.session import get_db
from artmarket.services.geocoding import GeoapifyGeocoder
from artmarket.services.image_host import CloudinaryImageHost
from artmarket.services.listings import ListingRepository


def get_listing_repository(db: Session = Depends(get_db)) -> ListingRepository:
    return ListingRepository(db)


def get_image_host(request: Request) -> CloudinaryImageHost:
    return request.app.state.image_host


def get_geocoder(request: Request) -> GeoapifyGeocoder:
    return request.app.state.geocoder
