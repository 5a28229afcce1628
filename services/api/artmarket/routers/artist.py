"""Artist endpoints: account, listing CRUD, image upload and map relay."""

import logging

from fastapi import APIRouter, Depends, File, Response, UploadFile, status
from sqlalchemy.orm import Session

from artmarket.auth.dependencies import (
    TOKEN_COOKIE,
    get_current_artist,
    get_resolved_identity,
    get_token_service,
)
from artmarket.auth.guard import authorize_owner
from artmarket.auth.schemas import ResolvedIdentity
from artmarket.auth.tokens import TokenService
from artmarket.database.session import get_db
from artmarket.errors import ValidationError
from artmarket.models.enums import Role
from artmarket.models.identity import Identity
from artmarket.models.listing import Listing
from artmarket.routers.deps import get_geocoder, get_image_host, get_listing_repository
from artmarket.schemas.identity import (
    ArtistAuthResponse,
    ArtistEnvelope,
    ArtistRegister,
    LoggedInResponse,
    LoginRequest,
    MessageResponse,
)
from artmarket.schemas.listing import (
    ListingCreate,
    ListingDetailResponse,
    ListingEnvelope,
    ListingResponse,
    ListingUpdate,
)
from artmarket.schemas.relay import MapResponse, OwnershipResponse, UploadResponse
from artmarket.services.geocoding import GeoapifyGeocoder, location_query
from artmarket.services.identities import login_identity, register_identity
from artmarket.services.image_host import CloudinaryImageHost
from artmarket.services.listings import ListingRepository

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/artist", tags=["artist"])


# Account


@router.post(
    "/register", response_model=ArtistAuthResponse, status_code=status.HTTP_201_CREATED
)
def register_artist(
    data: ArtistRegister,
    db: Session = Depends(get_db),
    tokens: TokenService = Depends(get_token_service),
) -> dict:
    """Register a new artist and return it with an access token."""
    artist, token = register_identity(db, tokens, Role.ARTIST, data)
    return {"artist": artist, "token": token}


@router.post("/login", response_model=ArtistAuthResponse)
def login_artist(
    credentials: LoginRequest,
    response: Response,
    db: Session = Depends(get_db),
    tokens: TokenService = Depends(get_token_service),
) -> dict:
    """Log an artist in. The token is returned and also set as a cookie."""
    artist, token = login_identity(db, tokens, Role.ARTIST, credentials)
    response.set_cookie(TOKEN_COOKIE, token, httponly=True, samesite="lax")
    return {"artist": artist, "token": token}


@router.get("/logout", response_model=MessageResponse)
def logout_artist(
    response: Response,
    artist: Identity = Depends(get_current_artist),
) -> dict:
    """
    Clear the token cookie.

    Tokens are stateless, so a copy held elsewhere stays valid until it
    expires.
    """
    response.delete_cookie(TOKEN_COOKIE)
    return {"message": "Logged Out"}


@router.get("/getArtist", response_model=ArtistEnvelope)
def get_artist(artist: Identity = Depends(get_current_artist)) -> dict:
    return {"artist": artist}


@router.get(
    "/loggedIn", response_model=LoggedInResponse, response_model_exclude_none=True
)
def logged_in(resolved: ResolvedIdentity = Depends(get_resolved_identity)) -> dict:
    """Report whether the token belongs to an artist or a user."""
    return {"role": resolved.role, resolved.role.value: resolved.identity}


# Listings


@router.post(
    "/create", response_model=ListingEnvelope, status_code=status.HTTP_201_CREATED
)
def create_listing(
    data: ListingCreate,
    artist: Identity = Depends(get_current_artist),
    listings: ListingRepository = Depends(get_listing_repository),
) -> dict:
    """Create a listing owned by the current artist."""
    return {"listing": listings.create(artist, data)}


@router.put("/update/{listing_id}", response_model=ListingEnvelope)
def update_listing(
    listing_id: str,
    data: ListingUpdate,
    artist: Identity = Depends(get_current_artist),
    listings: ListingRepository = Depends(get_listing_repository),
) -> dict:
    """Update a listing owned by the current artist."""
    return {"listing": listings.update(listing_id, artist, data)}


@router.delete("/delete/{listing_id}", response_model=ListingEnvelope)
def delete_listing(
    listing_id: str,
    artist: Identity = Depends(get_current_artist),
    listings: ListingRepository = Depends(get_listing_repository),
) -> dict:
    """Delete a listing owned by the current artist and return it."""
    return {"listing": listings.delete(listing_id, artist)}


@router.get("/show", response_model=list[ListingResponse])
def show_listings(
    listings: ListingRepository = Depends(get_listing_repository),
) -> list[Listing]:
    return listings.list()


@router.get("/show/{listing_id}", response_model=ListingDetailResponse)
def show_listing(
    listing_id: str,
    listings: ListingRepository = Depends(get_listing_repository),
) -> Listing:
    """Get a listing with its owner's public profile."""
    return listings.get(listing_id)


@router.get("/artOwner/{listing_id}", response_model=OwnershipResponse)
def art_owner(
    listing_id: str,
    artist: Identity = Depends(get_current_artist),
    listings: ListingRepository = Depends(get_listing_repository),
) -> dict:
    """Succeeds only for the listing's owner; used by the edit form."""
    authorize_owner(artist, listings.get(listing_id))
    return {"isOwner": True}


# Relays


@router.post("/upload", response_model=UploadResponse)
async def upload_image(
    file: UploadFile | None = File(default=None),
    image_host: CloudinaryImageHost = Depends(get_image_host),
) -> dict:
    """Relay an image to the image host and return its URL."""
    if file is None:
        raise ValidationError("No file")

    content = await file.read()
    if not content:
        raise ValidationError("No file")

    url = await image_host.upload(
        content,
        filename=file.filename or "upload",
        content_type=file.content_type,
    )
    return {"url": url}


def _listing_to_map(
    listing_id: str,
    listings: ListingRepository = Depends(get_listing_repository),
) -> Listing:
    # Sync dependency so the database lookup runs in the threadpool
    return listings.get(listing_id)


@router.get("/map/{listing_id}", response_model=MapResponse)
async def listing_map(
    listing: Listing = Depends(_listing_to_map),
    geocoder: GeoapifyGeocoder = Depends(get_geocoder),
) -> dict:
    """Geocode a listing's location and return a static map for it."""
    result = await geocoder.geocode(location_query(listing.location, listing.country))
    return {"mapUrl": result.map_url, "lat": result.lat, "lon": result.lon}
