"""Pydantic request/response schemas."""

from artmarket.schemas.identity import (
    ArtistAuthResponse,
    ArtistEnvelope,
    ArtistRegister,
    IdentityResponse,
    LoggedInResponse,
    LoginRequest,
    MessageResponse,
    UserAuthResponse,
    UserEnvelope,
    UserRegister,
)
from artmarket.schemas.listing import (
    ListingCreate,
    ListingDetailResponse,
    ListingEnvelope,
    ListingResponse,
    ListingUpdate,
    OwnerProfile,
)
from artmarket.schemas.relay import MapResponse, OwnershipResponse, UploadResponse

__all__ = [
    "ArtistAuthResponse",
    "ArtistEnvelope",
    "ArtistRegister",
    "IdentityResponse",
    "LoggedInResponse",
    "LoginRequest",
    "MessageResponse",
    "UserAuthResponse",
    "UserEnvelope",
    "UserRegister",
    "ListingCreate",
    "ListingDetailResponse",
    "ListingEnvelope",
    "ListingResponse",
    "ListingUpdate",
    "OwnerProfile",
    "MapResponse",
    "OwnershipResponse",
    "UploadResponse",
]
