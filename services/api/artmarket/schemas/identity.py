"""Identity (artist/user) schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from artmarket.models.enums import Role


class FullName(BaseModel):
    firstname: str = Field(..., min_length=3, max_length=100)
    lastname: str | None = Field(default=None, max_length=100)


class RegisterBase(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=5, max_length=128)
    fullname: FullName
    phone: str | None = Field(default=None, max_length=32)
    profile_pic: str | None = Field(default=None, max_length=1024, alias="profilePic")

    model_config = ConfigDict(populate_by_name=True)


class ArtistRegister(RegisterBase):
    """Schema for registering an artist."""

    city: str = Field(..., min_length=2, max_length=100)


class UserRegister(RegisterBase):
    """Schema for registering a user."""

    city: str | None = Field(default=None, max_length=100)


class LoginRequest(BaseModel):
    """Credentials posted to the login endpoints."""

    email: str = Field(..., min_length=5, max_length=255)
    password: str = Field(..., min_length=5, max_length=128)


class IdentityResponse(BaseModel):
    """Schema for an artist or user. Never carries the password hash."""

    id: str
    email: str
    role: Role
    firstname: str
    lastname: str | None = None
    phone: str | None = None
    city: str | None = None
    profile_pic: str | None = Field(default=None, alias="profilePic")
    owned_listing_ids: list[str] = Field(default_factory=list, alias="ownedListingIds")
    saved_listing_ids: list[str] = Field(default_factory=list, alias="savedListingIds")
    created_at: datetime = Field(alias="createdAt")

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)


class ArtistAuthResponse(BaseModel):
    artist: IdentityResponse
    token: str


class UserAuthResponse(BaseModel):
    user: IdentityResponse
    token: str


class ArtistEnvelope(BaseModel):
    artist: IdentityResponse


class UserEnvelope(BaseModel):
    user: IdentityResponse


class LoggedInResponse(BaseModel):
    """Whoever the token belongs to, keyed by role like the login responses."""

    role: Role
    artist: IdentityResponse | None = None
    user: IdentityResponse | None = None


class MessageResponse(BaseModel):
    message: str
