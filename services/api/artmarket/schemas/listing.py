"""Listing schemas."""

from datetime import datetime
from typing import Annotated, Any

from pydantic import AliasChoices, BaseModel, BeforeValidator, ConfigDict, Field


def _price_to_str(value: Any) -> Any:
    # The marketplace form posts prices as strings, API clients may send numbers
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return value


Price = Annotated[str | None, BeforeValidator(_price_to_str)]


class ListingCreate(BaseModel):
    """Schema for creating a listing."""

    title: str = Field(..., min_length=3, max_length=255)
    description: str = Field(..., min_length=1)
    image_url: str = Field(
        ...,
        min_length=1,
        max_length=1024,
        validation_alias=AliasChoices("image", "imageUrl", "image_url"),
    )
    location: str | None = Field(default=None, max_length=255)
    country: str | None = Field(default=None, max_length=100)
    type_of_art: str = Field(..., min_length=2, max_length=100, alias="typeOfArt")
    price: Price = Field(default=None, max_length=50)

    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)


class ListingUpdate(BaseModel):
    """
    Schema for updating a listing.

    Only the fields sent are applied. Ownership and ids are not part of
    the schema, so clients cannot reassign a listing.
    """

    title: str | None = Field(default=None, min_length=3, max_length=255)
    description: str | None = Field(default=None, min_length=1)
    image_url: str | None = Field(
        default=None,
        min_length=1,
        max_length=1024,
        validation_alias=AliasChoices("image", "imageUrl", "image_url"),
    )
    location: str | None = Field(default=None, max_length=255)
    country: str | None = Field(default=None, max_length=100)
    type_of_art: str | None = Field(
        default=None, min_length=2, max_length=100, alias="typeOfArt"
    )
    price: Price = Field(default=None, max_length=50)

    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)


class ListingResponse(BaseModel):
    """Schema for listing response."""

    id: str
    title: str
    description: str
    image_url: str = Field(alias="imageUrl")
    location: str | None = None
    country: str | None = None
    type_of_art: str = Field(alias="typeOfArt")
    price: str | None = None
    owner_id: str = Field(alias="ownerId")
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime | None = Field(default=None, alias="updatedAt")

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)


class OwnerProfile(BaseModel):
    """Public part of an artist's profile shown next to their work."""

    id: str
    firstname: str
    lastname: str | None = None
    city: str | None = None
    profile_pic: str | None = Field(default=None, alias="profilePic")

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)


class ListingDetailResponse(ListingResponse):
    """Listing with its owner's public profile."""

    owner: OwnerProfile


class ListingEnvelope(BaseModel):
    listing: ListingResponse
