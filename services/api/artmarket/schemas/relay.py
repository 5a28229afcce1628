"""Schemas for the image-host and geocoding relays."""

from pydantic import BaseModel, ConfigDict, Field


class UploadResponse(BaseModel):
    url: str


class MapResponse(BaseModel):
    """Coordinates of a listing's location and a ready-to-embed map image."""

    map_url: str = Field(alias="mapUrl")
    lat: float
    lon: float

    model_config = ConfigDict(populate_by_name=True)


class OwnershipResponse(BaseModel):
    is_owner: bool = Field(alias="isOwner")

    model_config = ConfigDict(populate_by_name=True)
