"""Pydantic models for the hotel listing read path."""

from decimal import Decimal
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator


class Address(BaseModel):
    """Postal address projected from hotel metadata."""

    address_1: Optional[str] = None
    address_2: Optional[str] = None
    city: Optional[str] = None
    zip: Optional[str] = None
    country: Optional[str] = None


class HotelRow(BaseModel):
    """One wp_users row, the identity of a candidate hotel."""

    id: int
    display_name: str

    model_config = ConfigDict(from_attributes=True)


class HotelMetas(BaseModel):
    """Known wp_usermeta keys for a hotel. Missing keys stay None."""

    address: Address = Field(default_factory=Address)
    geo_lat: Optional[float] = None
    geo_lng: Optional[float] = None
    cover_image: Optional[str] = None
    phone: Optional[str] = None

    @field_validator("geo_lat", "geo_lng", mode="before")
    @classmethod
    def blank_to_none(cls, v):
        """Empty strings in wp_usermeta mean no coordinate."""
        if isinstance(v, str) and not v.strip():
            return None
        return v


class ReviewStats(BaseModel):
    """Aggregate of a hotel's review ratings."""

    rating: Optional[int] = None  # Rounded average, None without reviews
    count: int = 0

    model_config = ConfigDict(from_attributes=True)


class Room(BaseModel):
    """Cheapest room of a hotel matching the active filters."""

    id: int
    title: str
    surface: float
    price: Decimal
    bedrooms_count: int
    bathrooms_count: int
    type: str

    model_config = ConfigDict(from_attributes=True)


class Hotel(BaseModel):
    """Hotel record assembled for a listing."""

    id: int
    name: str

    # Location
    address: Address = Field(default_factory=Address)
    geo_lat: Optional[float] = None
    geo_lng: Optional[float] = None

    # Contact
    image_url: Optional[str] = None
    phone: Optional[str] = None

    # Ratings
    rating: Optional[int] = None
    rating_count: int = 0

    cheapest_room: Optional[Room] = None

    # Kilometres from the search point, set only when distance filtering is active
    distance: Optional[float] = None
