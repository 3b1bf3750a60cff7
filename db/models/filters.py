"""Filter models for hotel listings.

Every field is optional. A missing field puts no constraint on that dimension.
"""

from typing import Optional, List
from pydantic import BaseModel, ConfigDict, Field, field_validator


class Range(BaseModel):
    """Inclusive numeric range, either bound may be open."""

    min: Optional[float] = None
    max: Optional[float] = None


class HotelFilters(BaseModel):
    """Search criteria for listing hotels."""

    # Free text search, accepted but not applied
    search: Optional[str] = None

    # Search point and radius in km
    lat: Optional[float] = Field(default=None, ge=-90, le=90)
    lng: Optional[float] = Field(default=None, ge=-180, le=180)
    distance: Optional[float] = Field(default=None, ge=0)

    price: Range = Field(default_factory=Range)
    surface: Range = Field(default_factory=Range)

    # Minimum bedroom / bathroom counts
    rooms: Optional[int] = Field(default=None, ge=0)
    bathrooms: Optional[int] = Field(default=None, ge=0, alias="bathRooms")

    # Accepted room types, empty means any
    types: List[str] = Field(default_factory=list)

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("price", "surface", mode="before")
    @classmethod
    def none_to_open_range(cls, v):
        """Handle an explicit null range as unconstrained."""
        return v if v is not None else {}

    @field_validator("types", mode="before")
    @classmethod
    def drop_blank_types(cls, v):
        if v is None:
            return []
        return [t for t in v if t]

    @property
    def distance_active(self) -> bool:
        """Distance filtering needs a search point and a radius."""
        return self.lat is not None and self.lng is not None and self.distance is not None
