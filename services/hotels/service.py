"""Hotel Query Service.

Lists hotels enriched with metadata, review stats and their cheapest room
matching the given filters. Uses dependency injection for the repo.

Hotels are built one at a time: one metadata, one review and one
cheapest-room query per candidate. A hotel that fails a filter is left
out of the result; any other error aborts the listing.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional

from loguru import logger

from db.models.filters import HotelFilters
from db.models.listing import Hotel, HotelRow
from services.hotels.geo import compute_distance
from services.hotels.repo import IHotelRepo
from services.hotels.timers import Timers


@dataclass
class BuildResult:
    """Outcome of building one hotel: the hotel, or why it was excluded."""
    hotel: Optional[Hotel] = None
    reason: Optional[str] = None

    @classmethod
    def included(cls, hotel: Hotel) -> "BuildResult":
        return cls(hotel=hotel)

    @classmethod
    def excluded(cls, reason: str) -> "BuildResult":
        return cls(reason=reason)

    @property
    def is_excluded(self) -> bool:
        return self.hotel is None


class IService(ABC):
    """Hotel Query Service - List hotels matching search filters."""

    @abstractmethod
    async def list(self, filters: Optional[HotelFilters] = None) -> List[Hotel]:
        """List hotels with at least one room matching every active filter.

        Results keep the storage order of the hotel rows.
        """
        pass

    @abstractmethod
    async def build_hotel(self, row: HotelRow, filters: HotelFilters) -> BuildResult:
        """Build a full hotel record, or exclude it if a filter fails."""
        pass


class Service(IService):
    def __init__(self, repo: IHotelRepo, timers: Optional[Timers] = None) -> None:
        self.repo = repo
        self.timers = timers or Timers()

    async def list(self, filters: Optional[HotelFilters] = None) -> List[Hotel]:
        filters = filters or HotelFilters()

        with self.timers.measure("get_hotel_rows"):
            rows = await self.repo.get_hotel_rows()

        hotels = []
        for row in rows:
            result = await self.build_hotel(row, filters)
            if result.is_excluded:
                logger.debug(f"Hotel {row.id} excluded: {result.reason}")
                continue
            hotels.append(result.hotel)

        logger.info(f"Listed {len(hotels)}/{len(rows)} hotels")
        return hotels

    async def build_hotel(self, row: HotelRow, filters: HotelFilters) -> BuildResult:
        hotel = Hotel(id=row.id, name=row.display_name)

        with self.timers.measure("get_metas"):
            metas = await self.repo.get_metas(hotel.id)
        hotel.address = metas.address
        hotel.geo_lat = metas.geo_lat
        hotel.geo_lng = metas.geo_lng
        hotel.image_url = metas.cover_image
        hotel.phone = metas.phone

        with self.timers.measure("get_reviews"):
            reviews = await self.repo.get_reviews(hotel.id)
        hotel.rating = reviews.rating
        hotel.rating_count = reviews.count

        with self.timers.measure("get_cheapest_room"):
            room = await self.repo.get_cheapest_room(hotel.id, filters)
        if room is None:
            return BuildResult.excluded("no room matches the filters")
        hotel.cheapest_room = room

        if filters.distance_active:
            if hotel.geo_lat is None or hotel.geo_lng is None:
                return BuildResult.excluded("no coordinates to check distance")

            hotel.distance = compute_distance(filters.lat, filters.lng, hotel.geo_lat, hotel.geo_lng)
            if hotel.distance > filters.distance:
                return BuildResult.excluded(
                    f"{hotel.distance:.1f}km away, outside {filters.distance}km radius"
                )

        return BuildResult.included(hotel)
