"""Hotel Repository - Database reads for hotel listings."""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

import asyncpg
from loguru import logger
from pydantic import BaseModel, ValidationError

from db.client import queries, get_conn
from db.models.filters import HotelFilters
from db.models.listing import Address, HotelMetas, HotelRow, ReviewStats, Room
from services.hotels.query_builder import build_cheapest_room_query


class MalformedRecordError(ValueError):
    """A stored value could not be parsed into its domain type."""


def _validate(model: type, data: Dict[str, Any], what: str) -> BaseModel:
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise MalformedRecordError(f"Malformed {what}: {e}") from e


def project_metas(meta: Dict[str, Optional[str]], hotel_id: int) -> HotelMetas:
    """Project raw wp_usermeta pairs onto the known hotel fields."""
    return _validate(
        HotelMetas,
        {
            "address": Address(
                address_1=meta.get("address_1"),
                address_2=meta.get("address_2"),
                city=meta.get("address_city"),
                zip=meta.get("address_zip"),
                country=meta.get("address_country"),
            ),
            "geo_lat": meta.get("geo_lat"),
            "geo_lng": meta.get("geo_lng"),
            "cover_image": meta.get("coverImage"),
            "phone": meta.get("phone"),
        },
        f"metadata for hotel {hotel_id}",
    )


class IHotelRepo(ABC):
    """Interface for hotel listing reads."""

    @abstractmethod
    async def get_hotel_rows(self) -> List[HotelRow]:
        """Get every candidate hotel in storage order."""
        pass

    @abstractmethod
    async def get_metas(self, hotel_id: int) -> HotelMetas:
        """Get address, geo and contact metadata for a hotel."""
        pass

    @abstractmethod
    async def get_reviews(self, hotel_id: int) -> ReviewStats:
        """Get rounded average rating and review count for a hotel."""
        pass

    @abstractmethod
    async def get_cheapest_room(self, hotel_id: int, filters: HotelFilters) -> Optional[Room]:
        """Get the cheapest room matching the filters, None if no room qualifies."""
        pass


class HotelRepo(IHotelRepo):
    """Hotel listing reads over an injected asyncpg pool."""

    def __init__(self, pool: asyncpg.Pool):
        self.pool = pool

    async def get_hotel_rows(self) -> List[HotelRow]:
        async with get_conn(self.pool) as conn:
            results = await queries.get_hotel_rows(conn)
            return [HotelRow.model_validate(dict(row)) for row in results]

    async def get_metas(self, hotel_id: int) -> HotelMetas:
        async with get_conn(self.pool) as conn:
            results = await queries.get_user_meta(conn, user_id=hotel_id)
        meta = {row["meta_key"]: row["meta_value"] for row in results}
        return project_metas(meta, hotel_id)

    async def get_reviews(self, hotel_id: int) -> ReviewStats:
        async with get_conn(self.pool) as conn:
            result = await queries.get_review_stats(conn, hotel_id=hotel_id)
        if not result:
            return ReviewStats()
        if result["malformed"]:
            logger.warning(f"Hotel {hotel_id}: ignored {result['malformed']} non-numeric review ratings")
        return ReviewStats(rating=result["rating"], count=result["count"])

    async def get_cheapest_room(self, hotel_id: int, filters: HotelFilters) -> Optional[Room]:
        query, params = build_cheapest_room_query(hotel_id, filters)
        async with get_conn(self.pool) as conn:
            row = await conn.fetchrow(query, *params)
        if row is None:
            return None
        return _validate(Room, dict(row), f"room for hotel {hotel_id}")
