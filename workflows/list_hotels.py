#!/usr/bin/env python3
"""
Workflow: List Hotels
=====================
Lists hotels with their cheapest matching room, review stats and address.

Usage:
    # All hotels with at least one room
    uv run python -m workflows.list_hotels

    # Rooms between 80 and 150, at least 2 bedrooms
    uv run python -m workflows.list_hotels --price-min 80 --price-max 150 --rooms 2

    # Suites within 10km of Lyon, as JSON
    uv run python -m workflows.list_hotels --lat 45.76 --lng 4.83 --distance 10 --type suite --json

    # Show per-step timings
    uv run python -m workflows.list_hotels --timings
"""

import argparse
import asyncio
import json
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from loguru import logger

from db.client import create_pool, close_pool
from db.config import DatabaseConfig
from db.models.filters import HotelFilters, Range
from db.models.listing import Hotel
from services.hotels.repo import HotelRepo
from services.hotels.service import Service
from services.hotels.timers import Timers


def filters_from_args(args: argparse.Namespace) -> HotelFilters:
    return HotelFilters(
        search=args.search,
        lat=args.lat,
        lng=args.lng,
        distance=args.distance,
        price=Range(min=args.price_min, max=args.price_max),
        surface=Range(min=args.surface_min, max=args.surface_max),
        rooms=args.rooms,
        bathrooms=args.bathrooms,
        types=args.types or [],
    )


def format_hotel(hotel: Hotel) -> str:
    """One-line summary, e.g. "Hotel du Parc (Lyon) | 4/5 (12) | Suite 2: 120 | 3.2km"."""
    parts = [f"{hotel.name} ({hotel.address.city or '?'})"]

    if hotel.rating_count:
        parts.append(f"{hotel.rating}/5 ({hotel.rating_count})")
    else:
        parts.append("no reviews")

    room = hotel.cheapest_room
    if room:
        parts.append(f"{room.title}: {room.price}")

    if hotel.distance is not None:
        parts.append(f"{hotel.distance:.1f}km")

    return " | ".join(parts)


async def run(filters: HotelFilters, as_json: bool = False, show_timings: bool = False) -> int:
    pool = await create_pool(DatabaseConfig.from_env())
    timers = Timers()
    try:
        service = Service(HotelRepo(pool), timers=timers)
        hotels = await service.list(filters)
    finally:
        await close_pool(pool)

    if as_json:
        print(json.dumps([h.model_dump(mode="json") for h in hotels], indent=2))
    else:
        for hotel in hotels:
            print(format_hotel(hotel))

    if show_timings:
        logger.info("Timings:")
        timers.log_summary()

    return len(hotels)


def main():
    parser = argparse.ArgumentParser(description="List hotels with their cheapest matching room")
    parser.add_argument("--search", help="Free text search (not applied)")
    parser.add_argument("--lat", type=float, help="Search point latitude")
    parser.add_argument("--lng", type=float, help="Search point longitude")
    parser.add_argument("--distance", type=float, help="Max distance from search point in km")
    parser.add_argument("--price-min", type=float)
    parser.add_argument("--price-max", type=float)
    parser.add_argument("--surface-min", type=float)
    parser.add_argument("--surface-max", type=float)
    parser.add_argument("--rooms", type=int, help="Minimum bedrooms")
    parser.add_argument("--bathrooms", type=int, help="Minimum bathrooms")
    parser.add_argument("--type", dest="types", action="append", help="Accepted room type (repeatable)")
    parser.add_argument("--json", action="store_true", help="Print hotels as JSON")
    parser.add_argument("--timings", action="store_true", help="Log per-step timings")

    args = parser.parse_args()

    logger.remove()
    logger.add(sys.stderr, level="INFO", format="<level>{level: <8}</level> | {message}")

    asyncio.run(run(filters_from_args(args), as_json=args.json, show_timings=args.timings))


if __name__ == "__main__":
    main()
