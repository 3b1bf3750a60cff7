from db.models.listing import Address, Hotel, HotelMetas, HotelRow, ReviewStats, Room
from db.models.filters import HotelFilters, Range

__all__ = [
    "Address",
    "Hotel",
    "HotelMetas",
    "HotelRow",
    "ReviewStats",
    "Room",
    "HotelFilters",
    "Range",
]
