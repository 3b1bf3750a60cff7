"""Hotel listing service.

Components:
- Repo: Database reads (repo.py)
- Query builder: Cheapest room SQL from optional filters (query_builder.py)
- Geo: Distance between coordinates (geo.py)
- Timers: Per-step timing (timers.py)
- Service: Assembles hotels and applies filters (service.py)
"""

from services.hotels.service import Service, IService, BuildResult
from services.hotels.repo import HotelRepo, IHotelRepo, MalformedRecordError

__all__ = [
    "Service",
    "IService",
    "BuildResult",
    "HotelRepo",
    "IHotelRepo",
    "MalformedRecordError",
]
