"""Dynamic SQL for the cheapest room of a hotel.

Room attributes live in wp_postmeta as text. Each attribute is joined once and
filter predicates are attached to its join only when the filter is set.
Values are always bound as asyncpg positional parameters.
"""

from decimal import Decimal
from typing import Any, List, Optional, Tuple

from db.models.filters import HotelFilters

# Text that parses as a plain decimal number
NUMERIC_PATTERN = r"^-?[0-9]+(\.[0-9]+)?$"


def numeric(alias: str) -> str:
    """Cast a meta_value to numeric, or NULL when it isn't a number."""
    value = f"btrim({alias}.meta_value)"
    return f"(CASE WHEN {value} ~ '{NUMERIC_PATTERN}' THEN {value}::numeric END)"


def _to_decimal(value: float) -> Decimal:
    # asyncpg encodes numeric params from Decimal
    return Decimal(str(value))


class _Params:
    """Collects bound values and hands out their $n placeholders."""

    def __init__(self) -> None:
        self.values: List[Any] = []

    def add(self, value: Any) -> str:
        self.values.append(value)
        return f"${len(self.values)}"


def _meta_join(alias: str, meta_key: str) -> str:
    return (
        f" INNER JOIN wp_postmeta AS {alias}"
        f" ON p.id = {alias}.post_id AND {alias}.meta_key = '{meta_key}'"
    )


def _range_clause(alias: str, low: Optional[float], high: Optional[float], params: _Params) -> str:
    clause = ""
    if low is not None:
        clause += f" AND {numeric(alias)} >= {params.add(_to_decimal(low))}"
    if high is not None:
        clause += f" AND {numeric(alias)} <= {params.add(_to_decimal(high))}"
    return clause


def build_cheapest_room_query(hotel_id: int, filters: HotelFilters) -> Tuple[str, List[Any]]:
    """Build the query selecting a hotel's cheapest room under the filters.

    Returns:
        Tuple of (sql, params) ready for conn.fetchrow(sql, *params)
    """
    params = _Params()
    hotel_param = params.add(hotel_id)

    query = (
        "SELECT p.id AS id,"
        " p.post_title AS title,"
        " surface_data.meta_value AS surface,"
        f" MIN({numeric('price_data')}) AS price,"
        " rooms_data.meta_value AS bedrooms_count,"
        " bath_data.meta_value AS bathrooms_count,"
        " type_data.meta_value AS type"
        " FROM wp_posts AS p"
    )

    query += _meta_join("surface_data", "surface")
    query += _range_clause("surface_data", filters.surface.min, filters.surface.max, params)

    query += _meta_join("price_data", "price")
    query += _range_clause("price_data", filters.price.min, filters.price.max, params)

    query += _meta_join("rooms_data", "bedrooms_count")
    if filters.rooms is not None:
        query += f" AND {numeric('rooms_data')} >= {params.add(_to_decimal(filters.rooms))}"

    query += _meta_join("bath_data", "bathrooms_count")
    if filters.bathrooms is not None:
        query += f" AND {numeric('bath_data')} >= {params.add(_to_decimal(filters.bathrooms))}"

    query += _meta_join("type_data", "type")
    if filters.types:
        query += f" AND type_data.meta_value = ANY({params.add(list(filters.types))}::text[])"

    query += f" WHERE p.post_author = {hotel_param} AND p.post_type = 'room'"
    query += (
        " GROUP BY p.id, p.post_title, surface_data.meta_value, rooms_data.meta_value,"
        " bath_data.meta_value, type_data.meta_value"
    )
    query += " ORDER BY price ASC, p.id ASC LIMIT 1"

    return query, params.values
