"""Distance between GPS coordinates."""

import math

# Kilometres per degree of great-circle arc
KM_PER_DEGREE = 111.111


def compute_distance(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """Great-circle distance in kilometres (spherical law of cosines).

    The cosine is clamped to [-1, 1] so near-identical or near-antipodal
    points don't push acos out of its domain through rounding.
    """
    if lat1 == lat2 and lng1 == lng2:
        return 0.0

    cos_angle = (
        math.cos(math.radians(lat2))
        * math.cos(math.radians(lat1))
        * math.cos(math.radians(lng2 - lng1))
        + math.sin(math.radians(lat2))
        * math.sin(math.radians(lat1))
    )
    return KM_PER_DEGREE * math.degrees(math.acos(max(-1.0, min(1.0, cos_angle))))
