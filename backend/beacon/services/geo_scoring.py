"""Geographic proximity scoring."""

import math

EARTH_RADIUS_KM = 6371.0

# (exclusive upper bound in km, score); anything farther scores FAR_SCORE
DISTANCE_BUCKETS = (
    (1, 30),    # walking distance
    (3, 27),    # short walk/ride
    (5, 25),    # easy to meet
    (10, 22),   # same area
    (25, 18),   # same city/region
    (50, 14),   # neighboring area
    (100, 10),  # regional
)
FAR_SCORE = 5
UNKNOWN_DISTANCE_SCORE = 10


def _is_coordinate(value) -> bool:
    if value is None or isinstance(value, bool):
        return False
    try:
        return math.isfinite(value)
    except TypeError:
        return False


def distance_km(lat1, lng1, lat2, lng2) -> float | None:
    """Great-circle distance between two points in km, or None if either point is unknown."""
    if not all(_is_coordinate(v) for v in (lat1, lng1, lat2, lng2)):
        return None

    d_lat = math.radians(lat2 - lat1)
    d_lng = math.radians(lng2 - lng1)
    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(d_lng / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def distance_score(km: float | None) -> int:
    """Bucketed proximity score (5-30). An unknown distance is neutral, not zero."""
    if km is None:
        return UNKNOWN_DISTANCE_SCORE
    for upper, score in DISTANCE_BUCKETS:
        if km < upper:
            return score
    return FAR_SCORE
