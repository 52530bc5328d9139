"""
Geo helperi - udaljenost izmedju dve tacke na Zemlji.
"""

from math import radians, sin, cos, asin, sqrt

EARTH_RADIUS_KM = 6371


def haversine_km(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """Calculate the great circle distance in km between two points."""
    lat1, lng1, lat2, lng2 = map(radians, [lat1, lng1, lat2, lng2])
    dlat = lat2 - lat1
    dlng = lng2 - lng1
    a = sin(dlat / 2) ** 2 + cos(lat1) * cos(lat2) * sin(dlng / 2) ** 2
    # min() stiti asin od a > 1 zbog floating point greske kod antipoda
    c = 2 * asin(sqrt(min(1.0, a)))
    return EARTH_RADIUS_KM * c
