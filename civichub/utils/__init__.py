"""
CivicHub Utilities Package.

Ciste pomocne funkcije bez zavisnosti od Flask-a i baze.
"""

from .geo import haversine_km, EARTH_RADIUS_KM
from .content_filter import ProfanityFilter

__all__ = [
    'haversine_km',
    'EARTH_RADIUS_KM',
    'ProfanityFilter',
]
