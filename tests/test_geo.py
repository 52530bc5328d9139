"""
Haversine udaljenost.
"""
import math
import pytest

from civichub.utils.geo import haversine_km, EARTH_RADIUS_KM


class TestHaversine:

    def test_identical_points_are_zero(self):
        assert haversine_km(12.9716, 77.5946, 12.9716, 77.5946) == 0

    def test_london_paris(self):
        d = haversine_km(51.5074, -0.1278, 48.8566, 2.3522)
        assert d == pytest.approx(343.5, abs=1.0)

    def test_symmetric(self):
        a = haversine_km(12.9716, 77.5946, 12.2958, 76.6394)
        b = haversine_km(12.2958, 76.6394, 12.9716, 77.5946)
        assert a == pytest.approx(b)

    def test_quarter_of_equator(self):
        d = haversine_km(0, 0, 0, 90)
        assert d == pytest.approx(math.pi * EARTH_RADIUS_KM / 2)

    def test_antipodes(self):
        """Floating point ne sme da izbaci asin van domena."""
        d = haversine_km(0, 0, 0, 180)
        assert d == pytest.approx(math.pi * EARTH_RADIUS_KM)

    def test_short_city_distance(self):
        """Dve tacke u Bengaluruu, oko 1.7 km."""
        d = haversine_km(12.9716, 77.5946, 12.9815, 77.6072)
        assert 1.5 < d < 2.0
