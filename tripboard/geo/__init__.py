"""Geospatial helpers."""

from tripboard.geo.distance import EARTH_RADIUS_KM, format_distance, haversine_km

__all__ = ["EARTH_RADIUS_KM", "format_distance", "haversine_km"]
