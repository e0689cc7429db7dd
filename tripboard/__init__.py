"""Itinerary state and geospatial orchestration core for a personal trip planner."""

__version__ = "0.1.0"
