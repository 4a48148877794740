"""
Sample import module.

Usage:
    from pumpfoil.features.samples import samples_from_gpx, samples_from_strava_streams

Components:
- samples_from_strava_streams: Strava streams payload -> samples
- samples_from_gpx: GPX track (gpxpy) -> samples
"""

from .strava_streams import samples_from_strava_streams
from .gpx import samples_from_gpx

__all__ = [
    "samples_from_strava_streams",
    "samples_from_gpx",
]
