"""
Geographic and kinematic utility functions.

This is the SINGLE SOURCE OF TRUTH for distance, elapsed-time and
speed calculations. DO NOT duplicate these functions elsewhere.
"""
import math
from typing import Optional, Tuple

# Earth radius in kilometers
EARTH_RADIUS_KM = 6371.0

# 1 m/s = 3.6 km/h
MS_TO_KMH = 3.6


def haversine(
    lat1: float, lon1: float,
    lat2: float, lon2: float
) -> float:
    """
    Calculate great-circle distance between two points.

    Args:
        lat1, lon1: First point coordinates (degrees)
        lat2, lon2: Second point coordinates (degrees)

    Returns:
        Distance in kilometers
    """
    lat1_rad = math.radians(lat1)
    lat2_rad = math.radians(lat2)
    delta_lat = math.radians(lat2 - lat1)
    delta_lon = math.radians(lon2 - lon1)

    a = (
        math.sin(delta_lat / 2) ** 2 +
        math.cos(lat1_rad) * math.cos(lat2_rad) *
        math.sin(delta_lon / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

    return EARTH_RADIUS_KM * c


def haversine_m(
    lat1: float, lon1: float,
    lat2: float, lon2: float
) -> float:
    """Great-circle distance in meters."""
    return haversine(lat1, lon1, lat2, lon2) * 1000


def is_valid_fix(position: Optional[Tuple[float, float]]) -> bool:
    """
    Check whether a (lat, lon) pair is a usable GPS fix.

    Trackers report (0, 0) when they have no signal, so null island
    counts as "no fix" together with a missing position.
    """
    if position is None:
        return False
    lat, lon = position
    if lat == 0.0 and lon == 0.0:
        return False
    return -90.0 <= lat <= 90.0 and -180.0 <= lon <= 180.0


def elapsed_seconds(start_offset: float, end_offset: float) -> float:
    """
    Elapsed time between two time offsets.

    Args:
        start_offset: Earlier offset (seconds from session start)
        end_offset: Later offset (seconds from session start)

    Returns:
        Elapsed seconds (never negative)
    """
    return max(0.0, end_offset - start_offset)


def ms_to_kmh(speed_ms: float) -> float:
    """Convert m/s to km/h."""
    return speed_ms * MS_TO_KMH


def kmh_to_ms(speed_kmh: float) -> float:
    """Convert km/h to m/s."""
    return speed_kmh / MS_TO_KMH


def instantaneous_speed_kmh(
    distance_m: float,
    elapsed_s: float
) -> Optional[float]:
    """
    Speed over a short displacement.

    Args:
        distance_m: Distance covered in meters
        elapsed_s: Time taken in seconds

    Returns:
        Speed in km/h, or None if no time elapsed
    """
    if elapsed_s <= 0:
        return None
    return ms_to_kmh(distance_m / elapsed_s)
