"""
Shared utilities (NOT business logic).

Usage:
    from pumpfoil.shared import haversine_m, instantaneous_speed_kmh
    from pumpfoil.shared.formatters import format_duration
"""
from .geo import (
    haversine,
    haversine_m,
    is_valid_fix,
    elapsed_seconds,
    ms_to_kmh,
    kmh_to_ms,
    instantaneous_speed_kmh,
    EARTH_RADIUS_KM,
    MS_TO_KMH,
)
from .formatters import (
    format_duration,
    format_distance,
    format_speed,
    format_heartrate,
)
from .constants import (
    DEFAULT_MIN_SPEED_THRESHOLD_KMH,
    DEFAULT_MIN_RUN_DURATION_S,
    DEFAULT_MIN_STOP_DURATION_S,
    DEFAULT_SPEED_SMOOTHING_WINDOW,
    SPEED_THRESHOLD_RANGE_KMH,
    RUN_DURATION_RANGE_S,
    STOP_DURATION_RANGE_S,
    SMOOTHING_WINDOW_RANGE,
)

__all__ = [
    # geo
    "haversine",
    "haversine_m",
    "is_valid_fix",
    "elapsed_seconds",
    "ms_to_kmh",
    "kmh_to_ms",
    "instantaneous_speed_kmh",
    "EARTH_RADIUS_KM",
    "MS_TO_KMH",
    # formatters
    "format_duration",
    "format_distance",
    "format_speed",
    "format_heartrate",
    # constants
    "DEFAULT_MIN_SPEED_THRESHOLD_KMH",
    "DEFAULT_MIN_RUN_DURATION_S",
    "DEFAULT_MIN_STOP_DURATION_S",
    "DEFAULT_SPEED_SMOOTHING_WINDOW",
    "SPEED_THRESHOLD_RANGE_KMH",
    "RUN_DURATION_RANGE_S",
    "STOP_DURATION_RANGE_S",
    "SMOOTHING_WINDOW_RANGE",
]
