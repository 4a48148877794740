"""
Formatting utilities for display.

Used by the CLI report and available to API consumers.
"""
from typing import Optional


def format_duration(seconds: Optional[float]) -> str:
    """
    Format seconds as 'M:SS' or 'H:MM:SS'.

    Args:
        seconds: Duration in seconds (e.g., 95)

    Returns:
        Formatted string (e.g., '1:35'), '—' when unknown
    """
    if seconds is None or seconds < 0:
        return "—"

    total = int(round(seconds))
    h = total // 3600
    m = (total % 3600) // 60
    s = total % 60

    if h > 0:
        return f"{h}:{m:02d}:{s:02d}"
    return f"{m}:{s:02d}"


def format_distance(meters: Optional[float]) -> str:
    """
    Format distance.

    Args:
        meters: Distance in meters

    Returns:
        Formatted string (e.g., '850 m' or '1.25 km')
    """
    if meters is None:
        return "—"
    if meters < 1000:
        return f"{int(round(meters))} m"
    return f"{meters / 1000:.2f} km"


def format_speed(speed_kmh: Optional[float]) -> str:
    """Format speed as '12.3 km/h'."""
    if speed_kmh is None:
        return "—"
    return f"{speed_kmh:.1f} km/h"


def format_heartrate(bpm: Optional[int]) -> str:
    """Format heart rate as '142 bpm'."""
    if bpm is None:
        return "—"
    return f"{bpm} bpm"
