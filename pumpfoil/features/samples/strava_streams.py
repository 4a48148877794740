"""
Strava streams conversion.

Turns an activity streams payload (as returned by the Strava API with
``key_by_type=true``) into detection samples. No network access here:
fetching the payload is the caller's job.
"""

import logging
import math
from typing import Any, Dict, List, Optional, Tuple

from pumpfoil.shared.geo import ms_to_kmh
from pumpfoil.features.detection.types import Position, Sample

logger = logging.getLogger(__name__)

# Stream keys we read
TIME_STREAM = "time"
LATLNG_STREAM = "latlng"
VELOCITY_STREAM = "velocity_smooth"
HEARTRATE_STREAM = "heartrate"


def _stream_data(streams: Dict[str, Any], key: str) -> Optional[List[Any]]:
    """Accept both {"time": {"data": [...]}} and {"time": [...]}."""
    stream = streams.get(key)
    if stream is None:
        return None
    if isinstance(stream, dict):
        return stream.get("data")
    return list(stream)


def _required_value(name: str, data: List[Any], index: int) -> float:
    """Numeric point of a required stream; nulls are not treated as zero."""
    value = data[index]
    if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
        raise ValueError(f"Stream '{name}' has an invalid value at point {index}: {value!r}")
    return float(value)


def samples_from_strava_streams(streams: Dict[str, Any]) -> Tuple[Sample, ...]:
    """
    Convert Strava streams to samples.

    Args:
        streams: Streams payload keyed by type. ``time`` and
            ``velocity_smooth`` (m/s) are required; ``latlng`` and
            ``heartrate`` are optional.

    Returns:
        Tuple of Sample with speed in km/h

    Raises:
        ValueError: If required streams are missing, lengths differ, or a
            required stream holds a null or non-numeric value
    """
    times = _stream_data(streams, TIME_STREAM)
    velocities = _stream_data(streams, VELOCITY_STREAM)

    if times is None or velocities is None:
        raise ValueError("Streams payload must contain 'time' and 'velocity_smooth'")

    latlngs = _stream_data(streams, LATLNG_STREAM)
    heartrates = _stream_data(streams, HEARTRATE_STREAM)

    n = len(times)
    for name, data in (
        (VELOCITY_STREAM, velocities),
        (LATLNG_STREAM, latlngs),
        (HEARTRATE_STREAM, heartrates),
    ):
        if data is not None and len(data) != n:
            raise ValueError(
                f"Stream '{name}' has {len(data)} points, expected {n}"
            )

    samples = []
    for i in range(n):
        position = None
        if latlngs is not None and latlngs[i]:
            lat, lng = latlngs[i]
            position = Position(float(lat), float(lng))

        heartrate = None
        if heartrates is not None and heartrates[i] is not None:
            heartrate = int(heartrates[i])

        samples.append(Sample(
            time_offset=_required_value(TIME_STREAM, times, i),
            speed=ms_to_kmh(_required_value(VELOCITY_STREAM, velocities, i)),
            position=position,
            heartrate=heartrate,
        ))

    logger.debug(
        f"Converted {n} stream points "
        f"(gps={'yes' if latlngs else 'no'}, hr={'yes' if heartrates else 'no'})"
    )

    return tuple(samples)
