"""
GPX track conversion.

Parses a recorded GPX track into detection samples.
"""

import logging
from typing import List, Optional, Tuple

import gpxpy
import gpxpy.gpx

from pumpfoil.shared.geo import (
    haversine_m,
    elapsed_seconds,
    instantaneous_speed_kmh,
    ms_to_kmh,
)
from pumpfoil.features.detection.types import Position, Sample

logger = logging.getLogger(__name__)


def _heartrate(point: gpxpy.gpx.GPXTrackPoint) -> Optional[int]:
    """Read heart rate from a Garmin TrackPointExtension, if any."""
    for extension in point.extensions:
        for element in extension.iter():
            tag = element.tag.rsplit("}", 1)[-1]
            if tag == "hr" and element.text:
                try:
                    return int(float(element.text))
                except (ValueError, OverflowError):
                    logger.debug(f"Ignoring malformed heart rate: {element.text!r}")
                    return None
    return None


def _track_points(gpx: gpxpy.gpx.GPX) -> List[gpxpy.gpx.GPXTrackPoint]:
    points = []
    for track in gpx.tracks:
        for segment in track.segments:
            points.extend(segment.points)
    return points


def samples_from_gpx(content: bytes) -> Tuple[Sample, ...]:
    """
    Parse GPX content into samples.

    Speed comes from the point's own speed field (m/s) when the recorder
    wrote one; otherwise it is derived from the displacement since the
    previous point. The first point takes the speed of the first interval.

    Args:
        content: GPX file content as bytes

    Returns:
        Tuple of Sample

    Raises:
        ValueError: If GPX is invalid, has no track points, or points
            lack timestamps or mix timezone-aware and naive ones
    """
    try:
        gpx = gpxpy.parse(content.decode("utf-8"))
    except Exception as e:
        logger.error(f"Failed to parse GPX: {e}")
        raise ValueError(f"Invalid GPX file: {e}")

    points = _track_points(gpx)
    if not points:
        raise ValueError("GPX file contains no track points")
    if any(p.time is None for p in points):
        raise ValueError("GPX track points must carry timestamps")
    if len({p.time.tzinfo is None for p in points}) > 1:
        raise ValueError("GPX track points mix timezone-aware and naive timestamps")

    start = points[0].time
    offsets = [(p.time - start).total_seconds() for p in points]

    speeds: List[Optional[float]] = []
    for i, point in enumerate(points):
        if point.speed is not None:
            speeds.append(ms_to_kmh(point.speed))
            continue
        if i == 0:
            speeds.append(None)
            continue
        prev = points[i - 1]
        distance = haversine_m(prev.latitude, prev.longitude, point.latitude, point.longitude)
        speed = instantaneous_speed_kmh(distance, elapsed_seconds(offsets[i - 1], offsets[i]))
        # Duplicate timestamps: keep the previous speed
        speeds.append(speed if speed is not None else speeds[-1])

    # Backfill leading gaps from the first known speed
    first_known = next((s for s in speeds if s is not None), 0.0)
    speeds = [first_known if s is None else s for s in speeds]

    samples = tuple(
        Sample(
            time_offset=offsets[i],
            speed=speeds[i],
            position=Position(p.latitude, p.longitude),
            heartrate=_heartrate(p),
        )
        for i, p in enumerate(points)
    )

    logger.info(f"Parsed GPX track: {len(samples)} points over {offsets[-1]:.0f}s")
    return samples
