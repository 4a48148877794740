"""
Shared test helpers.

Builds synthetic sample sequences for detection tests.
"""

import math

import pytest

from pumpfoil.features.detection import Position, Sample
from pumpfoil.shared.geo import EARTH_RADIUS_KM

# Degrees of latitude per meter on the haversine sphere
LAT_DEG_PER_M = 180.0 / (math.pi * EARTH_RADIUS_KM * 1000)

BASE_LAT = 43.0
BASE_LON = 5.0


def build_samples(
    speeds,
    interval=1.0,
    offsets=None,
    meters_per_sample=None,
    heartrates=None,
):
    """
    Build samples from a speed list.

    Args:
        speeds: Speed per sample (km/h)
        interval: Seconds between samples (ignored if offsets given)
        offsets: Explicit time offsets
        meters_per_sample: If set, samples move north by this distance
        heartrates: Optional heart rate per sample (None entries allowed)
    """
    if offsets is None:
        offsets = [i * interval for i in range(len(speeds))]

    samples = []
    for i, speed in enumerate(speeds):
        position = None
        if meters_per_sample is not None:
            position = Position(BASE_LAT + i * meters_per_sample * LAT_DEG_PER_M, BASE_LON)
        samples.append(Sample(
            time_offset=offsets[i],
            speed=speed,
            position=position,
            heartrate=heartrates[i] if heartrates else None,
        ))
    return tuple(samples)


@pytest.fixture
def make_samples():
    """Factory fixture for synthetic sample sequences."""
    return build_samples


@pytest.fixture
def steady_session(make_samples):
    """1 Hz, 10 km/h for 30 s (31 samples)."""
    return make_samples([10.0] * 31)


@pytest.fixture
def dip_session(make_samples):
    """Steady 10 km/h with a 2 s dip to 2 km/h at samples 10-11."""
    speeds = [10.0] * 31
    speeds[10] = 2.0
    speeds[11] = 2.0
    return make_samples(speeds)
