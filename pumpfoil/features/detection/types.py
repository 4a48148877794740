"""
Domain types for run detection.

Value types only. Nothing here imports the engine, segmenter or
builders, so every module of the feature can depend on it.
"""

import math
from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from typing import Optional, Tuple

from pumpfoil.shared.constants import (
    DEFAULT_MIN_SPEED_THRESHOLD_KMH,
    DEFAULT_MIN_RUN_DURATION_S,
    DEFAULT_MIN_STOP_DURATION_S,
    DEFAULT_SPEED_SMOOTHING_WINDOW,
)
from .exceptions import ConfigError


class EngineState(str, Enum):
    """Lifecycle of a detection pass."""
    IDLE = "idle"
    DETECTING = "detecting"
    DONE = "done"
    FAILED = "failed"


@dataclass(frozen=True)
class Position:
    """A GPS fix in degrees."""
    lat: float
    lon: float

    def as_tuple(self) -> Tuple[float, float]:
        return (self.lat, self.lon)


@dataclass(frozen=True)
class Sample:
    """
    One recorded point of a session.

    Index in the session's sample sequence is the sample's identity.
    """
    time_offset: float              # seconds from session start
    speed: float                    # km/h
    position: Optional[Position] = None
    heartrate: Optional[int] = None  # bpm


@dataclass(frozen=True)
class DetectionConfig:
    """
    Tunable detection parameters.

    Durations are in seconds and are compared against the samples'
    own time offsets, never against a nominal sample rate.
    """
    min_speed_threshold: float = DEFAULT_MIN_SPEED_THRESHOLD_KMH
    min_run_duration: float = DEFAULT_MIN_RUN_DURATION_S
    min_stop_duration: float = DEFAULT_MIN_STOP_DURATION_S
    speed_smoothing_window: int = DEFAULT_SPEED_SMOOTHING_WINDOW

    def validate(self) -> None:
        """
        Check that every parameter is positive.

        Raises:
            ConfigError: On the first invalid value
        """
        for name in ("min_speed_threshold", "min_run_duration", "min_stop_duration"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ConfigError(f"{name} must be a number, got {value!r}")
            if math.isnan(value) or math.isinf(value) or value <= 0:
                raise ConfigError(f"{name} must be positive, got {value!r}")

        window = self.speed_smoothing_window
        if isinstance(window, bool) or not isinstance(window, int) or window < 1:
            raise ConfigError(
                f"speed_smoothing_window must be a positive integer, got {window!r}"
            )


DEFAULT_CONFIG = DetectionConfig()


@dataclass(frozen=True)
class Run:
    """
    A contiguous interval of active pumping.

    Bounds are inclusive indices into the session's raw samples.
    Speeds are computed from raw values, never from the smoothed series.
    """
    id: str
    number: int
    start_index: int
    end_index: int
    start_time: float
    end_time: float
    distance: float                 # meters
    average_speed: float            # km/h, time-weighted
    max_speed: float                # km/h
    average_heartrate: Optional[int] = None
    max_heartrate: Optional[int] = None
    start_heartrate: Optional[int] = None
    end_heartrate: Optional[int] = None

    @property
    def duration(self) -> float:
        """Elapsed seconds between first and last sample."""
        return self.end_time - self.start_time

    @property
    def sample_count(self) -> int:
        return self.end_index - self.start_index + 1

    @property
    def has_heartrate(self) -> bool:
        return self.average_heartrate is not None


@dataclass(frozen=True)
class SessionStats:
    """
    Session-level reduction over the run set.

    Averages and maxima are None when there is no data; zero is a
    legitimate measurement and never means "missing".
    """
    number_of_runs: int = 0
    total_pumping_time: float = 0.0
    total_pumping_distance: float = 0.0
    best_max_speed: Optional[float] = None
    best_average_speed: Optional[float] = None
    average_run_duration: Optional[float] = None
    longest_run_duration: Optional[float] = None
    average_run_distance: Optional[float] = None
    longest_run_distance: Optional[float] = None
    average_heartrate: Optional[int] = None
    max_heartrate: Optional[int] = None
    session_duration: Optional[float] = None
    pumping_ratio: Optional[float] = None


@dataclass(frozen=True)
class DetectionResult:
    """Output of one detection pass."""
    runs: Tuple[Run, ...]
    stats: SessionStats
    config: DetectionConfig

    @property
    def is_empty(self) -> bool:
        return not self.runs


@dataclass(frozen=True)
class Session:
    """
    A recorded activity with its derived outputs.

    ``samples`` is None once the host has pruned the raw data;
    such a session keeps its runs but can no longer be reprocessed.
    """
    id: str
    samples: Optional[Tuple[Sample, ...]] = None
    runs: Tuple[Run, ...] = ()
    stats: SessionStats = field(default_factory=SessionStats)
    config: Optional[DetectionConfig] = None
    source_activity_id: Optional[int] = None
    start_date: Optional[datetime] = None

    @property
    def has_raw_data(self) -> bool:
        return self.samples is not None

    def with_result(self, result: DetectionResult) -> "Session":
        """Return a copy with runs, stats and config replaced by ``result``."""
        return replace(
            self,
            runs=result.runs,
            stats=result.stats,
            config=result.config,
        )
