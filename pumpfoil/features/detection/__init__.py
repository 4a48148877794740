"""
Run detection module.

Usage:
    from pumpfoil.features.detection import RunDetectionEngine, DetectionConfig
    from pumpfoil.features.detection import detect, reprocess

Components:
- smooth_speeds: Trailing moving average (detection aid only)
- Segmenter: Threshold + hysteresis candidate ranges
- RunBuilder: Per-run metrics from raw samples
- aggregate_session: Session statistics
- RunDetectionEngine: Facade with detect/reprocess
"""

from .exceptions import (
    DetectionError,
    ConfigError,
    SampleSequenceError,
    RawDataUnavailableError,
)
from .types import (
    EngineState,
    Position,
    Sample,
    DetectionConfig,
    DEFAULT_CONFIG,
    Run,
    SessionStats,
    DetectionResult,
    Session,
)
from .smoothing import smooth_speeds
from .segmenter import Segmenter
from .run_builder import RunBuilder, make_run_id
from .aggregator import aggregate_session, longest_run, find_run
from .engine import RunDetectionEngine, detect, reprocess

__all__ = [
    # Errors
    "DetectionError",
    "ConfigError",
    "SampleSequenceError",
    "RawDataUnavailableError",
    # Types
    "EngineState",
    "Position",
    "Sample",
    "DetectionConfig",
    "DEFAULT_CONFIG",
    "Run",
    "SessionStats",
    "DetectionResult",
    "Session",
    # Pipeline
    "smooth_speeds",
    "Segmenter",
    "RunBuilder",
    "make_run_id",
    "aggregate_session",
    "longest_run",
    "find_run",
    # Facade
    "RunDetectionEngine",
    "detect",
    "reprocess",
]
