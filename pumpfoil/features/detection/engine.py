"""
Run Detection Engine

Orchestrates the detection pipeline:
- Speed smoothing
- Threshold + hysteresis segmentation
- Run metric extraction
- Session aggregation

This is the main entry point for detection and reprocessing.
"""

import logging
import statistics
from typing import Optional, Sequence

from .aggregator import aggregate_session
from .exceptions import ConfigError, RawDataUnavailableError, SampleSequenceError
from .run_builder import RunBuilder
from .segmenter import Segmenter
from .smoothing import smooth_speeds
from .types import DetectionConfig, DetectionResult, EngineState, Sample, Session

logger = logging.getLogger(__name__)


class RunDetectionEngine:
    """
    Detects pumping runs in a session's samples.

    Each call is independent: the engine keeps no data between calls,
    only the state of its latest pass (IDLE -> DETECTING -> DONE/FAILED).

    Example usage:
        engine = RunDetectionEngine()
        result = engine.detect(samples, DetectionConfig(min_speed_threshold=9))
        session = session.with_result(engine.reprocess(session, new_config))
    """

    def __init__(self):
        self.state = EngineState.IDLE

    def detect(
        self,
        samples: Sequence[Sample],
        config: DetectionConfig,
        session_id: str = ""
    ) -> DetectionResult:
        """
        Run the full pipeline on a complete sample sequence.

        Args:
            samples: Raw samples in time order
            config: Detection parameters
            session_id: Used to derive deterministic run ids

        Returns:
            DetectionResult with runs and session stats

        Raises:
            ConfigError: If config is invalid or incompatible with the
                sample time resolution
            SampleSequenceError: If time offsets decrease
        """
        self.state = EngineState.DETECTING
        samples = tuple(samples)

        try:
            self.validate(samples, config)

            smoothed = smooth_speeds([s.speed for s in samples], config.speed_smoothing_window)
            candidates = Segmenter.find_candidates(
                smoothed,
                [s.time_offset for s in samples],
                config.min_speed_threshold,
                config.min_stop_duration,
            )
            runs = RunBuilder.build_runs(
                samples, candidates, config.min_run_duration, session_id
            )
            stats = aggregate_session(runs, samples)
        except ConfigError as e:
            self.state = EngineState.FAILED
            logger.warning(f"Detection rejected for session {session_id or '-'}: {e}")
            raise
        except Exception:
            self.state = EngineState.FAILED
            raise

        self.state = EngineState.DONE
        logger.info(
            f"Detected {len(runs)} runs in {len(samples)} samples "
            f"(session {session_id or '-'}, {len(candidates)} candidates)"
        )

        return DetectionResult(runs=tuple(runs), stats=stats, config=config)

    def reprocess(
        self,
        session: Session,
        new_config: DetectionConfig
    ) -> DetectionResult:
        """
        Re-detect runs from the session's stored raw samples.

        Previously derived runs and stats are ignored entirely; the caller
        replaces them with the returned result (see Session.with_result).

        Raises:
            RawDataUnavailableError: If the session's raw samples were pruned
            ConfigError: If new_config is invalid
        """
        if not session.has_raw_data:
            self.state = EngineState.FAILED
            raise RawDataUnavailableError(
                f"Session {session.id} has no raw samples to reprocess"
            )

        logger.info(f"Reprocessing session {session.id}")
        return self.detect(session.samples, new_config, session_id=session.id)

    @classmethod
    def validate(cls, samples: Sequence[Sample], config: DetectionConfig) -> None:
        """
        Check config values and their fit with the samples.

        A duration setting shorter than the typical spacing between
        samples cannot be resolved: every dip would split a run, or every
        candidate would be judged on a single interval.
        """
        config.validate()

        for prev, curr in zip(samples, samples[1:]):
            if curr.time_offset < prev.time_offset:
                raise SampleSequenceError(
                    f"Time offsets must be non-decreasing: "
                    f"{prev.time_offset} followed by {curr.time_offset}"
                )

        spacing = cls.typical_spacing(samples)
        if spacing is None:
            return

        if config.min_stop_duration < spacing:
            raise ConfigError(
                f"min_stop_duration ({config.min_stop_duration}s) is shorter than "
                f"the sample spacing ({spacing}s)"
            )
        if config.min_run_duration < spacing:
            raise ConfigError(
                f"min_run_duration ({config.min_run_duration}s) is shorter than "
                f"the sample spacing ({spacing}s)"
            )

    @staticmethod
    def typical_spacing(samples: Sequence[Sample]) -> Optional[float]:
        """Median positive gap between consecutive time offsets."""
        deltas = [
            curr.time_offset - prev.time_offset
            for prev, curr in zip(samples, samples[1:])
            if curr.time_offset > prev.time_offset
        ]
        if not deltas:
            return None
        return statistics.median(deltas)


def detect(
    samples: Sequence[Sample],
    config: DetectionConfig,
    session_id: str = ""
) -> DetectionResult:
    """Detect runs with a fresh engine."""
    return RunDetectionEngine().detect(samples, config, session_id=session_id)


def reprocess(session: Session, new_config: DetectionConfig) -> DetectionResult:
    """Reprocess a session with a fresh engine."""
    return RunDetectionEngine().reprocess(session, new_config)
