"""
Run Builder

Turns candidate index ranges into Run values with derived metrics.
All metrics come from the raw samples; smoothing is a detection aid only.
"""

import logging
import uuid
from typing import List, Sequence

from pumpfoil.shared.constants import RUN_ID_NAMESPACE
from pumpfoil.shared.geo import haversine_m, is_valid_fix, elapsed_seconds
from .segmenter import Candidate
from .types import Run, Sample

logger = logging.getLogger(__name__)

_RUN_NAMESPACE = uuid.UUID(RUN_ID_NAMESPACE)


def make_run_id(session_id: str, start_index: int, end_index: int) -> str:
    """Deterministic run identifier from session and index bounds."""
    return str(uuid.uuid5(_RUN_NAMESPACE, f"{session_id}:{start_index}:{end_index}"))


class RunBuilder:
    """
    Builds runs from candidate ranges.

    Candidates shorter than ``min_run_duration`` are dropped. Survivors
    are numbered 1, 2, ... in the order they occur in the session.
    """

    @classmethod
    def build_runs(
        cls,
        samples: Sequence[Sample],
        candidates: Sequence[Candidate],
        min_run_duration: float,
        session_id: str = ""
    ) -> List[Run]:
        """
        Build runs for every candidate long enough to count.

        Args:
            samples: Raw session samples
            candidates: Inclusive (start_index, end_index) ranges, ascending
            min_run_duration: Shortest accepted run (seconds)
            session_id: Session identifier used to derive run ids

        Returns:
            List of Run objects in ascending start order
        """
        runs: List[Run] = []

        for start, end in candidates:
            duration = elapsed_seconds(samples[start].time_offset, samples[end].time_offset)
            if duration < min_run_duration:
                logger.debug(
                    f"Dropping candidate [{start}, {end}]: "
                    f"{duration:.1f}s < {min_run_duration}s"
                )
                continue

            runs.append(cls._create_run(samples, start, end, len(runs) + 1, session_id))

        return runs

    @classmethod
    def _create_run(
        cls,
        samples: Sequence[Sample],
        start: int,
        end: int,
        number: int,
        session_id: str
    ) -> Run:
        """Create a Run from the sample slice [start, end]."""
        span = samples[start:end + 1]
        heartrates = [s.heartrate for s in span if s.heartrate is not None]

        return Run(
            id=make_run_id(session_id, start, end),
            number=number,
            start_index=start,
            end_index=end,
            start_time=span[0].time_offset,
            end_time=span[-1].time_offset,
            distance=cls.calculate_distance(span),
            average_speed=cls.calculate_average_speed(span),
            max_speed=max(s.speed for s in span),
            average_heartrate=round(sum(heartrates) / len(heartrates)) if heartrates else None,
            max_heartrate=max(heartrates) if heartrates else None,
            start_heartrate=heartrates[0] if heartrates else None,
            end_heartrate=heartrates[-1] if heartrates else None,
        )

    @staticmethod
    def calculate_distance(span: Sequence[Sample]) -> float:
        """
        Sum great-circle distances between consecutive usable fixes.

        Samples without a fix are skipped, not interpolated: the next
        fix is joined to the last known one, so a GPS dropout covers the
        straight line between them and never invents extra motion.

        Returns:
            Distance in meters
        """
        total = 0.0
        previous = None

        for sample in span:
            position = sample.position.as_tuple() if sample.position else None
            if not is_valid_fix(position):
                continue
            if previous is not None:
                total += haversine_m(previous[0], previous[1], position[0], position[1])
            previous = position

        return total

    @staticmethod
    def calculate_average_speed(span: Sequence[Sample]) -> float:
        """
        Time-weighted mean of raw speeds.

        Each interval between consecutive samples contributes the mean of
        its two endpoint speeds, weighted by its length (trapezoidal rule),
        so unevenly spaced samples do not skew the result. A span with no
        elapsed time falls back to the arithmetic mean.

        Returns:
            Average speed in km/h
        """
        weighted = 0.0
        total_time = 0.0

        for prev, curr in zip(span, span[1:]):
            dt = elapsed_seconds(prev.time_offset, curr.time_offset)
            weighted += (prev.speed + curr.speed) / 2 * dt
            total_time += dt

        if total_time <= 0:
            return sum(s.speed for s in span) / len(span)

        return weighted / total_time
