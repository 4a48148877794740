"""
Run Segmenter

Finds candidate pumping intervals in a smoothed speed series.
Used by RunDetectionEngine before run metrics are extracted.
"""

import logging
from enum import Enum
from typing import List, Sequence, Tuple

logger = logging.getLogger(__name__)

# Inclusive (start_index, end_index)
Candidate = Tuple[int, int]


class _State(Enum):
    BELOW = "below"
    ABOVE = "above"
    PENDING_GAP = "pending_gap"


class Segmenter:
    """
    Threshold + hysteresis segmentation in a single pass.

    A sample counts as pumping when its smoothed speed is at or above
    the threshold. Dips below the threshold do not close the current
    candidate immediately: the candidate is closed only once the dip
    has lasted ``min_stop_duration`` seconds. Shorter dips are bridged.

    Gap length is measured from the first low sample to the sample
    that follows the latest low sample, i.e. the time span over which
    speed is known to be low. At 1 Hz a dip over samples 10-11 lasts 2 s.
    """

    @classmethod
    def find_candidates(
        cls,
        smoothed: Sequence[float],
        time_offsets: Sequence[float],
        min_speed_threshold: float,
        min_stop_duration: float
    ) -> List[Candidate]:
        """
        Split the series into disjoint candidate ranges.

        Args:
            smoothed: Smoothed speed per sample (km/h)
            time_offsets: Time offset per sample (seconds, non-decreasing)
            min_speed_threshold: Pumping threshold (km/h)
            min_stop_duration: Shortest dip (seconds) that splits two runs

        Returns:
            Ordered list of inclusive (start_index, end_index) ranges
        """
        if len(smoothed) != len(time_offsets):
            raise ValueError(
                f"Series length mismatch: {len(smoothed)} speeds, "
                f"{len(time_offsets)} time offsets"
            )

        n = len(smoothed)
        candidates: List[Candidate] = []
        state = _State.BELOW
        run_start = 0
        gap_start = 0

        for i in range(n):
            above = smoothed[i] >= min_speed_threshold

            if state == _State.BELOW:
                if above:
                    state = _State.ABOVE
                    run_start = i
                continue

            if state == _State.ABOVE:
                if above:
                    continue
                state = _State.PENDING_GAP
                gap_start = i
            elif above:
                # Dip was short enough: candidate continues through it
                state = _State.ABOVE
                continue

            if cls._gap_elapsed(time_offsets, gap_start, i) >= min_stop_duration:
                candidates.append((run_start, gap_start - 1))
                state = _State.BELOW

        if state == _State.ABOVE:
            candidates.append((run_start, n - 1))
        elif state == _State.PENDING_GAP:
            candidates.append((run_start, gap_start - 1))

        logger.debug(
            f"Segmenter: {len(candidates)} candidates in {n} samples "
            f"(threshold={min_speed_threshold}, min_stop={min_stop_duration}s)"
        )

        return candidates

    @staticmethod
    def _gap_elapsed(
        time_offsets: Sequence[float],
        gap_start: int,
        current: int
    ) -> float:
        """Seconds from gap start until the sample after ``current``."""
        end = current + 1 if current + 1 < len(time_offsets) else current
        return time_offsets[end] - time_offsets[gap_start]
