"""
Session Aggregator

Reduces a session's runs into SessionStats. Stats are always recomputed
from the full run set; nothing here patches previous results.
"""

from typing import Optional, Sequence

from pumpfoil.shared.geo import elapsed_seconds
from .types import Run, Sample, SessionStats


def aggregate_session(
    runs: Sequence[Run],
    samples: Optional[Sequence[Sample]] = None
) -> SessionStats:
    """
    Compute session-level statistics.

    Args:
        runs: Detected runs of the session
        samples: Whole raw sample stream, used for session duration

    Returns:
        SessionStats. With zero runs, sums are 0 and averages/maxima None.
    """
    session_duration = None
    if samples:
        session_duration = elapsed_seconds(samples[0].time_offset, samples[-1].time_offset)

    if not runs:
        return SessionStats(
            session_duration=session_duration,
            pumping_ratio=0.0 if session_duration else None,
        )

    durations = [r.duration for r in runs]
    distances = [r.distance for r in runs]
    total_time = sum(durations)
    total_distance = sum(distances)

    average_hr, max_hr = _heartrate_aggregates(runs)

    pumping_ratio = None
    if session_duration:
        pumping_ratio = total_time / session_duration

    return SessionStats(
        number_of_runs=len(runs),
        total_pumping_time=total_time,
        total_pumping_distance=total_distance,
        best_max_speed=max(r.max_speed for r in runs),
        best_average_speed=max(r.average_speed for r in runs),
        average_run_duration=total_time / len(runs),
        longest_run_duration=max(durations),
        average_run_distance=total_distance / len(runs),
        longest_run_distance=max(distances),
        average_heartrate=average_hr,
        max_heartrate=max_hr,
        session_duration=session_duration,
        pumping_ratio=pumping_ratio,
    )


def _heartrate_aggregates(runs: Sequence[Run]) -> tuple:
    """Duration-weighted average and max heart rate over runs that have it."""
    hr_runs = [r for r in runs if r.has_heartrate]
    if not hr_runs:
        return None, None

    total_duration = sum(r.duration for r in hr_runs)
    if total_duration > 0:
        average = sum(r.average_heartrate * r.duration for r in hr_runs) / total_duration
    else:
        average = sum(r.average_heartrate for r in hr_runs) / len(hr_runs)

    max_values = [r.max_heartrate for r in hr_runs if r.max_heartrate is not None]

    return round(average), max(max_values) if max_values else None


def longest_run(runs: Sequence[Run]) -> Optional[Run]:
    """Longest run by duration; the earliest one wins a tie."""
    if not runs:
        return None
    best = runs[0]
    for run in runs[1:]:
        if run.duration > best.duration:
            best = run
    return best


def find_run(runs: Sequence[Run], run_id: str) -> Optional[Run]:
    """Look up a run by id (e.g. the run a user selected)."""
    for run in runs:
        if run.id == run_id:
            return run
    return None
