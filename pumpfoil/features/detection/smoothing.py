"""
Speed smoothing filter.

Trailing moving average used to stabilize threshold decisions.
Smoothed values drive detection only and are never reported as results.
"""
from typing import List, Sequence

from .exceptions import ConfigError


def smooth_speeds(
    speeds: Sequence[float],
    window: int
) -> List[float]:
    """
    Smooth a speed series with a trailing moving average.

    Each output value is the mean of the raw value and its ``window - 1``
    predecessors. At the start of the series the average is taken over
    whatever samples exist.

    Args:
        speeds: Raw speed values (km/h)
        window: Number of samples in the window (>= 1)

    Returns:
        Smoothed values, same length as the input

    Raises:
        ConfigError: If window is not a positive integer
    """
    if isinstance(window, bool) or not isinstance(window, int) or window < 1:
        raise ConfigError(
            f"speed_smoothing_window must be a positive integer, got {window!r}"
        )

    if window == 1:
        return [float(v) for v in speeds]

    smoothed = []

    for i in range(len(speeds)):
        start = max(0, i - window + 1)
        window_values = speeds[start:i + 1]
        smoothed.append(sum(window_values) / len(window_values))

    return smoothed
