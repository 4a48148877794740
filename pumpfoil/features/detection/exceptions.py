"""
Detection errors.

Zero samples or zero runs is a valid result and never raises.
"""


class DetectionError(Exception):
    """Base class for run detection failures."""


class ConfigError(DetectionError, ValueError):
    """Invalid or internally inconsistent detection configuration."""


class SampleSequenceError(DetectionError, ValueError):
    """Sample time offsets are not in non-decreasing order."""


class RawDataUnavailableError(DetectionError):
    """A session cannot be reprocessed because its raw samples were pruned."""
