"""
Tests for detection domain types.
"""

import pytest

from pumpfoil.features.detection import (
    ConfigError,
    DEFAULT_CONFIG,
    DetectionConfig,
    DetectionResult,
    Run,
    Session,
    SessionStats,
)


def _run(start_time=0.0, end_time=12.5, heartrate=None):
    return Run(
        id="r",
        number=1,
        start_index=0,
        end_index=25,
        start_time=start_time,
        end_time=end_time,
        distance=40.0,
        average_speed=11.0,
        max_speed=14.0,
        average_heartrate=heartrate,
    )


class TestDetectionConfig:
    """Tests for DetectionConfig.validate()."""

    def test_defaults_are_valid(self):
        DEFAULT_CONFIG.validate()
        assert DEFAULT_CONFIG.min_speed_threshold == 8.0
        assert DEFAULT_CONFIG.speed_smoothing_window == 3

    def test_integers_accepted(self):
        DetectionConfig(10, 5, 3, 2).validate()

    @pytest.mark.parametrize("kwargs", [
        {"min_speed_threshold": 0},
        {"min_run_duration": -5.0},
        {"min_stop_duration": float("inf")},
        {"min_speed_threshold": "8"},
        {"min_run_duration": True},
        {"speed_smoothing_window": 0},
        {"speed_smoothing_window": 3.0},
        {"speed_smoothing_window": False},
    ])
    def test_invalid_values(self, kwargs):
        with pytest.raises(ConfigError):
            DetectionConfig(**kwargs).validate()

    def test_error_names_field(self):
        with pytest.raises(ConfigError, match="min_stop_duration"):
            DetectionConfig(min_stop_duration=0).validate()

    def test_frozen(self):
        with pytest.raises(AttributeError):
            DEFAULT_CONFIG.min_speed_threshold = 5.0


class TestRun:
    """Tests for Run derived properties."""

    def test_duration(self):
        assert _run(start_time=100.0, end_time=130.5).duration == 30.5

    def test_sample_count_inclusive(self):
        assert _run().sample_count == 26

    def test_has_heartrate(self):
        assert not _run().has_heartrate
        assert _run(heartrate=140).has_heartrate


class TestSession:
    """Tests for Session.with_result()."""

    def test_has_raw_data(self):
        assert Session(id="a", samples=()).has_raw_data
        assert not Session(id="a").has_raw_data

    def test_with_result_replaces_derived_outputs(self):
        old = Session(id="a", samples=(), runs=(_run(),), stats=SessionStats(number_of_runs=1))
        result = DetectionResult(runs=(), stats=SessionStats(), config=DEFAULT_CONFIG)

        new = old.with_result(result)

        assert new.runs == ()
        assert new.stats.number_of_runs == 0
        assert new.config is DEFAULT_CONFIG
        assert old.runs != ()

    def test_result_is_empty(self):
        empty = DetectionResult(runs=(), stats=SessionStats(), config=DEFAULT_CONFIG)
        full = DetectionResult(runs=(_run(),), stats=SessionStats(), config=DEFAULT_CONFIG)
        assert empty.is_empty
        assert not full.is_empty
