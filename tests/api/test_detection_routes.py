"""
Tests for the detection API.

Run: python -m pytest tests/api -v
"""

import pytest
from fastapi.testclient import TestClient

from pumpfoil import __version__
from pumpfoil.main import app

client = TestClient(app)

CONFIG = {
    "min_speed_threshold": 8.0,
    "min_run_duration": 5.0,
    "min_stop_duration": 3.0,
    "speed_smoothing_window": 1,
}


def _samples(speeds, interval=1.0):
    return [
        {"time_offset": i * interval, "speed": speed, "heartrate": 150}
        for i, speed in enumerate(speeds)
    ]


def _gpx(n_points):
    """Track moving north ~11.1 m every 2 s (about 20 km/h)."""
    points = "".join(
        f'<trkpt lat="{43.0 + i * 0.0001:.4f}" lon="5.0">'
        f"<time>2024-06-01T10:00:{i * 2:02d}Z</time></trkpt>"
        for i in range(n_points)
    )
    return (
        '<?xml version="1.0" encoding="UTF-8"?>'
        '<gpx version="1.1" creator="test" xmlns="http://www.topografix.com/GPX/1/1">'
        f"<trk><trkseg>{points}</trkseg></trk></gpx>"
    ).encode("utf-8")


# =============================================================================
# Health and defaults
# =============================================================================

class TestMeta:
    """Health check and default config."""

    def test_health(self):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "version": __version__}

    def test_default_config(self):
        response = client.get("/api/v1/detection/config/defaults")

        assert response.status_code == 200
        assert response.json() == {
            "min_speed_threshold": 8.0,
            "min_run_duration": 5.0,
            "min_stop_duration": 3.0,
            "speed_smoothing_window": 3,
        }


# =============================================================================
# POST /detect
# =============================================================================

class TestDetect:
    """Tests for POST /api/v1/detection/detect."""

    def test_single_run(self):
        response = client.post("/api/v1/detection/detect", json={
            "session_id": "s1",
            "samples": _samples([10.0] * 31),
            "config": CONFIG,
        })

        assert response.status_code == 200
        data = response.json()
        assert len(data["runs"]) == 1
        assert data["runs"][0]["start_index"] == 0
        assert data["runs"][0]["end_index"] == 30
        assert data["runs"][0]["duration"] == 30.0
        assert data["runs"][0]["average_heartrate"] == 150
        assert data["longest_run_id"] == data["runs"][0]["id"]
        assert data["stats"]["number_of_runs"] == 1

    def test_default_config_used(self):
        response = client.post("/api/v1/detection/detect", json={
            "samples": _samples([10.0] * 31),
        })

        assert response.status_code == 200
        assert response.json()["config"]["speed_smoothing_window"] == 3

    def test_zero_runs_is_not_an_error(self):
        response = client.post("/api/v1/detection/detect", json={
            "samples": _samples([3.0] * 20),
            "config": CONFIG,
        })

        assert response.status_code == 200
        data = response.json()
        assert data["runs"] == []
        assert data["stats"]["best_max_speed"] is None
        assert data["longest_run_id"] is None

    def test_stop_below_resolution(self):
        config = dict(CONFIG, min_stop_duration=0.5)
        response = client.post("/api/v1/detection/detect", json={
            "samples": _samples([10.0] * 31),
            "config": config,
        })

        assert response.status_code == 400
        assert "min_stop_duration" in response.json()["detail"]

    def test_decreasing_offsets(self):
        samples = _samples([10.0] * 5)
        samples[3]["time_offset"] = 0.5
        response = client.post("/api/v1/detection/detect", json={
            "samples": samples,
            "config": CONFIG,
        })

        assert response.status_code == 400

    @pytest.mark.parametrize("field,value", [
        ("min_speed_threshold", 0),
        ("min_run_duration", -1),
        ("speed_smoothing_window", 0),
    ])
    def test_invalid_config_rejected(self, field, value):
        response = client.post("/api/v1/detection/detect", json={
            "samples": _samples([10.0] * 10),
            "config": dict(CONFIG, **{field: value}),
        })

        assert response.status_code == 422

    def test_half_position_rejected(self):
        response = client.post("/api/v1/detection/detect", json={
            "samples": [{"time_offset": 0, "speed": 10.0, "lat": 43.0}],
        })

        assert response.status_code == 422


# =============================================================================
# POST /reprocess
# =============================================================================

class TestReprocess:
    """Tests for POST /api/v1/detection/reprocess."""

    def test_reprocess_splits_on_new_config(self):
        speeds = [10.0] * 31
        speeds[10] = speeds[11] = 2.0
        session = {"id": "abc", "samples": _samples(speeds)}

        bridged = client.post("/api/v1/detection/reprocess", json={
            "session": session, "config": CONFIG,
        })
        split = client.post("/api/v1/detection/reprocess", json={
            "session": session, "config": dict(CONFIG, min_stop_duration=1.0),
        })

        assert bridged.status_code == 200
        assert split.status_code == 200
        assert len(bridged.json()["runs"]) == 1
        assert len(split.json()["runs"]) == 2

    def test_pruned_session(self):
        response = client.post("/api/v1/detection/reprocess", json={
            "session": {"id": "old", "samples": None},
            "config": CONFIG,
        })

        assert response.status_code == 400
        assert "old" in response.json()["detail"]


# =============================================================================
# POST /gpx
# =============================================================================

class TestGpxUpload:
    """Tests for POST /api/v1/detection/gpx."""

    def test_upload(self):
        response = client.post(
            "/api/v1/detection/gpx",
            files={"file": ("session.gpx", _gpx(12), "application/gpx+xml")},
        )

        assert response.status_code == 200
        data = response.json()
        assert len(data["runs"]) == 1
        assert data["runs"][0]["duration"] == 22.0
        assert data["runs"][0]["average_speed"] == pytest.approx(20.0, rel=1e-2)

    def test_query_overrides_threshold(self):
        response = client.post(
            "/api/v1/detection/gpx",
            params={"min_speed_threshold": 25},
            files={"file": ("session.gpx", _gpx(12), "application/gpx+xml")},
        )

        assert response.status_code == 200
        assert response.json()["runs"] == []
        assert response.json()["config"]["min_speed_threshold"] == 25.0

    def test_wrong_extension(self):
        response = client.post(
            "/api/v1/detection/gpx",
            files={"file": ("session.fit", b"data", "application/octet-stream")},
        )

        assert response.status_code == 400

    def test_empty_file(self):
        response = client.post(
            "/api/v1/detection/gpx",
            files={"file": ("session.gpx", b"", "application/gpx+xml")},
        )

        assert response.status_code == 400
        assert response.json()["detail"] == "File is empty"

    def test_invalid_gpx(self):
        response = client.post(
            "/api/v1/detection/gpx",
            files={"file": ("session.gpx", b"not xml", "application/gpx+xml")},
        )

        assert response.status_code == 400

    def test_mixed_timezones(self):
        content = (
            '<?xml version="1.0" encoding="UTF-8"?>'
            '<gpx version="1.1" creator="test" xmlns="http://www.topografix.com/GPX/1/1">'
            "<trk><trkseg>"
            '<trkpt lat="43.0000" lon="5.0"><time>2024-06-01T10:00:00Z</time></trkpt>'
            '<trkpt lat="43.0001" lon="5.0"><time>2024-06-01T10:00:01</time></trkpt>'
            '<trkpt lat="43.0002" lon="5.0"><time>2024-06-01T10:00:02Z</time></trkpt>'
            "</trkseg></trk></gpx>"
        ).encode("utf-8")
        response = client.post(
            "/api/v1/detection/gpx",
            files={"file": ("session.gpx", content, "application/gpx+xml")},
        )

        assert response.status_code == 400
        assert "timezone" in response.json()["detail"]
