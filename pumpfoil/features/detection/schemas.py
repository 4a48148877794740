"""
Detection schemas.

Pydantic models for the detection API. Each schema converts to or from
the feature's frozen dataclasses; the engine never sees pydantic models.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .aggregator import longest_run
from .types import (
    DetectionConfig,
    DetectionResult,
    Position,
    Sample,
    Session,
)


class SampleSchema(BaseModel):
    """Single recorded point."""

    time_offset: float = Field(..., ge=0, description="Seconds from session start")
    speed: float = Field(..., ge=0, description="Ground speed, km/h")
    lat: Optional[float] = Field(default=None, ge=-90, le=90)
    lon: Optional[float] = Field(default=None, ge=-180, le=180)
    heartrate: Optional[int] = Field(default=None, gt=0)

    @model_validator(mode="after")
    def check_position_pair(self):
        """Latitude and longitude come together or not at all."""
        if (self.lat is None) != (self.lon is None):
            raise ValueError("lat and lon must both be set or both be omitted")
        return self

    def to_domain(self) -> Sample:
        position = Position(self.lat, self.lon) if self.lat is not None else None
        return Sample(
            time_offset=self.time_offset,
            speed=self.speed,
            position=position,
            heartrate=self.heartrate,
        )


class DetectionConfigSchema(BaseModel):
    """Detection parameters."""

    model_config = ConfigDict(from_attributes=True)

    min_speed_threshold: float = Field(..., gt=0, description="km/h")
    min_run_duration: float = Field(..., gt=0, description="seconds")
    min_stop_duration: float = Field(..., gt=0, description="seconds")
    speed_smoothing_window: int = Field(..., ge=1, description="samples")

    def to_domain(self) -> DetectionConfig:
        return DetectionConfig(
            min_speed_threshold=self.min_speed_threshold,
            min_run_duration=self.min_run_duration,
            min_stop_duration=self.min_stop_duration,
            speed_smoothing_window=self.speed_smoothing_window,
        )


class RunSchema(BaseModel):
    """Detected run."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    number: int
    start_index: int
    end_index: int
    start_time: float
    end_time: float
    duration: float
    distance: float = Field(..., description="meters")
    average_speed: float
    max_speed: float
    average_heartrate: Optional[int] = None
    max_heartrate: Optional[int] = None
    start_heartrate: Optional[int] = None
    end_heartrate: Optional[int] = None


class SessionStatsSchema(BaseModel):
    """Session statistics. Missing values are null, never zero."""

    model_config = ConfigDict(from_attributes=True)

    number_of_runs: int
    total_pumping_time: float
    total_pumping_distance: float
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


class DetectionResponse(BaseModel):
    """Runs and stats for one detection pass."""

    runs: List[RunSchema]
    stats: SessionStatsSchema
    config: DetectionConfigSchema
    longest_run_id: Optional[str] = None

    @classmethod
    def from_result(cls, result: DetectionResult) -> "DetectionResponse":
        longest = longest_run(result.runs)
        return cls(
            runs=[RunSchema.model_validate(r) for r in result.runs],
            stats=SessionStatsSchema.model_validate(result.stats),
            config=DetectionConfigSchema.model_validate(result.config),
            longest_run_id=longest.id if longest else None,
        )


class DetectRequest(BaseModel):
    """Request to detect runs in a sample stream."""

    session_id: str = ""
    samples: List[SampleSchema]
    config: Optional[DetectionConfigSchema] = None  # None = server defaults


class SessionSchema(BaseModel):
    """A stored session as supplied by the host for reprocessing."""

    id: str
    samples: Optional[List[SampleSchema]] = None  # None = raw data pruned
    source_activity_id: Optional[int] = None
    start_date: Optional[datetime] = None

    def to_domain(self) -> Session:
        samples = None
        if self.samples is not None:
            samples = tuple(s.to_domain() for s in self.samples)
        return Session(
            id=self.id,
            samples=samples,
            source_activity_id=self.source_activity_id,
            start_date=self.start_date,
        )


class ReprocessRequest(BaseModel):
    """Request to reprocess a session with new parameters."""

    session: SessionSchema
    config: DetectionConfigSchema
