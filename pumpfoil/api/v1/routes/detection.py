"""
Detection Routes

Endpoints for run detection and session reprocessing.
"""

import logging
from typing import Optional

from fastapi import APIRouter, File, HTTPException, Query, UploadFile

from pumpfoil.config import settings
from pumpfoil.features.detection import (
    DetectionConfig,
    DetectionError,
    RunDetectionEngine,
)
from pumpfoil.features.detection.schemas import (
    DetectionConfigSchema,
    DetectionResponse,
    DetectRequest,
    ReprocessRequest,
)
from pumpfoil.features.samples import samples_from_gpx

logger = logging.getLogger(__name__)

router = APIRouter()


def _resolve_config(config: Optional[DetectionConfigSchema]) -> DetectionConfig:
    """Request config, or server defaults if none was sent."""
    if config is None:
        return settings.detection_config()
    return config.to_domain()


@router.get("/config/defaults", response_model=DetectionConfigSchema)
async def get_default_config():
    """Default detection parameters."""
    return DetectionConfigSchema.model_validate(settings.detection_config())


@router.post("/detect", response_model=DetectionResponse)
def detect_runs(request: DetectRequest):
    """
    Detect pumping runs in a sample stream.

    Returns runs and session statistics. Zero runs is a valid result.
    """
    samples = [s.to_domain() for s in request.samples]

    try:
        result = RunDetectionEngine().detect(
            samples,
            _resolve_config(request.config),
            session_id=request.session_id,
        )
    except DetectionError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return DetectionResponse.from_result(result)


@router.post("/reprocess", response_model=DetectionResponse)
def reprocess_session(request: ReprocessRequest):
    """
    Re-detect runs for a stored session with new parameters.

    Always works from the session's raw samples; previous runs are discarded.
    """
    try:
        result = RunDetectionEngine().reprocess(
            request.session.to_domain(),
            request.config.to_domain(),
        )
    except DetectionError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return DetectionResponse.from_result(result)


@router.post("/gpx", response_model=DetectionResponse)
async def detect_from_gpx(
    file: UploadFile = File(...),
    min_speed_threshold: Optional[float] = Query(default=None, gt=0),
    min_run_duration: Optional[float] = Query(default=None, gt=0),
    min_stop_duration: Optional[float] = Query(default=None, gt=0),
    speed_smoothing_window: Optional[int] = Query(default=None, ge=1),
):
    """
    Upload a recorded GPX track and detect runs in it.

    Parameters not given fall back to server defaults.
    """
    if not file.filename or not file.filename.lower().endswith('.gpx'):
        raise HTTPException(status_code=400, detail="Only .gpx files are allowed")

    content = await file.read()

    if len(content) == 0:
        raise HTTPException(status_code=400, detail="File is empty")

    if len(content) > settings.max_upload_mb * 1024 * 1024:
        raise HTTPException(
            status_code=400,
            detail=f"File too large (max {settings.max_upload_mb}MB)"
        )

    try:
        samples = samples_from_gpx(content)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    defaults = settings.detection_config()
    config = DetectionConfig(
        min_speed_threshold=min_speed_threshold or defaults.min_speed_threshold,
        min_run_duration=min_run_duration or defaults.min_run_duration,
        min_stop_duration=min_stop_duration or defaults.min_stop_duration,
        speed_smoothing_window=speed_smoothing_window or defaults.speed_smoothing_window,
    )

    try:
        result = RunDetectionEngine().detect(samples, config, session_id=file.filename)
    except DetectionError as e:
        raise HTTPException(status_code=400, detail=str(e))

    logger.info(f"GPX {file.filename}: {result.stats.number_of_runs} runs")
    return DetectionResponse.from_result(result)
