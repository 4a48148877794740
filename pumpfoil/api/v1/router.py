"""
API Router v1

Combines all route modules.
"""

from fastapi import APIRouter

from pumpfoil.api.v1.routes import detection

api_router = APIRouter()

api_router.include_router(detection.router, prefix="/detection", tags=["Detection"])
