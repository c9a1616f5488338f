"""
Health check and system status endpoints.
"""

from typing import Annotated
from fastapi import APIRouter, Depends

from ..models import HealthResponse
from ..dependencies import get_settings
from ..config import Settings


router = APIRouter(
    prefix="/api/v1",
    tags=["health"]
)


@router.get("/health", response_model=HealthResponse)
async def health_check(
    settings: Annotated[Settings, Depends(get_settings)]
):
    """
    Health check endpoint.
    
    The generator has no external services, so a responding API is healthy.
    """
    return HealthResponse(
        status="healthy",
        version=settings.app_version
    )
