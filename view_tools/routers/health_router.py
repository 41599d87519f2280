"""Health endpoints."""

from fastapi import APIRouter

from view_tools import __version__
from view_tools.models import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """Basic health check endpoint."""
    return HealthResponse(status="ok", version=__version__)
