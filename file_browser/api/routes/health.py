"""Health check endpoint."""
from fastapi import APIRouter, Depends

from file_browser.api.dependencies import get_health_service
from file_browser.schemas import HealthResponse
from file_browser.services.health_service import HealthService

router = APIRouter()


@router.get("/health", response_model=HealthResponse, summary="Health probe")
async def health_check(health_service: HealthService = Depends(get_health_service)) -> dict:
    return health_service.check()
