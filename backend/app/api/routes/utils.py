from fastapi import APIRouter

from app.core.config import settings
from app.models import HealthStatus

router = APIRouter()


@router.get("/health", response_model=HealthStatus)
async def health_check() -> HealthStatus:
    return HealthStatus(api_key_configured=settings.api_key_configured)
