import time
from typing import Annotated

from fastapi import APIRouter, Depends

from config import settings
from services.country_service import CountryService, get_country_service

router = APIRouter(tags=["health"])

_start_time = time.time()


@router.get("/health")
async def health_check(service: Annotated[CountryService, Depends(get_country_service)]):
    """Liveness plus the state of the country dataset cache. Never calls upstream."""
    return {
        "status": "ok",
        "uptime_seconds": round(time.time() - _start_time),
        "dataset_cached": service.is_cached(),
        "upstream": settings.country_base_url,
    }
