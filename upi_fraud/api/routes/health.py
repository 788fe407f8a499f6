"""Health endpoint."""

from fastapi import APIRouter, Depends

from upi_fraud.api.routes.predict import get_predictor
from upi_fraud.config import settings
from upi_fraud.domains.fraud.predictor import FraudPredictor

router = APIRouter(tags=["health"])


@router.get("/health")
async def health(
    predictor: FraudPredictor = Depends(get_predictor),  # noqa: B008
) -> dict:
    from upi_fraud.main import get_uptime

    return {
        "status": "healthy",
        "version": settings.app_version,
        "mode": predictor.mode,
        "uptime_seconds": get_uptime(),
    }
