"""Prediction endpoint, wire-compatible with the remote scoring contract."""

import structlog
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from upi_fraud.domains.fraud.models import TransactionRequest
from upi_fraud.domains.fraud.predictor import FraudPredictor, build_predictor

logger = structlog.get_logger()
router = APIRouter(tags=["predict"])

_predictor: FraudPredictor | None = None


def get_predictor() -> FraudPredictor:
    """Process-wide predictor, built from settings on first use."""
    global _predictor
    if _predictor is None:
        _predictor = build_predictor()
    return _predictor


@router.post("/predict")
async def predict(
    transaction: TransactionRequest,
    predictor: FraudPredictor = Depends(get_predictor),  # noqa: B008
) -> JSONResponse:
    result = await predictor.predict(transaction)
    return JSONResponse(content=result.to_wire())
