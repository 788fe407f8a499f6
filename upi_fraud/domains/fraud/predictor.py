"""Prediction entry point: validate once, then dispatch to the configured strategy."""

import math
from collections.abc import Mapping
from dataclasses import replace
from typing import Any

import httpx
import structlog

from upi_fraud.config import Settings

from .config import FraudConfig
from .errors import ValidationError
from .models import PredictionResult, TransactionRequest
from .remote_client import RemoteScoringClient
from .strategies import LocalHeuristicStrategy, PredictionStrategy, RemoteScoringStrategy

logger = structlog.get_logger()


def select_strategy(
    settings: Settings,
    config: FraudConfig | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> PredictionStrategy:
    """Remote when a scoring endpoint is configured, local heuristic otherwise."""
    if settings.scoring_endpoint:
        client = RemoteScoringClient(
            settings.scoring_endpoint,
            timeout_seconds=settings.remote_timeout_seconds,
            transport=transport,
        )
        return RemoteScoringStrategy(client)
    return LocalHeuristicStrategy(config=config)


def validate_request(request: TransactionRequest) -> None:
    """Reject requests whose amount is missing, non-numeric or non-positive."""
    amount = getattr(request, "amount", None)
    if amount is None:
        raise ValidationError("Missing amount")
    if isinstance(amount, bool) or not isinstance(amount, (int, float)):
        raise ValidationError(f"Amount is not a number: {amount!r}")
    if not math.isfinite(amount):
        raise ValidationError(f"Amount is not a finite number: {amount!r}")
    if amount <= 0:
        raise ValidationError(f"Amount must be greater than zero, got {amount}")


class FraudPredictor:
    """Single entry point for fraud predictions.

    The strategy is fixed at construction; the predictor holds no other
    state, so concurrent calls are independent.
    """

    def __init__(self, strategy: PredictionStrategy) -> None:
        self._strategy = strategy

    @property
    def strategy(self) -> PredictionStrategy:
        return self._strategy

    @property
    def mode(self) -> str:
        return self._strategy.mode

    async def predict(self, request: TransactionRequest) -> PredictionResult:
        validate_request(request)
        result = await self._strategy.predict(request)

        logger.info(
            "transaction_assessed",
            mode=self.mode,
            label=result.label.value,
            score=result.score,
            top_features=[f.name for f in result.top_features],
        )
        return result

    async def predict_form(self, fields: Mapping[str, Any]) -> PredictionResult:
        """Coerce raw form fields into a request, then predict."""
        return await self.predict(TransactionRequest.from_form(fields))


def build_predictor(
    settings: Settings | None = None,
    config: FraudConfig | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FraudPredictor:
    if settings is None:
        from upi_fraud.config import settings as app_settings

        settings = app_settings
    if config is None:
        config = FraudConfig.from_env()
        if settings.local_timezone and not config.local_timezone:
            config = replace(config, local_timezone=settings.local_timezone)

    strategy = select_strategy(settings, config=config, transport=transport)
    logger.info("fraud_predictor_initialized", mode=strategy.mode)
    return FraudPredictor(strategy)
