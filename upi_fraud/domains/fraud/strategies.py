"""Interchangeable prediction strategies.

Both strategies take a validated TransactionRequest and return a
PredictionResult; callers never need to know which one is active.
"""

from abc import ABC, abstractmethod

from .config import FraudConfig, default_config
from .heuristic import assess
from .models import PredictionResult, TransactionRequest
from .ranker import rank_contributions
from .remote_client import RemoteScoringClient


class PredictionStrategy(ABC):
    """Base class for prediction strategies."""

    mode: str  # "local" | "remote"

    @abstractmethod
    async def predict(self, request: TransactionRequest) -> PredictionResult:
        """Assess one transaction."""
        ...


class LocalHeuristicStrategy(PredictionStrategy):
    """Scores in-process with the deterministic heuristic. Does no I/O."""

    mode = "local"

    def __init__(self, config: FraudConfig | None = None) -> None:
        self._config = config or default_config

    async def predict(self, request: TransactionRequest) -> PredictionResult:
        return self.predict_sync(request)

    def predict_sync(self, request: TransactionRequest) -> PredictionResult:
        cfg = self._config
        scored = assess(request, cfg)
        top_features = rank_contributions(scored.contributions, top_n=cfg.explanation.top_n)
        return PredictionResult.from_score(
            scored.score,
            top_features,
            threshold=cfg.labels.fraud_threshold,
        )


class RemoteScoringStrategy(PredictionStrategy):
    """Delegates to a remote scoring service and returns its result as-is."""

    mode = "remote"

    def __init__(self, client: RemoteScoringClient) -> None:
        self._client = client

    @property
    def client(self) -> RemoteScoringClient:
        return self._client

    async def predict(self, request: TransactionRequest) -> PredictionResult:
        return await self._client.predict(request)
