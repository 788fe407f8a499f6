"""Fraud risk assessment domain."""

from .config import FraudConfig
from .errors import DecodeError, PredictionError, RemoteError, TransportError, ValidationError
from .models import (
    FeatureContribution,
    Label,
    NormalizedFeatures,
    PredictionResult,
    TransactionRequest,
)
from .predictor import FraudPredictor, build_predictor, select_strategy
from .remote_client import RemoteScoringClient
from .strategies import LocalHeuristicStrategy, PredictionStrategy, RemoteScoringStrategy

__all__ = [
    "DecodeError",
    "FeatureContribution",
    "FraudConfig",
    "FraudPredictor",
    "Label",
    "LocalHeuristicStrategy",
    "NormalizedFeatures",
    "PredictionError",
    "PredictionResult",
    "PredictionStrategy",
    "RemoteError",
    "RemoteScoringClient",
    "RemoteScoringStrategy",
    "TransactionRequest",
    "TransportError",
    "ValidationError",
    "build_predictor",
    "select_strategy",
]
