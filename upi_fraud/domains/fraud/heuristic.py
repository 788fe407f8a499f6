"""Deterministic heuristic scorer.

The score is additive:

    base (0.05)
    + amount over 3000, scaled by 1/10000 and capped at 0.7
    + 0.15 for a night-hour transaction
    + 0.2 for a burst (5+ transactions in the last hour)

clamped to [0, 1].

The per-feature weights reported alongside the score use their own
formulas. They describe what to show the user, so they neither sum to the
score nor follow its constants; a remote model's weights come from
elsewhere entirely.
"""

import structlog

from .config import FraudConfig, default_config
from .models import FeatureContribution, HeuristicScore, NormalizedFeatures, TransactionRequest
from .normalizer import normalize

logger = structlog.get_logger()

AMOUNT = "amount"
TXN_COUNT = "txnCountLastHour"
TIMESTAMP = "timestamp"


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def score_features(features: NormalizedFeatures, config: FraudConfig | None = None) -> float:
    cfg = (config or default_config).heuristic

    score = cfg.base_score
    score += clamp((features.amount - cfg.amount_offset) / cfg.amount_scale, 0.0, cfg.amount_cap)
    if features.is_night_hour:
        score += cfg.night_bonus
    if features.is_burst:
        score += cfg.burst_bonus
    return clamp(score, 0.0, 1.0)


def feature_weights(
    features: NormalizedFeatures, config: FraudConfig | None = None
) -> dict[str, float]:
    """Presentation weights keyed by feature name, in reporting order."""
    cfg = (config or default_config).explanation

    amount_weight = clamp(
        (features.amount - cfg.amount_offset) / cfg.amount_scale, 0.0, cfg.amount_cap
    )
    return {
        AMOUNT: round(amount_weight, 2),
        TXN_COUNT: cfg.burst_weight if features.is_burst else cfg.calm_weight,
        TIMESTAMP: cfg.night_weight if features.is_night_hour else cfg.day_weight,
    }


def _reported_count(count):
    """Whole counts are reported as the integer the caller sent."""
    if isinstance(count, float) and count.is_integer():
        return int(count)
    return count


def assess(request: TransactionRequest, config: FraudConfig | None = None) -> HeuristicScore:
    """Normalize, score, and attach contributions for a single request."""
    cfg = config or default_config
    features = normalize(request, cfg)
    score = score_features(features, cfg)
    weights = feature_weights(features, cfg)

    values = {
        AMOUNT: request.amount,
        TXN_COUNT: _reported_count(request.txn_count_last_hour),
        TIMESTAMP: request.timestamp,
    }
    contributions = [
        FeatureContribution(name=name, value=values[name], weight=weight)
        for name, weight in weights.items()
    ]

    logger.debug(
        "heuristic_scored",
        score=score,
        hour=features.hour,
        is_night_hour=features.is_night_hour,
        is_burst=features.is_burst,
    )
    return HeuristicScore(score=score, contributions=contributions)
