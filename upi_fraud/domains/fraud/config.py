"""Fraud scoring configuration with sensible defaults."""

import os
from dataclasses import dataclass, field


@dataclass(frozen=True)
class HeuristicConfig:
    base_score: float = 0.05
    amount_offset: float = 3_000.0
    amount_scale: float = 10_000.0
    amount_cap: float = 0.70
    night_bonus: float = 0.15
    burst_bonus: float = 0.20
    night_start_hour: int = 23
    night_end_hour: int = 5
    burst_min_count: int = 5


@dataclass(frozen=True)
class ExplanationWeights:
    """Weights shown to the user as "why". Not a decomposition of the score."""

    amount_offset: float = 2_000.0
    amount_scale: float = 8_000.0
    amount_cap: float = 0.40
    burst_weight: float = 0.20
    calm_weight: float = 0.03
    night_weight: float = 0.15
    day_weight: float = 0.02
    top_n: int = 3


@dataclass(frozen=True)
class LabelConfig:
    fraud_threshold: float = 0.5


@dataclass(frozen=True)
class FraudConfig:
    heuristic: HeuristicConfig = field(default_factory=HeuristicConfig)
    explanation: ExplanationWeights = field(default_factory=ExplanationWeights)
    labels: LabelConfig = field(default_factory=LabelConfig)
    local_timezone: str | None = None

    @classmethod
    def from_env(cls) -> "FraudConfig":
        """Load config with env var overrides. Env vars use FRAUD_ prefix."""
        heuristic: dict = {}
        explanation: dict = {}

        # Heuristic overrides
        if v := os.getenv("FRAUD_BURST_MIN_COUNT"):
            heuristic["burst_min_count"] = int(v)
        if v := os.getenv("FRAUD_NIGHT_START_HOUR"):
            heuristic["night_start_hour"] = int(v)
        if v := os.getenv("FRAUD_NIGHT_END_HOUR"):
            heuristic["night_end_hour"] = int(v)

        # Explanation overrides
        if v := os.getenv("FRAUD_TOP_N"):
            explanation["top_n"] = int(v)

        return cls(
            heuristic=HeuristicConfig(**heuristic),
            explanation=ExplanationWeights(**explanation),
            labels=LabelConfig(),
            local_timezone=os.getenv("FRAUD_LOCAL_TIMEZONE") or None,
        )


# Module-level default instance
default_config = FraudConfig()
