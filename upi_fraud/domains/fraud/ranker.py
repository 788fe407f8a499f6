"""Explanation ranking: order contributions and keep the top few."""

from collections.abc import Iterable

from .models import FeatureContribution

DEFAULT_TOP_N = 3

FEATURE_DESCRIPTIONS = {
    "amount": "Transaction amount",
    "txnCountLastHour": "Transactions in the last hour",
    "timestamp": "Time of day",
    "avgTicketLast7d": "Average ticket over the last 7 days",
    "device_id": "Device",
    "geo_lat": "Location latitude",
    "geo_lon": "Location longitude",
}


def describe_contribution(contribution: FeatureContribution) -> FeatureContribution:
    """Attach a human-readable label when the feature is known and unlabelled."""
    if contribution.description is not None:
        return contribution
    description = FEATURE_DESCRIPTIONS.get(contribution.name)
    if description is None:
        return contribution
    return contribution.model_copy(update={"description": description})


def rank_contributions(
    contributions: Iterable[FeatureContribution],
    top_n: int = DEFAULT_TOP_N,
) -> list[FeatureContribution]:
    """Sort by descending weight and truncate. Ties keep their input order."""
    # sorted() is stable, so equal weights stay in input order
    ranked = sorted(contributions, key=lambda c: c.weight, reverse=True)
    return [describe_contribution(c) for c in ranked[: max(top_n, 0)]]
