"""Feature normalization: TransactionRequest -> NormalizedFeatures."""

from datetime import datetime
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import structlog

from .config import FraudConfig, HeuristicConfig, default_config
from .models import NormalizedFeatures, TransactionRequest, parse_or_zero

logger = structlog.get_logger()


def extract_local_hour(timestamp: str | None, local_timezone: str | None = None) -> int | None:
    """Return the hour of day of an ISO-8601 timestamp, or None if it does not parse.

    Naive timestamps are already local. Offset-aware ones are converted to
    `local_timezone` when given, otherwise read in their own offset.
    """
    if not timestamp or not isinstance(timestamp, str):
        return None
    try:
        parsed = datetime.fromisoformat(timestamp.strip())
    except ValueError:
        return None

    if parsed.tzinfo is not None and local_timezone:
        try:
            zone = ZoneInfo(local_timezone)
        except (ZoneInfoNotFoundError, ValueError, OSError):
            logger.warning("unknown_local_timezone", local_timezone=local_timezone)
            return parsed.hour
        try:
            parsed = parsed.astimezone(zone)
        except OverflowError:
            # Conversion would leave the representable date range
            return None
    return parsed.hour


def is_night_hour(hour: int | None, config: HeuristicConfig) -> bool:
    if hour is None:
        return False
    start, end = config.night_start_hour, config.night_end_hour
    if start <= end:
        return start <= hour <= end
    # Window wraps past midnight (23..5)
    return hour >= start or hour <= end


def normalize(
    request: TransactionRequest,
    config: FraudConfig | None = None,
) -> NormalizedFeatures:
    """Coerce a request into the feature bundle the heuristic consumes. Never raises."""
    cfg = config or default_config
    hour = extract_local_hour(request.timestamp, cfg.local_timezone)
    txn_count = parse_or_zero(request.txn_count_last_hour)

    return NormalizedFeatures(
        amount=parse_or_zero(request.amount),
        hour=hour,
        is_night_hour=is_night_hour(hour, cfg.heuristic),
        is_burst=txn_count >= cfg.heuristic.burst_min_count,
    )
