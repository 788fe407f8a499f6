"""Pydantic models for the fraud domain."""

import math
from collections.abc import Mapping
from datetime import UTC, datetime
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from .errors import ValidationError


class Label(StrEnum):
    FRAUD = "FRAUD"
    LEGIT = "LEGIT"


def label_for(score: float, threshold: float = 0.5) -> Label:
    return Label.FRAUD if score >= threshold else Label.LEGIT


def parse_optional_float(value: Any) -> float | None:
    """Parse a raw field into a finite float, or None when empty/unparsable."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def parse_or_zero(value: Any) -> float:
    number = parse_optional_float(value)
    return 0.0 if number is None else number


# Form field name -> wire field name
_FORM_ALIASES = {
    "payerId": "payer_id",
    "payeeId": "payee_id",
    "deviceId": "device_id",
    "geoLat": "geo_lat",
    "geoLon": "geo_lon",
}


class TransactionRequest(BaseModel):
    """A single payment transaction submitted for assessment."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    amount: float = Field(gt=0, allow_inf_nan=False)
    timestamp: str = ""
    payer_id: str = ""
    payee_id: str = ""
    device_id: str = ""
    geo_lat: float | None = None
    geo_lon: float | None = None
    txn_count_last_hour: float = Field(default=0.0, alias="txnCountLastHour")
    avg_ticket_last_7d: float = Field(default=0.0, alias="avgTicketLast7d")

    @field_validator("txn_count_last_hour", "avg_ticket_last_7d", mode="before")
    @classmethod
    def _absent_count_is_zero(cls, value: Any) -> Any:
        return 0.0 if value is None else value

    @field_validator("timestamp", "payer_id", "payee_id", "device_id", mode="before")
    @classmethod
    def _absent_text_is_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @classmethod
    def from_form(cls, fields: Mapping[str, Any]) -> "TransactionRequest":
        """Build a request from raw form fields.

        `amount` must be present and a positive number. Geo fields parse to
        None when empty, the counters fall back to 0.
        """
        raw = {_FORM_ALIASES.get(key, key): value for key, value in fields.items()}

        amount_raw = raw.get("amount")
        if amount_raw is None or (isinstance(amount_raw, str) and not amount_raw.strip()):
            raise ValidationError("Missing amount")
        amount = parse_optional_float(amount_raw)
        if amount is None:
            raise ValidationError(f"Amount is not a number: {amount_raw!r}")
        if amount <= 0:
            raise ValidationError(f"Amount must be greater than zero, got {amount}")

        timestamp = raw.get("timestamp")
        if timestamp is None:
            timestamp = datetime.now(UTC).isoformat()

        try:
            return cls(
                amount=amount,
                timestamp=str(timestamp),
                payer_id=str(raw.get("payer_id") or ""),
                payee_id=str(raw.get("payee_id") or ""),
                device_id=str(raw.get("device_id") or ""),
                geo_lat=parse_optional_float(raw.get("geo_lat")),
                geo_lon=parse_optional_float(raw.get("geo_lon")),
                txn_count_last_hour=parse_or_zero(raw.get("txnCountLastHour")),
                avg_ticket_last_7d=parse_or_zero(raw.get("avgTicketLast7d")),
            )
        except PydanticValidationError as exc:
            raise ValidationError(str(exc)) from exc

    def to_wire(self) -> dict[str, Any]:
        """JSON body sent to a remote scoring endpoint."""
        return self.model_dump(mode="json", by_alias=True)


class NormalizedFeatures(BaseModel):
    model_config = ConfigDict(frozen=True)

    amount: float
    hour: int | None = None
    is_night_hour: bool = False
    is_burst: bool = False


class FeatureContribution(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    value: Any = None
    weight: float
    description: str | None = None


class HeuristicScore(BaseModel):
    score: float = Field(ge=0.0, le=1.0)
    contributions: list[FeatureContribution] = []


class PredictionResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    label: Label
    score: float = Field(ge=0.0, le=1.0)
    top_features: list[FeatureContribution] = []
    explanation: str | None = None

    @classmethod
    def from_score(
        cls,
        score: float,
        top_features: list[FeatureContribution],
        threshold: float = 0.5,
    ) -> "PredictionResult":
        score = max(0.0, min(1.0, score))
        return cls(label=label_for(score, threshold), score=score, top_features=top_features)

    def to_wire(self) -> dict[str, Any]:
        """Response body; absent optional fields are left out."""
        data = self.model_dump(mode="json")
        if data["explanation"] is None:
            del data["explanation"]
        for feature in data["top_features"]:
            if feature["description"] is None:
                del feature["description"]
        return data
