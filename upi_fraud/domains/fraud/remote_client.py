"""HTTP client for a remote scoring service sharing the local result contract."""

import httpx
import structlog
from pydantic import ValidationError as PydanticValidationError

from .errors import DecodeError, RemoteError, TransportError
from .models import PredictionResult, TransactionRequest

logger = structlog.get_logger()


class RemoteScoringClient:
    """Sends one transaction to `POST {endpoint}/predict` and parses the result.

    One attempt per call, no retries. No timeout unless `timeout_seconds` is
    given. `transport` lets callers (and tests) swap the underlying httpx
    transport.
    """

    def __init__(
        self,
        endpoint: str,
        timeout_seconds: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._endpoint = endpoint.rstrip("/")
        self._timeout = httpx.Timeout(timeout_seconds)
        self._transport = transport

    @property
    def endpoint(self) -> str:
        return self._endpoint

    @property
    def predict_url(self) -> str:
        return f"{self._endpoint}/predict"

    async def predict(self, request: TransactionRequest) -> PredictionResult:
        url = self.predict_url
        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                response = await client.post(
                    url,
                    json=request.to_wire(),
                    headers={"Content-Type": "application/json"},
                )
        except httpx.TransportError as exc:
            logger.warning("remote_scoring_unreachable", url=url, error=str(exc))
            raise TransportError(f"Could not reach scoring service at {url}: {exc}") from exc

        if not response.is_success:
            logger.warning("remote_scoring_error_status", url=url, status_code=response.status_code)
            raise RemoteError(response.status_code)

        try:
            result = PredictionResult.model_validate_json(response.content)
        except PydanticValidationError as exc:
            logger.warning("remote_scoring_bad_body", url=url, error_count=exc.error_count())
            raise DecodeError(f"Malformed prediction from {url}: {exc}") from exc

        logger.info(
            "remote_scoring_completed",
            url=url,
            label=result.label.value,
            score=result.score,
        )
        return result
