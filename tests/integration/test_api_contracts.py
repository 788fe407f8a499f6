"""API contract tests for the prediction service.

Validates the /predict wire contract, the error payloads for each failure
class, and the health endpoint.
"""

import httpx
import pytest
from httpx import ASGITransport, AsyncClient

from upi_fraud.api.routes.predict import get_predictor
from upi_fraud.domains.fraud.predictor import FraudPredictor
from upi_fraud.domains.fraud.remote_client import RemoteScoringClient
from upi_fraud.domains.fraud.strategies import LocalHeuristicStrategy, RemoteScoringStrategy
from upi_fraud.main import app

pytestmark = pytest.mark.integration

BASE_URL = "http://test"
UPSTREAM = "http://upstream.test"


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _use_predictor(predictor: FraudPredictor) -> None:
    app.dependency_overrides[get_predictor] = lambda: predictor


def _use_upstream(handler) -> None:
    client = RemoteScoringClient(UPSTREAM, transport=httpx.MockTransport(handler))
    _use_predictor(FraudPredictor(RemoteScoringStrategy(client)))


def _client() -> AsyncClient:
    transport = ASGITransport(app=app)
    return AsyncClient(transport=transport, base_url=BASE_URL)


@pytest.fixture(autouse=True)
def _local_predictor():
    _use_predictor(FraudPredictor(LocalHeuristicStrategy()))
    yield
    app.dependency_overrides.clear()


# =========================================================================
# POST /predict
# =========================================================================


class TestPredict:
    endpoint = "/predict"

    @pytest.mark.asyncio
    async def test_risky_transaction(self, sample_wire_request):
        async with _client() as client:
            response = await client.post(self.endpoint, json=sample_wire_request)

        assert response.status_code == 200
        data = response.json()
        assert data["label"] == "FRAUD"
        assert data["score"] == 1.0
        assert [f["name"] for f in data["top_features"]] == [
            "amount",
            "txnCountLastHour",
            "timestamp",
        ]
        assert [f["weight"] for f in data["top_features"]] == [0.4, 0.2, 0.15]
        count = data["top_features"][1]["value"]
        assert count == 6
        assert isinstance(count, int)
        assert "explanation" not in data

    @pytest.mark.asyncio
    async def test_calm_transaction(self):
        async with _client() as client:
            response = await client.post(
                self.endpoint,
                json={"amount": 1500, "timestamp": "2026-01-15T12:00:00", "txnCountLastHour": 1},
            )

        assert response.status_code == 200
        data = response.json()
        assert data["label"] == "LEGIT"
        assert data["score"] == pytest.approx(0.05)
        assert len(data["top_features"]) <= 3

    @pytest.mark.asyncio
    async def test_minimal_body_uses_defaults(self):
        async with _client() as client:
            response = await client.post(self.endpoint, json={"amount": 250})
        assert response.status_code == 200
        assert response.json()["score"] == pytest.approx(0.05)

    @pytest.mark.asyncio
    async def test_repeated_requests_are_byte_identical(self, sample_wire_request):
        async with _client() as client:
            first = await client.post(self.endpoint, json=sample_wire_request)
            second = await client.post(self.endpoint, json=sample_wire_request)
        assert first.content == second.content

    @pytest.mark.asyncio
    async def test_response_carries_request_id(self):
        async with _client() as client:
            response = await client.post(self.endpoint, json={"amount": 10})
        assert response.headers.get("X-Request-ID")

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "body",
        [
            {},
            {"amount": None},
            {"amount": "lots"},
            {"amount": 0},
            {"amount": -100},
        ],
    )
    async def test_invalid_amount_rejected(self, body):
        async with _client() as client:
            response = await client.post(self.endpoint, json=body)
        assert response.status_code == 422
        data = response.json()
        assert data["error"] == "validation_error"
        assert "amount" in data["message"]
        assert "request_id" in data

    @pytest.mark.asyncio
    async def test_upstream_server_error(self, sample_wire_request):
        _use_upstream(lambda r: httpx.Response(500))
        async with _client() as client:
            response = await client.post(self.endpoint, json=sample_wire_request)
        assert response.status_code == 502
        data = response.json()
        assert data["error"] == "remote_error"
        assert data["upstream_status"] == 500
        assert data["message"] == "API error: 500"

    @pytest.mark.asyncio
    async def test_upstream_unreachable(self, sample_wire_request):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("Connection refused", request=request)

        _use_upstream(handler)
        async with _client() as client:
            response = await client.post(self.endpoint, json=sample_wire_request)
        assert response.status_code == 503
        assert response.json()["error"] == "transport_error"

    @pytest.mark.asyncio
    async def test_upstream_malformed_body(self, sample_wire_request):
        _use_upstream(lambda r: httpx.Response(200, content=b"<html>oops</html>"))
        async with _client() as client:
            response = await client.post(self.endpoint, json=sample_wire_request)
        assert response.status_code == 502
        assert response.json()["error"] == "decode_error"

    @pytest.mark.asyncio
    async def test_upstream_result_passed_through(self, sample_wire_request):
        forwarded = []
        body = {
            "label": "LEGIT",
            "score": 0.31,
            "top_features": [{"name": "device_id", "value": "dev-abc123", "weight": 0.2}],
            "explanation": "Known device",
        }

        def handler(request: httpx.Request) -> httpx.Response:
            forwarded.append(request)
            return httpx.Response(200, json=body)

        _use_upstream(handler)
        async with _client() as client:
            response = await client.post(self.endpoint, json=sample_wire_request)

        assert response.status_code == 200
        assert response.json() == body
        assert str(forwarded[0].url) == f"{UPSTREAM}/predict"


# =========================================================================
# GET /health
# =========================================================================


class TestHealth:
    @pytest.mark.asyncio
    async def test_health_local_mode(self):
        async with _client() as client:
            response = await client.get("/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["mode"] == "local"
        assert "version" in data
        assert "uptime_seconds" in data

    @pytest.mark.asyncio
    async def test_health_remote_mode(self):
        _use_upstream(lambda r: httpx.Response(500))
        async with _client() as client:
            response = await client.get("/health")
        assert response.json()["mode"] == "remote"
