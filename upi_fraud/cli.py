"""Command-line entry point.

Usage:
    upi-fraud predict --amount 1500 --timestamp 2026-01-15T12:00:00 --txn-count-last-hour 1
    upi-fraud predict --amount 13000 --endpoint http://localhost:8000
    upi-fraud serve --port 8000
"""

import argparse
import asyncio
import json
import sys

from upi_fraud.config import settings
from upi_fraud.domains.fraud.errors import PredictionError
from upi_fraud.domains.fraud.predictor import build_predictor
from upi_fraud.shared.logging import setup_logging

# CLI option dest -> form field name
_FORM_FIELDS = {
    "amount": "amount",
    "timestamp": "timestamp",
    "payer_id": "payerId",
    "payee_id": "payeeId",
    "device_id": "deviceId",
    "geo_lat": "geoLat",
    "geo_lon": "geoLon",
    "txn_count_last_hour": "txnCountLastHour",
    "avg_ticket_last_7d": "avgTicketLast7d",
}


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="upi-fraud", description="UPI transaction fraud scoring")
    subparsers = parser.add_subparsers(dest="command", required=True)

    predict = subparsers.add_parser("predict", help="Score a single transaction")
    predict.add_argument("--amount", type=str, default="", help="Transaction amount")
    predict.add_argument(
        "--timestamp", type=str, default=None, help="ISO-8601 timestamp (default: now)"
    )
    predict.add_argument("--payer-id", type=str, default="u_12345")
    predict.add_argument("--payee-id", type=str, default="m_67890")
    predict.add_argument("--device-id", type=str, default="dev-abc123")
    predict.add_argument("--geo-lat", type=str, default="")
    predict.add_argument("--geo-lon", type=str, default="")
    predict.add_argument("--txn-count-last-hour", type=str, default="")
    predict.add_argument("--avg-ticket-last-7d", type=str, default="")
    predict.add_argument(
        "--endpoint",
        type=str,
        default=None,
        help="Remote scoring endpoint (default: SCORING_ENDPOINT, else local heuristic)",
    )

    serve = subparsers.add_parser("serve", help="Run the HTTP prediction service")
    serve.add_argument("--host", type=str, default=settings.host)
    serve.add_argument("--port", type=int, default=settings.port)

    return parser


def _run_predict(args: argparse.Namespace) -> int:
    app_settings = settings
    if args.endpoint:
        app_settings = settings.model_copy(update={"scoring_endpoint": args.endpoint})

    fields = {
        form_name: getattr(args, dest)
        for dest, form_name in _FORM_FIELDS.items()
        if getattr(args, dest) is not None
    }

    try:
        predictor = build_predictor(app_settings)
        result = asyncio.run(predictor.predict_form(fields))
    except PredictionError as exc:
        print(f"Prediction failed: {exc}", file=sys.stderr)
        return 1

    print(json.dumps(result.to_wire(), indent=2))
    return 0


def _run_serve(args: argparse.Namespace) -> int:
    import uvicorn

    uvicorn.run("upi_fraud.main:app", host=args.host, port=args.port)
    return 0


def main(argv: list[str] | None = None) -> None:
    args = _build_parser().parse_args(argv)
    setup_logging(settings.log_level, json_logs=not settings.debug)

    if args.command == "predict":
        sys.exit(_run_predict(args))
    sys.exit(_run_serve(args))


if __name__ == "__main__":
    main()
