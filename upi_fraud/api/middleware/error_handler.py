"""Exception handling: prediction errors and request validation to JSON responses."""

import structlog
from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from upi_fraud.domains.fraud.errors import (
    DecodeError,
    PredictionError,
    RemoteError,
    TransportError,
    ValidationError,
)

logger = structlog.get_logger()


def _error_response(
    request: Request, status_code: int, error: str, message: str, **extra
) -> JSONResponse:
    request_id = getattr(request.state, "request_id", "unknown")
    return JSONResponse(
        status_code=status_code,
        content={"error": error, "message": message, "request_id": request_id, **extra},
    )


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    message = "; ".join(
        f"{'.'.join(str(p) for p in err.get('loc', ()))}: {err.get('msg', '')}"
        for err in exc.errors()
    )
    logger.warning("invalid_request_body", error=message)
    return _error_response(request, 422, ValidationError.error_code, message)


async def prediction_error_handler(request: Request, exc: Exception) -> JSONResponse:
    if isinstance(exc, ValidationError):
        logger.warning("prediction_rejected", error=str(exc))
        return _error_response(request, 422, exc.error_code, str(exc))

    if isinstance(exc, RemoteError):
        logger.warning("upstream_error_status", upstream_status=exc.status)
        return _error_response(
            request, 502, exc.error_code, str(exc), upstream_status=exc.status
        )

    if isinstance(exc, DecodeError):
        logger.warning("upstream_bad_response", error=str(exc))
        return _error_response(request, 502, exc.error_code, str(exc))

    if isinstance(exc, TransportError):
        logger.warning("upstream_unreachable", error=str(exc))
        return _error_response(request, 503, exc.error_code, str(exc))

    if isinstance(exc, PredictionError):
        logger.warning("prediction_failed", error=str(exc))
        return _error_response(request, 500, exc.error_code, str(exc))

    return await global_exception_handler(request, exc)


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("unhandled_exception", error=str(exc))
    return _error_response(
        request, 500, "internal_server_error", "An unexpected error occurred"
    )
