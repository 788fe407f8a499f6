"""FastAPI application entry point for the UPI fraud detector."""

import time
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from upi_fraud.api.middleware.error_handler import (
    global_exception_handler,
    prediction_error_handler,
    request_validation_handler,
)
from upi_fraud.api.middleware.logging import StructuredLoggingMiddleware
from upi_fraud.api.routes.health import router as health_router
from upi_fraud.api.routes.predict import get_predictor
from upi_fraud.api.routes.predict import router as predict_router
from upi_fraud.config import settings
from upi_fraud.domains.fraud.errors import PredictionError
from upi_fraud.shared.logging import setup_logging

logger = structlog.get_logger()

# Track app start time for uptime calculation
APP_START_TIME: float = 0.0


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan: resolve configuration once at startup."""
    global APP_START_TIME
    APP_START_TIME = time.time()
    setup_logging(settings.log_level, json_logs=not settings.debug)

    predictor = get_predictor()
    logger.info(
        "upi_fraud_starting",
        app_name=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
        mode=predictor.mode,
    )

    yield

    logger.info("upi_fraud_shutting_down")


app = FastAPI(
    title="UPI Fraud Detector",
    description="Fraud risk scoring for single UPI transactions",
    version=settings.app_version,
    lifespan=lifespan,
)

# CORS for local development
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if settings.debug else [],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Structured logging middleware
app.add_middleware(StructuredLoggingMiddleware)

# Exception handlers
app.add_exception_handler(RequestValidationError, request_validation_handler)
app.add_exception_handler(PredictionError, prediction_error_handler)
app.add_exception_handler(Exception, global_exception_handler)

# Register routers
app.include_router(health_router)
app.include_router(predict_router)


def get_uptime() -> int:
    """Get application uptime in seconds."""
    if APP_START_TIME == 0.0:
        return 0
    return int(time.time() - APP_START_TIME)
