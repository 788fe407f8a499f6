"""Prediction error taxonomy.

Every failure of a prediction surfaces as exactly one of these, carrying a
human-readable message. `error_code` is the machine-readable tag used by the
API error payload.
"""


class PredictionError(Exception):
    """Base class for all prediction failures."""

    error_code = "prediction_error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(PredictionError, ValueError):
    """Missing or invalid input, detected before dispatch."""

    error_code = "validation_error"


class TransportError(PredictionError):
    """The remote scoring service could not be reached."""

    error_code = "transport_error"


class RemoteError(PredictionError):
    """The remote scoring service answered with a non-success status."""

    error_code = "remote_error"

    def __init__(self, status: int, message: str | None = None) -> None:
        super().__init__(message or f"API error: {status}")
        self.status = status


class DecodeError(PredictionError):
    """The remote response body is not a valid prediction result."""

    error_code = "decode_error"
