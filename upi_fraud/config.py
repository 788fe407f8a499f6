"""Application configuration via environment variables."""

from pydantic import field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    app_name: str = "upi-fraud-detector"
    app_version: str = "0.1.0"
    debug: bool = False
    log_level: str = "INFO"

    host: str = "0.0.0.0"
    port: int = 8000

    # Remote scoring service; when unset, predictions use the local heuristic
    scoring_endpoint: str | None = None
    remote_timeout_seconds: float | None = None

    # IANA zone used to read the hour of offset-aware timestamps
    local_timezone: str | None = None

    model_config = {"env_prefix": "", "env_file": ".env", "extra": "ignore", "frozen": True}

    @field_validator("scoring_endpoint", "local_timezone", mode="before")
    @classmethod
    def _blank_is_unset(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value


settings = Settings()
