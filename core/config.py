import os
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file="ticker.env", extra="ignore")

    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    SERVICE_NAME: str = os.getenv("SERVICE_NAME", "ticker")

    # Health check (ops/healthcheck.py)
    HEALTHCHECK_REPORTS: int = Field(int(os.getenv("HEALTHCHECK_REPORTS", "3")), ge=1)
    HEALTHCHECK_TIMEOUT_SECONDS: float = float(os.getenv("HEALTHCHECK_TIMEOUT_SECONDS", "10"))
    HEALTHCHECK_TOLERANCE_SECONDS: float = float(os.getenv("HEALTHCHECK_TOLERANCE_SECONDS", "0.05"))
    # Observe another command instead of the bundled ticker service
    HEALTHCHECK_COMMAND: str | None = os.getenv("HEALTHCHECK_COMMAND")
