"""Environment-driven settings for the name checker."""

import os
from dataclasses import dataclass

DEFAULT_API_URL = "https://api.nameslol.com"
DEFAULT_TIMEOUT = 15


@dataclass(frozen=True)
class Settings:
    api_url: str
    timeout: float
    environment: str
    secret_key: str
    log_level: str

    @property
    def production(self) -> bool:
        return self.environment == "production"


def settings_from_env() -> Settings:
    return Settings(
        api_url=os.environ.get("NAMESLOL_API_URL", DEFAULT_API_URL).rstrip("/"),
        timeout=float(os.environ.get("NAMESLOL_TIMEOUT", DEFAULT_TIMEOUT)),
        environment=os.environ.get("ENVIRONMENT", "development").lower(),
        secret_key=os.environ.get("SECRET_KEY", "dev"),
        log_level=os.environ.get("LOG_LEVEL", "INFO").upper(),
    )
