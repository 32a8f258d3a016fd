from typing import List, Optional

from fastapi import Request
from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict


class MissingConfigurationError(Exception):
    def __init__(self, missing: List[str]):
        self.missing = missing
        super().__init__(f"Missing required environment variables: {', '.join(missing)}")


class Settings(BaseSettings):
    SERVICE_NAME: str = "Paystack Relay"
    DEBUG: bool = False

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 3000

    # Paystack Configuration
    PAYSTACK_SECRET_KEY: str = Field(min_length=1)
    PAYSTACK_BASE_URL: str = "https://api.paystack.co"
    PAYSTACK_TIMEOUT: float = 30.0
    PAYSTACK_SIGNATURE_HEADER: str = "x-paystack-signature"

    # Overrides the callback URL derived from the incoming request
    CALLBACK_URL: Optional[str] = None

    # Comma separated, "*" allows any origin
    CORS_ORIGINS: str = "*"

    # Logging levels
    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    @property
    def cors_origin_list(self) -> List[str]:
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]


def load_settings(**overrides) -> Settings:
    """
    Build the process configuration once from the environment (and .env).
    Raises MissingConfigurationError when a required variable is absent.
    """
    try:
        return Settings(**overrides)
    except ValidationError as e:
        missing = [
            str(error["loc"][0])
            for error in e.errors()
            if error["loc"] and error["type"] in ("missing", "string_too_short")
        ]
        if missing:
            raise MissingConfigurationError(missing) from e
        raise


def get_settings(request: Request) -> Settings:
    return request.app.state.settings
