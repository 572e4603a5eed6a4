"""Configuration management using pydantic-settings."""

from typing import Literal

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_JWT_SECRET = "change-this-in-production"


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    A Settings instance is built once by the entry point and handed to
    every component that needs it (database, token issuer, app factories).
    """

    environment: Literal["development", "production", "test"] = "development"

    database_path: str = "./data/usergate.db"

    # Gateway (public HTTP surface)
    gateway_host: str = "0.0.0.0"
    gateway_port: int = 3000
    cors_origins: list[str] = ["http://localhost:3000"]

    # Authentication service (internal)
    service_host: str = "localhost"
    service_port: int = 3001
    service_url: str | None = None
    service_timeout: float = 10.0
    health_check_timeout: float = 5.0

    # Rate limiting: throttle_limit requests per throttle_ttl seconds, per
    # client address and route
    throttle_limit: int = 10
    throttle_ttl: int = 60
    throttle_storage_uri: str = "memory://"

    # JWT Configuration
    jwt_secret_key: str = DEFAULT_JWT_SECRET
    jwt_algorithm: str = "HS256"
    jwt_expiry_hours: int = 24

    # Bcrypt work factor; tests use 4 for faster execution
    bcrypt_work_factor: int = 10

    log_level: str = "INFO"
    log_file: str | None = None

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False
    )

    @model_validator(mode="after")
    def check_production_secret(self) -> "Settings":
        """Refuse to start in production with a default or short JWT secret."""
        if self.environment == "production":
            if self.jwt_secret_key == DEFAULT_JWT_SECRET or len(self.jwt_secret_key) < 32:
                raise ValueError(
                    "JWT_SECRET_KEY must be set to at least 32 characters in production"
                )
        return self

    @property
    def rate_limit(self) -> str:
        """Rate limit string understood by flask-limiter."""
        return f"{self.throttle_limit} per {self.throttle_ttl} second"

    @property
    def auth_service_url(self) -> str:
        """Base URL the gateway uses to reach the authentication service."""
        if self.service_url:
            return self.service_url.rstrip("/")
        return f"http://{self.service_host}:{self.service_port}"
