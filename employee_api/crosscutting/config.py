"""
Name: Application Configuration (Settings)

Responsibilities:
  - Centralized, typed configuration using pydantic-settings
  - Validate environment variables at startup (fail fast)
  - Provide defaults that match the documented runtime behavior

Collaborators:
  - api/main.py: lifespan, CORS, static assets, security validation
  - container.py: token service secret/TTL, store selection (test vs runtime)
  - crosscutting.rate_limit / middleware / security: limits and headers

Constraints:
  - Lives in API/infrastructure layer, NOT in domain/application
  - No business logic — pure configuration
  - Instances are immutable (frozen); build a new Settings to change values

Notes:
  - Singleton via lru_cache; components receive the values they need by injection
"""

from functools import lru_cache

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_KNOWN_ENVS = {"development", "production", "test", "testing", "ci"}
_INSECURE_SECRETS = {"dev-secret", "changeme", "change-me", "password", "secret"}


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Attributes:
        database_url: PostgreSQL connection string
        app_env: development | production | test
        port: HTTP port for the uvicorn entrypoint (default: 6000)
        jwt_secret: Secret for signing access tokens
        jwt_access_ttl_minutes: Access token TTL in minutes (default: 60)
        allowed_origins: Comma-separated CORS origins
        cors_allow_credentials: Allow cookies cross-origin (default: True)
        rate_limit_rps: Refill rate per client (default: 100 per 10 minutes)
        rate_limit_burst: Max burst tokens per client (default: 100)
        max_body_bytes: Max request body size (default: 1MB)
        log_level: Root level for the project logger
        log_json: Emit JSON log lines (False -> plain text)
        access_log: Per-request access log (None -> enabled outside production)
        frontend_build_dir: Built SPA served in production (if present)
    """

    # Required (no defaults)
    database_url: str

    # Environment
    app_env: str = "development"
    port: int = 6000

    # Security - JWT
    jwt_secret: str = "dev-secret"
    jwt_access_ttl_minutes: int = 60

    # CORS configuration
    allowed_origins: str = "http://localhost:3000"
    cors_allow_credentials: bool = True

    # Security - Rate Limiting (100 requests / 10 minutes per IP)
    rate_limit_rps: float = 100 / 600
    rate_limit_burst: int = 100

    # Security - Hardening
    max_body_bytes: int = 1 * 1024 * 1024  # 1MB

    # Database - Connection Pool
    db_pool_min_size: int = 2
    db_pool_max_size: int = 10
    db_statement_timeout_ms: int = 30000  # 30 seconds

    # Logging
    log_level: str = "INFO"
    log_json: bool = True
    access_log: bool | None = None

    # Static assets (production only)
    frontend_build_dir: str = "frontend/build"

    # Dev Tools (Backend Safe)
    dev_seed_admin: bool = False
    dev_seed_admin_username: str = "admin"
    dev_seed_admin_email: str = "admin@local.dev"
    dev_seed_admin_password: str = "admin123"

    @field_validator("app_env")
    @classmethod
    def app_env_must_be_known(cls, v: str) -> str:
        env = (v or "development").strip().lower()
        if env not in _KNOWN_ENVS:
            raise ValueError(f"app_env must be one of {sorted(_KNOWN_ENVS)}")
        return env

    @field_validator("jwt_access_ttl_minutes")
    @classmethod
    def ttl_must_be_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("jwt_access_ttl_minutes must be greater than 0")
        return v

    @field_validator("rate_limit_rps", "rate_limit_burst")
    @classmethod
    def rate_limit_non_negative(cls, v):
        # R: 0 disables rate limiting; negatives are always a typo.
        if v < 0:
            raise ValueError("rate limit values must be >= 0")
        return v

    @model_validator(mode="after")
    def validate_pool_sizes(self):
        if self.db_pool_min_size > self.db_pool_max_size:
            raise ValueError(
                f"db_pool_min_size ({self.db_pool_min_size}) must be <= "
                f"db_pool_max_size ({self.db_pool_max_size})"
            )
        return self

    @model_validator(mode="after")
    def validate_security_requirements(self):
        if not self.is_production():
            return self

        jwt_secret = (self.jwt_secret or "").strip()
        if not jwt_secret or jwt_secret in _INSECURE_SECRETS:
            raise ValueError(
                "JWT_SECRET must be set to a strong, non-default value in production"
            )
        if len(jwt_secret) < 32:
            raise ValueError("JWT_SECRET must be at least 32 characters in production")
        return self

    def get_allowed_origins_list(self) -> list[str]:
        """Parse comma-separated origins into a list."""
        return [
            origin.strip()
            for origin in self.allowed_origins.split(",")
            if origin.strip()
        ]

    def is_production(self) -> bool:
        return self.app_env == "production"

    def is_test(self) -> bool:
        return self.app_env in {"test", "testing", "ci"}

    def access_log_enabled(self) -> bool:
        if self.access_log is not None:
            return self.access_log
        return not self.is_production()

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",  # Ignore unknown env vars
        frozen=True,
    )


@lru_cache
def get_settings() -> Settings:
    """
    Get singleton Settings instance.

    Raises:
        ValidationError: If required env vars are missing or invalid
    """
    return Settings()
