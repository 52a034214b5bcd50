from functools import lru_cache
from urllib.parse import urlparse

from pydantic import ValidationInfo, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # App
    app_name: str = "Tenant CRM"
    app_env: str = "development"  # development, testing, production
    debug: bool = False
    enable_openapi: bool = True

    # Security
    log_user_emails: bool = False  # GDPR: keep emails out of logs unless explicitly enabled
    allowed_app_url_domains: list[str] = ["localhost", "127.0.0.1"]
    csp_production: str = "default-src 'self'; frame-ancestors 'none'"

    # Database
    database_url: str
    database_pool_size: int = 5
    database_max_overflow: int = 10
    database_ssl_mode: str = "prefer"  # disable, prefer, require, verify-ca, verify-full
    database_create_tables: bool = False  # Local bootstrapping only, there are no migrations

    # Auth (tokens are issued by the hosted auth provider, verified here)
    jwt_secret_key: str
    jwt_algorithm: str = "HS256"
    jwt_audience: str | None = "authenticated"

    @field_validator("jwt_secret_key")
    @classmethod
    def validate_jwt_secret(cls, v: str) -> str:
        if v == "change-this-to-a-secure-random-string":
            raise ValueError(
                "JWT_SECRET_KEY must be changed from default value. "
                "Use the signing secret of your auth provider."
            )
        if len(v) < 32:
            raise ValueError("JWT_SECRET_KEY must be at least 32 characters")
        return v

    @field_validator("cors_origins")
    @classmethod
    def validate_cors_origins(cls, v: list[str]) -> list[str]:
        """Reject wildcards, credentials are allowed on CORS requests."""
        for origin in v:
            if origin == "*":
                raise ValueError(
                    "CORS wildcard '*' is not allowed when allow_credentials=True. "
                    "Specify explicit origins instead."
                )
        return v

    @field_validator("app_url")
    @classmethod
    def validate_app_url(cls, v: str, info: ValidationInfo) -> str:
        """APP_URL ends up in emailed links, so it must be on an allowed domain."""
        allowed = info.data.get("allowed_app_url_domains", ["localhost", "127.0.0.1"])
        hostname = urlparse(v).hostname or ""
        if not any(hostname == domain or hostname.endswith(f".{domain}") for domain in allowed):
            raise ValueError(
                f"APP_URL domain '{hostname}' not in allowed list. "
                f"Add it to ALLOWED_APP_URL_DOMAINS or use: {allowed}"
            )
        return v

    # Temporal
    temporal_host: str = "localhost:7233"
    temporal_namespace: str = "default"
    temporal_task_queue: str = "crm-jobs"

    # CORS
    cors_origins: list[str] = ["http://localhost:3000"]

    # Metrics
    metrics_api_key: str | None = None  # If set, /metrics requires this key

    # Email (Resend)
    resend_api_key: str | None = None  # If not set, emails are logged but not sent
    email_from: str = "noreply@example.com"
    email_send_timeout_seconds: int = 10
    app_url: str = "http://localhost:3000"  # Frontend URL used in emailed links
    recovery_email_expire_hours: int = 24

    # Invitations
    invite_expire_days: int = 7

    # Scheduled jobs (Temporal cron syntax, unset = not scheduled by the worker)
    scheduled_reports_schedule: str | None = None  # e.g. "*/15 * * * *"
    cleanup_schedule: str | None = None  # e.g. "0 3 * * *"
    cleanup_retention_days: int = 30
    scheduled_report_preview_rows: int = 50

    # Redis (optional - app works without it)
    redis_url: str | None = None
    redis_pool_size: int = 10
    notification_count_ttl_seconds: int = 30

    # Rate limiting (slowapi, public endpoints)
    public_rate_limit: str = "10/minute"


@lru_cache
def get_settings() -> Settings:
    return Settings()
