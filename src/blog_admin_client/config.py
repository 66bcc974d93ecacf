"""Console configuration via environment variables."""

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Client configuration loaded from ``BLOG_ADMIN_*`` environment variables."""

    model_config = SettingsConfigDict(env_prefix="BLOG_ADMIN_")

    # Backend
    api_url: str = Field(description="Blog backend base URL")
    request_timeout: float = Field(default=30.0, description="Per-request timeout in seconds")

    # Navigation
    login_path: str = Field(default="/login", description="Console route of the login screen")
    console_url: str | None = Field(
        default=None,
        description="Console origin for hard navigation fallback. Defaults to API_URL.",
    )

    # Retry policy (reads only)
    read_retries: int = Field(default=1, description="Extra attempts for transient read errors")
    retry_base_delay: float = Field(default=1.0, description="Backoff base in seconds")
    retry_max_delay: float = Field(default=30.0, description="Backoff cap in seconds")

    # Lists
    page_limit: int = Field(default=10, description="Page size for list screens")
    stale_after_seconds: float = Field(
        default=300.0, description="Advisory freshness window for list results"
    )

    # Notifications
    success_notification_seconds: float = Field(
        default=3.0, description="Lifetime of success notifications"
    )
    error_notification_seconds: float = Field(
        default=5.0, description="Lifetime of error notifications"
    )

    log_level: str = Field(default="info", description="Log level")

    @property
    def login_url(self) -> str:
        """Absolute URL of the login screen, used when no router is registered."""
        origin = (self.console_url or self.api_url).rstrip("/")
        return f"{origin}/{self.login_path.lstrip('/')}"

    @field_validator("read_retries")
    @classmethod
    def _validate_read_retries(cls, v: int) -> int:
        if not 0 <= v <= 1:
            raise ValueError("BLOG_ADMIN_READ_RETRIES must be between 0 and 1")
        return v

    @field_validator(
        "request_timeout",
        "page_limit",
        "success_notification_seconds",
        "error_notification_seconds",
    )
    @classmethod
    def _validate_positive(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("must be greater than zero")
        return v

    @model_validator(mode="after")
    def _check_backoff(self) -> "Settings":
        if self.retry_base_delay < 0:
            raise ValueError("BLOG_ADMIN_RETRY_BASE_DELAY must not be negative")
        if self.retry_max_delay < self.retry_base_delay:
            raise ValueError("BLOG_ADMIN_RETRY_MAX_DELAY must be >= BLOG_ADMIN_RETRY_BASE_DELAY")
        return self
