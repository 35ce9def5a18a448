"""
Name: Client Configuration (Settings)

Responsibilities:
  - Centralized, typed configuration using pydantic-settings
  - Validate environment variables at startup
  - Provide defaults that match the web front end behavior

Collaborators:
  - container.py: reads settings to select the credential strategy and adapters
  - infrastructure/http/client.py: base URL, timeout and retry knobs
  - application/auth_redirect.py: public paths and login route

Constraints:
  - No business logic: pure configuration
  - Env vars use the LEAVEMARKER_ prefix (e.g. LEAVEMARKER_API_BASE_URL)

Notes:
  - Singleton via lru_cache; tests build Settings(...) directly
  - auth_mode is read once at startup (cookie vs legacy token strategy)
"""

from functools import lru_cache

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_AUTH_MODES = {"cookie", "token"}


class Settings(BaseSettings):
    """
    Client settings loaded from environment variables.

    Attributes:
        api_base_url: Backend REST API root (default: http://localhost:8080/api)
        app_env: Environment name (development/test/production)
        auth_mode: cookie (server session cookie) or token (legacy bearer token)
        http_timeout_seconds: Transport timeout (httpx default: 5s)
        public_paths: Comma-separated routes that never redirect to login
        logout_flag_key: Session storage key of the logout-in-progress flag
        token_storage_key: Durable storage key of the bearer token (token mode)
        user_storage_key: Durable storage key of the serialized identity
        local_storage_path: JSON file backing durable storage (empty: in-memory)
        download_dir: Directory where downloaded reports are written
        retry_max_attempts: Attempts for idempotent GETs (1 disables retry)
        log_level: Logging level name
        log_json: Emit JSON log lines
    """

    api_base_url: str = "http://localhost:8080/api"

    # Environment
    app_env: str = "development"

    # Auth transport
    auth_mode: str = "cookie"
    http_timeout_seconds: float = 5.0

    # Routes
    public_paths: str = "/,/login,/signup,/pricing"
    landing_path: str = "/"
    login_path: str = "/login"
    dashboard_path: str = "/dashboard"
    pricing_path: str = "/pricing"
    payment_success_path: str = "/payment/success"
    payment_cancel_path: str = "/payment/cancel"

    # Client storage
    logout_flag_key: str = "isLoggingOut"
    token_storage_key: str = "auth_token"
    user_storage_key: str = "user"
    local_storage_path: str = ""

    # Reports
    download_dir: str = "downloads"
    report_default_range_days: int = 30

    # Retry/Resilience
    retry_max_attempts: int = 3
    retry_base_delay_seconds: float = 0.5
    retry_max_delay_seconds: float = 5.0

    # Logging
    log_level: str = "INFO"
    log_json: bool = True

    # Checkout
    checkout_brand_name: str = "LeaveMarker"
    checkout_theme_color: str = "#6366f1"

    @field_validator("auth_mode")
    @classmethod
    def auth_mode_valid(cls, v: str) -> str:
        mode = (v or "cookie").strip().lower()
        if mode not in _AUTH_MODES:
            raise ValueError("auth_mode must be cookie or token")
        return mode

    @field_validator("retry_max_attempts")
    @classmethod
    def retry_attempts_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("retry_max_attempts must be >= 1")
        return v

    @field_validator(
        "landing_path",
        "login_path",
        "dashboard_path",
        "pricing_path",
        "payment_success_path",
        "payment_cancel_path",
    )
    @classmethod
    def route_must_be_absolute(cls, v: str) -> str:
        if not v.startswith("/"):
            raise ValueError("route paths must start with '/'")
        return v

    @field_validator("api_base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    def get_public_paths_list(self) -> list[str]:
        """Parse comma-separated public paths into a list."""
        return [path.strip() for path in self.public_paths.split(",") if path.strip()]

    def uses_cookies(self) -> bool:
        return self.auth_mode == "cookie"

    def is_production(self) -> bool:
        return self.app_env.strip().lower() == "production"

    @model_validator(mode="after")
    def validate_security_requirements(self):
        if not self.is_production():
            return self
        if not self.api_base_url.startswith("https://"):
            raise ValueError("API base URL must use https in production")
        return self

    model_config = SettingsConfigDict(
        env_prefix="LEAVEMARKER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    """
    Get singleton Settings instance.

    Raises:
        ValidationError: If env vars are invalid
    """
    return Settings()
