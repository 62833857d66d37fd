from pydantic_settings import BaseSettings
from pydantic_settings import SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Values are read from process environment and optionally from `.env`.
    `timezone` is an IANA zone name used to bucket submissions into
    calendar days; when unset, the host's local zone is used.
    """

    codeforces_api_url: str = "https://codeforces.com/api"
    codeforces_base_url: str = "https://codeforces.com"
    request_timeout_seconds: float = 20.0
    timezone: str | None = None
    log_level: str = "INFO"
    sentry_dsn: str | None = None
    environment: str = "development"
    release: str | None = None
    sentry_traces_sample_rate: float = 0.1
    rate_limit_per_minute: int = 30
    rate_limit_window_seconds: int = 60

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")
