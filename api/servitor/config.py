"""Application configuration."""

from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Database
    postgres_host: str = "localhost"
    postgres_port: int = 5432
    postgres_user: str = "servitor"
    postgres_password: str = "changeme"
    postgres_db: str = "cafe"
    database_uri: Optional[str] = None  # Full SQLAlchemy URL, wins over postgres_*
    auto_create_schema: bool = True

    # API
    api_host: str = "0.0.0.0"
    api_port: int = 1333
    api_reload: bool = False

    # Logging
    log_level: Optional[str] = None
    log_json: bool = False

    # Tracing (disabled unless an OTLP/HTTP endpoint is given)
    otel_traces_endpoint: Optional[str] = None
    otel_service_name: str = "servitor"

    # Environment
    environment: str = "development"

    @property
    def database_url(self) -> str:
        """Build database URL."""
        if self.database_uri:
            return self.database_uri
        return (
            f"postgresql+psycopg2://{self.postgres_user}:{self.postgres_password}"
            f"@{self.postgres_host}:{self.postgres_port}/{self.postgres_db}"
        )

    @property
    def effective_log_level(self) -> str:
        """Explicit log level, else DEBUG in development and INFO elsewhere."""
        if self.log_level:
            return self.log_level.upper()
        return "DEBUG" if self.environment == "development" else "INFO"


settings = Settings()
