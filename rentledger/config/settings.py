"""Application configuration from environment variables."""

from pydantic import ConfigDict, Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = ConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Database
    database_url: str = Field(
        default="sqlite:///./rentledger.db",
        description="SQLAlchemy connection string",
    )
    database_echo: bool = Field(default=False, description="Log SQL queries")

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")
    log_file: str = Field(default="logs/server.log", description="Server log file path")

    # API
    api_title: str = Field(default="Rent Ledger API", description="API title")
    api_version: str = Field(default="0.1.0", description="API version")

    # Listing
    default_page_size: int = Field(default=10, description="Rents per page when limit is omitted")
    max_page_size: int = Field(default=100, description="Upper bound for the limit query parameter")

    # Payments
    payment_max_retries: int = Field(
        default=3,
        description="Attempts before a conflicting concurrent payment is reported",
    )

    # Overdue sweep
    scheduler_enabled: bool = Field(default=True, description="Run the daily overdue sweep in-process")
    sweep_hour: int = Field(default=0, ge=0, le=23, description="Hour of the daily overdue sweep")
    sweep_minute: int = Field(default=0, ge=0, le=59, description="Minute of the daily overdue sweep")


# Global settings instance
settings = Settings()
