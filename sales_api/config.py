"""Configuration settings for the application."""
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings."""

    app_name: str = "Sales Dashboard API"
    version: str = "1.0.0"
    debug: bool = False
    log_level: str = "INFO"
    database_path: str = "sales.db"

    # Seed data source used by /api/init
    seed_url: str = "https://s3.amazonaws.com/roxiler.com/product_transaction.json"
    seed_timeout: float = 30.0

    # Every month filter is resolved inside this year
    report_year: int = 2023
    default_per_page: int = 10
    max_per_page: int = 1000
    max_page: int = 1_000_000

    host: str = "0.0.0.0"
    port: int = 5000

    class Config:
        env_file = ".env"
        case_sensitive = False


settings = Settings()
