"""Centralised application settings loaded from environment / .env file."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    app_title: str = "Taxi Order API"
    log_level: str = "INFO"

    # Order lifecycle
    first_order_id: int = 1
    rollback_failed_assignment: bool = False  # undo id/status on unknown driver
    unassign_resets_driver_id: bool = False

    # Presentation
    timestamp_format: str = "%Y-%m-%d %H:%M:%S"

    # API
    rate_limit: str = "100/minute"

    model_config = {"env_file": ".env", "env_prefix": "TAXI_", "extra": "ignore"}


settings = Settings()
