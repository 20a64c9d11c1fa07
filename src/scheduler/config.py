"""Scheduler configuration loaded from environment variables.

Only presentation defaults for the calendar grid and logging live here; the
core reads no other environment.
"""

from pydantic import Field
from pydantic_settings import BaseSettings


class SchedulerConfig(BaseSettings):
    """Scheduler configuration loaded from environment variables.

    Settings are loaded from SCHEDULER_-prefixed environment variables with
    sensible defaults. For local development, create a .env file in the
    project root.
    """

    # Calendar grid (the admin UI shows 07:00-22:00, 15 hourly gridlines)
    calendar_start_hour: int = Field(
        default=7,
        description="First visible hour of the calendar grid (inclusive)",
    )
    calendar_end_hour: int = Field(
        default=22,
        description="Last visible hour of the calendar grid (exclusive)",
    )
    calendar_min_height_percent: float = Field(
        default=2.5,
        description="Minimum cell height so very short sessions stay clickable",
    )
    calendar_clamp: bool = Field(
        default=False,
        description="Clip cells to the visible window instead of positioning them outside it",
    )

    # Logging
    log_json: bool = Field(
        default=False,
        description="Output logs in JSON format (for production)",
    )
    log_level: str = Field(
        default="INFO",
        description="Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )

    model_config = {
        "env_prefix": "SCHEDULER_",
        "case_sensitive": False,
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


# Singleton pattern
_config: SchedulerConfig | None = None


def get_config() -> SchedulerConfig:
    """Get the scheduler configuration singleton.

    Returns:
        SchedulerConfig: Scheduler configuration instance
    """
    global _config
    if _config is None:
        _config = SchedulerConfig()
    return _config


def reset_config() -> None:
    """Drop the cached configuration so the next get_config() re-reads the environment."""
    global _config
    _config = None
