from pydantic_settings import BaseSettings, SettingsConfigDict
from pathlib import Path

# Get the project root directory (parent of planner folder)
PROJECT_ROOT = Path(__file__).parent.parent

class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""
    database_url: str = "sqlite:///./planner.db"
    sql_echo: bool = False

    log_level: str = "INFO"

    # Planner defaults
    default_daily_limit: int = 5
    rebalance_horizon_days: int = 14
    capacity_slack: float = 1.3  # soft headroom above nominal daily capacity
    heavy_tomorrow_multiplier: float = 0.4

    model_config = SettingsConfigDict(
        env_prefix="PLANNER_",
        env_file=str(PROJECT_ROOT / ".env"),
        extra="ignore",
    )

settings = Settings()
