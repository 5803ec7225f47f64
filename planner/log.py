"""Loguru sink configuration."""
import sys

from loguru import logger

from planner.config import settings


def configure_logging(level: str = None) -> None:
    """Replace loguru's default sink with a stderr sink at the configured level."""
    logger.remove()
    logger.add(
        sys.stderr,
        level=(level or settings.log_level).upper(),
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | {name}:{function} - {message}",
    )
