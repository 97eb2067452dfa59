"""
Logging configuration
"""
import sys
from pathlib import Path

from loguru import logger

from customer_api.config import get_settings

settings = get_settings()

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>"
)


def setup_logger(log_dir: str = settings.log_dir, level: str = settings.log_level):
    """Console sink plus daily request and error files under log_dir."""
    logger.remove()

    logger.add(sys.stdout, colorize=True, format=CONSOLE_FORMAT, level=level)

    if not log_dir:
        return logger

    directory = Path(log_dir)
    directory.mkdir(parents=True, exist_ok=True)

    logger.add(
        directory / "customer_api_{time:YYYY-MM-DD}.log",
        rotation="00:00",
        retention="30 days",
        compression="zip",
        level="INFO",
    )
    logger.add(
        directory / "errors_{time:YYYY-MM-DD}.log",
        rotation="00:00",
        retention="90 days",
        level="ERROR",
        backtrace=True,
        diagnose=settings.debug,
    )

    return logger


log = setup_logger()
