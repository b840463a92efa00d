import sys
import logging
from typing import Optional

from loguru import logger

from nhl_stats.config.settings import settings

# Loggers that install their own handlers and must be routed through loguru
THIRD_PARTY_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access", "httpx", "fastapi")


class InterceptHandler(logging.Handler):
    """Forwards standard logging records to loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        # Get corresponding Loguru level if it exists
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Find caller from where originated the logged message
        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(
            level, record.getMessage()
        )


def setup_logging(level: Optional[str] = None) -> None:
    """Configures Loguru logger based on application settings."""
    log_level = (level or settings.log_level).upper()
    logger.remove()  # Remove default handler

    # Basic console logging
    logger.add(
        sys.stderr,  # Output to standard error
        level=log_level,
        format=(
            "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
            "<level>{message}</level>"
        ),
        colorize=True,
        backtrace=True,
        diagnose=False,
    )

    logger.info(f"Logging initialized with level: {log_level}")

    # Intercept standard logging messages
    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
    for name in THIRD_PARTY_LOGGERS:
        std_logger = logging.getLogger(name)
        std_logger.handlers = [InterceptHandler()]
        std_logger.propagate = False
    logger.info("Standard logging intercepted.")
