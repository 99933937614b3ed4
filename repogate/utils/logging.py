"""Centralized logging configuration for Repogate."""

import logging
import sys
from typing import Literal

from repogate.config import Settings


def setup_logging(
    settings: Settings,
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] | None = None,
) -> None:
    """Configure logging for the application.

    Args:
        settings: Application settings
        level: Override log level (default: INFO for production, DEBUG for development)
    """
    if level is None:
        level = "INFO" if settings.is_production else "DEBUG"

    logging.basicConfig(
        level=getattr(logging, level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    # Reduce noise from third-party libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
