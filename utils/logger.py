"""Centralized logging configuration."""
import os
import sys

from loguru import logger

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_FILE = os.getenv("LOG_FILE")

log_format = ' | '.join(
    (
        '<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green>',
        '<level>{level:<8}</level>',
        '<cyan>{name}:{function}:{line}</cyan>',
        '{message}',
    )
)

_configured = False


def setup_logging() -> None:
    """Replace loguru's default handler with the app's sinks (idempotent)"""
    global _configured
    if _configured:
        return

    logger.remove()  # Drop the default handler to avoid duplicate output
    logger.add(sys.stderr, format=log_format, level=LOG_LEVEL)

    if LOG_FILE:
        # File output with daily rotation and compression
        logger.add(
            LOG_FILE,
            format=log_format,
            level=LOG_LEVEL,
            rotation='1 day',
            retention='30 days',
            compression='zip',
            enqueue=True,
        )

    _configured = True
