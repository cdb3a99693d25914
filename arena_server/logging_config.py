# arena_server/logging_config.py
"""Logging configuration for the arena server."""

import logging


def configure_logging(level: str = "INFO"):
    """Configure root logging once for the whole process."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
