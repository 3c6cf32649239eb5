"""Logging configuration."""

import logging
import os


def setup_logging(level: str | None = None) -> None:
    """Configure root logging for scripts and applications using the facade.

    ``level`` falls back to the LOG_LEVEL environment variable, then INFO.
    """
    level = (level or os.getenv("LOG_LEVEL", "INFO")).upper()
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
