"""
Logging setup for host applications embedding the pipeline.
"""

import logging

from interview_pipeline.config.settings import Settings, get_settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(settings: Settings | None = None) -> None:
    """
    Configure root logging for the pipeline.

    Args:
        settings: Settings providing the log level (defaults to cached settings)
    """
    settings = settings or get_settings()
    level = getattr(logging, settings.log_level.upper(), logging.INFO)

    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger("interview_pipeline").setLevel(level)

    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
