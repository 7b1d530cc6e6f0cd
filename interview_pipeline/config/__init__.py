"""
Configuration for the interview pipeline.
"""

from interview_pipeline.config.settings import Settings, TTSEngine, get_settings
from interview_pipeline.config.logging import configure_logging

__all__ = [
    "Settings",
    "TTSEngine",
    "get_settings",
    "configure_logging",
]
