"""
Interview Pipeline - AI evaluation and proctoring core for mock interviews.

Turns a candidate's recorded answers and webcam snapshots into transcripts,
scored feedback, follow-up questions, proctoring violations and a final
interview assessment.
"""

from interview_pipeline.config import Settings, configure_logging, get_settings
from interview_pipeline.core.orchestrator import PipelineOrchestrator
from interview_pipeline.dependencies import build_orchestrator

__version__ = "0.1.0"

__all__ = [
    "PipelineOrchestrator",
    "Settings",
    "build_orchestrator",
    "configure_logging",
    "get_settings",
]
