"""
Provider capabilities and reference backends.
"""

from interview_pipeline.providers.base import (
    ProviderTranscription,
    SpeechSynthesisProvider,
    StructuredTextProvider,
    TranscriptionProvider,
    VisionProvider,
    map_http_error,
)
from interview_pipeline.providers.openai import (
    OpenAIChatProvider,
    OpenAISpeechProvider,
    OpenAITranscriptionProvider,
)
from interview_pipeline.providers.google_vision import GoogleVisionProvider
from interview_pipeline.providers.local_whisper import LocalWhisperProvider
from interview_pipeline.providers.edge_tts import EdgeSpeechProvider
from interview_pipeline.providers.unconfigured import (
    UnconfiguredSpeechProvider,
    UnconfiguredTextProvider,
    UnconfiguredTranscriptionProvider,
    UnconfiguredVisionProvider,
)

__all__ = [
    # Capabilities
    "ProviderTranscription",
    "SpeechSynthesisProvider",
    "StructuredTextProvider",
    "TranscriptionProvider",
    "VisionProvider",
    "map_http_error",
    # Backends
    "OpenAIChatProvider",
    "OpenAISpeechProvider",
    "OpenAITranscriptionProvider",
    "GoogleVisionProvider",
    "LocalWhisperProvider",
    "EdgeSpeechProvider",
    # Unconfigured variants
    "UnconfiguredSpeechProvider",
    "UnconfiguredTextProvider",
    "UnconfiguredTranscriptionProvider",
    "UnconfiguredVisionProvider",
]
