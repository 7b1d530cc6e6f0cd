"""
Component wiring.

Builds a PipelineOrchestrator from Settings. Backends whose credentials are
missing are replaced by their explicit unconfigured variants; each component
then applies its own fallback or fail-closed rule.
"""

import logging

from interview_pipeline.config.settings import Settings, TTSEngine, get_settings
from interview_pipeline.core.assessment import AssessmentAggregator
from interview_pipeline.core.camera import CameraValidator
from interview_pipeline.core.follow_up import FollowUpGenerator
from interview_pipeline.core.orchestrator import PipelineOrchestrator
from interview_pipeline.core.proctoring import ProctoringInspector
from interview_pipeline.core.response_analyzer import ResponseAnalyzer
from interview_pipeline.core.speech import SpeechSynthesizer
from interview_pipeline.core.transcription import TranscriptionAdapter
from interview_pipeline.providers import (
    EdgeSpeechProvider,
    GoogleVisionProvider,
    LocalWhisperProvider,
    OpenAIChatProvider,
    OpenAISpeechProvider,
    OpenAITranscriptionProvider,
    SpeechSynthesisProvider,
    StructuredTextProvider,
    TranscriptionProvider,
    UnconfiguredSpeechProvider,
    UnconfiguredTextProvider,
    UnconfiguredTranscriptionProvider,
    UnconfiguredVisionProvider,
    VisionProvider,
)

logger = logging.getLogger(__name__)


def build_transcription_provider(settings: Settings) -> TranscriptionProvider:
    if settings.openai_configured:
        return OpenAITranscriptionProvider(settings)
    logger.warning("OpenAI not configured - transcription unavailable")
    return UnconfiguredTranscriptionProvider()


def build_text_provider(settings: Settings) -> StructuredTextProvider:
    if settings.openai_configured:
        return OpenAIChatProvider(settings)
    logger.warning("OpenAI not configured - analysis, follow-ups and assessment unavailable")
    return UnconfiguredTextProvider()


def build_vision_provider(settings: Settings) -> VisionProvider:
    if settings.vision_configured:
        return GoogleVisionProvider(settings)
    logger.warning("Google Vision not configured - proctoring will use fallback results")
    return UnconfiguredVisionProvider()


def build_speech_provider(settings: Settings) -> SpeechSynthesisProvider:
    if settings.tts_engine == TTSEngine.EDGE:
        return EdgeSpeechProvider()
    if settings.openai_configured:
        return OpenAISpeechProvider(settings)
    logger.warning("OpenAI not configured - speech will use the silent placeholder")
    return UnconfiguredSpeechProvider()


def build_orchestrator(settings: Settings | None = None) -> PipelineOrchestrator:
    """
    Wire every component from one Settings object.

    Args:
        settings: Pipeline settings (defaults to get_settings())

    Returns:
        Ready-to-use PipelineOrchestrator; call aclose() when done
    """
    settings = settings or get_settings()

    text_provider = build_text_provider(settings)
    fallback = LocalWhisperProvider(settings) if settings.use_local_whisper_fallback else None

    return PipelineOrchestrator(
        transcription=TranscriptionAdapter(
            build_transcription_provider(settings),
            fallback_provider=fallback,
            settings=settings,
        ),
        analyzer=ResponseAnalyzer(text_provider, settings),
        follow_ups=FollowUpGenerator(text_provider, settings),
        aggregator=AssessmentAggregator(text_provider, settings),
        inspector=ProctoringInspector(build_vision_provider(settings), settings),
        speech=SpeechSynthesizer(build_speech_provider(settings), settings),
        camera=CameraValidator(),
        settings=settings,
    )
