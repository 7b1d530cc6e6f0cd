"""
Shared fixtures and fake providers.
"""

import pytest

from interview_pipeline.config.settings import Settings
from interview_pipeline.core.assessment import AssessmentAggregator
from interview_pipeline.core.follow_up import FollowUpGenerator
from interview_pipeline.core.media import MediaDurationProbe
from interview_pipeline.core.orchestrator import PipelineOrchestrator
from interview_pipeline.core.proctoring import ProctoringInspector
from interview_pipeline.core.response_analyzer import ResponseAnalyzer
from interview_pipeline.core.speech import SpeechSynthesizer
from interview_pipeline.core.transcription import TranscriptionAdapter
from interview_pipeline.models.proctoring import DetectedObject, FaceObservation, TextBlock
from interview_pipeline.providers.base import ProviderTranscription


class FakeTranscriptionProvider:
    def __init__(self, result: ProviderTranscription | None = None, error: Exception | None = None, name: str = "fake_stt"):
        self.name = name
        self.result = result or ProviderTranscription(text="I led the team through a database migration.")
        self.error = error
        self.calls = []

    async def transcribe(self, audio, mime_hint, language_hint):
        self.calls.append((audio, mime_hint, language_hint))
        if self.error:
            raise self.error
        return self.result

    async def aclose(self):
        return None


class FakeTextProvider:
    """Returns canned responses; a callable response receives the prompt."""

    name = "fake_llm"

    def __init__(self, response="", error: Exception | None = None):
        self.response = response
        self.error = error
        self.calls = []
        self.closed = False

    async def complete(self, prompt, system_instruction, max_tokens, temperature):
        self.calls.append({
            "prompt": prompt,
            "system_instruction": system_instruction,
            "max_tokens": max_tokens,
            "temperature": temperature,
        })
        if self.error:
            raise self.error
        if callable(self.response):
            return self.response(prompt)
        return self.response

    async def aclose(self):
        self.closed = True


class FakeVisionProvider:
    name = "fake_vision"

    def __init__(
        self,
        faces: list[FaceObservation] | None = None,
        objects: list[DetectedObject] | None = None,
        text: list[TextBlock] | None = None,
        error: Exception | None = None,
    ):
        self.faces = faces or []
        self.objects = objects or []
        self.text = text or []
        self.error = error

    async def detect_faces(self, image):
        if self.error:
            raise self.error
        return self.faces

    async def detect_objects(self, image):
        if self.error:
            raise self.error
        return self.objects

    async def detect_text(self, image):
        if self.error:
            raise self.error
        return self.text

    async def aclose(self):
        return None


class FakeSpeechProvider:
    name = "fake_tts"
    content_type = "audio/mpeg"

    def __init__(self, audio: bytes = b"ID3fake-mp3", error: Exception | None = None):
        self.audio = audio
        self.error = error
        self.voices = []

    async def synthesize(self, text, voice):
        self.voices.append(voice)
        if self.error:
            raise self.error
        return self.audio

    async def aclose(self):
        return None


class FixedDurationProbe(MediaDurationProbe):
    def __init__(self, seconds: float = 30.0):
        self.seconds = seconds

    async def duration_seconds(self, clip):
        return self.seconds


ANALYSIS_RESPONSE = """Here is my analysis:
{
  "analysis": "Clear answer. Consider adding metrics.",
  "confidence": 0.85,
  "scores": {"clarity": 80, "relevance": 75, "depth": 60, "structure": 70},
  "suggestions": ["Quantify the impact", "Describe trade-offs"]
}"""

FOLLOW_UP_RESPONSE = """1. What was the hardest part of the migration?
2. How did you measure success?
3. What would you do differently?"""


def text_router(prompt: str) -> str:
    """Answer analysis prompts with JSON and follow-up prompts with questions."""
    if "JSON format" in prompt:
        return ANALYSIS_RESPONSE
    return FOLLOW_UP_RESPONSE


@pytest.fixture
def settings():
    return Settings(_env_file=None, openai_api_key="", google_vision_api_key="")


@pytest.fixture
def make_orchestrator(settings):
    def _make(
        transcription_provider=None,
        text_provider=None,
        vision_provider=None,
        speech_provider=None,
    ) -> PipelineOrchestrator:
        text_provider = text_provider or FakeTextProvider(text_router)
        return PipelineOrchestrator(
            transcription=TranscriptionAdapter(
                transcription_provider or FakeTranscriptionProvider(),
                settings=settings,
                duration_probe=FixedDurationProbe(),
            ),
            analyzer=ResponseAnalyzer(text_provider, settings),
            follow_ups=FollowUpGenerator(text_provider, settings),
            aggregator=AssessmentAggregator(text_provider, settings),
            inspector=ProctoringInspector(vision_provider or FakeVisionProvider(), settings),
            speech=SpeechSynthesizer(speech_provider or FakeSpeechProvider(), settings),
            settings=settings,
        )

    return _make
