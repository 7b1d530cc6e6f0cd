"""
Explicit "unconfigured" provider variants.

These stand in for a backend whose credentials are missing. Every call raises
ProviderUnavailable, which each component then handles with its own fallback
or fail-closed rule.
"""

from interview_pipeline.core.errors import ProviderUnavailable
from interview_pipeline.models.proctoring import DetectedObject, FaceObservation, TextBlock
from interview_pipeline.providers.base import ProviderTranscription


class _Unconfigured:
    name = "unconfigured"
    component = "provider"
    setting = ""

    def _unavailable(self) -> ProviderUnavailable:
        return ProviderUnavailable(
            f"Provider is not configured. Please set {self.setting.upper()}.",
            component=self.component,
            provider=self.name,
        )

    async def aclose(self) -> None:
        return None


class UnconfiguredTranscriptionProvider(_Unconfigured):
    component = "transcription"
    setting = "openai_api_key"

    async def transcribe(
        self,
        audio: bytes,
        mime_hint: str | None,
        language_hint: str | None,
    ) -> ProviderTranscription:
        raise self._unavailable()


class UnconfiguredTextProvider(_Unconfigured):
    component = "text_generation"
    setting = "openai_api_key"

    async def complete(
        self,
        prompt: str,
        system_instruction: str,
        max_tokens: int,
        temperature: float,
    ) -> str:
        raise self._unavailable()


class UnconfiguredVisionProvider(_Unconfigured):
    component = "vision"
    setting = "google_vision_api_key"

    async def detect_faces(self, image: bytes) -> list[FaceObservation]:
        raise self._unavailable()

    async def detect_objects(self, image: bytes) -> list[DetectedObject]:
        raise self._unavailable()

    async def detect_text(self, image: bytes) -> list[TextBlock]:
        raise self._unavailable()


class UnconfiguredSpeechProvider(_Unconfigured):
    component = "speech"
    setting = "openai_api_key"
    content_type = "audio/mpeg"

    async def synthesize(self, text: str, voice: str) -> bytes:
        raise self._unavailable()
