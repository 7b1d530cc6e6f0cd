"""
Provider capabilities consumed by the pipeline.

Each component receives the capability it needs at construction time. Any
backend implementing these protocols can be substituted.
"""

from typing import Protocol, runtime_checkable

import httpx
from pydantic import BaseModel, Field

from interview_pipeline.core.errors import ProviderError, ProviderErrorReason
from interview_pipeline.models.proctoring import DetectedObject, FaceObservation, TextBlock
from interview_pipeline.models.transcript import TranscriptSegment, TranscriptWord


class ProviderTranscription(BaseModel):
    """Raw transcription returned by a transcription backend."""

    text: str
    language_code: str = ""
    segments: list[TranscriptSegment] = Field(default_factory=list)
    words: list[TranscriptWord] = Field(default_factory=list)


@runtime_checkable
class TranscriptionProvider(Protocol):
    name: str

    async def transcribe(
        self,
        audio: bytes,
        mime_hint: str | None,
        language_hint: str | None,
    ) -> ProviderTranscription: ...

    async def aclose(self) -> None: ...


@runtime_checkable
class VisionProvider(Protocol):
    name: str

    async def detect_faces(self, image: bytes) -> list[FaceObservation]: ...

    async def detect_objects(self, image: bytes) -> list[DetectedObject]: ...

    async def detect_text(self, image: bytes) -> list[TextBlock]: ...

    async def aclose(self) -> None: ...


@runtime_checkable
class StructuredTextProvider(Protocol):
    name: str

    async def complete(
        self,
        prompt: str,
        system_instruction: str,
        max_tokens: int,
        temperature: float,
    ) -> str: ...

    async def aclose(self) -> None: ...


@runtime_checkable
class SpeechSynthesisProvider(Protocol):
    name: str
    content_type: str

    async def synthesize(self, text: str, voice: str) -> bytes: ...

    async def aclose(self) -> None: ...


# =============================================================================
# HTTP ERROR MAPPING
# =============================================================================

_UNSUPPORTED_FORMAT_MARKERS = ("unrecognized file format", "invalid file format")


def map_http_error(error: httpx.HTTPError, component: str, provider: str) -> ProviderError:
    """
    Translate an httpx failure into a ProviderError.

    Args:
        error: The exception raised by httpx
        component: Pipeline component making the call
        provider: Provider identifier

    Returns:
        ProviderError with the matching reason and status
    """
    if isinstance(error, httpx.TimeoutException):
        return ProviderError(
            f"Request timed out: {error}",
            reason=ProviderErrorReason.TIMEOUT,
            component=component,
            provider=provider,
        )

    if isinstance(error, httpx.HTTPStatusError):
        status = error.response.status_code
        body = error.response.text

        if status in (401, 403):
            reason = ProviderErrorReason.AUTH_INVALID
        elif status == 413:
            reason = ProviderErrorReason.PAYLOAD_TOO_LARGE
        elif status == 429:
            reason = ProviderErrorReason.QUOTA_EXCEEDED
        elif status == 400 and any(m in body.lower() for m in _UNSUPPORTED_FORMAT_MARKERS):
            reason = ProviderErrorReason.UNSUPPORTED_FORMAT
        else:
            reason = ProviderErrorReason.FAILED

        return ProviderError(
            f"HTTP {status}: {body[:200]}",
            reason=reason,
            component=component,
            provider=provider,
            status=status,
        )

    return ProviderError(
        f"Request failed: {error}",
        component=component,
        provider=provider,
    )
