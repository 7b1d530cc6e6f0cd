"""
Transcription Adapter

Turns a candidate's audio clip into a Transcript:
- Rejects empty and oversized clips before any provider call
- Makes exactly one fallback attempt when the provider fails
- Surfaces the original failure (never the fallback's) with context
"""

import asyncio
import logging

from interview_pipeline.config.settings import Settings, get_settings
from interview_pipeline.core.confidence import ConfidenceEstimator
from interview_pipeline.core.errors import (
    InputError,
    InputErrorReason,
    PipelineError,
    ProviderError,
    ProviderErrorReason,
    ProviderUnavailable,
)
from interview_pipeline.core.media import MediaDurationProbe, audio_format
from interview_pipeline.models.media import AudioClip
from interview_pipeline.models.transcript import Transcript
from interview_pipeline.providers.base import ProviderTranscription, TranscriptionProvider

logger = logging.getLogger(__name__)


class TranscriptionAdapter:
    """
    Audio to transcript, with one-shot fallback on failure.

    The fallback provider is a degraded strategy (local Whisper by default).
    If it fails too, the primary provider's error is classified and re-raised.
    """

    component = "transcription"

    def __init__(
        self,
        provider: TranscriptionProvider,
        fallback_provider: TranscriptionProvider | None = None,
        settings: Settings | None = None,
        confidence_estimator: ConfidenceEstimator | None = None,
        duration_probe: MediaDurationProbe | None = None,
    ):
        """
        Args:
            provider: Primary transcription backend
            fallback_provider: Backend tried once when the primary fails
            settings: Pipeline settings
            confidence_estimator: Confidence scoring strategy
            duration_probe: Media duration lookup
        """
        self.provider = provider
        self.fallback_provider = fallback_provider
        self.settings = settings or get_settings()
        self.confidence_estimator = confidence_estimator or ConfidenceEstimator()
        self.duration_probe = duration_probe or MediaDurationProbe(self.settings)

    async def transcribe(self, clip: AudioClip, language: str | None = None) -> Transcript:
        """
        Transcribe an audio clip.

        Args:
            clip: The candidate's recorded answer
            language: Language hint (defaults to settings.language)

        Returns:
            Immutable Transcript with confidence and duration

        Raises:
            InputError: Empty, oversized or unsupported audio
            ProviderUnavailable: Transcription backend not configured
            ProviderError: Remote call failed (auth, timeout, quota, ...)
        """
        self._validate(clip)
        language = language or self.settings.language

        fmt = audio_format(clip)
        if fmt is None:
            logger.warning(
                f"Unrecognized audio format (mime={clip.content_type}, "
                f"ext={clip.extension or 'none'}), sending as-is"
            )

        audio = clip.read_bytes()
        logger.info(f"Transcribing audio clip: {len(audio)} bytes, format={fmt}")

        provider_name = self._name(self.provider)
        fallback_used = False
        try:
            raw = await self.provider.transcribe(audio, clip.content_type, language)
        except Exception as original:
            logger.error(f"Transcription error ({provider_name}): {original}")
            raw = await self._attempt_fallback(audio, clip, language, original)
            provider_name = self._name(self.fallback_provider)
            fallback_used = True

        duration = await self.duration_probe.duration_seconds(clip)
        confidence = self.confidence_estimator.estimate(raw.text, raw.segments)

        return Transcript(
            text=raw.text,
            language_code=raw.language_code or language,
            confidence=confidence,
            duration_seconds=duration,
            segments=tuple(raw.segments),
            words=tuple(raw.words),
            provider=provider_name,
            fallback=fallback_used,
        )

    def _validate(self, clip: AudioClip) -> None:
        size = clip.size_bytes
        if size <= self.settings.min_audio_bytes:
            raise InputError(
                "Audio file is empty",
                reason=InputErrorReason.EMPTY,
                component=self.component,
            )
        if size > self.settings.max_audio_bytes:
            raise InputError(
                f"Audio file is too large ({size} bytes). Please record a shorter response.",
                reason=InputErrorReason.TOO_LARGE,
                component=self.component,
            )

    async def _attempt_fallback(
        self,
        audio: bytes,
        clip: AudioClip,
        language: str,
        original: Exception,
    ) -> ProviderTranscription:
        """Try the fallback provider once; on failure re-raise the original error."""
        if self.fallback_provider is None:
            raise self._classify(original) from original

        logger.info(f"Attempting fallback transcription with {self._name(self.fallback_provider)}")
        try:
            return await self.fallback_provider.transcribe(audio, clip.content_type, language)
        except Exception as fallback_error:
            logger.error(f"Fallback transcription also failed: {fallback_error}")
            raise self._classify(original) from original

    def _classify(self, error: Exception) -> PipelineError:
        """Wrap the primary provider's error with caller-facing context."""
        provider = getattr(error, "provider", None) or self._name(self.provider)
        status = getattr(error, "status", None)
        context = {"component": self.component, "provider": provider, "status": status}

        if isinstance(error, InputError):
            return error

        if isinstance(error, ProviderUnavailable):
            return ProviderUnavailable(
                f"Transcription provider is not configured: {error.message}",
                **context,
            )

        if isinstance(error, ProviderError):
            if error.reason == ProviderErrorReason.UNSUPPORTED_FORMAT:
                return InputError(
                    "Audio file format not supported. Please ensure the recording is "
                    "in a supported format (MP3, WAV, M4A, etc.).",
                    reason=InputErrorReason.UNSUPPORTED_FORMAT,
                    **context,
                )
            if error.reason == ProviderErrorReason.PAYLOAD_TOO_LARGE:
                return InputError(
                    "Audio file is too large. Please record a shorter response.",
                    reason=InputErrorReason.TOO_LARGE,
                    **context,
                )
            if error.reason == ProviderErrorReason.AUTH_INVALID:
                return ProviderError(
                    "Transcription API key is invalid or expired. Please check your configuration.",
                    reason=ProviderErrorReason.AUTH_INVALID,
                    **context,
                )
            return ProviderError(
                f"Transcription failed: {error.message}",
                reason=error.reason,
                **context,
            )

        if isinstance(error, (TimeoutError, asyncio.TimeoutError)):
            return ProviderError(
                "Transcription timed out",
                reason=ProviderErrorReason.TIMEOUT,
                **context,
            )

        return ProviderError(f"Transcription failed: {error}", **context)

    @staticmethod
    def _name(provider: object) -> str:
        return getattr(provider, "name", type(provider).__name__)
