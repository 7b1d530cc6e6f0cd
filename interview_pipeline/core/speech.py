"""
Speech synthesis for interviewer prompts.

Best-effort: any failure yields a short silent MP3 so the client always
has something playable.
"""

import logging

from interview_pipeline.config.settings import Settings, get_settings
from interview_pipeline.models.media import SpeechAudio
from interview_pipeline.providers.base import SpeechSynthesisProvider

logger = logging.getLogger(__name__)

# One MPEG-1 Layer III frame header followed by silence
SILENT_MP3 = bytes([0xFF, 0xFB, 0x90, 0x00] + [0x00] * 16)


class SpeechSynthesizer:
    """Wraps a SpeechSynthesisProvider with the silent-placeholder fallback."""

    def __init__(self, provider: SpeechSynthesisProvider, settings: Settings | None = None):
        self.provider = provider
        self.settings = settings or get_settings()

    async def synthesize(self, text: str, voice: str | None = None) -> SpeechAudio:
        """
        Convert text to speech.

        Args:
            text: Text to speak
            voice: Provider voice name (defaults to settings.tts_voice)

        Returns:
            SpeechAudio; fallback=True when the silent placeholder was used
        """
        voice = voice or self.settings.tts_voice

        try:
            audio = await self.provider.synthesize(text, voice)
            if not audio:
                raise ValueError("No audio data received")
        except Exception as e:
            logger.warning(f"Speech synthesis failed, using silent placeholder: {e}")
            return self.fallback(text)

        logger.info(f"Speech generated with {self.provider.name}, size: {len(audio)}")
        return SpeechAudio(
            audio=audio,
            content_type=getattr(self.provider, "content_type", "audio/mpeg"),
        )

    @staticmethod
    def fallback(text: str) -> SpeechAudio:
        logger.debug(f"Generating fallback speech for: {text[:50]}...")
        return SpeechAudio(audio=SILENT_MP3, content_type="audio/mpeg", fallback=True)
