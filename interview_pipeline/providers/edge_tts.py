"""
Edge TTS (Microsoft) speech provider.
"""

import logging

from interview_pipeline.core.errors import ProviderError, ProviderUnavailable

logger = logging.getLogger(__name__)

# Map voice names to Edge TTS voices
EDGE_VOICES = {
    "male": "en-US-GuyNeural",
    "female": "en-US-JennyNeural",
    "professional": "en-US-AriaNeural",
    "nova": "en-US-JennyNeural",
    "default": "en-US-GuyNeural",
}


class EdgeSpeechProvider:
    """Speech synthesis through the edge-tts streaming client."""

    name = "edge_tts"
    component = "speech"
    content_type = "audio/mpeg"

    async def aclose(self) -> None:
        return None

    async def synthesize(self, text: str, voice: str) -> bytes:
        """Generate MP3 speech, streaming chunks from Edge TTS."""
        try:
            import edge_tts
        except ImportError as e:
            logger.error("edge-tts not installed. Install with: pip install edge-tts")
            raise ProviderUnavailable(
                "edge-tts is not installed",
                component=self.component,
                provider=self.name,
            ) from e

        # Full Edge voice names pass through unchanged
        edge_voice = EDGE_VOICES.get(voice, voice if "Neural" in voice else EDGE_VOICES["default"])

        try:
            communicate = edge_tts.Communicate(text, edge_voice)

            # Collect audio chunks
            audio_chunks = []
            async for chunk in communicate.stream():
                if chunk["type"] == "audio":
                    audio_chunks.append(chunk["data"])
        except Exception as e:
            logger.error(f"Edge TTS failed: {e}")
            raise ProviderError(
                f"Edge TTS failed: {e}",
                component=self.component,
                provider=self.name,
            ) from e

        return b"".join(audio_chunks)
